"""Registry of special forms for the chainlisp evaluator.

Maps keyword text to handler functions that control their own operand
evaluation. The evaluator merges this table with the primitives into a single
keyword table, consulted before user-function application.
"""

from chainlisp.evaluation.special_forms.quote_form import quote_form
from chainlisp.evaluation.special_forms.if_form import if_form
from chainlisp.evaluation.special_forms.cond_form import cond_form
from chainlisp.evaluation.special_forms.define_form import define_form
from chainlisp.evaluation.special_forms.logic_forms import and_form, or_form

SPECIAL_FORMS = {
    "quote": quote_form,
    "if": if_form,
    "cond": cond_form,
    "define": define_form,
    "and": and_form,
    "AND": and_form,
    "or": or_form,
    "OR": or_form,
}
