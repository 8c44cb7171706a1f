# Core type aliases for chainlisp's data model.
# Code (forms) and runtime values share one representation: the Node chain
# from chainlisp.types.node. Evaluation operations pass Handles around.
#
# Naming guidance:
# - SExpression: use in reader/printer code to denote syntactic forms.
# - LispValue:  use in evaluator/runtime code to denote evaluated values.
# Both are the same Node type; the aliases only document intent.

from typing import Callable

from chainlisp.types.node import Node, Handle

SExpression = Node
LispValue = Node

# Evaluator function type: evaluator passed into special forms
EvaluatorFn = Callable[..., Handle]
