class LispError(Exception):
    """ Base class for all chainlisp errors"""
    pass

class LispSyntaxError(LispError):
    """ Raised when the reader meets unbalanced or unexpected tokens"""

class LispArityError(LispError):
    """ Raised when the number of operands passed to a form is incorrect"""

class LispTypeError(LispError):
    """ Raised when an operand has the wrong shape (not a number, not a list)"""

class LispRecursionError(LispError):
    """ Raised when evaluation nests deeper than the configured recursion limit"""
