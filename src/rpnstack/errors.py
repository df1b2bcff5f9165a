## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class RpnError(Exception):
    def __init__(self, message: str = "", *, rpn_token=None, rpn_meta=None, rpn_stack=None):
        """Base class for all errors raised while evaluating a program."""
        super().__init__(message)
        self.rpn_token: str = rpn_token
        self.rpn_meta: dict = rpn_meta
        self.rpn_stack: object = rpn_stack


class RpnUnsupportedToken(RpnError, NameError):
    """Lexeme is neither a literal nor a known keyword."""
    pass

class RpnStackUnderflow(RpnError, IndexError):
    """Operation needs more items than the stack holds."""
    pass

class RpnTypeMismatch(RpnError, TypeError):
    """Operand types have no branch for this operator, or cannot be coerced to it."""
    pass

class RpnDivideByZero(RpnError, ZeroDivisionError):
    pass

class RpnNegativeRepeatCount(RpnError, ValueError):
    pass

class RpnRepeatTooLarge(RpnError, ValueError):
    """Repeated string would not fit in memory."""
    pass


class RpnSignatureError(RpnError, TypeError):
    """Loading-time problems with a Python operation's annotations."""
    pass


class RpnFixtureError(RpnError, OSError):
    def __init__(self, message, *, filename=None):
        super().__init__(message)
        self.filename = filename
