## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark


class PushPopError(Exception):
    """Base class for all errors raised while parsing or running a script."""
    pass

class PushPopParseError(PushPopError):
    def __init__(self, message, *, filename=None, line=None, column=None, token=None):
        super().__init__(message)
        self.filename = filename
        self.line = line
        self.column = column
        self.token = token

class PushPopIncompleteParse(PushPopParseError, lark.exceptions.ParseError):
    def __init__(self, message, *, filename=None, line=None, column=None, token=None):
        super().__init__(message, filename=filename, line=line, column=column, token=token)

class PushPopEmptyParse(PushPopError):
    pass


class PushPopStackError(PushPopError, IndexError):
    """Runtime failure from popping an empty stack, with the instruction index reached."""
    def __init__(self, message: str = "", *, index: int = None, node=None, reason: str = ""):
        super().__init__(message)
        self.index: int = index
        self.node = node
        self.reason: str = reason

class PushPopContractError(PushPopError, RuntimeError):
    """Parser and executor disagree on the tree shape; never caused by a script."""
    pass
