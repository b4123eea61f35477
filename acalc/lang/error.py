"""Error handling for acalc. Only GenericExceptions should be encountered during running: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

The pure core (lexer, parser, evaluator) only raises these errors, it never catches or reports them.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw an acalc error. expr is the source text the error
    originated from, and [start, end) is the offending part of it (used for the caret diagnosis).
    """

    def __init__(self, msg, expr=None, start=0, end=-1, diagnosis=True, internal=False):
        super().__init__(msg)

        self.msg = msg
        self.expr = expr if expr is not None else ""
        self.start = start
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.diagnosis = diagnosis
        self.internal = internal


class LexicalError(GenericException):
    """A character in the source matches none of the token classes."""


class InvalidSyntaxError(GenericException):
    """The token stream does not conform to the grammar, or tokens remain after a complete expression."""


class UndefinedVariableError(GenericException):
    """A variable was read before anything was assigned to it."""

    def __init__(self, name):
        super().__init__(f"'{name}' is not defined", diagnosis=False)
        self.name = name


class DivisionByZeroError(GenericException):
    """Right operand of '/' evaluated to zero."""

    def __init__(self, dividend):
        super().__init__(f"division by zero ({dividend} / 0)", diagnosis=False)
        self.dividend = dividend


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report custom acalc errors."""
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error):
        """Returns offending part of error.expr highlighted and bolded, with a caret line underneath."""
        start = min(error.start, len(error.expr))
        end = max(error.end, start + 1)

        diagnosis = "  " + error.expr[:start]
        diagnosis += colored(error.expr[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Reports error using self.traceback, a dict of file: (line, line_num) representing origination of error.
        Exits if self.fatal.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # dicts are insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)

        for file in self.traceback:  # if error occurred, reset traceback lines (no need if error is fatal)
            self.remove_line(file)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or issubclass(exc_type, SystemExit):
            return False

        if issubclass(exc_type, KeyboardInterrupt):
            self.throw(GenericException("keyboard interrupt"))
        elif issubclass(exc_type, RecursionError):
            self.throw(GenericException("maximum nesting depth exceeded"))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            return False

        return True
