import io
import re
import unittest
from contextlib import redirect_stdout

from acalc.lang.error import (DivisionByZeroError, ErrorHandler, GenericException, InvalidSyntaxError, LexicalError,
                              UndefinedVariableError)
from acalc.pure.parser import parse

ANSI = re.compile(r"\x1b\[[0-9;]*m")


class GenericExceptionTestCase(unittest.TestCase):

    def test_defaults(self):
        error = GenericException("oops", "1 + &", start=4)
        self.assertEqual("oops", str(error))
        self.assertEqual(5, error.end)
        self.assertTrue(error.diagnosis)
        self.assertFalse(error.internal)

        error = GenericException("oops")
        self.assertEqual("", error.expr)
        self.assertEqual(0, error.end)

    def test_hierarchy(self):
        for cls in [LexicalError, InvalidSyntaxError, UndefinedVariableError, DivisionByZeroError]:
            self.assertTrue(issubclass(cls, GenericException), cls)

    def test_runtime_errors_have_no_diagnosis(self):
        self.assertFalse(UndefinedVariableError("x").diagnosis)
        self.assertIn("'x'", UndefinedVariableError("x").msg)
        self.assertFalse(DivisionByZeroError(3).diagnosis)
        self.assertIn("division by zero", DivisionByZeroError(3).msg)


class ErrorHandlerTestCase(unittest.TestCase):

    def run_handler(self, func, fatal=False):
        """Runs func inside an ErrorHandler, returning (handler, printed output)."""
        output = io.StringIO()
        handler = ErrorHandler(fatal=fatal)
        with redirect_stdout(output):
            with handler:
                func()
        return handler, output.getvalue()

    def test_reports_generic_exception(self):
        __, output = self.run_handler(lambda: parse("3 & 4"))
        self.assertIn("error: ", output)
        self.assertIn("invalid character '&'", output)
        self.assertIn("^", output)

    def test_traceback(self):
        def fail():
            handler.register_line("calc.txt", "x + 1", 3)
            raise UndefinedVariableError("x")

        handler = ErrorHandler(fatal=False)
        handler.register_file("calc.txt")
        output = io.StringIO()
        with redirect_stdout(output):
            with handler:
                fail()

        self.assertIn("File 'calc.txt', line 3:", output.getvalue())
        self.assertIn("'x' is not defined", output.getvalue())
        self.assertEqual({"calc.txt": (None, None)}, handler.traceback)

    def test_fatal_exits(self):
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as context:
                with ErrorHandler(fatal=True):
                    parse("(3 + 4")
        self.assertEqual(1, context.exception.code)

    def test_recursion_error(self):
        def recurse():
            raise RecursionError("maximum recursion depth exceeded")

        __, output = self.run_handler(recurse)
        self.assertIn("maximum nesting depth exceeded", output)

    def test_keyboard_interrupt(self):
        def interrupt():
            raise KeyboardInterrupt

        __, output = self.run_handler(interrupt)
        self.assertIn("keyboard interrupt", output)

    def test_internal_errors_are_reraised(self):
        def fail():
            raise ValueError("bad")

        with redirect_stdout(io.StringIO()) as output:
            with self.assertRaises(ValueError):
                with ErrorHandler(fatal=False):
                    fail()
        self.assertIn("[internal] ", output.getvalue())
        self.assertIn("ValueError: bad", output.getvalue())

    def test_system_exit_passes_through(self):
        with self.assertRaises(SystemExit):
            with ErrorHandler(fatal=False):
                raise SystemExit(2)

    def test_diagnose(self):
        diagnosis = ErrorHandler.diagnose(LexicalError("invalid character '&'", "3 & 4", start=2, end=3))
        text, caret = ANSI.sub("", diagnosis).split("\n")
        self.assertEqual("  3 & 4", text)
        self.assertEqual("    ^", caret)

        diagnosis = ErrorHandler.diagnose(InvalidSyntaxError("invalid syntax", "x = abc 1", start=4, end=7))
        self.assertEqual("      ^~~", ANSI.sub("", diagnosis).split("\n")[1])


if __name__ == '__main__':
    unittest.main()
