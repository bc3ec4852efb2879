import io
import unittest
from contextlib import redirect_stdout

from lceval.lang.error import ErrorHandler, GenericException, InvalidCharacter, MalformedInput, OutOfVariables


class GenericExceptionTestCase(unittest.TestCase):

    def test_init(self):
        error = GenericException("'{}' is bad", "λx.", start=2)
        self.assertEqual("λx.", error.expr)
        self.assertEqual(2, error.start)
        self.assertEqual(3, error.end)
        self.assertEqual("'λx.' is bad", str(error))

        error = GenericException("nothing to point at")
        self.assertEqual("", error.expr)
        self.assertEqual(0, error.end)

    def test_subclasses(self):
        cases = [InvalidCharacter("x#y", 1), MalformedInput("expected ')'", "(x", 2), OutOfVariables("λx.x")]
        for case in cases:
            self.assertIsInstance(case, GenericException, case)

        error = InvalidCharacter("x#y", 1)
        self.assertEqual(("#", 1, 1, 2), (error.char, error.position, error.start, error.end))
        self.assertIn("'#'", str(error))

        error = MalformedInput("expected ')'", "(x", 2)
        self.assertEqual((2, 2, 3), (error.position, error.start, error.end))
        self.assertIn("expected ')'", str(error))


class ErrorHandlerTestCase(unittest.TestCase):

    def test_throw_non_fatal(self):
        output = io.StringIO()
        with redirect_stdout(output):
            with ErrorHandler(fatal=False) as error_handler:
                error_handler.register_file("<in>")
                error_handler.register_line("<in>", "x#y", 1)
                raise InvalidCharacter("x#y", 1)

        self.assertIn("error: ", output.getvalue())
        self.assertIn("invalid character", output.getvalue())
        self.assertIn("^", output.getvalue())
        self.assertEqual({"<in>": (None, None)}, error_handler.traceback)

    def test_throw_fatal(self):
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit):
                with ErrorHandler(fatal=True):
                    raise MalformedInput("unexpected ')'", ")", 0)

    def test_recursion_error(self):
        output = io.StringIO()
        with redirect_stdout(output):
            with ErrorHandler(fatal=False):
                raise RecursionError()
        self.assertIn("maximum recursion depth exceeded", output.getvalue())

    def test_unknown_error(self):
        output = io.StringIO()
        with redirect_stdout(output):
            with self.assertRaises(KeyError):
                with ErrorHandler(fatal=False):
                    raise KeyError("x")
        self.assertIn("[internal]", output.getvalue())

    def test_no_error(self):
        output = io.StringIO()
        with redirect_stdout(output):
            with ErrorHandler():
                pass
        self.assertEqual("", output.getvalue())

    def test_warn(self):
        output = io.StringIO()
        error_handler = ErrorHandler(fatal=False)
        error_handler.register_file("terms.lc")
        error_handler.register_line("terms.lc", "(λx.(xx)λx.(xx))", 4)
        with redirect_stdout(output):
            error_handler.warn("'{}' did not reach beta-normal form", "(λx.(xx)λx.(xx))")

        self.assertIn("terms.lc:4:0: ", output.getvalue())
        self.assertIn("warning: ", output.getvalue())
        self.assertIn("did not reach beta-normal form", output.getvalue())

    def test_register_step(self):
        output = io.StringIO()
        with redirect_stdout(output):
            ErrorHandler(verbose=False).register_step("β", "y")
        self.assertEqual("", output.getvalue())

        with redirect_stdout(output):
            ErrorHandler(verbose=True).register_step("β", "y")
        self.assertIn("β: ", output.getvalue())
        self.assertTrue(output.getvalue().rstrip().endswith("y"))

    def test_diagnose(self):
        diagnosis = ErrorHandler.diagnose(InvalidCharacter("x#y", 1))
        first, second = diagnosis.split("\n")
        self.assertTrue(first.startswith("  x"))
        self.assertIn("#", first)
        self.assertTrue(first.endswith("y"))
        self.assertTrue(second.startswith("   "))
        self.assertIn("^", second)


if __name__ == '__main__':
    unittest.main()
