import unittest

from lceval.interpreter import evaluate
from lceval.lang.error import InvalidCharacter, MalformedInput

OMEGA = "(λx.(xx)λx.(xx))"


class EvaluateTestCase(unittest.TestCase):

    def test_evaluate(self):
        cases = {
            "x": "x",
            "λx.x": "λx.x",
            "(λx.xy)": "y",
            "(λx.λy.xz)": "λy.z",
            "(λx.λy.(xy)y)": "λz.(yz)",  # bound y is renamed instead of capturing the argument
            "((λx.λy.xz)" + OMEGA + ")": "z",
            "((λx.λy.(yx)a)λz.z)": "a",
            "(λf.λx.(f(fx))λy.y)": "λx.x",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, evaluate(case), case)

    def test_evaluate_step_bound(self):
        self.assertEqual(OMEGA, evaluate(OMEGA))
        self.assertEqual(OMEGA, evaluate(OMEGA, max_steps=0))
        self.assertEqual("(λx.xy)", evaluate("(λx.xy)", max_steps=0))
        self.assertEqual("(λy.z" + OMEGA + ")", evaluate("((λx.λy.xz)" + OMEGA + ")", max_steps=1))

    def test_evaluate_errors(self):
        self.assertRaises(MalformedInput, evaluate, "(x")
        self.assertRaises(MalformedInput, evaluate, "")
        self.assertRaises(InvalidCharacter, evaluate, "x#y")
        self.assertRaises(InvalidCharacter, evaluate, "(λx.x y)")
        self.assertRaises(ValueError, evaluate, "x", -1)


if __name__ == '__main__':
    unittest.main()
