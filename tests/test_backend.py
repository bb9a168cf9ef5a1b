import math
import unittest

import sympy as sp

from backend import (
    analyze_sequence,
    check_convergence,
    expression_to_latex,
    n,
    to_sympy,
)
from errors import ExpressionError
from expression_parser import parse_expression
from limits import (
    Converges,
    DivergesIndeterminate,
    DivergesToInfinity,
    GrowthKind,
)


class AnalyzeSequenceTests(unittest.TestCase):
    def assertConvergent(self, expr, limit, tolerance=1e-4):
        result = check_convergence(expr)
        self.assertIsInstance(result, Converges, msg=f"{expr}: {result}")
        self.assertLess(abs(result.limit - limit), tolerance, msg=f"{expr}: {result}")

    def assertDivergent(self, expr, direction=math.inf):
        result = check_convergence(expr)
        self.assertIsInstance(result, DivergesToInfinity, msg=f"{expr}: {result}")
        self.assertEqual(result.direction, direction, msg=f"{expr}: {result}")

    def assertIndeterminate(self, expr):
        result = check_convergence(expr)
        self.assertIsInstance(result, DivergesIndeterminate, msg=f"{expr}: {result}")

    def test_constants(self):
        self.assertConvergent("1/2", 0.5)
        self.assertConvergent("3/4", 0.75)
        self.assertConvergent("5", 5)
        self.assertConvergent("0", 0)
        self.assertConvergent("-3", -3)

    def test_literal_limit_is_polynomial_class(self):
        for k in (0, 1, -2.5, 1e6):
            self.assertEqual(check_convergence(str(k)), Converges(float(k), GrowthKind.POLYNOMIAL))

    def test_rational_degree_law(self):
        self.assertConvergent("(2n+1)/(3n+2)", 2 / 3)
        self.assertConvergent("(n+5)/(2n-3)", 0.5)
        self.assertConvergent("(5n)/(2n+1)", 2.5)
        self.assertConvergent("(n^2+2n)/(3n^2+1)", 1 / 3)
        self.assertConvergent("(2n^2-n)/(n^2+n)", 2)
        self.assertConvergent("(n+1)/(n^2+2)", 0)
        self.assertDivergent("(n^2+1)/(n+2)")
        self.assertConvergent("(5*n^3 - n)/(n^3 + 2*n^2)", 5)

    def test_negative_exponents(self):
        self.assertConvergent("1/n", 0)
        self.assertConvergent("n^-1", 0)
        self.assertConvergent("(2*n^-2)/(2*n^-1)", 0)

    def test_fraction_algebra(self):
        self.assertConvergent("2*(n/(n+1))", 2)
        self.assertConvergent("(n/(n+1))+(2n/(2n+1))", 2)
        self.assertConvergent("(n/(n+1))-(1/(n+1))", 1)
        self.assertConvergent("(n+1)*(n+2)/(n^2)", 1)
        self.assertConvergent("n*(n+1)/(n^2+n)", 1)

    def test_unary_minus(self):
        self.assertConvergent("-n/(2n)", -0.5)
        self.assertConvergent("(2n-1)/(-n-1)", -2)
        self.assertDivergent("-n", -math.inf)

    def test_polynomials_diverge(self):
        self.assertDivergent("n")
        self.assertDivergent("n^2")
        self.assertDivergent("3 - n^3", -math.inf)

    def test_trig(self):
        self.assertIndeterminate("sin(n)")
        self.assertConvergent("sin(n)/n", 0)
        self.assertConvergent("(sin(n)+cos(n))/n", 0)
        self.assertConvergent("sin(1/n)", 0)
        self.assertConvergent("cos(1/n)", 1)

    def test_exponentials(self):
        self.assertDivergent("2^n")
        self.assertDivergent("3^n")
        self.assertDivergent("2^(n+1)")
        self.assertConvergent("0.5^n", 0)
        self.assertConvergent("(1/2)^n", 0)
        self.assertConvergent("1^n", 1)
        self.assertConvergent("0.5^(2*n)", 0)
        self.assertConvergent("2^n / 3^n", 0)
        self.assertConvergent("10^(-n)", 0)
        self.assertIndeterminate("(-1)^n")
        self.assertConvergent("exp(1/n)", 1)
        self.assertConvergent("exp(-n)", 0)
        self.assertConvergent("e^(-n)", 0)
        self.assertDivergent("exp(n)/n")
        self.assertConvergent("n/exp(n)", 0)

    def test_growth_ordering(self):
        for b in ("0.5", "0.9", "(-1/3)"):
            result = check_convergence(f"(2n^2 + 1)*{b}^n")
            self.assertEqual(result, Converges(0.0, GrowthKind.EXPONENTIAL))
        self.assertConvergent("n^2/2^n", 0)
        self.assertDivergent("2^n/n^2")
        self.assertDivergent("n*2^n")
        self.assertDivergent("2^n/(n^2 + 1)")
        self.assertConvergent("ln(n)/2^n", 0)
        self.assertDivergent("2^n/ln(n)")

    def test_logarithms(self):
        self.assertDivergent("ln(n)")
        self.assertConvergent("ln(n)/n", 0)
        self.assertDivergent("n/ln(n)")
        self.assertDivergent("ln(1/n)", -math.inf)
        self.assertConvergent("ln(n+1)/ln(n)", 1, tolerance=0.01)
        self.assertConvergent("ln(n^2)/ln(n)", 2)
        self.assertConvergent("log10(100)", 2)

    def test_square_roots(self):
        self.assertDivergent("sqrt(n)")
        self.assertConvergent("sqrt(n)/n", 0)
        self.assertDivergent("n/sqrt(n)")
        self.assertConvergent("sqrt(1/n)", 0)
        self.assertConvergent("1/sqrt(n)", 0)

    def test_self_cancellation(self):
        for expr in ("n", "sin(n)", "2^n", "n^n", "tan(n)", "(n^2+1)/(n-3)"):
            self.assertConvergent(f"{expr} - {expr}", 0)

    def test_same_growth_class_is_indeterminate(self):
        self.assertIndeterminate("(3^n + n)/(2^n + 1)")
        self.assertIndeterminate("n - sqrt(n)")

    def test_abs_is_identity(self):
        self.assertDivergent("abs(n)")
        self.assertDivergent("abs(-n)", -math.inf)

    def test_messages(self):
        self.assertEqual(analyze_sequence("1/2"), "Convergent (limit = 0.5)")
        self.assertEqual(analyze_sequence("2^n"), "Divergent (-> +∞, exponential growth)")
        self.assertEqual(analyze_sequence("-ln(n)"), "Divergent (-> -∞, logarithmic growth)")
        self.assertTrue(analyze_sequence("sin(n)").startswith("Divergent (oscillates"))

    def test_unsupported_tan(self):
        result = analyze_sequence("tan(1/n)")
        self.assertTrue(result.startswith("Unsupported"), msg=result)

    def test_large_integer_powers(self):
        self.assertDivergent("n^1000")
        self.assertConvergent("1/n^1000", 0)
        self.assertTrue(analyze_sequence("n^1000000").startswith("Invalid expression"))

    def test_deep_nesting_is_an_expression_error(self):
        self.assertTrue(analyze_sequence("(" * 200 + "n" + ")" * 200).startswith("Invalid expression"))
        with self.assertRaises(ExpressionError):
            check_convergence("+".join(["sin(n)"] * 3000))

    def test_overflowing_constants_never_converge(self):
        big = "9" * 200
        self.assertDivergent(f"{big}*{big}")
        self.assertDivergent("10^400")
        self.assertTrue(analyze_sequence("1" + "0" * 400).startswith("Invalid expression"))

    def test_invalid_expression(self):
        for expr in ("1/(", "", "2 $ n", "foo(n)", "n^n", "sin n"):
            result = analyze_sequence(expr)
            self.assertTrue(result.startswith("Invalid expression"), msg=f"{expr}: {result}")


class SympyCrossCheckTests(unittest.TestCase):
    CONVERGENT = (
        "(2n+1)/(3n+2)",
        "(n^2+2n)/(3n^2+1)",
        "sin(n)/n",
        "ln(n)/n",
        "n/exp(n)",
        "n^2/2^n",
        "(1/2)^n*n",
        "ln(n+1)/ln(n)",
        "sqrt(n)/n",
        "cos(1/n)",
        "exp(1/n)",
    )

    def test_limits_agree_with_sympy(self):
        for expr in self.CONVERGENT:
            result = check_convergence(expr)
            expected = sp.limit(to_sympy(parse_expression(expr)), n, sp.oo)
            self.assertIsInstance(result, Converges, msg=expr)
            self.assertAlmostEqual(result.limit, float(expected), places=6, msg=expr)

    def test_to_sympy(self):
        self.assertEqual(to_sympy(parse_expression("2n+1")), 2 * n + 1)
        self.assertEqual(to_sympy(parse_expression("log2(n)")), sp.log(n) / sp.log(2))

    def test_latex(self):
        self.assertIn("\\frac", expression_to_latex(parse_expression("(2n+1)/(3n+2)")))
        self.assertIn("\\sqrt{n}", expression_to_latex(parse_expression("sqrt(n)")))
        self.assertIn("\\sin", expression_to_latex(parse_expression("sin(n)/n")))


if __name__ == "__main__":
    unittest.main()
