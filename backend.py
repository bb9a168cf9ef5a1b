import logging

import sympy as sp

from errors import ExpressionError, ParseError, UnsupportedOperationError
from expression import (
    BinaryExpression,
    FunctionCall,
    Identifier,
    NumericLiteral,
    PowerExpression,
    UnaryExpression,
    canonical_function,
    simplify,
)
from expression_parser import parse_expression
from limits import Converges, DivergesToInfinity, converge
from translator import parse_function

logger = logging.getLogger(__name__)

# Define the symbol 'n' as a positive integer (sequence index)
n = sp.symbols('n', positive=True, integer=True)

SYMPY_FUNCTIONS = {
    'sin': sp.sin,
    'cos': sp.cos,
    'tan': sp.tan,
    'ln': sp.log,
    'log10': lambda arg: sp.log(arg, 10),
    'log2': lambda arg: sp.log(arg, 2),
    'sqrt': sp.sqrt,
    'exp': sp.exp,
    'abs': sp.Abs,
}


def _parse_sequence_expression(expr_str):
    expr_str = expr_str.strip()
    if not expr_str:
        raise ParseError("Empty expression")
    return parse_expression(expr_str)


def _sympy_number(value):
    if float(value).is_integer():
        return sp.Integer(int(value))
    return sp.Float(value)


def _to_sympy(expr):
    if isinstance(expr, NumericLiteral):
        return _sympy_number(expr.value)
    if isinstance(expr, Identifier):
        return n
    if isinstance(expr, UnaryExpression):
        operand = _to_sympy(expr.operand)
        return sp.Mul(-1, operand) if expr.operator == '-' else operand
    if isinstance(expr, BinaryExpression):
        left = _to_sympy(expr.left)
        right = _to_sympy(expr.right)
        if expr.operator == '+':
            return sp.Add(left, right)
        if expr.operator == '-':
            return sp.Add(left, sp.Mul(-1, right))
        if expr.operator == '*':
            return sp.Mul(left, right)
        return sp.Mul(left, sp.Pow(right, -1))
    if isinstance(expr, PowerExpression):
        return sp.Pow(_to_sympy(expr.base), _to_sympy(expr.exponent))
    if isinstance(expr, FunctionCall):
        return SYMPY_FUNCTIONS[canonical_function(expr.name)](_to_sympy(expr.argument))
    raise TypeError(f"Unknown expression node: {expr!r}")


def to_sympy(expr, evaluate=True):
    """Convert an expression tree into the equivalent sympy expression in n."""
    with sp.evaluate(evaluate):
        return _to_sympy(expr)


def expression_to_latex(expr):
    # keep the tree's shape: evaluation would reorder and cancel terms
    return sp.latex(to_sympy(expr, evaluate=False))


def check_convergence(expr_str):
    tree = _parse_sequence_expression(expr_str)
    logger.debug("parsed %r as %r", expr_str, tree)
    try:
        func = parse_function(simplify(tree))
        logger.debug("asymptotic form: %r", func)
        result = converge(func)
    except RecursionError:
        # long operator chains parse iteratively but are walked recursively
        raise ExpressionError("Expression nested too deeply") from None
    logger.debug("convergence of %r: %r", expr_str, result)
    return result


def describe_result(result):
    if isinstance(result, Converges):
        return f"Convergent (limit = {result.limit:.6g})"
    if isinstance(result, DivergesToInfinity):
        direction = "+∞" if result.direction > 0 else "-∞"
        return f"Divergent (-> {direction}, {result.growth.name.lower()} growth)"
    return "Divergent (oscillates or has no determinate limit)"


def analyze_sequence(expr_str):
    """Decide whether the sequence a_n given as a string converges as n -> ∞."""
    try:
        result = check_convergence(expr_str)
    except UnsupportedOperationError as e:
        return f"Unsupported: {e}"
    except ExpressionError as e:
        return f"Invalid expression: {e}"
    return describe_result(result)
