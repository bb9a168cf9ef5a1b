from asymptotic import (
    MINUS_ONE,
    N,
    ONE,
    ZERO,
    ConstantBaseExpFunction,
    CosFunction,
    ExpFunction,
    LnFunction,
    LogFunction,
    Polynomial,
    RationalFunction,
    SinFunction,
    SqrtFunction,
    TanFunction,
)
from errors import UnknownFunctionError, UnsupportedExpressionError
from expression import (
    BinaryExpression,
    FunctionCall,
    Identifier,
    NumericLiteral,
    PowerExpression,
    UnaryExpression,
    canonical_function,
    expressions_equal,
)
from limits import Converges, converge

# abs is read as the identity: sequences are assumed eventually non-negative
# inside it. Negative arguments give wrong answers.
FUNCTION_WRAPPERS = {
    "sin": SinFunction,
    "cos": CosFunction,
    "tan": TanFunction,
    "ln": LnFunction,
    "log10": lambda arg: LogFunction(arg, 10.0),
    "log2": lambda arg: LogFunction(arg, 2.0),
    "sqrt": SqrtFunction,
    "exp": ExpFunction,
    "abs": lambda arg: arg,
}

# Largest |k| expanded for ``base^k`` when the base depends on n.
MAX_INTEGER_EXPONENT = 1000


def parse_function(expr):
    """Translate an expression tree into an asymptotic function of n."""
    if isinstance(expr, NumericLiteral):
        return Polynomial((expr.value,))
    if isinstance(expr, Identifier):
        return N
    if isinstance(expr, UnaryExpression):
        operand = parse_function(expr.operand)
        return operand.negate() if expr.operator == "-" else operand
    if isinstance(expr, BinaryExpression):
        return _translate_binary(expr)
    if isinstance(expr, PowerExpression):
        return _translate_power(expr)
    if isinstance(expr, FunctionCall):
        wrapper = FUNCTION_WRAPPERS.get(canonical_function(expr.name))
        if wrapper is None:
            raise UnknownFunctionError(expr.name)
        return wrapper(parse_function(expr.argument))
    raise TypeError(f"Unknown expression node: {expr!r}")


def _translate_binary(expr):
    if expr.operator == "-" and expressions_equal(expr.left, expr.right):
        return ZERO
    left = parse_function(expr.left)
    right = parse_function(expr.right)
    if expr.operator == "+":
        return left.add(right)
    if expr.operator == "-":
        return left.add(right.multiply(MINUS_ONE))
    if expr.operator == "*":
        return left.multiply(right)
    if expr.operator == "/":
        return left.divide(right)
    raise UnsupportedExpressionError(f"Unknown operator '{expr.operator}'")


def _constant_value(func):
    if isinstance(func, Polynomial) and func.is_constant:
        return func.leading
    if isinstance(func, RationalFunction):
        result = converge(func)
        if isinstance(result, Converges):
            return result.limit
    return None


def _integer_exponent(expr):
    if isinstance(expr, NumericLiteral):
        value = expr.value
    else:
        value = _constant_value(parse_function(expr))
        if value is None:
            return None
    return int(value) if float(value).is_integer() else None


def _translate_power(expr):
    base = parse_function(expr.base)
    base_value = _constant_value(base)
    if base_value is not None:
        return ConstantBaseExpFunction(base_value, parse_function(expr.exponent))

    k = _integer_exponent(expr.exponent)
    if k is None:
        raise UnsupportedExpressionError(
            "Only integer exponents are supported over a base that depends on n"
        )
    if abs(k) > MAX_INTEGER_EXPONENT:
        raise UnsupportedExpressionError(
            f"Exponent {k} exceeds the largest supported power {MAX_INTEGER_EXPONENT}"
        )
    product = _power(base, abs(k))
    if k < 0:
        return ONE.divide(product)
    return product


def _power(base, k):
    # square-and-multiply
    result = ONE
    while k:
        if k & 1:
            result = result.multiply(base)
        k >>= 1
        if k:
            base = base.multiply(base)
    return result
