"""Asymptotic functions of n: the algebra limits are taken over.

Every variant is an immutable dataclass and exposes ``add``, ``multiply`` and
``divide``. Combining any two variants always yields another variant; the
specific folds (polynomial arithmetic, fraction algebra, same-base
exponentials) are tried first and the generic composites are the fallback.
"""

import math
from dataclasses import dataclass
from itertools import zip_longest
from typing import Tuple


class AsymptoticFunction:

    def add(self, other):
        if _is_zero(other):
            return self
        return AddFunction(self, other)

    def multiply(self, other):
        if _is_zero(other):
            return ZERO
        if _is_one(other):
            return self
        return MultiplyFunction(self, other)

    def divide(self, other):
        if _is_one(other):
            return self
        return DivideFunction(self, other)

    def negate(self):
        return self.multiply(MINUS_ONE)


@dataclass(frozen=True)
class Polynomial(AsymptoticFunction):
    coefficients: Tuple[float, ...]

    def __post_init__(self):
        coeffs = [float(c) for c in self.coefficients] or [0.0]
        while len(coeffs) > 1 and coeffs[-1] == 0:
            coeffs.pop()
        object.__setattr__(self, "coefficients", tuple(coeffs))

    @property
    def degree(self):
        return len(self.coefficients) - 1

    @property
    def leading(self):
        return self.coefficients[-1]

    @property
    def is_constant(self):
        return self.degree == 0

    @property
    def is_zero(self):
        return self.coefficients == (0.0,)

    def scale(self, factor):
        return Polynomial(tuple(c * factor for c in self.coefficients))

    def add(self, other):
        if isinstance(other, Polynomial):
            return Polynomial(tuple(
                a + b for a, b in zip_longest(self.coefficients, other.coefficients, fillvalue=0.0)
            ))
        if isinstance(other, RationalFunction):
            return RationalFunction(self, ONE).add(other)
        if self.is_zero:
            return other
        return super().add(other)

    def multiply(self, other):
        if isinstance(other, Polynomial):
            out = [0.0] * (len(self.coefficients) + len(other.coefficients) - 1)
            for i, a in enumerate(self.coefficients):
                for j, b in enumerate(other.coefficients):
                    out[i + j] += a * b
            return Polynomial(tuple(out))
        if isinstance(other, RationalFunction):
            return RationalFunction(self.multiply(other.numerator), other.denominator)
        if self.is_zero:
            return ZERO
        if _is_one(self):
            return other
        return super().multiply(other)

    def divide(self, other):
        if isinstance(other, Polynomial):
            if other.is_constant and not other.is_zero:
                return self.scale(1.0 / other.leading)
            return RationalFunction(self, other)
        if isinstance(other, RationalFunction):
            return RationalFunction(self.multiply(other.denominator), other.numerator)
        return super().divide(other)


@dataclass(frozen=True)
class RationalFunction(AsymptoticFunction):
    numerator: AsymptoticFunction
    denominator: AsymptoticFunction

    def add(self, other):
        if isinstance(other, Polynomial):
            return RationalFunction(
                self.numerator.add(other.multiply(self.denominator)), self.denominator
            )
        if isinstance(other, RationalFunction):
            return RationalFunction(
                self.numerator.multiply(other.denominator).add(
                    other.numerator.multiply(self.denominator)
                ),
                self.denominator.multiply(other.denominator),
            )
        return super().add(other)

    def multiply(self, other):
        if isinstance(other, Polynomial):
            return RationalFunction(self.numerator.multiply(other), self.denominator)
        if isinstance(other, RationalFunction):
            return RationalFunction(
                self.numerator.multiply(other.numerator),
                self.denominator.multiply(other.denominator),
            )
        return super().multiply(other)

    def divide(self, other):
        if isinstance(other, Polynomial):
            return RationalFunction(self.numerator, self.denominator.multiply(other))
        if isinstance(other, RationalFunction):
            return RationalFunction(
                self.numerator.multiply(other.denominator),
                self.denominator.multiply(other.numerator),
            )
        return super().divide(other)


@dataclass(frozen=True)
class AddFunction(AsymptoticFunction):
    left: AsymptoticFunction
    right: AsymptoticFunction


@dataclass(frozen=True)
class MultiplyFunction(AsymptoticFunction):
    left: AsymptoticFunction
    right: AsymptoticFunction


@dataclass(frozen=True)
class DivideFunction(AsymptoticFunction):
    numerator: AsymptoticFunction
    denominator: AsymptoticFunction


@dataclass(frozen=True)
class ConstantBaseExpFunction(AsymptoticFunction):
    """``base ** exponent`` for a fixed real base."""
    base: float
    exponent: AsymptoticFunction

    def multiply(self, other):
        if isinstance(other, ConstantBaseExpFunction) and other.base == self.base:
            return ConstantBaseExpFunction(self.base, self.exponent.add(other.exponent))
        return super().multiply(other)

    def divide(self, other):
        if isinstance(other, ConstantBaseExpFunction):
            if other.base == self.base:
                return ConstantBaseExpFunction(
                    self.base, self.exponent.add(other.exponent.negate())
                )
            if other.base != 0 and _same_limit(self.exponent, other.exponent):
                return ConstantBaseExpFunction(self.base / other.base, self.exponent)
        return super().divide(other)


@dataclass(frozen=True)
class SinFunction(AsymptoticFunction):
    argument: AsymptoticFunction


@dataclass(frozen=True)
class CosFunction(AsymptoticFunction):
    argument: AsymptoticFunction


@dataclass(frozen=True)
class TanFunction(AsymptoticFunction):
    argument: AsymptoticFunction


@dataclass(frozen=True)
class LnFunction(AsymptoticFunction):
    argument: AsymptoticFunction


@dataclass(frozen=True)
class LogFunction(AsymptoticFunction):
    argument: AsymptoticFunction
    base: float = 10.0


@dataclass(frozen=True)
class SqrtFunction(AsymptoticFunction):
    argument: AsymptoticFunction


@dataclass(frozen=True)
class ExpFunction(AsymptoticFunction):
    argument: AsymptoticFunction

    def multiply(self, other):
        if isinstance(other, ExpFunction):
            return ExpFunction(self.argument.add(other.argument))
        return super().multiply(other)

    def divide(self, other):
        if isinstance(other, ExpFunction):
            return ExpFunction(self.argument.add(other.argument.negate()))
        return super().divide(other)


ZERO = Polynomial((0.0,))
ONE = Polynomial((1.0,))
MINUS_ONE = Polynomial((-1.0,))
N = Polynomial((0.0, 1.0))


def _is_zero(func):
    return isinstance(func, Polynomial) and func.is_zero


def _is_one(func):
    return isinstance(func, Polynomial) and func.coefficients == (1.0,)


def _same_limit(a, b):
    # deferred: the evaluator itself imports this module
    from limits import Converges, DivergesToInfinity, converge

    ra, rb = converge(a), converge(b)
    if isinstance(ra, Converges) and isinstance(rb, Converges):
        return ra.limit == rb.limit
    if isinstance(ra, DivergesToInfinity) and isinstance(rb, DivergesToInfinity):
        return ra.direction == rb.direction
    return False


def growth_degree(func):
    """Power of n that a polynomial-class function grows like, if known."""
    if isinstance(func, Polynomial):
        return None if func.is_zero else float(func.degree)
    if isinstance(func, SqrtFunction):
        inner = growth_degree(func.argument)
        return None if inner is None else inner / 2
    if isinstance(func, (RationalFunction, DivideFunction)):
        num, den = growth_degree(func.numerator), growth_degree(func.denominator)
        if num is None or den is None:
            return None
        return num - den
    if isinstance(func, MultiplyFunction):
        left, right = growth_degree(func.left), growth_degree(func.right)
        if left is None or right is None:
            return None
        return left + right
    if isinstance(func, AddFunction):
        left, right = growth_degree(func.left), growth_degree(func.right)
        # equal degrees may cancel
        if left is None or right is None or left == right:
            return None
        return max(left, right)
    return None


def log_coefficient(func):
    """``c`` such that a logarithm wrapper behaves like ``c * ln(n)``."""
    if isinstance(func, LnFunction):
        scale = 1.0
    elif isinstance(func, LogFunction):
        scale = 1.0 / math.log(func.base)
    else:
        return None
    degree = growth_degree(func.argument)
    if not degree:
        return None
    return degree * scale
