"""Limit evaluation over asymptotic functions.

``converge`` classifies an asymptotic function as n -> oo into one of three
results: a finite limit, a signed infinity, or no determinate behaviour.
Finite and infinite results carry a growth class which decides the winner
when two results are combined.
"""

import math
from dataclasses import dataclass
from enum import IntEnum

from asymptotic import (
    AddFunction,
    ConstantBaseExpFunction,
    CosFunction,
    DivideFunction,
    ExpFunction,
    LnFunction,
    LogFunction,
    MultiplyFunction,
    Polynomial,
    RationalFunction,
    SinFunction,
    SqrtFunction,
    TanFunction,
    growth_degree,
    log_coefficient,
)
from errors import UnsupportedOperationError


class GrowthKind(IntEnum):
    LOGARITHMIC = 1
    POLYNOMIAL = 2
    EXPONENTIAL = 3


class ConvergenceResult:
    """Boundary view shared by the three result states."""
    converges = False
    limit = None
    diverge_to = None
    growth = None

    def to_dict(self):
        diverge_to = None
        if self.diverge_to is not None:
            diverge_to = "+inf" if self.diverge_to > 0 else "-inf"
        return {
            "converges": self.converges,
            "limit": self.limit,
            "divergeTo": diverge_to,
            "growth": self.growth.name.lower() if self.growth is not None else None,
        }


@dataclass(frozen=True)
class Converges(ConvergenceResult):
    limit: float
    growth: GrowthKind = GrowthKind.POLYNOMIAL
    converges = True


@dataclass(frozen=True)
class DivergesToInfinity(ConvergenceResult):
    direction: float
    growth: GrowthKind = GrowthKind.POLYNOMIAL

    @property
    def diverge_to(self):
        return self.direction


@dataclass(frozen=True)
class DivergesIndeterminate(ConvergenceResult):
    pass


INDETERMINATE = DivergesIndeterminate()


def _sign(x):
    return math.copysign(1.0, x)


def _finite(value, growth):
    # constants that overflowed a double are infinities, never limits
    if math.isnan(value):
        return INDETERMINATE
    if math.isinf(value):
        return _infinity(value, growth)
    # normalise -0.0 so limits of 0 read the same either way
    return Converges(value + 0.0, growth)


def _infinity(sign, growth):
    return DivergesToInfinity(math.copysign(math.inf, sign), growth)


def converge(func):
    if isinstance(func, Polynomial):
        return _converge_polynomial(func)
    if isinstance(func, RationalFunction):
        return _converge_rational(func)
    if isinstance(func, ConstantBaseExpFunction):
        return _converge_constant_base(func)
    if isinstance(func, AddFunction):
        return combine_add(converge(func.left), converge(func.right))
    if isinstance(func, MultiplyFunction):
        return combine_multiply(converge(func.left), converge(func.right))
    if isinstance(func, DivideFunction):
        return combine_divide(
            converge(func.numerator), converge(func.denominator),
            func.numerator, func.denominator,
        )
    if isinstance(func, TanFunction):
        raise UnsupportedOperationError(
            "The limit of tan is undefined: it has a singularity in every period"
        )
    if isinstance(func, (SinFunction, CosFunction, ExpFunction, LnFunction,
                         LogFunction, SqrtFunction)):
        return _converge_wrapper(func)
    raise TypeError(f"Unknown asymptotic function: {func!r}")


def _converge_polynomial(poly):
    if poly.is_constant:
        return _finite(poly.leading, GrowthKind.POLYNOMIAL)
    return _infinity(poly.leading, GrowthKind.POLYNOMIAL)


def _converge_rational(func):
    num, den = func.numerator, func.denominator
    if not (isinstance(num, Polynomial) and isinstance(den, Polynomial)):
        return combine_divide(converge(num), converge(den), num, den)

    if den.is_zero:
        return INDETERMINATE
    if num.is_zero or num.degree < den.degree:
        return _finite(0.0, GrowthKind.POLYNOMIAL)
    ratio = num.leading / den.leading
    if num.degree == den.degree:
        return _finite(ratio, GrowthKind.POLYNOMIAL)
    return _infinity(ratio, GrowthKind.POLYNOMIAL)


def _converge_constant_base(func):
    b = func.base
    exponent = converge(func.exponent)
    growth = GrowthKind.EXPONENTIAL

    if isinstance(exponent, Converges):
        L = exponent.limit
        if b < 0 and not L.is_integer():
            return INDETERMINATE
        if b == 0 and L < 0:
            return INDETERMINATE
        try:
            return _finite(math.pow(b, L), growth)
        except OverflowError:
            sign = -1.0 if b < 0 and L % 2 == 1 else 1.0
            return _infinity(sign, growth)

    if isinstance(exponent, DivergesToInfinity):
        if b == 1:
            return _finite(1.0, growth)
        if b == -1:
            return INDETERMINATE
        if exponent.direction > 0:
            if b > 1:
                return _infinity(1.0, growth)
            if abs(b) < 1:
                return _finite(0.0, growth)
            return INDETERMINATE
        # exponent -> -oo: |b| > 1 decays, 0 < b < 1 blows up
        if abs(b) > 1:
            return _finite(0.0, growth)
        if 0 < b < 1:
            return _infinity(1.0, growth)
        return INDETERMINATE

    return INDETERMINATE


def _apply_real(func, L):
    if isinstance(func, ExpFunction):
        try:
            return math.exp(L)
        except OverflowError:
            return math.inf
    if isinstance(func, (LnFunction, LogFunction)):
        if L < 0:
            return None
        value = math.log(L) if L > 0 else -math.inf
        if isinstance(func, LogFunction):
            value /= math.log(func.base)
        return value
    if isinstance(func, SinFunction):
        return math.sin(L)
    if isinstance(func, CosFunction):
        return math.cos(L)
    if isinstance(func, SqrtFunction):
        return math.sqrt(L) if L >= 0 else None
    raise TypeError(f"Not a transcendental wrapper: {func!r}")


def _converge_wrapper(func):
    arg = converge(func.argument)

    if isinstance(arg, Converges):
        value = _apply_real(func, arg.limit)
        if value is None or math.isnan(value):
            return INDETERMINATE
        if math.isinf(value):
            growth = GrowthKind.EXPONENTIAL if isinstance(func, ExpFunction) else GrowthKind.LOGARITHMIC
            return _infinity(value, growth)
        return _finite(value, arg.growth)

    if not isinstance(arg, DivergesToInfinity):
        return INDETERMINATE

    up = arg.direction > 0
    if isinstance(func, ExpFunction):
        return _infinity(1.0, GrowthKind.EXPONENTIAL) if up else _finite(0.0, GrowthKind.EXPONENTIAL)
    if isinstance(func, (LnFunction, LogFunction)):
        if not up:
            return INDETERMINATE
        sign = 1.0 if isinstance(func, LnFunction) or func.base > 1 else -1.0
        return _infinity(sign, GrowthKind.LOGARITHMIC)
    if isinstance(func, SqrtFunction):
        return _infinity(1.0, GrowthKind.POLYNOMIAL) if up else INDETERMINATE
    # sin and cos oscillate forever
    return INDETERMINATE


def combine_add(left, right):
    if isinstance(left, Converges) and isinstance(right, Converges):
        return _finite(left.limit + right.limit, min(left.growth, right.growth))
    if isinstance(left, Converges) and isinstance(right, DivergesToInfinity):
        return right
    if isinstance(right, Converges) and isinstance(left, DivergesToInfinity):
        return left
    if isinstance(left, DivergesToInfinity) and isinstance(right, DivergesToInfinity):
        if left.growth != right.growth:
            return left if left.growth > right.growth else right
        if left.direction == right.direction:
            return left
    return INDETERMINATE


def combine_multiply(left, right):
    if isinstance(left, Converges) and isinstance(right, Converges):
        return _finite(left.limit * right.limit, min(left.growth, right.growth))

    for a, b in ((left, right), (right, left)):
        if not isinstance(a, Converges):
            continue
        if a.limit == 0 and isinstance(b, DivergesIndeterminate):
            # bounded oscillation times a vanishing factor
            return _finite(0.0, a.growth)
        if isinstance(b, DivergesToInfinity):
            if a.limit != 0:
                return _infinity(_sign(a.limit) * b.direction, b.growth)
            if a.growth > b.growth:
                return _finite(0.0, a.growth)
            return INDETERMINATE

    if isinstance(left, DivergesToInfinity) and isinstance(right, DivergesToInfinity):
        return _infinity(left.direction * right.direction, max(left.growth, right.growth))
    return INDETERMINATE


def combine_divide(num, den, num_func=None, den_func=None):
    if isinstance(num, Converges):
        if isinstance(den, Converges):
            if den.limit == 0:
                return INDETERMINATE
            return _finite(num.limit / den.limit, min(num.growth, den.growth))
        if isinstance(den, DivergesToInfinity):
            return _finite(0.0, den.growth)
        return INDETERMINATE

    if isinstance(num, DivergesToInfinity):
        if isinstance(den, Converges):
            if den.limit == 0:
                return INDETERMINATE
            return _infinity(num.direction * _sign(den.limit), num.growth)
        if isinstance(den, DivergesToInfinity):
            return _divide_infinities(num, den, num_func, den_func)
        return INDETERMINATE

    # numerator has no determinate trend
    if isinstance(den, DivergesToInfinity):
        return _finite(0.0, den.growth)
    return INDETERMINATE


def _divide_infinities(num, den, num_func, den_func):
    sign = num.direction * den.direction
    if num.growth != den.growth:
        if den.growth > num.growth:
            return _finite(0.0, den.growth)
        return _infinity(sign, num.growth)

    if num_func is None or den_func is None:
        return INDETERMINATE

    if num.growth == GrowthKind.POLYNOMIAL:
        num_degree, den_degree = growth_degree(num_func), growth_degree(den_func)
        if num_degree is None or den_degree is None or num_degree == den_degree:
            return INDETERMINATE
        if den_degree > num_degree:
            return _finite(0.0, GrowthKind.POLYNOMIAL)
        return _infinity(sign, GrowthKind.POLYNOMIAL)

    if num.growth == GrowthKind.LOGARITHMIC:
        num_coeff, den_coeff = log_coefficient(num_func), log_coefficient(den_func)
        if num_coeff is not None and den_coeff is not None:
            return _finite(num_coeff / den_coeff, GrowthKind.LOGARITHMIC)

    return INDETERMINATE
