# ScientificEngine.py
"""""
Built-in constants and functions known to the evaluator.

Both registries are built once when this module is imported and are exposed
as read-only mappings, so the evaluator can share them between calls without
locking. Each function entry records how many arguments it accepts
(max_args = None means any number from min_args upwards).

A function may let OverflowError escape only when the overflowing result is
positive; the evaluator turns it into +inf. Functions that can overflow to
-inf return the signed infinity themselves.
"""""

import math
import statistics
from collections import namedtuple
from types import MappingProxyType


Builtin = namedtuple("Builtin", ["func", "min_args", "max_args"])


def accepts(builtin, count):
    """Return True if the builtin can be called with `count` arguments."""
    if count < builtin.min_args:
        return False
    return builtin.max_args is None or count <= builtin.max_args


# -----------------------------
# Arithmetic (IEEE-754)
# -----------------------------

def _is_odd_integer(value):
    return math.isfinite(value) and value == math.floor(value) and int(value) % 2 == 1


def divide(left, right):
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def power(basis, exponent):
    try:
        return math.pow(basis, exponent)
    except OverflowError:
        if basis < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        # 0 ^ negative -> inf, negative ^ fractional -> nan
        if basis == 0 and exponent < 0:
            if math.copysign(1.0, basis) < 0 and _is_odd_integer(-exponent):
                return -math.inf
            return math.inf
        return math.nan


# -----------------------------
# Helpers
# -----------------------------

def _integral(value, what):
    if not math.isfinite(value) or value < 0 or value != math.floor(value):
        raise ValueError(f"{what} only defined for non-negative integers")
    return int(value)


def _floor(x):
    return float(math.floor(x)) if math.isfinite(x) else x


def _ceil(x):
    return float(math.ceil(x)) if math.isfinite(x) else x


def _round(x):
    # Half up, so round(2.5) = 3 and round(-2.5) = -2
    if not math.isfinite(x):
        return x
    whole = math.floor(x)
    if x - whole >= 0.5:
        whole += 1
    return float(whole)


def _sinh(x):
    try:
        return math.sinh(x)
    except OverflowError:
        return math.copysign(math.inf, x)


def _log(number, base=None):
    """log(x) is base 10; log(x, b) uses base b."""
    if base is None:
        return math.log10(number)
    return math.log(number, base)


def _factorial(n):
    return float(math.factorial(_integral(n, "Factorial")))


def _ncr(n, r):
    n, r = _integral(n, "nCr"), _integral(r, "nCr")
    if r > n:
        raise ValueError("nCr only defined for r <= n")
    return float(math.comb(n, r))


def _npr(n, r):
    n, r = _integral(n, "nPr"), _integral(r, "nPr")
    if r > n:
        raise ValueError("nPr only defined for r <= n")
    return float(math.perm(n, r))


def _mean(*numbers):
    try:
        return float(statistics.fmean(numbers))
    except OverflowError:
        # fsum refuses intermediate overflow; a plain sum keeps the sign of the infinity
        return sum(numbers) / len(numbers)


def _median(*numbers):
    return float(statistics.median(numbers))


def _mode(*numbers):
    return float(statistics.mode(numbers))


def _stddev(*numbers):
    return float(statistics.pstdev(numbers))


def _variance(*numbers):
    return float(statistics.pvariance(numbers))


def _pv(future_value, rate, periods):
    return future_value / power(1 + rate, periods)


def _fv(present_value, rate, periods):
    return present_value * power(1 + rate, periods)


def _pmt(present_value, rate, periods):
    """Payment per period that pays off `present_value` in `periods` payments."""
    if rate == 0:
        return present_value / periods
    return present_value * rate / (1 - power(1 + rate, -periods))


def _npv(rate, *cashflows):
    # The first cash flow is discounted by one period
    return math.fsum(cashflow / power(1 + rate, i) for i, cashflow in enumerate(cashflows, start=1))


def _irr(*cashflows):
    """Rate at which the net present value of `cashflows` is zero (Newton's method)."""
    guess = 0.1
    for _ in range(100):
        npv_value = 0.0
        derivative = 0.0
        for i, cashflow in enumerate(cashflows):
            npv_value += cashflow / power(1 + guess, i)
            if i > 0:
                derivative -= i * cashflow / power(1 + guess, i + 1)
        new_guess = guess - npv_value / derivative
        if abs(new_guess - guess) < 1e-7:
            return new_guess
        guess = new_guess
    raise ValueError("IRR did not converge")


def _min(*numbers):
    return float(min(numbers))


def _max(*numbers):
    return float(max(numbers))


# -----------------------------
# Registries
# -----------------------------

CONSTANTS = MappingProxyType({
    "pi": math.pi,
    "e": math.e,
    "tau": math.tau,
    "phi": (1 + math.sqrt(5)) / 2,
    "inf": math.inf,
    "nan": math.nan,
})


_functions = {
    # Trigonometry (radians)
    "sin": Builtin(math.sin, 1, 1),
    "cos": Builtin(math.cos, 1, 1),
    "tan": Builtin(math.tan, 1, 1),
    "asin": Builtin(math.asin, 1, 1),
    "acos": Builtin(math.acos, 1, 1),
    "atan": Builtin(math.atan, 1, 1),
    "sinh": Builtin(_sinh, 1, 1),
    "cosh": Builtin(math.cosh, 1, 1),
    "tanh": Builtin(math.tanh, 1, 1),
    "asinh": Builtin(math.asinh, 1, 1),
    "acosh": Builtin(math.acosh, 1, 1),
    "atanh": Builtin(math.atanh, 1, 1),

    # Logarithms and powers
    "log": Builtin(_log, 1, 2),
    "log10": Builtin(math.log10, 1, 1),
    "log2": Builtin(math.log2, 1, 1),
    "ln": Builtin(math.log, 1, 1),
    "exp": Builtin(math.exp, 1, 1),
    "sqrt": Builtin(math.sqrt, 1, 1),
    "pow": Builtin(power, 2, 2),

    # Rounding
    "abs": Builtin(abs, 1, 1),
    "floor": Builtin(_floor, 1, 1),
    "ceil": Builtin(_ceil, 1, 1),
    "round": Builtin(_round, 1, 1),
    "min": Builtin(_min, 1, None),
    "max": Builtin(_max, 1, None),

    # Combinatorics
    "factorial": Builtin(_factorial, 1, 1),
    "ncr": Builtin(_ncr, 2, 2),
    "npr": Builtin(_npr, 2, 2),

    # Statistics (population variants)
    "mean": Builtin(_mean, 1, None),
    "median": Builtin(_median, 1, None),
    "mode": Builtin(_mode, 1, None),
    "stddev": Builtin(_stddev, 1, None),
    "variance": Builtin(_variance, 1, None),

    # Finance (rates per period, e.g. 0.05 for 5 %)
    "pv": Builtin(_pv, 3, 3),
    "fv": Builtin(_fv, 3, 3),
    "pmt": Builtin(_pmt, 3, 3),
    "npv": Builtin(_npv, 2, None),
    "irr": Builtin(_irr, 2, None),
}

FUNCTIONS = MappingProxyType(dict(_functions))


# Degree mode: trig functions take degrees, inverse trig functions return degrees
DEGREE_FUNCTIONS = MappingProxyType({
    **_functions,
    "sin": Builtin(lambda x: math.sin(math.radians(x)), 1, 1),
    "cos": Builtin(lambda x: math.cos(math.radians(x)), 1, 1),
    "tan": Builtin(lambda x: math.tan(math.radians(x)), 1, 1),
    "asin": Builtin(lambda x: math.degrees(math.asin(x)), 1, 1),
    "acos": Builtin(lambda x: math.degrees(math.acos(x)), 1, 1),
    "atan": Builtin(lambda x: math.degrees(math.atan(x)), 1, 1),
})

del _functions
