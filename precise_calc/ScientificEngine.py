# ScientificEngine.py
"""""
Operation catalog for the calculator.

Holds the closed sets of binary and unary operations, the constants table and
the function-name aliases the parser folds onto canonical operations. Every
operation is applied through a dispatch table (`apply_binary` / `apply_unary`).

Floating point policy
---------------------
Explicitly checked domains (sqrt, logarithms, inverse hyperbolics, factorial,
factors, division) raise `CalculationError`. Everything else follows IEEE-754:
where Python's `math` module would raise ValueError/OverflowError instead of
producing NaN/Infinity, the value is mapped back so it propagates silently.
"""""

import math
from enum import Enum
from types import MappingProxyType

from . import error as E


class AngleMode(Enum):
    RADIANS = "radians"
    DEGREES = "degrees"

    @classmethod
    def from_setting(cls, value):
        """Parse a config/command string ('rad', 'radians', 'deg', 'degrees')."""
        text = str(value).strip().lower()
        if text in ("rad", "radians"):
            return cls.RADIANS
        if text in ("deg", "degrees"):
            return cls.DEGREES
        raise ValueError(f"Angle mode must be 'radians' or 'degrees', got {value!r}")


class BinaryOperation(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"
    MODULO = "%"


class UnaryOperation(Enum):
    NEGATE = "-"

    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    COT = "cot"
    SEC = "sec"
    CSC = "csc"

    ARCSIN = "arcsin"
    ARCCOS = "arccos"
    ARCTAN = "arctan"
    ARCCOT = "arccot"
    ARCSEC = "arcsec"
    ARCCSC = "arccsc"

    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"
    COTH = "coth"
    SECH = "sech"
    CSCH = "csch"

    ASINH = "asinh"
    ACOSH = "acosh"
    ATANH = "atanh"
    ACOTH = "acoth"
    ASECH = "asech"
    ACSCH = "acsch"

    SQRT = "sqrt"
    ABS = "abs"
    SIGN = "sign"

    FLOOR = "floor"
    CEIL = "ceil"
    ROUND = "round"

    LN = "ln"
    LOG10 = "log10"
    LOG2 = "log2"
    EXP = "exp"
    LOG1P = "log1p"

    FACTORIAL = "fact"
    IS_PRIME = "isprime"
    IS_EVEN = "iseven"
    IS_ODD = "isodd"
    FACTORS = "factors"

    NOT = "not"

    RADS = "rads"  # degrees -> radians
    DEGS = "degs"  # radians -> degrees


# Every unary operation except negation is reachable by name; lookups are lower case.
FUNCTION_NAMES = {op.value: op for op in UnaryOperation if op is not UnaryOperation.NEGATE}
FUNCTION_NAMES.update({
    "asin": UnaryOperation.ARCSIN,
    "acos": UnaryOperation.ARCCOS,
    "atan": UnaryOperation.ARCTAN,
    "acot": UnaryOperation.ARCCOT,
    "asec": UnaryOperation.ARCSEC,
    "acsc": UnaryOperation.ARCCSC,
    "factorial": UnaryOperation.FACTORIAL,
})


CONSTANTS = MappingProxyType({
    "PI": math.pi,
    "E": math.e,
    "PHI": (1 + math.sqrt(5.0)) / 2,
    "TAU": 2 * math.pi,
    "SQRT2": math.sqrt(2.0),
    "SQRT3": math.sqrt(3.0),
    "LN2": math.log(2.0),
    "LN10": math.log(10.0),
    "RIGHT_ANGLE": math.pi / 2,
    "STRAIGHT_ANGLE": math.pi,
    "FULL_CIRCLE": 2 * math.pi,
})


def lookup_function(name):
    """Return the UnaryOperation for a function name (case-insensitive) or None."""
    return FUNCTION_NAMES.get(name.lower())


# -----------------------------
# IEEE-754 helpers
# -----------------------------

def _ieee(function, *args):
    """Call a math function, turning its domain ValueError into NaN."""
    try:
        return function(*args)
    except ValueError:
        return math.nan


def _is_integral(value):
    return float(value).is_integer()


def _is_odd_integer(value):
    return _is_integral(value) and value % 2 == 1


def _reciprocal(value):
    if value == 0:
        return math.copysign(math.inf, value)
    return 1.0 / value


def _exp(value):
    try:
        return math.exp(value)
    except OverflowError:
        return math.inf


def _sinh(value):
    try:
        return math.sinh(value)
    except OverflowError:
        return math.copysign(math.inf, value)


def _cosh(value):
    try:
        return math.cosh(value)
    except OverflowError:
        return math.inf


def _atanh(value):
    # atanh(+-1) is +-Infinity in IEEE arithmetic, math.atanh rejects it
    if abs(value) == 1:
        return math.copysign(math.inf, value)
    return _ieee(math.atanh, value)


def _finite_only(function):
    """Wrap a rounding function so NaN and +-Infinity pass through unchanged."""
    def wrapper(value):
        if not math.isfinite(value):
            return value
        return float(function(value))
    return wrapper


# -----------------------------
# Binary operations
# -----------------------------

def _divide(left, right):
    if right == 0:
        raise E.CalculationError("Division by zero", code="3001")
    return left / right


def _power(base, exponent):
    try:
        return math.pow(base, exponent)
    except ValueError:
        if base == 0:
            # zero to a negative power
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        # negative base with a fractional exponent
        return math.nan
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf


def _modulo(left, right):
    if right == 0:
        raise E.CalculationError("Modulo by zero", code="3002")
    return _ieee(math.fmod, left, right)


_BINARY_OPERATIONS = {
    BinaryOperation.ADD: lambda left, right: left + right,
    BinaryOperation.SUBTRACT: lambda left, right: left - right,
    BinaryOperation.MULTIPLY: lambda left, right: left * right,
    BinaryOperation.DIVIDE: _divide,
    BinaryOperation.POWER: _power,
    BinaryOperation.MODULO: _modulo,
}


def apply_binary(operation, left, right):
    return _BINARY_OPERATIONS[operation](left, right)


# -----------------------------
# Unary operations
# -----------------------------

def _sqrt(operand):
    if operand < 0:
        raise E.CalculationError("Square root of negative number", code="3003")
    return math.sqrt(operand)


def _ln(operand):
    if operand <= 0:
        raise E.CalculationError("Natural log of non-positive number", code="3004")
    return math.log(operand)


def _log10(operand):
    if operand <= 0:
        raise E.CalculationError("Log10 of non-positive number", code="3005")
    return math.log10(operand)


def _log2(operand):
    if operand <= 0:
        raise E.CalculationError("Logarithm of non-positive number", code="3006")
    return math.log2(operand)


def _log1p(operand):
    if operand <= -1:
        raise E.CalculationError("Logarithm of (1 + x) is undefined for x <= -1", code="3007")
    return math.log1p(operand)


def _acosh(operand):
    if operand < 1:
        raise E.CalculationError("Acosh is only defined for x >= 1", code="3008")
    return math.acosh(operand)


def _atanh_checked(operand):
    if operand <= -1 or operand >= 1:
        raise E.CalculationError("Atanh is only defined for -1 < x < 1", code="3009")
    return math.atanh(operand)


def _acoth(operand):
    if operand == 0:
        raise E.CalculationError("Acoth is undefined for zero", code="3010")
    return _atanh(1.0 / operand)


def _asech(operand):
    if operand <= 0 or operand > 1:
        raise E.CalculationError("Asech is only defined for 0 < x <= 1", code="3011")
    return math.acosh(1.0 / operand)


def _acsch(operand):
    if operand == 0:
        raise E.CalculationError("Acsch is undefined for zero", code="3012")
    return math.asinh(1.0 / operand)


def _sign(operand):
    if operand > 0:
        return 1.0
    if operand < 0:
        return -1.0
    return 0.0


def _factorial(operand):
    """Product 1..n as a float; overflows to Infinity past 170!."""
    if operand < 0 or not _is_integral(operand):
        raise E.CalculationError("Factorial of negative or non-integer number", code="3013")
    result = 1.0
    for factor in range(2, int(operand) + 1):
        result *= factor
        if math.isinf(result):
            break
    return result


def _is_prime(operand):
    if not _is_integral(operand) or operand < 2:
        return 0.0
    if operand == 2:
        return 1.0
    if operand % 2 == 0:
        return 0.0
    candidate = int(operand)
    for divisor in range(3, math.isqrt(candidate) + 1, 2):
        if candidate % divisor == 0:
            return 0.0
    return 1.0


def _is_even(operand):
    if not _is_integral(operand):
        return 0.0
    return 1.0 if operand % 2 == 0 else 0.0


def _is_odd(operand):
    if not _is_integral(operand):
        return 0.0
    return 1.0 if operand % 2 != 0 else 0.0


def _count_factors(operand):
    """Number of positive divisors, counted in pairs up to the square root."""
    if operand < 1 or not _is_integral(operand):
        raise E.CalculationError("Factors are only defined for positive integers", code="3014")
    number = int(operand)
    count = 0
    for divisor in range(1, math.isqrt(number) + 1):
        if number % divisor == 0:
            count += 1 if divisor * divisor == number else 2
    return float(count)


# Operand is converted from the angle mode into radians first.
_TRIGONOMETRIC = {
    UnaryOperation.SIN: math.sin,
    UnaryOperation.COS: math.cos,
    UnaryOperation.TAN: math.tan,
    UnaryOperation.COT: lambda radians: _reciprocal(math.tan(radians)),
    UnaryOperation.SEC: lambda radians: _reciprocal(math.cos(radians)),
    UnaryOperation.CSC: lambda radians: _reciprocal(math.sin(radians)),
}

# Result is computed in radians, then converted into the angle mode.
_INVERSE_TRIGONOMETRIC = {
    UnaryOperation.ARCSIN: math.asin,
    UnaryOperation.ARCCOS: math.acos,
    UnaryOperation.ARCTAN: math.atan,
    UnaryOperation.ARCCOT: lambda value: math.atan(_reciprocal(value)),
    UnaryOperation.ARCSEC: lambda value: math.acos(_reciprocal(value)),
    UnaryOperation.ARCCSC: lambda value: math.asin(_reciprocal(value)),
}

_UNARY_OPERATIONS = {
    UnaryOperation.NEGATE: lambda operand: -operand,

    UnaryOperation.SINH: _sinh,
    UnaryOperation.COSH: _cosh,
    UnaryOperation.TANH: math.tanh,
    UnaryOperation.COTH: lambda operand: _reciprocal(math.tanh(operand)),
    UnaryOperation.SECH: lambda operand: _reciprocal(_cosh(operand)),
    UnaryOperation.CSCH: lambda operand: _reciprocal(_sinh(operand)),

    UnaryOperation.ASINH: math.asinh,
    UnaryOperation.ACOSH: _acosh,
    UnaryOperation.ATANH: _atanh_checked,
    UnaryOperation.ACOTH: _acoth,
    UnaryOperation.ASECH: _asech,
    UnaryOperation.ACSCH: _acsch,

    UnaryOperation.SQRT: _sqrt,
    UnaryOperation.ABS: abs,
    UnaryOperation.SIGN: _sign,

    UnaryOperation.FLOOR: _finite_only(math.floor),
    UnaryOperation.CEIL: _finite_only(math.ceil),
    UnaryOperation.ROUND: _finite_only(round),  # half-even, like the rest of IEEE rounding

    UnaryOperation.LN: _ln,
    UnaryOperation.LOG10: _log10,
    UnaryOperation.LOG2: _log2,
    UnaryOperation.EXP: _exp,
    UnaryOperation.LOG1P: _log1p,

    UnaryOperation.FACTORIAL: _factorial,
    UnaryOperation.IS_PRIME: _is_prime,
    UnaryOperation.IS_EVEN: _is_even,
    UnaryOperation.IS_ODD: _is_odd,
    UnaryOperation.FACTORS: _count_factors,

    UnaryOperation.NOT: lambda operand: 1.0 if operand == 0 else 0.0,

    UnaryOperation.RADS: lambda operand: operand * math.pi / 180.0,
    UnaryOperation.DEGS: lambda operand: operand * 180.0 / math.pi,
}


def to_radians(angle, angle_mode):
    if angle_mode is AngleMode.DEGREES:
        return angle * math.pi / 180.0
    return angle


def from_radians(angle, angle_mode):
    if angle_mode is AngleMode.DEGREES:
        return angle * 180.0 / math.pi
    return angle


def apply_unary(operation, operand, angle_mode=AngleMode.RADIANS):
    """Apply a unary operation; trigonometric ones honour the angle mode."""
    if operation in _TRIGONOMETRIC:
        return _ieee(_TRIGONOMETRIC[operation], to_radians(operand, angle_mode))
    if operation in _INVERSE_TRIGONOMETRIC:
        return from_radians(_ieee(_INVERSE_TRIGONOMETRIC[operation], operand), angle_mode)
    return _UNARY_OPERATIONS[operation](operand)
