# PreciseDisplay.py
"""""
Precise display of results.

Tries to recognise a value as one of a few families of "nice" numbers and
renders it symbolically, in this order:

1) known constants (π, e, √2, φ, simple fractions, ...)
2) radians: common angles as fractions of π, integer multiples of π,
   then k·π/d for d in 2..12
   degrees: common angles, then any whole number of degrees
3) simple fractions n/d for d in 2..16 (reduced)
4) ±√i for i in 2..20
5) decimal fallback

Every comparison uses an absolute tolerance of 1e-10. Only numerators that
fit in 32 bits are rendered symbolically; larger values fall through.
"""""

import math
from fractions import Fraction

from .ScientificEngine import AngleMode

TOLERANCE = 1e-10
MAX_NUMERATOR = 2**31 - 1
MAX_EXACT_INTEGER = 2**63

PI = math.pi

# Common angle values in radians as fractions of π
COMMON_ANGLES_RADIANS = [
    (0.0, "0"),
    (PI / 6, "π/6"),
    (PI / 4, "π/4"),
    (PI / 3, "π/3"),
    (PI / 2, "π/2"),
    (2 * PI / 3, "2π/3"),
    (3 * PI / 4, "3π/4"),
    (5 * PI / 6, "5π/6"),
    (PI, "π"),
    (7 * PI / 6, "7π/6"),
    (5 * PI / 4, "5π/4"),
    (4 * PI / 3, "4π/3"),
    (3 * PI / 2, "3π/2"),
    (5 * PI / 3, "5π/3"),
    (7 * PI / 4, "7π/4"),
    (11 * PI / 6, "11π/6"),
    (2 * PI, "2π"),
    (-PI / 6, "-π/6"),
    (-PI / 4, "-π/4"),
    (-PI / 3, "-π/3"),
    (-PI / 2, "-π/2"),
    (-2 * PI / 3, "-2π/3"),
    (-3 * PI / 4, "-3π/4"),
    (-5 * PI / 6, "-5π/6"),
    (-PI, "-π"),
]

COMMON_ANGLES_DEGREES = [
    (float(degrees), f"{degrees}°")
    for degrees in (0, 30, 45, 60, 90, 120, 135, 150, 180, 210, 225, 240, 270, 300, 315, 330, 360,
                    -30, -45, -60, -90, -120, -135, -150, -180)
]

COMMON_CONSTANTS = [
    (PI, "π"),
    (math.e, "e"),
    (2 * PI, "2π"),
    (PI / 2, "π/2"),
    (PI / 3, "π/3"),
    (PI / 4, "π/4"),
    (PI / 6, "π/6"),
    (math.sqrt(2.0), "√2"),
    (math.sqrt(3.0), "√3"),
    (math.sqrt(5.0), "√5"),
    ((1 + math.sqrt(5.0)) / 2, "φ"),  # golden ratio
    (math.log(2.0), "ln(2)"),
    (math.log(10.0), "ln(10)"),
    (1.0, "1"),
    (0.0, "0"),
    (-1.0, "-1"),
    (0.5, "1/2"),
    (0.25, "1/4"),
    (0.75, "3/4"),
    (1.0 / 3.0, "1/3"),
    (2.0 / 3.0, "2/3"),
]

ANGLE_DESCRIPTIONS = {
    "0": "zero angle",
    "0°": "zero angle",
    "π/2": "right angle",
    "90°": "right angle",
    "π": "straight angle",
    "180°": "straight angle",
    "2π": "full circle",
    "360°": "full circle",
    "π/4": "half right angle",
    "45°": "half right angle",
    "π/3": "acute angle",
    "60°": "acute angle",
    "π/6": "acute angle",
    "30°": "acute angle",
}


def _close(value, target):
    return abs(value - target) < TOLERANCE


def _lookup(value, table):
    for candidate, display in table:
        if _close(value, candidate):
            return display
    return None


def _pi_multiple(value):
    multiple = value / PI
    whole = int(multiple)
    if abs(whole) <= MAX_NUMERATOR and abs(multiple - whole) < TOLERANCE:
        if whole == 0:
            return "0"
        if whole == 1:
            return "π"
        if whole == -1:
            return "-π"
        return f"{whole}π"
    return None


def _pi_fraction(value):
    for denominator in range(2, 13):
        numerator = round(value * denominator / PI)
        if abs(numerator) > MAX_NUMERATOR:
            continue
        if _close(value, numerator * PI / denominator):
            if numerator == 0:
                return "0"
            if numerator == denominator:
                return "π"
            if numerator == -denominator:
                return "-π"
            if numerator == 1:
                return f"π/{denominator}"
            if numerator == -1:
                return f"-π/{denominator}"
            return f"{numerator}π/{denominator}"
    return None


def _whole_degrees(value):
    degrees = round(value)
    if abs(degrees) <= MAX_NUMERATOR and _close(value, degrees):
        return f"{degrees}°"
    return None


def _simple_fraction(value):
    for denominator in range(2, 17):
        numerator = round(value * denominator)
        if abs(numerator) > MAX_NUMERATOR:
            continue
        if _close(value, numerator / denominator):
            if numerator == 0:
                return "0"
            if numerator == denominator:
                return "1"
            if numerator == -denominator:
                return "-1"
            return str(Fraction(numerator, denominator))
    return None


def _square_root(value):
    for radicand in range(2, 21):
        root = math.sqrt(radicand)
        if _close(value, root):
            return f"√{radicand}"
        if _close(value, -root):
            return f"-√{radicand}"
    return None


def format_value(value, angle_mode=AngleMode.RADIANS):
    """Render value symbolically when it matches a known form, else as a decimal."""
    if not math.isfinite(value):
        return format_decimal(value)

    display = _lookup(value, COMMON_CONSTANTS)
    if display is not None:
        return display

    if angle_mode is AngleMode.RADIANS:
        finders = (lambda v: _lookup(v, COMMON_ANGLES_RADIANS), _pi_multiple, _pi_fraction)
    else:
        finders = (lambda v: _lookup(v, COMMON_ANGLES_DEGREES), _whole_degrees)

    for finder in finders + (_simple_fraction, _square_root):
        display = finder(value)
        if display is not None:
            return display

    return format_decimal(value)


def format_decimal(value):
    """Plain decimal rendering: integers exactly, very large/small values in scientific notation."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if abs(value) < TOLERANCE:
        return "0"
    if float(value).is_integer() and abs(value) < MAX_EXACT_INTEGER:
        return str(int(value))
    if abs(value) > 1e6 or abs(value) < 1e-4:
        return f"{value:.6e}"
    return f"{value:.10g}"


def is_nice_angle(value, angle_mode):
    """True if value is one of the common angles of the given mode."""
    if angle_mode is AngleMode.RADIANS:
        table = COMMON_ANGLES_RADIANS
    else:
        table = COMMON_ANGLES_DEGREES
    return _lookup(value, table) is not None


def get_angle_description(value, angle_mode):
    return ANGLE_DESCRIPTIONS.get(format_value(value, angle_mode))
