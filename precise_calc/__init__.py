"""Precise calculator engine: tokenizer, parser, evaluator and symbolic display."""

from .MathEngine import Calculator, calculate, describe, evaluate, parse, tokenize
from .PreciseDisplay import format_value, get_angle_description, is_nice_angle
from .ScientificEngine import AngleMode, BinaryOperation, UnaryOperation

__all__ = [
    "AngleMode",
    "BinaryOperation",
    "Calculator",
    "UnaryOperation",
    "calculate",
    "describe",
    "evaluate",
    "format_value",
    "get_angle_description",
    "is_nice_angle",
    "parse",
    "tokenize",
]
