# MathEngine.py
"""""
Core calculation engine for the precise calculator.

Pipeline
--------
1) Tokenizer: converts a raw input string into a flat list of tokens,
   always terminated by an END token.
2) Parser (AST): builds an Abstract Syntax Tree (recursive-descent, precedence aware).
3) Evaluator: walks the tree bottom-up and applies the operation catalog
   (see ScientificEngine) under the calculator's angle mode.
4) Formatter: renders results symbolically where possible (see PreciseDisplay).

Grammar (lowest to highest precedence)
--------------------------------------
    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/' | '%') factor)*
    factor     := power ('^' power)*
    power      := unary
    unary      := ('-' | '+')* (function_name primary | primary)
    primary    := number | identifier | '(' expression ')'

'^' is left-associative: 2^3^2 is (2^3)^2 = 64.
A function takes a single primary, so sin 2 + 1 is sin(2) + 1.
"""""

import logging
import math
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Union

from . import config_manager as config_manager
from . import PreciseDisplay
from . import ScientificEngine
from . import error as E
from .ScientificEngine import AngleMode, BinaryOperation, UnaryOperation

logger = logging.getLogger(__name__)

DIGITS = "0123456789"
Operations = "+-*/^%"


# -----------------------------
# Tokens
# -----------------------------

class TokenType(Enum):
    NUMBER = "NUMBER"
    IDENTIFIER = "IDENTIFIER"
    OPERATOR = "OPERATOR"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    END = "END"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Union[str, float, None]
    position: int

    def __str__(self):
        if self.type is TokenType.NUMBER:
            return f"number {self.value!r}"
        if self.type is TokenType.IDENTIFIER:
            return f"identifier '{self.value}'"
        if self.type is TokenType.OPERATOR:
            return f"operator '{self.value}'"
        if self.type is TokenType.LPAREN:
            return "'('"
        if self.type is TokenType.RPAREN:
            return "')'"
        return "end of input"


def _is_identifier_start(char):
    return (char.isascii() and char.isalpha()) or char == "_"


def _is_identifier_char(char):
    return char.isalnum() or char == "_"


def tokenize(problem):
    """Convert raw input into tokens (numbers, identifiers, operators, parens, END).

    Notes:
    - A number is a run of digits with at most one '.'; a second '.' starts a new token.
    - Identifiers keep their original case; the parser normalizes them.
    """
    tokens = []
    b = 0

    while b < len(problem):
        current_char = problem[b]

        # --- Whitespace (ignored) ---
        if current_char.isspace():
            b += 1

        # --- Parentheses ---
        elif current_char == "(":
            tokens.append(Token(TokenType.LPAREN, "(", b))
            b += 1
        elif current_char == ")":
            tokens.append(Token(TokenType.RPAREN, ")", b))
            b += 1

        # --- Operators ---
        elif current_char in Operations:
            tokens.append(Token(TokenType.OPERATOR, current_char, b))
            b += 1

        # --- Numbers: digits and one decimal separator ---
        elif current_char in DIGITS or current_char == ".":
            start = b
            has_decimal = False
            while b < len(problem):
                if problem[b] in DIGITS:
                    b += 1
                elif problem[b] == "." and not has_decimal:
                    has_decimal = True
                    b += 1
                else:
                    break

            str_number = problem[start:b]
            try:
                value = float(str_number)
            except ValueError:
                raise E.LexicalError(
                    f"Invalid number: {str_number} at position {start}",
                    character=str_number, position=start, code="1002") from None
            tokens.append(Token(TokenType.NUMBER, value, start))

        # --- Identifiers: constants and function names ---
        elif _is_identifier_start(current_char):
            start = b
            while b < len(problem) and _is_identifier_char(problem[b]):
                b += 1
            tokens.append(Token(TokenType.IDENTIFIER, problem[start:b], start))

        else:
            raise E.LexicalError(
                f"Unexpected character: {current_char} at position {b}",
                character=current_char, position=b, code="1001")

    tokens.append(Token(TokenType.END, None, len(problem)))
    return tokens


# -----------------------------
# AST node types
# -----------------------------

@dataclass(frozen=True)
class Number:
    """Numeric literal."""
    value: float


@dataclass(frozen=True)
class Variable:
    """Reference to a named constant; the name is stored upper case."""
    name: str


@dataclass(frozen=True)
class BinOp:
    left: "Expr"
    operator: BinaryOperation
    right: "Expr"


@dataclass(frozen=True)
class UnaryOp:
    operator: UnaryOperation
    operand: "Expr"


Expr = Union[Number, Variable, BinOp, UnaryOp]


def _tree_depth(expr):
    deepest = 0
    pending = [(expr, 1)]
    while pending:
        node, depth = pending.pop()
        deepest = max(deepest, depth)
        if isinstance(node, BinOp):
            pending.append((node.left, depth + 1))
            pending.append((node.right, depth + 1))
        elif isinstance(node, UnaryOp):
            pending.append((node.operand, depth + 1))
    return deepest


@contextmanager
def _stack_room(frames):
    """Raise the recursion limit by `frames` for the duration of the block."""
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(previous + frames)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


def _number_text(value):
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    # Positional notation; the tokenizer has no exponent syntax
    return format(Decimal(repr(float(value))), "f")


def _grouped(expr):
    text = _describe(expr)
    if isinstance(expr, BinOp) or (isinstance(expr, UnaryOp) and expr.operator is UnaryOperation.NEGATE):
        return f"({text})"
    if isinstance(expr, Number) and expr.value < 0:
        return f"({text})"
    return text


def _describe(expr):
    if isinstance(expr, Number):
        return _number_text(expr.value)
    if isinstance(expr, Variable):
        return expr.name
    if isinstance(expr, BinOp):
        return f"{_grouped(expr.left)} {expr.operator.value} {_grouped(expr.right)}"
    if isinstance(expr, UnaryOp):
        if expr.operator is UnaryOperation.NEGATE:
            return f"-{_grouped(expr.operand)}"
        return f"{expr.operator.value}({_describe(expr.operand)})"
    raise TypeError(f"Not an expression node: {expr!r}")


def describe(expr):
    """Render a tree as infix text that parses back to the same tree."""
    with _stack_room(2 * _tree_depth(expr)):
        return _describe(expr)


# -----------------------------
# Parser (recursive descent)
# -----------------------------

_SUM_OPERATORS = {"+": BinaryOperation.ADD, "-": BinaryOperation.SUBTRACT}
_PRODUCT_OPERATORS = {"*": BinaryOperation.MULTIPLY, "/": BinaryOperation.DIVIDE, "%": BinaryOperation.MODULO}
_POWER_OPERATORS = {"^": BinaryOperation.POWER}


class ExpressionParser:
    """Recursive-descent parser over a token list ending in END."""

    def __init__(self, tokens):
        self.tokens = tokens
        self.position = 0

    def parse(self):
        tree = self.parse_expression()
        token = self.current_token()
        if token.type is not TokenType.END:
            raise E.SyntaxError(f"Unexpected token after expression: {token}",
                                expected="end of input", found=str(token), code="2002")
        return tree

    def current_token(self):
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return Token(TokenType.END, None, self.tokens[-1].position if self.tokens else 0)

    def consume(self):
        token = self.current_token()
        self.position += 1
        return token

    def _match_operator(self, table):
        token = self.current_token()
        if token.type is TokenType.OPERATOR and token.value in table:
            self.consume()
            return table[token.value]
        return None

    def parse_expression(self):
        """Addition and subtraction."""
        current_tree = self.parse_term()
        operator = self._match_operator(_SUM_OPERATORS)
        while operator is not None:
            current_tree = BinOp(current_tree, operator, self.parse_term())
            operator = self._match_operator(_SUM_OPERATORS)
        return current_tree

    def parse_term(self):
        """Multiplication, division and modulo."""
        current_tree = self.parse_factor()
        operator = self._match_operator(_PRODUCT_OPERATORS)
        while operator is not None:
            current_tree = BinOp(current_tree, operator, self.parse_factor())
            operator = self._match_operator(_PRODUCT_OPERATORS)
        return current_tree

    def parse_factor(self):
        """Exponentiation; each '^' takes one power-level operand, so it chains left to right."""
        current_tree = self.parse_power()
        operator = self._match_operator(_POWER_OPERATORS)
        while operator is not None:
            current_tree = BinOp(current_tree, operator, self.parse_power())
            operator = self._match_operator(_POWER_OPERATORS)
        return current_tree

    def parse_power(self):
        return self.parse_unary()

    def parse_unary(self):
        """Leading '+'/'-' and function application."""
        negations = 0
        token = self.current_token()
        while token.type is TokenType.OPERATOR and token.value in "+-":
            if token.value == "-":
                negations += 1
            self.consume()
            token = self.current_token()

        operation = None
        if token.type is TokenType.IDENTIFIER:
            operation = ScientificEngine.lookup_function(token.value)
        if operation is not None:
            self.consume()
            current_tree = UnaryOp(operation, self.parse_primary())
        else:
            current_tree = self.parse_primary()

        # '+' is dropped, each '-' wraps one NEGATE, innermost first
        for _ in range(negations):
            current_tree = UnaryOp(UnaryOperation.NEGATE, current_tree)
        return current_tree

    def parse_primary(self):
        """Numbers, constants and sub-expressions in '()'."""
        token = self.current_token()

        if token.type is TokenType.NUMBER:
            self.consume()
            return Number(token.value)

        if token.type is TokenType.IDENTIFIER:
            self.consume()
            return Variable(token.value.upper())

        if token.type is TokenType.LPAREN:
            self.consume()
            tree_in_brackets = self.parse_expression()
            closing = self.current_token()
            if closing.type is not TokenType.RPAREN:
                raise E.SyntaxError(f"Expected ')' but found: {closing}",
                                    expected="')'", found=str(closing), code="2004")
            self.consume()
            return tree_in_brackets

        raise E.SyntaxError(f"Expected number, identifier, or '(' but found: {token}",
                            expected="number, identifier, or '('", found=str(token), code="2003")


def parse(received_string):
    """Parse text into an expression tree; raises ParseError subclasses on bad input."""
    if not received_string or received_string.isspace():
        raise E.SyntaxError("Empty expression", expected="expression", found="end of input", code="2001")

    tokens = tokenize(received_string)
    logger.debug("Tokens: %s", [str(token) for token in tokens])

    # Each '(' costs one pass through the six grammar levels
    try:
        with _stack_room(8 * len(tokens)):
            final_tree = ExpressionParser(tokens).parse()
    except RecursionError:
        raise E.SyntaxError("Expression is nested too deeply.", code="2505") from None

    logger.debug("Final AST: %s", final_tree)
    return final_tree


# -----------------------------
# Evaluator
# -----------------------------

def _evaluate(expr, angle_mode, constants):
    if isinstance(expr, Number):
        return float(expr.value)

    if isinstance(expr, Variable):
        try:
            return constants[expr.name]
        except KeyError:
            raise E.UnknownIdentifierError(f"Unknown variable: {expr.name}", name=expr.name) from None

    if isinstance(expr, BinOp):
        left_value = _evaluate(expr.left, angle_mode, constants)
        right_value = _evaluate(expr.right, angle_mode, constants)
        return ScientificEngine.apply_binary(expr.operator, left_value, right_value)

    if isinstance(expr, UnaryOp):
        operand = _evaluate(expr.operand, angle_mode, constants)
        return ScientificEngine.apply_unary(expr.operator, operand, angle_mode)

    raise TypeError(f"Not an expression node: {expr!r}")


def evaluate(expr, angle_mode=AngleMode.RADIANS, constants=ScientificEngine.CONSTANTS):
    """Evaluate a tree bottom-up to a float. The tree is never modified."""
    with _stack_room(2 * _tree_depth(expr)):
        return _evaluate(expr, angle_mode, constants)


class Calculator:
    """Evaluation context: owns the angle mode and the constants table.

    Independent instances never share state, so a shell and a GUI (or two
    tests) can each keep their own angle mode.
    """

    def __init__(self, angle_mode=None, constants=None):
        if angle_mode is None:
            angle_mode = config_manager.load_setting_value("angle_mode")
        self._angle_mode = self._coerce_mode(angle_mode)
        if constants is None:
            constants = ScientificEngine.CONSTANTS
        self._constants = MappingProxyType(dict(constants))

    @staticmethod
    def _coerce_mode(mode):
        if isinstance(mode, AngleMode):
            return mode
        return AngleMode.from_setting(mode)

    @property
    def angle_mode(self):
        return self._angle_mode

    @property
    def constants(self):
        return self._constants

    def get_angle_mode(self):
        return self._angle_mode

    def set_angle_mode(self, mode):
        self._angle_mode = self._coerce_mode(mode)
        logger.debug("Angle mode set to %s", self._angle_mode.value)

    def toggle_angle_mode(self):
        """Switch between radians and degrees and return the new mode."""
        if self._angle_mode is AngleMode.DEGREES:
            self.set_angle_mode(AngleMode.RADIANS)
        else:
            self.set_angle_mode(AngleMode.DEGREES)
        return self._angle_mode

    def evaluate(self, expr):
        try:
            return evaluate(expr, self._angle_mode, self._constants)
        except RecursionError:
            raise E.CalculationError("Expression is nested too deeply to evaluate.", code="3515") from None


# -----------------------------
# Public entry point
# -----------------------------

def calculate(problem, calculator=None):
    """Main API: parse -> evaluate -> format -> render string ("= <result>")."""
    if calculator is None:
        calculator = Calculator()
    settings = config_manager.load_setting_value("all")

    try:
        final_tree = parse(problem)
        result = calculator.evaluate(final_tree)
        logger.debug("%s = %r (%s)", describe(final_tree), result, calculator.angle_mode.value)

    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = problem
        raise

    if not settings["precise_display"]:
        return "= " + PreciseDisplay.format_decimal(result)

    output_string = PreciseDisplay.format_value(result, calculator.angle_mode)
    # A zero result is plain arithmetic far more often than an angle
    if abs(result) >= PreciseDisplay.TOLERANCE and PreciseDisplay.is_nice_angle(result, calculator.angle_mode):
        description = PreciseDisplay.get_angle_description(result, calculator.angle_mode)
        if description:
            return f"= {output_string} ({description})"
    return "= " + output_string
