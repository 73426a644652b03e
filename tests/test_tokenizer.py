import pytest

from precise_calc import error as E
from precise_calc.MathEngine import TokenType, tokenize


def types(tokens):
    return [token.type for token in tokens]


def test_simple_expression():
    tokens = tokenize("2 + 3")
    assert types(tokens) == [TokenType.NUMBER, TokenType.OPERATOR, TokenType.NUMBER, TokenType.END]
    assert [token.value for token in tokens[:3]] == [2.0, "+", 3.0]


def test_every_operator_is_a_single_token():
    tokens = tokenize("+-*/^%")
    assert [token.value for token in tokens[:-1]] == ["+", "-", "*", "/", "^", "%"]
    assert all(token.type is TokenType.OPERATOR for token in tokens[:-1])


def test_empty_input_still_ends_with_end_token():
    tokens = tokenize("")
    assert types(tokens) == [TokenType.END]
    assert tokens[0].position == 0


def test_positions_skip_whitespace():
    tokens = tokenize("  (1)\t")
    assert [(token.type, token.position) for token in tokens] == [
        (TokenType.LPAREN, 2),
        (TokenType.NUMBER, 3),
        (TokenType.RPAREN, 4),
        (TokenType.END, 6),
    ]


@pytest.mark.parametrize("text, value", [
    ("42", 42.0),
    ("3.14", 3.14),
    (".5", 0.5),
    ("7.", 7.0),
])
def test_number_literals(text, value):
    token = tokenize(text)[0]
    assert token.type is TokenType.NUMBER
    assert token.value == value


def test_second_decimal_point_starts_a_new_number():
    tokens = tokenize("1.2.3")
    assert types(tokens) == [TokenType.NUMBER, TokenType.NUMBER, TokenType.END]
    assert tokens[0].value == 1.2
    assert tokens[1].value == 0.3
    assert tokens[1].position == 3


def test_lone_decimal_point_is_invalid_number():
    with pytest.raises(E.LexicalError) as excinfo:
        tokenize("1 + .")
    assert excinfo.value.code == "1002"
    assert excinfo.value.position == 4


def test_identifiers_keep_case_and_allow_digits_and_underscores():
    tokens = tokenize("Pi sin_x2 _a")
    assert types(tokens) == [TokenType.IDENTIFIER] * 3 + [TokenType.END]
    assert [token.value for token in tokens[:3]] == ["Pi", "sin_x2", "_a"]


def test_number_followed_by_identifier():
    tokens = tokenize("2x")
    assert types(tokens) == [TokenType.NUMBER, TokenType.IDENTIFIER, TokenType.END]


@pytest.mark.parametrize("text, character, position", [
    ("2 $ 3", "$", 2),
    ("1,5", ",", 1),
    ("ä", "ä", 0),
    ("3²", "²", 1),
])
def test_unexpected_character(text, character, position):
    with pytest.raises(E.LexicalError) as excinfo:
        tokenize(text)
    error = excinfo.value
    assert error.character == character
    assert error.position == position
    assert error.code == "1001"
    assert isinstance(error, E.ParseError)
    assert f"at position {position}" in error.message


def test_token_descriptions():
    number, operator, identifier, lparen, rparen, end = tokenize("2+x()")
    assert str(number) == "number 2.0"
    assert str(operator) == "operator '+'"
    assert str(identifier) == "identifier 'x'"
    assert str(lparen) == "'('"
    assert str(rparen) == "')'"
    assert str(end) == "end of input"
