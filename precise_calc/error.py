# error.py


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

    @property
    def category(self):
        return Error_Dictionary.get(self.code[:1], Error_Dictionary["9"])


class ParseError(MathError):
    pass


class LexicalError(ParseError):
    def __init__(self, message, character, position, code="1001", equation=None):
        super().__init__(message, code=code, equation=equation)
        self.character = character
        self.position = position


class SyntaxError(ParseError):
    def __init__(self, message, expected=None, found=None, code="2000", equation=None):
        super().__init__(message, code=code, equation=equation)
        self.expected = expected
        self.found = found


class CalculationError(MathError):
    pass


class UnknownIdentifierError(MathError):
    def __init__(self, message, name, code="4001", equation=None):
        super().__init__(message, code=code, equation=equation)
        self.name = name


Error_Dictionary = {

    "1" : "Lexical Error",
    "2" : "Syntax Error",
    "3" : "Math Error",
    "4" : "Unknown Identifier",
    "9" : "Unexpected Error"

}

#Error codes are structured in:
# 1. Digit: Main Error (see Error_Dictionary)
# 2. Digit: Specification (0 = input, 5 = engine internal)
# 3. and 4. Digit: Error Number


ERROR_MESSAGES = {
    "1001" : "Unexpected character: ", # + character and position
    "1002" : "Invalid number: ", # + literal and position

    "2000" : "Invalid expression.",
    "2001" : "Empty expression",
    "2002" : "Unexpected token after expression: ", # + token
    "2003" : "Expected number, identifier, or '(' but found: ", # + token
    "2004" : "Expected ')' but found: ", # + token
    "2505" : "Expression is nested too deeply.",

    "3001" : "Division by zero",
    "3002" : "Modulo by zero",
    "3003" : "Square root of negative number",
    "3004" : "Natural log of non-positive number",
    "3005" : "Log10 of non-positive number",
    "3006" : "Logarithm of non-positive number",
    "3007" : "Logarithm of (1 + x) is undefined for x <= -1",
    "3008" : "Acosh is only defined for x >= 1",
    "3009" : "Atanh is only defined for -1 < x < 1",
    "3010" : "Acoth is undefined for zero",
    "3011" : "Asech is only defined for 0 < x <= 1",
    "3012" : "Acsch is undefined for zero",
    "3013" : "Factorial of negative or non-integer number",
    "3014" : "Factors are only defined for positive integers",
    "3515" : "Expression is nested too deeply to evaluate.",

    "4001" : "Unknown variable: ", # + name

    "9999" : "Unexpected Error: " #+error
}
