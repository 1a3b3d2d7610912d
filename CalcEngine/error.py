# error.py
"""""
Error types raised by the expression engine.

Every error carries a four digit code. The codes are structured in:
 1. Digit: Main Error (3 = Calculator, 5 = Configuration, 9 = Runtime)
 2. Digit: Specification (1 = expression engine)
 3. Digit: Component (0 = Lexer, 1 = Parser, 2 = Evaluator)
 4. Digit: Error Number
"""""


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

    def __str__(self):
        return f"[{self.code}] {self.message}"


class LexError(MathError):
    """Unrecognized character or malformed number literal."""
    def __init__(self, message, text, position, code="3100"):
        super().__init__(message, code=code)
        self.text = text
        self.position = position


class ParseError(MathError):
    """Unexpected token, unexpected end of input or invalid assignment target."""
    def __init__(self, message, expected, position, code="3112"):
        super().__init__(message, code=code)
        self.expected = expected
        self.position = position


class EvalError(MathError):
    """Undefined variable, unknown function or invalid call arity."""
    def __init__(self, message, name, code="3120"):
        super().__init__(f"{message}: {name}", code=code)
        self.reason = message
        self.name = name


ERROR_MESSAGES = {
    "3100" : "Unknown character: ", # + character
    "3101" : "Invalid number format: ", # + malformed number
    "3110" : "Cannot parse an empty expression.",
    "3111" : "Unexpected end of input.",
    "3112" : "Unexpected token: ", # + token
    "3113" : "Invalid assignment target.",
    "3120" : "Undefined variable: ", # + name
    "3121" : "Unknown function: ", # + name
    "3122" : "Invalid number of arguments: ", # + function name
    "3123" : "Math domain error in function: ", # + function name
    "3124" : "Function used as a value: ", # + name


    "5000" : "Settings file could not be written.",
    "5001" : "Unknown setting: ", # + key
    "5002" : "Invalid setting value: ", # + key and value


    "9999" : "Unexpected Error: " #+error
}
