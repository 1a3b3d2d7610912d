# Parser.py
"""""
Recursive-descent parser for the expression engine.

Precedence, loosest to tightest:

    batch        ';'-separated expressions
    assignment   name = value  /  f(a, b) = body
    sum          + -   (left-associative)
    term         * /   (left-associative)
    power        ^     (right-associative)
    unary        prefix - and +
    factor       number, variable, call or '(' expression ')'

Unary is parsed inside the left operand of '^', so '-2^2' means '(-2)^2'.
"""""

from . import error as E
from .AST import (Assignment, Batch, BinaryOp, BinaryOperator, FunctionCall, FunctionDef,
                  NumberLit, UnaryMinus, Variable)
from .Lexer import TokenKind, tokenize


def parse_expression(received_string):
    """Parse a string into an AST. Raises LexError or ParseError; never returns a partial tree."""
    tokens = tokenize(received_string)
    if not tokens:
        raise E.ParseError("Cannot parse an empty expression.", expected="expression",
                           position=0, code="3110")

    pos = 0

    # ---- Token helpers ----

    def current():
        return tokens[pos] if pos < len(tokens) else None

    def end_position():
        # Just past the last consumed token
        if pos == 0:
            return 0
        last = tokens[pos - 1]
        return last.position + len(last.text)

    def match(kind, text=None):
        token = current()
        return token is not None and token.kind == kind and (text is None or token.text == text)

    def advance():
        nonlocal pos
        token = tokens[pos]
        pos += 1
        return token

    def fail(expected):
        token = current()
        if token is None:
            where = end_position()
            raise E.ParseError(f"Unexpected end of input at position {where}, expected {expected}.",
                               expected=expected, position=where, code="3111")
        raise E.ParseError(f"Unexpected token '{token.text}' at position {token.position}, expected {expected}.",
                           expected=expected, position=token.position, code="3112")

    def consume(kind, text, expected):
        if not match(kind, text):
            fail(expected)
        return advance()

    # ---- Parsing functions in precedence order ----

    def parse_factor():
        """Numbers, variables, function calls and sub-expressions in '()'."""
        token = current()
        if token is None:
            fail("number, variable or '('")

        if token.kind == TokenKind.NUMBER:
            advance()
            return NumberLit(float(token.text))

        if token.kind == TokenKind.IDENTIFIER:
            advance()
            if not match(TokenKind.PAREN_OPEN):
                return Variable(token.text)

            # Function call: argument list may be empty
            advance()
            args = []
            if not match(TokenKind.PAREN_CLOSE):
                args.append(parse_sum())
                while match(TokenKind.COMMA):
                    advance()
                    args.append(parse_sum())
            consume(TokenKind.PAREN_CLOSE, ")", f"',' or ')' after arguments of '{token.text}'")
            return FunctionCall(token.text, tuple(args))

        if token.kind == TokenKind.PAREN_OPEN:
            advance()
            baum_in_der_klammer = parse_sum()
            consume(TokenKind.PAREN_CLOSE, ")", "closing parenthesis ')'")
            return baum_in_der_klammer

        fail("number, variable or '('")

    def parse_unary():
        """Leading '-' becomes UnaryMinus, leading '+' is dropped."""
        if match(TokenKind.OPERATOR, "-"):
            advance()
            return UnaryMinus(parse_unary())
        if match(TokenKind.OPERATOR, "+"):
            advance()
            return parse_unary()
        return parse_factor()

    def parse_power():
        """Exponentiation, recursing on the right for right-associativity."""
        basis = parse_unary()
        if match(TokenKind.OPERATOR, "^"):
            advance()
            exponent = parse_power()
            return BinaryOp(BinaryOperator.EXPONENT, basis, exponent)
        return basis

    def parse_term():
        """Multiplication and division."""
        aktueller_baum = parse_power()
        while match(TokenKind.OPERATOR, "*") or match(TokenKind.OPERATOR, "/"):
            operator = BinaryOperator(advance().text)
            rechtes_teil = parse_power()
            aktueller_baum = BinaryOp(operator, aktueller_baum, rechtes_teil)
        return aktueller_baum

    def parse_sum():
        """Addition and subtraction."""
        aktueller_baum = parse_term()
        while match(TokenKind.OPERATOR, "+") or match(TokenKind.OPERATOR, "-"):
            operator = BinaryOperator(advance().text)
            rechte_seite = parse_term()
            aktueller_baum = BinaryOp(operator, aktueller_baum, rechte_seite)
        return aktueller_baum

    def parse_assignment():
        """Optional '=': binds a variable or defines a function."""
        linke_seite = parse_sum()
        if not match(TokenKind.OPERATOR, "="):
            return linke_seite

        equals = advance()
        if isinstance(linke_seite, Variable):
            return Assignment(linke_seite.name, parse_assignment())

        if isinstance(linke_seite, FunctionCall) and all(isinstance(arg, Variable) for arg in linke_seite.args):
            params = tuple(arg.name for arg in linke_seite.args)
            return FunctionDef(linke_seite.name, params, parse_assignment())

        raise E.ParseError(f"Invalid assignment target before '=' at position {equals.position}.",
                           expected="variable or function signature", position=equals.position, code="3113")

    def parse_batch():
        """';'-separated expressions; a single one is returned unwrapped."""
        expressions = [parse_assignment()]
        while match(TokenKind.OPERATOR, ";"):
            advance()
            expressions.append(parse_assignment())
        if len(expressions) == 1:
            return expressions[0]
        return Batch(tuple(expressions))

    # Build the final AST
    finaler_baum = parse_batch()

    if pos < len(tokens):
        fail("end of input")

    return finaler_baum
