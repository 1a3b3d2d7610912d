# CodeGen.py
"""""
Render an AST back into expression text.

Parentheses are only written where the parser would otherwise build a
different tree, so generate_code(parse_expression(s)) is a normalized
version of s that parses back to an equivalent expression.
"""""

import math
from decimal import Decimal

from .AST import (Assignment, Batch, BinaryOp, BinaryOperator, ComplexLit, FunctionCall, FunctionDef,
                  NumberLit, UnaryMinus, Variable)


# Binding strength, loosest to tightest
PREC_ASSIGNMENT = 0
PREC_SUM = 1
PREC_TERM = 2
PREC_POWER = 3
PREC_UNARY = 4
PREC_ATOM = 5

_BINARY_PREC = {
    BinaryOperator.ADD: PREC_SUM,
    BinaryOperator.SUBTRACT: PREC_SUM,
    BinaryOperator.MULTIPLY: PREC_TERM,
    BinaryOperator.DIVIDE: PREC_TERM,
    BinaryOperator.EXPONENT: PREC_POWER,
}


def format_number(value):
    """Plain positional notation without a trailing '.0' (the lexer has no exponent syntax).

    inf and nan are written as the names of the matching constants.
    """
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_complex(re, im):
    sign = "+" if im >= 0 else "-"
    return f"{format_number(re)}{sign}{format_number(abs(im))}i"


def precedence(node):
    if isinstance(node, BinaryOp):
        return _BINARY_PREC[node.op]
    if isinstance(node, UnaryMinus):
        return PREC_UNARY
    if isinstance(node, NumberLit) and (node.value < 0 or (node.value == 0 and math.copysign(1, node.value) < 0)):
        return PREC_UNARY
    if isinstance(node, (Assignment, FunctionDef, Batch)):
        return PREC_ASSIGNMENT
    return PREC_ATOM


def _wrap(node, minimum):
    text = generate_code(node)
    if precedence(node) < minimum:
        return f"({text})"
    return text


def generate_code(node):
    if isinstance(node, NumberLit):
        return format_number(node.value)

    elif isinstance(node, ComplexLit):
        return f"({format_complex(node.re, node.im)})"

    elif isinstance(node, Variable):
        return node.name

    elif isinstance(node, BinaryOp):
        own = _BINARY_PREC[node.op]
        if node.op == BinaryOperator.EXPONENT:
            # Right-associative: base must be unary or tighter, exponent may be another power
            left = _wrap(node.left, PREC_UNARY)
            right = _wrap(node.right, PREC_POWER)
            return f"{left}^{right}"
        left = _wrap(node.left, own)
        right = _wrap(node.right, own + 1)
        return f"{left} {node.op.symbol} {right}"

    elif isinstance(node, UnaryMinus):
        return "-" + _wrap(node.operand, PREC_ATOM)

    elif isinstance(node, FunctionCall):
        return f"{node.name}({', '.join(generate_code(arg) for arg in node.args)})"

    elif isinstance(node, Assignment):
        return f"{node.name} = {generate_code(node.value)}"

    elif isinstance(node, FunctionDef):
        return f"{node.name}({', '.join(node.params)}) = {generate_code(node.body)}"

    elif isinstance(node, Batch):
        return "; ".join(generate_code(expression) for expression in node.expressions)

    raise TypeError(f"Unknown AST node: {node!r}")
