# Simplifier.py
"""""
Structural simplification: identity elimination and constant folding.

Children are simplified first, then the rule for the parent is applied.
The result is a new tree (unchanged subtrees are shared with the input),
and simplify_ast(simplify_ast(t)) == simplify_ast(t).

Folding stops at function calls: sin(0) stays a call.
"""""

from .AST import (Assignment, Batch, BinaryOp, BinaryOperator, ComplexLit, FunctionCall, FunctionDef,
                  NumberLit, UnaryMinus, Variable)
from .Evaluator import evaluate_ast


def _is_number(node, value):
    return isinstance(node, NumberLit) and node.value == value


def simplify_binary(operator, left, right):
    """Apply the identity rules for one operator to already simplified operands."""
    if operator == BinaryOperator.ADD:
        if _is_number(left, 0):
            return right  # 0 + x = x
        if _is_number(right, 0):
            return left  # x + 0 = x

    elif operator == BinaryOperator.SUBTRACT:
        if _is_number(right, 0):
            return left  # x - 0 = x

    elif operator == BinaryOperator.MULTIPLY:
        if _is_number(left, 1):
            return right  # 1 * x = x
        if _is_number(right, 1):
            return left  # x * 1 = x
        if _is_number(left, 0) or _is_number(right, 0):
            return NumberLit(0.0)

    elif operator == BinaryOperator.DIVIDE:
        if _is_number(right, 1):
            return left  # x / 1 = x
        if _is_number(left, 0) and isinstance(right, NumberLit) and right.value != 0:
            return NumberLit(0.0)

    elif operator == BinaryOperator.EXPONENT:
        if _is_number(right, 1):
            return left  # x ^ 1 = x
        if _is_number(left, 1):
            return NumberLit(1.0)  # 1 ^ x = 1
        if _is_number(right, 0):
            return NumberLit(1.0)  # x ^ 0 = 1

    return None


def simplify_ast(node):
    if isinstance(node, (NumberLit, ComplexLit, Variable)):
        return node

    elif isinstance(node, UnaryMinus):
        operand = simplify_ast(node.operand)
        if isinstance(operand, NumberLit):
            return NumberLit(-operand.value)
        if isinstance(operand, UnaryMinus):
            return operand.operand  # --x = x
        if operand is node.operand:
            return node
        return UnaryMinus(operand)

    elif isinstance(node, BinaryOp):
        left = simplify_ast(node.left)
        right = simplify_ast(node.right)

        # Constant folding
        if isinstance(left, NumberLit) and isinstance(right, NumberLit):
            return NumberLit(evaluate_ast(BinaryOp(node.op, left, right), {}))

        vereinfacht = simplify_binary(node.op, left, right)
        if vereinfacht is not None:
            return vereinfacht
        if left is node.left and right is node.right:
            return node
        return BinaryOp(node.op, left, right)

    elif isinstance(node, FunctionCall):
        return FunctionCall(node.name, tuple(simplify_ast(arg) for arg in node.args))

    elif isinstance(node, Assignment):
        return Assignment(node.name, simplify_ast(node.value))

    elif isinstance(node, FunctionDef):
        return FunctionDef(node.name, node.params, simplify_ast(node.body))

    elif isinstance(node, Batch):
        return Batch(tuple(simplify_ast(expression) for expression in node.expressions))

    raise TypeError(f"Unknown AST node: {node!r}")
