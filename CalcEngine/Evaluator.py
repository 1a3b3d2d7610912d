# Evaluator.py
"""""
Evaluate an AST against a caller-supplied scope.

The scope is a plain mutable mapping (name -> number). Assignment and
function definitions write into it, and the same scope object is threaded
through every expression of a batch, so later expressions see the bindings
made by earlier ones.

Arithmetic follows IEEE-754 doubles: dividing by zero gives +-inf or nan,
and is not an error.
"""""

import math
from collections import ChainMap
from dataclasses import dataclass
from typing import Tuple

from . import error as E
from .AST import (Assignment, Batch, BinaryOp, BinaryOperator, ComplexLit, FunctionCall, FunctionDef,
                  NumberLit, UnaryMinus, Variable)
from .CodeGen import format_complex, format_number
from .ScientificEngine import CONSTANTS, DEGREE_FUNCTIONS, FUNCTIONS, accepts, divide, power


@dataclass(frozen=True)
class UserFunction:
    """Closure created by 'f(x, y) = body'; stored in the scope under its name."""
    params: Tuple[str, ...]
    body: object


def apply_operator(operator, left, right):
    """Apply a binary operator to two floats."""
    if operator == BinaryOperator.ADD:
        return left + right
    elif operator == BinaryOperator.SUBTRACT:
        return left - right
    elif operator == BinaryOperator.MULTIPLY:
        return left * right
    elif operator == BinaryOperator.DIVIDE:
        return divide(left, right)
    elif operator == BinaryOperator.EXPONENT:
        return power(left, right)
    raise E.MathError(f"Unknown operator: {operator}", code="9999")


def _symbolic(value):
    if isinstance(value, str):
        return value
    return format_number(value)


def evaluate_ast(node, scope=None, degrees=False, constants=CONSTANTS):
    """Evaluate `node` and return a float, or a string for symbolic results.

    `scope` is modified in place by assignments and function definitions.
    With degrees=True the trigonometric functions work in degrees.
    """
    if scope is None:
        scope = {}
    functions = DEGREE_FUNCTIONS if degrees else FUNCTIONS

    def evaluate(node, scope):
        if isinstance(node, NumberLit):
            return node.value

        elif isinstance(node, ComplexLit):
            return format_complex(node.re, node.im)

        elif isinstance(node, Variable):
            if node.name in scope:
                value = scope[node.name]
                if isinstance(value, UserFunction):
                    raise E.EvalError("function used as a value", node.name, code="3124")
                return value if isinstance(value, str) else float(value)
            if node.name in constants:
                return constants[node.name]
            raise E.EvalError("undefined variable", node.name, code="3120")

        elif isinstance(node, BinaryOp):
            left_value = evaluate(node.left, scope)
            right_value = evaluate(node.right, scope)
            if isinstance(left_value, str) or isinstance(right_value, str):
                return f"({_symbolic(left_value)} {node.op.symbol} {_symbolic(right_value)})"
            return apply_operator(node.op, left_value, right_value)

        elif isinstance(node, UnaryMinus):
            value = evaluate(node.operand, scope)
            if isinstance(value, str):
                return f"-({value})"
            return -value

        elif isinstance(node, FunctionCall):
            return call(node, scope)

        elif isinstance(node, Assignment):
            value = evaluate(node.value, scope)
            if not isinstance(value, str):
                scope[node.name] = value
            return value

        elif isinstance(node, FunctionDef):
            scope[node.name] = UserFunction(node.params, node.body)
            return f"{node.name}({', '.join(node.params)}) defined"

        elif isinstance(node, Batch):
            ergebnis = None
            for expression in node.expressions:
                ergebnis = evaluate(expression, scope)
            return ergebnis

        raise TypeError(f"Unknown AST node: {node!r}")

    def call(node, scope):
        user_function = scope.get(node.name)
        if isinstance(user_function, UserFunction):
            if len(node.args) != len(user_function.params):
                raise E.EvalError("invalid arity", node.name, code="3122")
            args = [evaluate(arg, scope) for arg in node.args]
            # Parameters shadow the caller's scope, free variables fall through to it
            overlay = ChainMap(dict(zip(user_function.params, args)), scope)
            return evaluate(user_function.body, overlay)

        builtin = functions.get(node.name)
        if builtin is None:
            raise E.EvalError("unknown function", node.name, code="3121")
        if not accepts(builtin, len(node.args)):
            raise E.EvalError("invalid arity", node.name, code="3122")

        args = [evaluate(arg, scope) for arg in node.args]
        if any(isinstance(arg, str) for arg in args):
            return f"{node.name}({', '.join(_symbolic(arg) for arg in args)})"

        try:
            return float(builtin.func(*args))
        except OverflowError:
            # Only raised by functions whose overflow is positive (exp, cosh, factorial)
            return math.inf
        except (ValueError, ZeroDivisionError) as e:
            raise E.EvalError("math domain error", node.name, code="3123") from e

    return evaluate(node, scope)
