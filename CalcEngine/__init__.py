"""""
CalcEngine: tokenizer, recursive-descent parser, evaluator and simplifier
for calculator expressions.

    >>> from CalcEngine import parse_expression, evaluate_ast, simplify_ast
    >>> evaluate_ast(parse_expression("2+3*4"), {})
    14.0
"""""

from .AST import (Assignment, Batch, BinaryOp, BinaryOperator, ComplexLit, FunctionCall, FunctionDef,
                  NumberLit, UnaryMinus, Variable)
from .CodeGen import generate_code
from .error import EvalError, LexError, MathError, ParseError
from .Evaluator import evaluate_ast
from .Lexer import Token, TokenKind, tokenize
from .MathEngine import calculate
from .Parser import parse_expression
from .Simplifier import simplify_ast
from .StepTracker import StepTracker, evaluate_with_steps

__all__ = [
    "Assignment", "Batch", "BinaryOp", "BinaryOperator", "ComplexLit", "FunctionCall", "FunctionDef",
    "NumberLit", "UnaryMinus", "Variable",
    "EvalError", "LexError", "MathError", "ParseError",
    "Token", "TokenKind", "tokenize",
    "parse_expression", "evaluate_ast", "simplify_ast",
    "generate_code", "calculate", "StepTracker", "evaluate_with_steps",
]
