# AST.py
"""""
AST node types produced by the parser.

Nodes are frozen dataclasses: they compare structurally and are never
changed after construction. The simplifier builds new trees instead of
editing old ones, and may share untouched subtrees with its input.
"""""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class BinaryOperator(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    EXPONENT = "^"

    @property
    def symbol(self):
        return self.value


@dataclass(frozen=True)
class NumberLit:
    value: float


@dataclass(frozen=True)
class ComplexLit:
    """Complex literal re + im*i. The grammar does not produce it yet."""
    re: float
    im: float


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class Assignment:
    name: str
    value: "Node"


@dataclass(frozen=True)
class FunctionDef:
    name: str
    params: Tuple[str, ...]
    body: "Node"


@dataclass(frozen=True)
class Batch:
    expressions: Tuple["Node", ...]


@dataclass(frozen=True)
class BinaryOp:
    op: BinaryOperator
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class FunctionCall:
    name: str
    args: Tuple["Node", ...]


@dataclass(frozen=True)
class UnaryMinus:
    operand: "Node"


Node = Union[NumberLit, ComplexLit, Variable, Assignment, FunctionDef, Batch, BinaryOp, FunctionCall, UnaryMinus]
