# StepTracker.py
"""""
Step-by-step evaluation: records the original expression, the simplified
form, the substituted variables and the final result so a caller can show
how an answer was reached.
"""""

from dataclasses import dataclass
from typing import List, Optional, Union

from .CodeGen import format_number, generate_code
from .Evaluator import evaluate_ast
from .Simplifier import simplify_ast


STEP_TYPES = ("simplification", "substitution", "evaluation")


@dataclass(frozen=True)
class SolutionStep:
    id: int
    description: str
    expression: str
    result: Union[float, str]
    type: str


class StepTracker:
    def __init__(self):
        self.steps: List[SolutionStep] = []
        self.current_id = 0

    def add_step(self, description, expression, step_type, result=None):
        if step_type not in STEP_TYPES:
            raise ValueError(f"Unknown step type: {step_type}")
        step = SolutionStep(
            id=self.current_id,
            description=description,
            expression=expression,
            result=expression if result is None else result,
            type=step_type,
        )
        self.steps.append(step)
        self.current_id += 1
        return step

    def get_steps(self):
        return list(self.steps)

    def clear(self):
        self.steps = []
        self.current_id = 0


def evaluate_with_steps(ast, scope=None, tracker: Optional[StepTracker] = None, degrees=False):
    """Simplify and evaluate `ast`, returning (result, steps)."""
    if scope is None:
        scope = {}
    if tracker is None:
        tracker = StepTracker()

    original_code = generate_code(ast)
    tracker.add_step("Original expression", original_code, "evaluation")

    vereinfacht = simplify_ast(ast)
    simplified_code = generate_code(vereinfacht)
    if simplified_code != original_code:
        tracker.add_step("Simplified expression", simplified_code, "simplification")

    values = {name: value for name, value in scope.items() if isinstance(value, (int, float))}
    if values:
        substitutions = ", ".join(f"{name} = {format_number(value)}" for name, value in values.items())
        tracker.add_step(f"Substitute values: {substitutions}", simplified_code, "substitution",
                         result=substitutions)

    ergebnis = evaluate_ast(vereinfacht, scope, degrees=degrees)
    tracker.add_step("Final result", simplified_code, "evaluation", result=ergebnis)

    return ergebnis, tracker.get_steps()
