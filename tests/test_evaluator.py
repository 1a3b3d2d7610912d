"""Tests for evaluating ASTs against a scope."""

import math

import pytest

from CalcEngine.AST import Assignment, BinaryOp, BinaryOperator, ComplexLit, FunctionCall, NumberLit, Variable
from CalcEngine.error import EvalError
from CalcEngine.Evaluator import UserFunction, evaluate_ast
from CalcEngine.Parser import parse_expression


def evaluate(problem, scope=None, **kwargs):
    return evaluate_ast(parse_expression(problem), {} if scope is None else scope, **kwargs)


class TestArithmetic:

    @pytest.mark.parametrize("problem, expected", [
        ("2+3*4", 14),
        ("2^3^2", 512),
        ("-2^2", 4),
        ("-(2^2)", -4),
        ("(2+3)*4", 20),
        ("10-4-3", 3),
        ("2^-1", 0.5),
        ("7/2", 3.5),
        ("+5", 5),
        ("--5", 5),
    ])
    def test_expression_values(self, problem, expected):
        assert evaluate(problem) == expected

    def test_result_is_float(self):
        assert isinstance(evaluate("1+1"), float)

    def test_division_by_zero_follows_ieee(self):
        assert evaluate("1/0") == math.inf
        assert evaluate("-1/0") == -math.inf
        assert math.isnan(evaluate("0/0"))

    def test_power_edge_cases(self):
        assert evaluate("10^400") == math.inf
        assert evaluate("(-10)^401") == -math.inf
        assert evaluate("0^-1") == math.inf
        assert math.isnan(evaluate("(-8)^(1/3)"))


class TestVariablesAndConstants:

    def test_scope_lookup(self):
        assert evaluate("x*2", {"x": 21}) == 42

    def test_constants(self):
        assert evaluate("pi") == math.pi
        assert evaluate("e") == math.e

    def test_scope_shadows_constants(self):
        assert evaluate("pi", {"pi": 3}) == 3

    def test_undefined_variable(self):
        with pytest.raises(EvalError) as excinfo:
            evaluate_ast(Variable("y"), {}, constants={})
        assert excinfo.value.name == "y"
        assert excinfo.value.code == "3120"
        assert "undefined variable" in excinfo.value.message

    def test_empty_constant_table(self):
        with pytest.raises(EvalError):
            evaluate_ast(Variable("pi"), {}, constants={})


class TestFunctionCalls:

    @pytest.mark.parametrize("problem, expected", [
        ("sqrt(16)", 4),
        ("abs(-3)", 3),
        ("floor(2.7)", 2),
        ("ceil(2.1)", 3),
        ("round(2.5)", 3),
        ("round(-2.5)", -2),
        ("log(1000)", 3),
        ("log(8, 2)", 3),
        ("log10(100)", 2),
        ("ln(e)", 1),
        ("exp(0)", 1),
        ("max(1, 7, 3)", 7),
        ("min(4, 2)", 2),
        ("factorial(5)", 120),
        ("ncr(5, 2)", 10),
        ("npr(5, 2)", 20),
        ("mean(1, 2, 3, 4)", 2.5),
        ("median(3, 1, 2)", 2),
        ("pow(2, 10)", 1024),
        ("pv(121, 0.1, 2)", 100),
        ("fv(100, 0.1, 2)", 121),
        ("pmt(1000, 0.1, 1)", 1100),
        ("pmt(1000, 0, 10)", 100),
        ("npv(0.1, 110, 121)", 200),
        ("irr(-100, 110)", 0.1),
        ("irr(-100, 60, 60)", 0.1306623862918075),
    ])
    def test_builtin_values(self, problem, expected):
        assert evaluate(problem) == pytest.approx(expected)

    def test_round_half_up_is_exact(self):
        assert evaluate("round(0.49999999999999994)") == 0
        assert evaluate("round(-0.5)") == 0
        assert evaluate("round(4503599627370497)") == 4503599627370497

    @pytest.mark.parametrize("basis, exponent", [
        ("0", "-1"),
        ("(-8)", "(1/3)"),
        ("(-10)", "309"),
        ("10", "400"),
        ("2", "0.5"),
    ])
    def test_pow_matches_operator(self, basis, exponent):
        via_function = evaluate(f"pow({basis}, {exponent})")
        via_operator = evaluate(f"{basis}^{exponent}")
        if math.isnan(via_operator):
            assert math.isnan(via_function)
        else:
            assert via_function == via_operator

    def test_overflow_keeps_sign(self):
        assert evaluate("sinh(-1000)") == -math.inf
        assert evaluate("sinh(1000)") == math.inf
        assert evaluate("exp(1000)") == math.inf
        assert evaluate("mean(-(10^308), -(10^308))") == -math.inf

    def test_irr_without_solution(self):
        with pytest.raises(EvalError) as excinfo:
            evaluate("irr(1, 1)")
        assert excinfo.value.code == "3123"

    def test_trig_in_radians_and_degrees(self):
        assert evaluate("sin(pi/2)") == pytest.approx(1)
        assert evaluate("sin(90)", degrees=True) == pytest.approx(1)
        assert evaluate("acos(0)", degrees=True) == pytest.approx(90)

    def test_unknown_function(self):
        with pytest.raises(EvalError) as excinfo:
            evaluate("foo(1)")
        assert excinfo.value.name == "foo"
        assert excinfo.value.code == "3121"

    def test_invalid_arity(self):
        with pytest.raises(EvalError) as excinfo:
            evaluate("sin(1, 2)")
        assert excinfo.value.name == "sin"
        assert excinfo.value.code == "3122"

    def test_variadic_needs_one_argument(self):
        with pytest.raises(EvalError) as excinfo:
            evaluate("max()")
        assert excinfo.value.code == "3122"

    def test_domain_error(self):
        with pytest.raises(EvalError) as excinfo:
            evaluate("sqrt(-1)")
        assert excinfo.value.code == "3123"
        assert excinfo.value.name == "sqrt"

    def test_factorial_rejects_fractions(self):
        with pytest.raises(EvalError):
            evaluate("factorial(2.5)")

    def test_arguments_are_evaluated_left_to_right(self):
        with pytest.raises(EvalError) as excinfo:
            evaluate("max(p, q)")
        assert excinfo.value.name == "p"


class TestBindings:

    def test_assignment_returns_value_and_updates_scope(self):
        scope = {"x": 1}
        assert evaluate("x = 3*3", scope) == 9
        assert scope == {"x": 9}

    def test_batch_sequencing(self):
        scope = {}
        assert evaluate("x=5;x+1", scope) == 6
        assert scope == {"x": 5}

    def test_batch_returns_last_result(self):
        assert evaluate("1; 2; 3") == 3

    def test_function_definition_and_call(self):
        scope = {}
        assert evaluate("f(x) = x^2 + 1; f(3)", scope) == 10
        assert scope["f"] == UserFunction(("x",), parse_expression("x^2 + 1"))

    def test_function_definition_result(self):
        assert evaluate("area(w, h) = w*h") == "area(w, h) defined"

    def test_user_function_reads_free_variables_from_scope(self):
        assert evaluate("k = 10; g(x) = x + k; g(1)") == 11

    def test_parameters_shadow_outer_variables(self):
        scope = {}
        assert evaluate("x = 100; f(x) = x * 2; f(4) + x", scope) == 108
        assert scope["x"] == 100

    def test_assignment_inside_function_stays_local(self):
        scope = {}
        evaluate("f(x) = y = x + 1; f(1)", scope)
        assert "y" not in scope

    def test_user_function_arity(self):
        with pytest.raises(EvalError) as excinfo:
            evaluate("f(x) = x; f(1, 2)")
        assert excinfo.value.code == "3122"

    def test_function_used_as_value(self):
        with pytest.raises(EvalError) as excinfo:
            evaluate("f(x) = x; f + 1")
        assert excinfo.value.code == "3124"

    def test_user_function_shadows_builtin(self):
        assert evaluate("sin(x) = 42; sin(0)") == 42


class TestSymbolicFallback:

    def test_complex_literal(self):
        assert evaluate_ast(ComplexLit(1.0, 2.0), {}) == "1+2i"
        assert evaluate_ast(ComplexLit(0.5, -1.0), {}) == "0.5-1i"

    def test_complex_operand_gives_symbolic_string(self):
        node = BinaryOp(BinaryOperator.ADD, NumberLit(3.0), ComplexLit(1.0, 2.0))
        assert evaluate_ast(node, {}) == "(3 + 1+2i)"

    def test_complex_argument(self):
        node = FunctionCall("abs", (ComplexLit(0.0, 1.0),))
        assert evaluate_ast(node, {}) == "abs(0+1i)"

    def test_symbolic_values_are_not_stored(self):
        scope = {}
        assert evaluate_ast(Assignment("z", ComplexLit(1.0, 1.0)), scope) == "1+1i"
        assert scope == {}
