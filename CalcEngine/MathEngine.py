# MathEngine.py
"""""
Calculator front door for the expression engine.

Pipeline
--------
1) Lexer + Parser: raw input string -> AST
2) Simplifier (optional, "simplify_first" setting): AST -> smaller AST
3) Evaluator: AST + scope -> number (or symbolic string)
4) Formatter: renders numbers using Decimal/Fraction and user preferences
"""""

import fractions
import logging
import math
from decimal import Decimal, localcontext

from . import config_manager as config_manager
from . import error as E
from .CodeGen import format_number, generate_code
from .Evaluator import evaluate_ast
from .Parser import parse_expression
from .Simplifier import simplify_ast

logger = logging.getLogger(__name__)

ungefaehr_zeichen = "\u2248"  # "≈"


# -----------------------------
# Result formatting
# -----------------------------

def cleanup(ergebnis, settings):
    """Format a numeric result as Fraction or Decimal depending on settings.

    Returns:
        (rendered_value, rounding_flag)
    where rounding_flag indicates whether Decimal rounding occurred.
    """
    rounding = False

    if not math.isfinite(ergebnis):
        return format_number(ergebnis), rounding

    target_decimals = settings["decimal_places"]
    wert = Decimal(repr(ergebnis))

    # Try Fraction rendering if enabled
    if settings["fractions"] and wert != wert.to_integral_value():
        bruch_ergebnis = fractions.Fraction.from_decimal(wert)
        gekuerzter_bruch = bruch_ergebnis.limit_denominator(100000)
        if gekuerzter_bruch != bruch_ergebnis:
            rounding = True
        zaehler = gekuerzter_bruch.numerator
        nenner = gekuerzter_bruch.denominator
        if abs(zaehler) > nenner:
            # Mixed fraction form (e.g., 3/2 -> "1 1/2")
            ganzzahl = zaehler // nenner
            rest_zaehler = zaehler % nenner

            if rest_zaehler == 0:
                return str(ganzzahl), rounding
            # Adjust for negatives so that the remainder part is positive
            if ganzzahl < 0 and rest_zaehler > 0:
                ganzzahl += 1
                rest_zaehler = abs(nenner - rest_zaehler)
            return f"{ganzzahl} {rest_zaehler}/{nenner}", rounding

        return str(gekuerzter_bruch), rounding

    if wert == wert.to_integral_value():
        # Integer result, no rounding
        return format(wert.normalize(), "f"), rounding

    # A temporary precision boost prevents Decimal.InvalidOperation
    # during quantize() for long numbers.
    with localcontext() as ctx:
        ctx.prec = 128
        rundungs_muster = Decimal(1).scaleb(-target_decimals)
        gerundetes_ergebnis = wert.quantize(rundungs_muster)

    if gerundetes_ergebnis != wert:
        rounding = True

    text = format(gerundetes_ergebnis.normalize(), "f")
    return text, rounding


def render(ergebnis, settings):
    """Render an evaluation result as '= value', '≈ value' or the symbolic text."""
    if isinstance(ergebnis, str):
        return ergebnis
    ausgabe_string, rounding = cleanup(ergebnis, settings)
    if rounding:
        return f"{ungefaehr_zeichen} {ausgabe_string}"
    return f"= {ausgabe_string}"


# -----------------------------
# Public entry point
# -----------------------------

def calculate(problem, scope=None, settings=None):
    """Main API: parse -> (simplify) -> evaluate -> format -> render string.

    `scope` is updated in place, so a caller can keep variables and
    functions between calls by passing the same dictionary again.
    """
    if scope is None:
        scope = {}
    if settings is None:
        settings = config_manager.load_setting_value("all")

    try:
        finaler_baum = parse_expression(problem)
        logger.debug("Final AST: %r", finaler_baum)

        if settings["simplify_first"]:
            finaler_baum = simplify_ast(finaler_baum)
            logger.debug("Simplified: %s", generate_code(finaler_baum))

        ergebnis = evaluate_ast(finaler_baum, scope, degrees=settings["degree_mode"])
        return render(ergebnis, settings)

    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = problem
        raise
    # Convert unexpected Python exceptions to our unified error type
    except Exception as e:
        raise E.MathError(message=f"Unexpected Error: {e}", code="9999", equation=problem) from e


def simplify(problem):
    """Parse and simplify, returning the simplified expression as text."""
    try:
        return generate_code(simplify_ast(parse_expression(problem)))
    except E.MathError as e:
        e.equation = problem
        raise
