""" Step-by-step balance and isomer checks for formula notation."""

"""
Parses equations (e.g. "H2 + O2 = H2O") and formulas (e.g. "AX3YM67"),
canonicalizes them, and produces a human-readable trail explaining how
the verdict was reached.
"""

import logging
import time
from datetime import datetime

from chemcheck.equation import Equation, parse_side, split_segment
from chemcheck.errors import InvalidCharacter, MalformedFormula
from chemcheck.formula import Formula

logger = logging.getLogger(__name__)

_ALLOWED = set("abcdefghijklmnopqrstuvwxyz"
               "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
               "0123456789"
               "+=")


def _validate_characters(text: str) -> None:
    """Reject input that contains characters outside the notation.

    Allowed: letters, digits, whitespace, ``+`` and ``=``.  Lowercase
    letters pass here so the parser can report them as malformed terms.
    """
    bad = {ch for ch in text if ch not in _ALLOWED and not ch.isspace()}
    if bad:
        bad_sorted = " ".join(sorted(bad))
        raise InvalidCharacter(
            f"Invalid character(s): {bad_sorted}\n"
            f"Only element letters, counts, '+' and '=' are allowed."
        )


def _format_counts(counts: dict) -> str:
    """Render ``{"H": 2, "O": 1}`` as ``H: 2, O: 1``."""
    if not counts:
        return "(nothing)"
    return ", ".join(f"{e}: {n}" for e, n in counts.items())


def _summary(t_start: float, steps: list, passed: bool) -> dict:
    runtime_ms = round((time.perf_counter() - t_start) * 1000, 2)
    return {
        "runtime_ms": runtime_ms,
        "total_steps": len(steps),
        "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        "validation_status": "pass" if passed else "fail",
    }


def _number_steps(steps: list) -> list:
    for i, step in enumerate(steps, start=1):
        step["step_number"] = i
    return steps


def _expansion_steps(side_name: str, side_text: str) -> list:
    """Describe each coefficient expansion on one side."""
    steps = []
    for raw in "".join(side_text.split()).split("+"):
        coefficient, body = split_segment(raw)
        if coefficient is None:
            continue
        expanded = Formula.parse(body).scaled(coefficient)
        steps.append({
            "description": f"Expand coefficient {coefficient} on the {side_name}",
            "expression": f"{raw} → {expanded}",
            "explanation": (
                f"The coefficient {coefficient} multiplies every count in {body}, "
                f"so {raw} holds the same atoms as {expanded}."
            ),
        })
    return steps


def check_equation(equation_str: str) -> dict:
    """
    Check whether an equation is balanced.

    Returns a dict with trail-format sections:
      - given, method, steps, final_answer, balanced, element_totals, summary
    """
    t_start = time.perf_counter()
    _validate_characters(equation_str)

    equation = Equation.parse(equation_str)
    lhs_text, rhs_text = equation_str.split("=")
    lhs_totals, rhs_totals = equation.side_totals()
    balanced = equation.is_valid()
    logger.info("checked %r: balanced=%s", equation.display(), balanced)

    steps = [{
        "description": "Starting with the original equation",
        "expression": equation_str.strip(),
        "explanation": (
            "We are given a chemical equation. Our goal is to check that "
            "every element has the same number of atoms on both sides."
        ),
    }]
    steps += _expansion_steps("left side", lhs_text)
    steps += _expansion_steps("right side", rhs_text)
    steps.append({
        "description": "Count atoms on the left side",
        "expression": _format_counts(lhs_totals),
        "explanation": (
            f"Adding up every formula in {' + '.join(map(str, equation.lhs))} "
            f"element by element."
        ),
    })
    steps.append({
        "description": "Count atoms on the right side",
        "expression": _format_counts(rhs_totals),
        "explanation": (
            f"Adding up every formula in {' + '.join(map(str, equation.rhs))} "
            f"element by element."
        ),
    })

    if balanced:
        final_answer = f"{equation} is balanced."
        steps.append({
            "description": "Compare both sides",
            "expression": _format_counts(lhs_totals),
            "explanation": "Every element has the same total on both sides.",
        })
    else:
        mismatched = [
            e for e in sorted(set(lhs_totals) | set(rhs_totals))
            if lhs_totals.get(e, 0) != rhs_totals.get(e, 0)
        ]
        detail = ", ".join(
            f"{e} ({lhs_totals.get(e, 0)} vs {rhs_totals.get(e, 0)})"
            for e in mismatched
        )
        final_answer = f"{equation} is not balanced: {detail}."
        steps.append({
            "description": "Compare both sides",
            "expression": detail,
            "explanation": (
                "These elements have different totals on the left and "
                "right, so atoms are created or destroyed."
            ),
        })

    _number_steps(steps)
    return {
        "equation": equation.display(),
        "given": {
            "problem": f"Check the balance of: {equation}",
            "inputs": {
                "equation": equation_str.strip(),
                "left_side": lhs_text.strip(),
                "right_side": rhs_text.strip(),
            },
        },
        "method": {
            "name": "Atom Count Comparison",
            "description": "Expand coefficients, total each element per side, compare.",
        },
        "steps": steps,
        "final_answer": final_answer,
        "balanced": balanced,
        "element_totals": {"left": lhs_totals, "right": rhs_totals},
        "summary": _summary(t_start, steps, balanced),
    }


def _parse_single_formula(text: str) -> Formula:
    """Parse user text holding exactly one formula (coefficient allowed)."""
    _validate_characters(text)
    formulas = parse_side(text)
    if len(formulas) != 1:
        raise MalformedFormula(f"Expected a single formula, got '{text.strip()}'.")
    return formulas[0]


def check_isomers(first_str: str, second_str: str) -> dict:
    """
    Check whether two formulas are isomers.

    Returns a dict with trail-format sections:
      - given, method, steps, final_answer, isomers, summary
    """
    t_start = time.perf_counter()
    first = _parse_single_formula(first_str)
    second = _parse_single_formula(second_str)
    first_std = first.standardized()
    second_std = second.standardized()
    isomers = first.is_isomer(second)
    logger.info("checked %s vs %s: isomers=%s", first, second, isomers)

    steps = [
        {
            "description": "Starting with the two formulas",
            "expression": f"{first}, {second}",
            "explanation": (
                "Two formulas are isomers when they contain the same number "
                "of atoms of every element, in any arrangement."
            ),
        },
        {
            "description": "Standardize the first formula",
            "expression": f"{first} → {first_std}",
            "explanation": "Merge repeated elements and sort them alphabetically.",
        },
        {
            "description": "Standardize the second formula",
            "expression": f"{second} → {second_std}",
            "explanation": "Merge repeated elements and sort them alphabetically.",
        },
        {
            "description": "Compare standardized forms",
            "expression": f"{first_std} {'=' if isomers else '≠'} {second_std}",
            "explanation": (
                "The standardized forms match." if isomers
                else "The standardized forms differ."
            ),
        },
    ]
    _number_steps(steps)

    verdict = "are isomers" if isomers else "are not isomers"
    return {
        "formulas": [first.display(), second.display()],
        "given": {
            "problem": f"Are {first} and {second} isomers?",
            "inputs": {"first": first_str.strip(), "second": second_str.strip()},
        },
        "method": {
            "name": "Standardized Form Comparison",
            "description": "Reduce each formula to one sorted term per element.",
        },
        "steps": steps,
        "final_answer": f"{first} and {second} {verdict}.",
        "isomers": isomers,
        "summary": _summary(t_start, steps, isomers),
    }


def standardize_formula(formula_str: str) -> dict:
    """Return the standardized form and element counts of one formula."""
    formula = _parse_single_formula(formula_str)
    standard = formula.standardized()
    return {
        "formula": formula.display(),
        "standardized": standard.display(),
        "element_counts": standard.element_counts(),
    }
