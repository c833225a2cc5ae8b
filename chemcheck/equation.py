"""
Equation — two sides of formulas, e.g. ``X3 + Y2Z2 = ZX + Y2X2 + Z``.

Each side is a ``+``-separated list of formulas.  A formula may carry a
leading coefficient that multiplies every count in it, so ``2X3Y`` on a
side stands for ``X6Y2``.
"""

import logging
import re
from typing import NamedTuple, Optional

from chemcheck.errors import EmptySide, MalformedFormula, MissingEqualsSign
from chemcheck.formula import Formula
from chemcheck.term import parse_count

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_COEFFICIENT = re.compile(r"[0-9]+")


def indices_of(s: str, x: str) -> list:
    """Return every index at which *x* occurs in *s*.

    ``indices_of("ax34x", "x")`` is ``[1, 4]``.
    """
    return [i for i, ch in enumerate(s) if ch == x]


class Segment(NamedTuple):
    """One ``+``-delimited piece of a side, split at its coefficient."""
    coefficient: Optional[int]
    body: str


def _strip_ws(text: str) -> str:
    return _WHITESPACE.sub("", text)


def split_segment(segment: str) -> Segment:
    """Separate a leading coefficient from the formula body.

    ``"2X3Y"`` gives ``Segment(2, "X3Y")``; ``"X3Y"`` gives
    ``Segment(None, "X3Y")``.
    """
    match = _COEFFICIENT.match(segment)
    if match is None:
        return Segment(None, segment)
    body = segment[match.end():]
    if not body:
        raise MalformedFormula(
            f"Coefficient '{segment}' is not followed by a formula."
        )
    coefficient = parse_count(match.group(), MalformedFormula)
    if coefficient < 1:
        raise MalformedFormula(
            f"Coefficient of '{body}' must be at least 1, got {coefficient}."
        )
    return Segment(coefficient, body)


def parse_segment(segment: str) -> Formula:
    """Parse one side segment, expanding its coefficient into the counts."""
    coefficient, body = split_segment(segment)
    formula = Formula.parse(body)
    if coefficient is None:
        return formula
    return formula.scaled(coefficient)


def parse_side(text: str) -> list:
    """Parse one side of an equation into its list of formulas."""
    side = _strip_ws(text)
    plus_at = indices_of(side, "+")
    bounds = zip([-1] + plus_at, plus_at + [len(side)])
    segments = [side[start + 1:end] for start, end in bounds]
    if any(not seg for seg in segments):
        raise EmptySide(
            f"Side '{text.strip()}' has a missing formula around '+'."
            if side else "Both sides of the equation must have formulas."
        )
    logger.debug("side %r -> segments %r", side, segments)
    return [parse_segment(seg) for seg in segments]


def _aggregate(side: list) -> Formula:
    """Fold every formula on *side* into one standardized formula."""
    return Formula.from_terms(t for f in side for t in f.terms).standardized()


class Equation:
    """A chemical equation with formulas on a left and a right side."""

    def __init__(self, lhs: list, rhs: list) -> None:
        self._lhs = list(lhs)
        self._rhs = list(rhs)

    @classmethod
    def parse(cls, text: str) -> "Equation":
        """Parse e.g. ``"X3 + Y2Z = ZX + Y2X4"``; whitespace is ignored."""
        equals = indices_of(text, "=")
        if len(equals) == 0:
            raise MissingEqualsSign("Equation must contain '='. Example: H2 + H2 = H4")
        if len(equals) > 1:
            raise MissingEqualsSign("Equation must contain exactly one '=' sign.")
        lhs_text, rhs_text = text.split("=")
        return cls(parse_side(lhs_text), parse_side(rhs_text))

    @property
    def lhs(self) -> list:
        return list(self._lhs)

    @property
    def rhs(self) -> list:
        return list(self._rhs)

    def is_valid(self) -> bool:
        """True if both sides hold the same number of atoms of each element."""
        return _aggregate(self._lhs).display() == _aggregate(self._rhs).display()

    def side_totals(self) -> tuple:
        """Return ``(lhs_counts, rhs_counts)`` as element -> total dicts."""
        return (_aggregate(self._lhs).element_counts(),
                _aggregate(self._rhs).element_counts())

    def display(self) -> str:
        left = " + ".join(f.display() for f in self._lhs)
        right = " + ".join(f.display() for f in self._rhs)
        return f"{left} = {right}"

    def __str__(self) -> str:
        return self.display()

    def __repr__(self) -> str:
        return f"Equation({self.display()!r})"
