"""
Formula — an ordered sequence of terms, e.g. ``AX3YM67``.

Parsing relies on element symbols being a single uppercase letter: every
uppercase letter starts a new term, and the digits that follow belong to
it.  Terms keep their parse order, so the same element may appear more
than once until the formula is standardized.
"""

from typing import Iterable

from chemcheck.errors import MalformedFormula
from chemcheck.term import MAX_COUNT, Term, is_element


def last_uc(s: str) -> int:
    """Return the index of the rightmost uppercase letter in *s*, or -1.

    ``last_uc("AX3YM67")`` is 4.
    """
    for i in range(len(s) - 1, -1, -1):
        if is_element(s[i]):
            return i
    return -1


def _split_terms(text: str) -> list:
    """Cut *text* into term substrings at each uppercase letter."""
    pieces = []
    last = 0
    for i in range(1, len(text)):
        if is_element(text[i]):
            pieces.append(text[last:i])
            last = i
    pieces.append(text[last:])
    return pieces


class Formula:
    """A chemical species as an ordered list of :class:`Term`."""

    def __init__(self, terms: Iterable[Term] = ()) -> None:
        self._terms = list(terms)

    # ── Construction ────────────────────────────────────────────────────

    @classmethod
    def parse(cls, text: str) -> "Formula":
        """Parse a whitespace-free formula such as ``"AX3YM67"`` or ``"Z"``."""
        if not text:
            raise MalformedFormula("Formula cannot be empty.")
        return cls(Term.parse(piece) for piece in _split_terms(text))

    @classmethod
    def from_terms(cls, terms: Iterable[Term]) -> "Formula":
        """Make a formula holding a copy of *terms*."""
        return cls(terms)

    # ── Queries ─────────────────────────────────────────────────────────

    @property
    def terms(self) -> list:
        return list(self._terms)

    def count_element(self, element: str) -> int:
        """Total atoms of *element*; 0 when it does not occur.

        For terms ``W2 X W5``, ``count_element("W")`` is 7.
        """
        return sum(t.count for t in self._terms if t.element == element)

    def element_counts(self) -> dict:
        """Return ``{element: total}`` ordered by element letter."""
        return {e: self.count_element(e)
                for e in sorted({t.element for t in self._terms})}

    # ── Canonical form ──────────────────────────────────────────────────

    def standardize(self) -> None:
        """Rewrite the terms in place: one term per element, sorted.

        ``C3 D B2 D2 C`` becomes ``B2 C4 D3``.
        """
        self._terms = [Term(e, n) for e, n in self.element_counts().items()]

    def standardized(self) -> "Formula":
        """Return a standardized copy, leaving this formula untouched."""
        copy = Formula.from_terms(self._terms)
        copy.standardize()
        return copy

    def is_isomer(self, other: "Formula") -> bool:
        """True if both formulas hold the same number of every element."""
        return self.standardized().display() == other.standardized().display()

    def scaled(self, factor: int) -> "Formula":
        """Return a copy with every count multiplied by *factor*."""
        if factor < 1:
            raise MalformedFormula(f"Coefficient must be at least 1, got {factor}.")
        if any(t.count * factor > MAX_COUNT for t in self._terms):
            raise MalformedFormula("Coefficient makes a count too large to display.")
        return Formula(Term(t.element, t.count * factor) for t in self._terms)

    # ── Rendering ───────────────────────────────────────────────────────

    def display(self) -> str:
        """Render the terms in order, e.g. ``B22ED3``."""
        return "".join(t.display() for t in self._terms)

    def __str__(self) -> str:
        return self.display()

    def __repr__(self) -> str:
        return f"Formula({self.display()!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Formula):
            return NotImplemented
        return self._terms == other._terms

    def __len__(self) -> int:
        return len(self._terms)
