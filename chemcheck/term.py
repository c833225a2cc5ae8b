"""
Term — one element symbol paired with a positive count.

Element symbols are exactly one uppercase ASCII letter; ``X3`` is the
element ``X`` with count 3 and a bare ``X`` has count 1.
"""

from dataclasses import dataclass

from chemcheck.errors import MalformedTerm

ELEMENTS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ")

# Longest count or coefficient accepted from text.  Products and sums of
# such values stay well inside MAX_COUNT.
MAX_COUNT_DIGITS = 1000
MAX_COUNT = 10 ** 4000 - 1


def is_element(ch: str) -> bool:
    """Return True if *ch* is a single uppercase ASCII letter."""
    return ch in ELEMENTS


def parse_count(digits: str, error: type) -> int:
    """Convert a run of ASCII digits, raising *error* if it is too long."""
    if len(digits.lstrip("0")) > MAX_COUNT_DIGITS:
        raise error(f"Number with {len(digits)} digits is too large.")
    try:
        return int(digits.lstrip("0") or "0")
    except ValueError as e:
        raise error(f"'{digits[:20]}...' is not a usable number: {e}") from e


@dataclass(frozen=True)
class Term:
    element: str
    count: int = 1

    def __post_init__(self) -> None:
        if (not isinstance(self.element, str) or len(self.element) != 1
                or not is_element(self.element)):
            raise MalformedTerm(
                f"Element must be a single uppercase letter, got '{self.element}'."
            )
        if not isinstance(self.count, int) or isinstance(self.count, bool):
            raise MalformedTerm(
                f"Count of '{self.element}' must be an integer, got {self.count!r}."
            )
        if self.count < 1:
            raise MalformedTerm(
                f"Count of '{self.element}' must be at least 1, got {self.count}."
            )
        if self.count > MAX_COUNT:
            raise MalformedTerm(f"Count of '{self.element}' is too large.")

    @classmethod
    def parse(cls, text: str) -> "Term":
        """Parse ``"X"`` or ``"X12"`` into a Term."""
        if not text:
            raise MalformedTerm("Empty term.")
        element, digits = text[0], text[1:]
        if not is_element(element):
            raise MalformedTerm(
                f"Term '{text}' must start with an uppercase letter."
            )
        if not digits:
            return cls(element)
        if not (digits.isascii() and digits.isdigit()):
            raise MalformedTerm(
                f"Term '{text}': '{digits}' is not a count."
            )
        return cls(element, parse_count(digits, MalformedTerm))

    def display(self) -> str:
        return self.element if self.count == 1 else f"{self.element}{self.count}"

    def __str__(self) -> str:
        return self.display()
