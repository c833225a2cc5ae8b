"""Parse errors raised by the chemcheck notation parsers.

Every error derives from :class:`ChemParseError`, itself a ``ValueError``,
so callers that already treat ``ValueError`` as "bad input" keep working.
"""


class ChemParseError(ValueError):
    """Base class for malformed formula / equation text."""


class MalformedTerm(ChemParseError):
    """A term does not start with an uppercase letter or has a bad count."""


class MalformedFormula(ChemParseError):
    """Empty formula text, or a coefficient with no element body."""


class MissingEqualsSign(ChemParseError):
    """Equation text does not contain exactly one '='."""


class EmptySide(ChemParseError):
    """A side of an equation yields a zero-length segment."""


class InvalidCharacter(ChemParseError):
    """Input contains characters outside the notation's alphabet."""
