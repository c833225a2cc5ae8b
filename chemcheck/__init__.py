"""ChemCheck — parse, standardize and compare toy chemistry notation."""

from chemcheck.engine import check_equation, check_isomers, standardize_formula
from chemcheck.equation import Equation, indices_of, parse_side
from chemcheck.errors import (
    ChemParseError,
    EmptySide,
    InvalidCharacter,
    MalformedFormula,
    MalformedTerm,
    MissingEqualsSign,
)
from chemcheck.formula import Formula, last_uc
from chemcheck.term import Term

__all__ = [
    "ChemParseError", "EmptySide", "Equation", "Formula", "InvalidCharacter",
    "MalformedFormula", "MalformedTerm", "MissingEqualsSign", "Term",
    "check_equation", "check_isomers", "indices_of", "last_uc", "parse_side",
    "standardize_formula",
]
