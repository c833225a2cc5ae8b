import pytest

from chemcheck.equation import (
    Equation,
    Segment,
    indices_of,
    parse_segment,
    parse_side,
    split_segment,
)
from chemcheck.errors import EmptySide, MalformedFormula, MalformedTerm, MissingEqualsSign


def _displays(formulas) -> list:
    return [f.display() for f in formulas]


def test_indices_of() -> None:
    assert indices_of("ax34x", "x") == [1, 4]
    assert indices_of("abc", "x") == []
    assert indices_of("", "x") == []


@pytest.mark.parametrize(
    "segment,expected",
    [
        ("X3Y", Segment(None, "X3Y")),
        ("2X3Y", Segment(2, "X3Y")),
        ("12AB", Segment(12, "AB")),
        ("02X", Segment(2, "X")),
    ],
)
def test_split_segment(segment: str, expected: Segment) -> None:
    assert split_segment(segment) == expected


@pytest.mark.parametrize("segment", ["3", "42", "0X"])
def test_split_segment_rejects_bare_or_zero_coefficient(segment: str) -> None:
    with pytest.raises(MalformedFormula):
        split_segment(segment)


@pytest.mark.parametrize(
    "segment,expected",
    [
        ("2X3Y", "X6Y2"),
        ("3X", "X3"),
        ("2XY3", "X2Y6"),
        ("10A2B", "A20B10"),
        ("X3Y", "X3Y"),
        ("02X03", "X6"),
    ],
)
def test_parse_segment_expands_coefficient(segment: str, expected: str) -> None:
    assert parse_segment(segment).display() == expected


def test_parse_side_splits_on_plus_and_strips_whitespace() -> None:
    assert _displays(parse_side(" X3 + Y2Z2 ")) == ["X3", "Y2Z2"]
    assert _displays(parse_side("2X3Y+Z+ 3 A")) == ["X6Y2", "Z", "A3"]
    assert _displays(parse_side("Q")) == ["Q"]


@pytest.mark.parametrize("side", ["", "   ", "H2 +", "+H2", "H2 + + O2"])
def test_parse_side_rejects_empty_segments(side: str) -> None:
    with pytest.raises(EmptySide):
        parse_side(side)


def test_parse_equation_sides_in_order() -> None:
    eq = Equation.parse("X3 + Y2Z2 = ZX + Y2X2 + Z")
    assert _displays(eq.lhs) == ["X3", "Y2Z2"]
    assert _displays(eq.rhs) == ["ZX", "Y2X2", "Z"]


def test_display_joins_formulas() -> None:
    eq = Equation.parse("X3+Y2Z   =ZX+ Y2X2+Z")
    assert eq.display() == "X3 + Y2Z = ZX + Y2X2 + Z"
    assert Equation.parse("2X3Y + Z = X6Y2Z").display() == "X6Y2 + Z = X6Y2Z"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("H2 + O2 = H2O", False),
        ("H2 + H2 = H4", True),
        ("2H2 + O2 = 2H2O", True),
        ("CB + A = ABC", True),
        ("X3 + Y2Z2 = ZX + Y2X2 + Z", True),
        ("X3 + Y2Z = ZX + Y2X4", False),
        ("A = B", False),
    ],
)
def test_is_valid(text: str, expected: bool) -> None:
    assert Equation.parse(text).is_valid() is expected


def test_is_valid_does_not_mutate_formulas() -> None:
    eq = Equation.parse("CB + A = CAB")
    assert eq.is_valid() is True
    assert eq.display() == "CB + A = CAB"


def test_side_totals() -> None:
    lhs, rhs = Equation.parse("H2 + O2 = H2O").side_totals()
    assert lhs == {"H": 2, "O": 2}
    assert rhs == {"H": 2, "O": 1}


def test_lhs_and_rhs_are_copies() -> None:
    eq = Equation.parse("A = A")
    eq.lhs.clear()
    assert len(eq.lhs) == 1


@pytest.mark.parametrize(
    "text,error",
    [
        ("H2 + O2", MissingEqualsSign),
        ("A = B = C", MissingEqualsSign),
        (" = H2", EmptySide),
        ("H2 = ", EmptySide),
        ("H2 + = H2", EmptySide),
        ("3 = X3", MalformedFormula),
        ("h2 = H2", MalformedTerm),
        ("X0 = X", MalformedTerm),
    ],
)
def test_parse_errors(text: str, error) -> None:
    with pytest.raises(error):
        Equation.parse(text)


@pytest.mark.parametrize(
    "text,error",
    [
        ("X" + "9" * 5000 + " = X", MalformedTerm),
        ("9" * 5000 + "X = X", MalformedFormula),
        ("9" * 3000 + "X" + "9" * 3000 + " = X", MalformedFormula),
    ],
)
def test_oversized_counts_are_parse_errors(text: str, error) -> None:
    with pytest.raises(error, match="too large"):
        Equation.parse(text)


def test_largest_counts_still_balance() -> None:
    big = "9" * 1000
    eq = Equation.parse(f"{big}X{big} = X{big} + {big}X{big} + X{big}")
    assert eq.is_valid() is False
    eq = Equation.parse(f"{big}X{big} = {big}X + {big}X{big[:-1]}8")
    assert eq.is_valid() is True
    assert eq.lhs[0].count_element("X") == int(big) ** 2


def test_whitespace_of_any_kind_is_ignored() -> None:
    eq = Equation.parse("H2\u00a0+\fH2 =\vH4")
    assert eq.display() == "H2 + H2 = H4"
