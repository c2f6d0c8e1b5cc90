import pytest

from backend.app.analytics.ticket_value import parse_ticket_value


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1.234,56", 1234.56),
        ("2.000", 2000.0),
        ("300,75", 300.75),
        ("R$ 1.500,00", 1500.0),
    ],
)
def test_parses_brazilian_notation(raw, expected):
    assert parse_ticket_value(raw) == pytest.approx(expected)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1234.56", 1234.56),
        ("2000", 2000.0),
        ("$ 99.9", 99.9),
    ],
)
def test_parses_english_notation(raw, expected):
    assert parse_ticket_value(raw) == pytest.approx(expected)


def test_empty_and_missing_values_are_zero():
    assert parse_ticket_value("") == 0.0
    assert parse_ticket_value(None) == 0.0
    assert parse_ticket_value("abc") == 0.0
    assert parse_ticket_value(",") == 0.0
    assert parse_ticket_value(".") == 0.0


def test_three_digit_trailing_group_is_thousands():
    # known ambiguity: a real 3-decimal value is read as thousands
    assert parse_ticket_value("1.234") == pytest.approx(1234.0)
    assert parse_ticket_value("1.000.000") == pytest.approx(1_000_000.0)


def test_uses_leading_numeric_prefix_on_extra_separators():
    assert parse_ticket_value("1.2.3") == pytest.approx(1.2)
    assert parse_ticket_value("12,5,0") == pytest.approx(12.5)
    assert parse_ticket_value("1.000.00") == pytest.approx(1.0)


def test_never_returns_nan():
    for raw in ["", "..", ",,", "1.,", "---", "0", 0, 1500]:
        value = parse_ticket_value(raw)
        assert value == value
