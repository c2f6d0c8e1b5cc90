import pytest

from backend.app.analytics.mrr import (
    DURATION_MONTHS,
    calculate_mrr,
    is_recurring,
    resolve_duration_months,
)


def test_calculate_mrr_divides_total_by_duration():
    assert calculate_mrr(1200, 12, "monthly") == pytest.approx(100)
    assert calculate_mrr(600, 6, "monthly") == pytest.approx(100)


def test_calculate_mrr_guards_non_positive_duration():
    assert calculate_mrr(1000, 0, "monthly") == pytest.approx(1000)
    assert calculate_mrr(1000, -3, "monthly") == pytest.approx(1000)
    assert calculate_mrr(1000, None, "monthly") == pytest.approx(1000)


def test_payment_frequency_does_not_change_the_arithmetic():
    results = {freq: calculate_mrr(2400, 24, freq) for freq in ("monthly", "quarterly", "biannual", "annual", "one_time")}
    assert set(results.values()) == {100.0}


def test_resolve_duration_months_known_codes():
    assert resolve_duration_months("3_months") == 3
    assert resolve_duration_months("6_months") == 6
    assert resolve_duration_months("1_year") == 12
    assert resolve_duration_months("2_years") == 24


def test_resolve_duration_months_falls_back_to_one_month():
    assert resolve_duration_months("5_years") == 1
    assert resolve_duration_months("") == 1
    assert resolve_duration_months(None) == 1


def test_duration_table_is_read_only():
    with pytest.raises(TypeError):
        DURATION_MONTHS["5_years"] = 60  # type: ignore[index]


def test_is_recurring():
    assert is_recurring("monthly")
    assert is_recurring("annual")
    assert not is_recurring("one_time")
