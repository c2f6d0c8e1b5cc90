from datetime import datetime, timezone

import pytest

from backend.app.services import analytics_service

AS_OF = datetime(2024, 6, 15, tzinfo=timezone.utc)


def _contracts():
    return [
        {
            "id": "c1",
            "start_date": "2024-05-01",
            "contract_duration": "3_months",
            "ticket_value": "900",
            "payment_frequency": "monthly",
            "product": "Core",
        },
        {
            "id": "c2",
            "start_date": "2024-06-01",
            "contract_duration": "1_year",
            "ticket_value": "1.200,00",
            "payment_frequency": "one_time",
            "product": "Sites",
        },
        {
            "id": "c3",
            "start_date": "2023-01-10",
            "contract_duration": "6_months",
            "ticket_value": "600",
            "payment_frequency": "monthly",
            "product": "Core",
        },
        {
            "id": "c4",
            "start_date": "not-a-date",
            "contract_duration": "1_year",
            "ticket_value": "5000",
            "payment_frequency": "monthly",
            "product": "Core",
        },
    ]


def test_dashboard_for_six_month_period():
    payload = analytics_service.build_contract_analytics(_contracts(), as_of=AS_OF, period="6_months")
    kpis = payload["kpis"]

    assert payload["filters"] == {"period": "6_months", "product": "all", "duration": "all"}
    # c4 has an unparsable start date: it survives the period cutoff but lands in no month
    assert kpis["total_contracts"] == 3
    assert kpis["total_revenue"] == pytest.approx(7100)
    assert kpis["period_mrr"] == pytest.approx(300 + 5000 / 12)
    assert kpis["current_mrr"] == pytest.approx(300)
    assert kpis["active_recurring_count"] == 1
    assert kpis["ticket_monthly_avg"] == pytest.approx(300)
    assert kpis["average_ticket"] == pytest.approx(7100 / 3)
    assert kpis["mrr_growth_pct"] == pytest.approx(0.0)

    series = payload["series"]
    assert [row["month"] for row in series] == ["2024-01", "2024-02", "2024-03", "2024-04", "2024-05", "2024-06"]
    assert series[-1]["contract_count"] == 2
    assert series[-1]["billing_total"] == pytest.approx(2100)
    assert series[-1]["mrr"] == pytest.approx(300)
    assert series[-2]["contract_count"] == 1
    assert series[0]["contract_count"] == 0

    assert [row["name"] for row in payload["by_product"]] == ["Core", "Sites"]
    assert payload["by_duration"] == [{"name": "1 Ano", "count": 2}, {"name": "3 Meses", "count": 1}]
    assert payload["products"] == ["Core", "Sites"]
    assert payload["filtered_count"] == 3
    assert payload["total_count"] == 4


def test_dashboard_all_period_keeps_every_contract():
    payload = analytics_service.build_contract_analytics(_contracts(), as_of=AS_OF, period="all")

    assert len(payload["series"]) == 12
    assert payload["series"][0]["month"] == "2023-07"
    assert payload["kpis"]["total_contracts"] == 4
    assert payload["kpis"]["total_revenue"] == pytest.approx(7700)
    assert payload["kpis"]["period_mrr"] == pytest.approx(300 + 100 + 5000 / 12)
    assert payload["kpis"]["current_mrr"] == pytest.approx(300)


def test_dashboard_product_filter_and_unknown_period():
    payload = analytics_service.build_contract_analytics(
        _contracts(), as_of=AS_OF, period="forever", product_filter="Sites"
    )

    assert payload["filters"]["period"] == "6_months"
    assert payload["kpis"]["total_contracts"] == 1
    assert payload["kpis"]["current_mrr"] == 0.0
    assert payload["kpis"]["ticket_monthly_avg"] == 0.0
    assert payload["products"] == ["Core", "Sites"]


def test_dashboard_with_no_contracts():
    payload = analytics_service.build_contract_analytics([], as_of=AS_OF, period="3_months")

    assert len(payload["series"]) == 3
    assert payload["kpis"]["average_ticket"] == 0.0
    assert payload["kpis"]["mrr_growth_pct"] == 0.0
    assert payload["by_product"] == []


def test_current_mrr_and_monthly_series_payloads():
    mrr = analytics_service.build_current_mrr(_contracts(), as_of=AS_OF)
    assert mrr["mrr"] == pytest.approx(300)
    assert mrr["active_recurring_count"] == 1

    monthly = analytics_service.build_monthly_series(_contracts(), months_back=2, as_of=AS_OF)
    assert [row["month"] for row in monthly["series"]] == ["2024-05", "2024-06"]
    assert monthly["mrr_growth_pct"] == pytest.approx(0.0)


def test_dashboard_falls_back_to_now_for_unparsable_as_of():
    payload = analytics_service.build_contract_analytics(_contracts(), as_of="soon", period="1_month")

    assert payload["as_of"] != "soon"
    assert len(payload["series"]) == 1
    assert payload["kpis"]["current_mrr"] == 0.0
