from __future__ import annotations

from dataclasses import asdict
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional

from dateutil.relativedelta import relativedelta

from backend.app.analytics.activity import ContractRecord, record_from_contract
from backend.app.analytics.core import (
    ALL,
    COMPUTATION_VERSION,
    MonthBucket,
    compute_contracts_by_month,
    compute_current_mrr,
    compute_duration_breakdown,
    compute_mrr_growth,
    compute_product_breakdown,
    count_active_recurring,
    filter_by_start_cutoff,
    matches_filters,
    monthly_contribution,
    resolve_as_of,
    unique_products,
)
from backend.app.analytics.mrr import DURATION_LABELS, PAYMENT_FREQUENCY_LABELS, is_recurring
from backend.app.analytics.ticket_value import parse_ticket_value

DEFAULT_PERIOD = "6_months"

PERIOD_MONTHS: Mapping[str, int] = MappingProxyType(
    {
        "1_month": 1,
        "3_months": 3,
        "6_months": 6,
        "1_year": 12,
        "2_years": 24,
        "all": 12,
    }
)


def build_contract_records(contracts: Iterable[Any]) -> List[ContractRecord]:
    return [record_from_contract(c) for c in contracts]


def _bucket_rows(buckets: List[MonthBucket]) -> List[Dict[str, Any]]:
    return [asdict(b) for b in buckets]


def build_contract_analytics(
    contracts: Iterable[Any],
    *,
    as_of: Any = None,
    period: Optional[str] = None,
    product_filter: str = ALL,
    duration_filter: str = ALL,
) -> Dict[str, Any]:
    """
    Dashboard payload for the contracts analytics page.

    The period filter only narrows the KPI/series population (by start date);
    current MRR always looks at every contract active on as_of.
    """
    records = build_contract_records(contracts)
    ref = resolve_as_of(as_of)
    period_key = period if period in PERIOD_MONTHS else DEFAULT_PERIOD
    window_months = PERIOD_MONTHS[period_key]

    scoped = [c for c in records if matches_filters(c, product_filter, duration_filter)]
    cutoff = None if period_key == ALL else ref - relativedelta(months=window_months)
    filtered = filter_by_start_cutoff(scoped, cutoff)

    total_contracts = len(filtered)
    total_revenue = sum((parse_ticket_value(c.ticket_value) for c in filtered), 0.0)
    period_mrr = sum((monthly_contribution(c) for c in filtered if is_recurring(c.payment_frequency)), 0.0)

    current_mrr = compute_current_mrr(records, ref, product_filter, duration_filter)
    active_recurring = count_active_recurring(records, ref, product_filter, duration_filter)

    series = compute_contracts_by_month(filtered, window_months, ref)

    return {
        "computation_version": COMPUTATION_VERSION,
        "as_of": ref.isoformat(),
        "filters": {"period": period_key, "product": product_filter, "duration": duration_filter},
        "kpis": {
            "total_contracts": total_contracts,
            "total_revenue": total_revenue,
            "period_mrr": period_mrr,
            "current_mrr": current_mrr,
            "active_recurring_count": active_recurring,
            "ticket_monthly_avg": current_mrr / active_recurring if active_recurring > 0 else 0.0,
            "average_ticket": total_revenue / total_contracts if total_contracts > 0 else 0.0,
            "mrr_growth_pct": compute_mrr_growth(series),
        },
        "series": _bucket_rows(series),
        "by_product": compute_product_breakdown(filtered),
        "by_duration": compute_duration_breakdown(filtered),
        "products": unique_products(records),
        "filtered_count": total_contracts,
        "total_count": len(records),
        "labels": {
            "durations": dict(DURATION_LABELS),
            "payment_frequencies": dict(PAYMENT_FREQUENCY_LABELS),
        },
    }


def build_current_mrr(
    contracts: Iterable[Any],
    *,
    as_of: Any = None,
    product_filter: str = ALL,
    duration_filter: str = ALL,
) -> Dict[str, Any]:
    records = build_contract_records(contracts)
    ref = resolve_as_of(as_of)
    return {
        "computation_version": COMPUTATION_VERSION,
        "as_of": ref.isoformat(),
        "mrr": compute_current_mrr(records, ref, product_filter, duration_filter),
        "active_recurring_count": count_active_recurring(records, ref, product_filter, duration_filter),
    }


def build_monthly_series(
    contracts: Iterable[Any],
    *,
    months_back: int,
    as_of: Any = None,
    product_filter: str = ALL,
    duration_filter: str = ALL,
) -> Dict[str, Any]:
    ref = resolve_as_of(as_of)
    buckets = compute_contracts_by_month(contracts, months_back, ref, product_filter, duration_filter)
    return {
        "computation_version": COMPUTATION_VERSION,
        "as_of": ref.isoformat(),
        "series": _bucket_rows(buckets),
        "mrr_growth_pct": compute_mrr_growth(buckets),
    }
