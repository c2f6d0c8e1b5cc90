from __future__ import annotations

import calendar
import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from backend.app.analytics.activity import (
    ContractRecord,
    coverage_interval,
    is_contract_active_on,
    overlaps_period,
    parse_contract_datetime,
    record_from_contract,
)
from backend.app.analytics.mrr import (
    DURATION_LABELS,
    calculate_mrr,
    is_recurring,
    resolve_duration_months,
)
from backend.app.analytics.ticket_value import parse_ticket_value

logger = logging.getLogger(__name__)

COMPUTATION_VERSION = "contract_analytics_v1"
ALL = "all"
OTHER_LABEL = "Outros"


@dataclass(frozen=True)
class MonthBucket:
    month: str  # "YYYY-MM"
    date: datetime  # first instant of the month, UTC
    contract_count: int
    billing_total: float
    mrr: float


def _records(contracts: Iterable[Any]) -> List[ContractRecord]:
    return [record_from_contract(c) for c in contracts]


def resolve_as_of(as_of: Any) -> datetime:
    """Reference instant for a computation; None or an unparsable value means now."""
    if as_of is None:
        return datetime.now(timezone.utc)
    resolved = parse_contract_datetime(as_of)
    if resolved is None:
        logger.warning("Unparsable as_of %r, using the current time", as_of)
        return datetime.now(timezone.utc)
    return resolved


def matches_filters(contract: ContractRecord, product_filter: str = ALL, duration_filter: str = ALL) -> bool:
    if product_filter != ALL and contract.product != product_filter:
        return False
    if duration_filter != ALL and contract.contract_duration != duration_filter:
        return False
    return True


def monthly_contribution(contract: ContractRecord) -> float:
    return calculate_mrr(
        parse_ticket_value(contract.ticket_value),
        resolve_duration_months(contract.contract_duration),
        contract.payment_frequency,
    )


def active_contracts_on(
    contracts: Iterable[Any],
    as_of: Any = None,
    product_filter: str = ALL,
    duration_filter: str = ALL,
) -> List[ContractRecord]:
    ref = resolve_as_of(as_of)
    return [
        c
        for c in _records(contracts)
        if matches_filters(c, product_filter, duration_filter) and is_contract_active_on(c, ref)
    ]


def compute_current_mrr(
    contracts: Iterable[Any],
    as_of: Any = None,
    product_filter: str = ALL,
    duration_filter: str = ALL,
) -> float:
    active = active_contracts_on(contracts, as_of, product_filter, duration_filter)
    return sum((monthly_contribution(c) for c in active if is_recurring(c.payment_frequency)), 0.0)


def count_active_recurring(
    contracts: Iterable[Any],
    as_of: Any = None,
    product_filter: str = ALL,
    duration_filter: str = ALL,
) -> int:
    active = active_contracts_on(contracts, as_of, product_filter, duration_filter)
    return sum(1 for c in active if is_recurring(c.payment_frequency))


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """First and last instant of a calendar month, UTC."""
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    end = datetime(year, month, last_day, tzinfo=timezone.utc) + timedelta(days=1) - timedelta(microseconds=1)
    return start, end


def _months_ending_at(as_of: datetime, months_back: int) -> List[Tuple[int, int]]:
    anchor = as_of.year * 12 + (as_of.month - 1)
    out: List[Tuple[int, int]] = []
    for offset in range(months_back - 1, -1, -1):
        idx = anchor - offset
        out.append((idx // 12, idx % 12 + 1))
    return out


def compute_contracts_by_month(
    contracts: Iterable[Any],
    months_back: int,
    as_of: Any = None,
    product_filter: str = ALL,
    duration_filter: str = ALL,
) -> List[MonthBucket]:
    """
    One bucket per calendar month, oldest first, ending with the month that
    contains as_of. A contract lands in every month its coverage overlaps and
    contributes its full ticket value to each of them.
    """
    ref = resolve_as_of(as_of)
    if months_back <= 0:
        return []

    candidates: List[ContractRecord] = []
    for c in _records(contracts):
        if not matches_filters(c, product_filter, duration_filter):
            continue
        if coverage_interval(c) is None:
            logger.debug("Skipping contract %s with unparsable start_date %r", c.id, c.start_date)
            continue
        candidates.append(c)

    buckets: List[MonthBucket] = []
    for year, month in _months_ending_at(ref, months_back):
        month_start, month_end = month_bounds(year, month)
        in_month = [c for c in candidates if overlaps_period(c, month_start, month_end)]

        billing = sum((parse_ticket_value(c.ticket_value) for c in in_month), 0.0)
        mrr = sum((monthly_contribution(c) for c in in_month if is_recurring(c.payment_frequency)), 0.0)
        buckets.append(
            MonthBucket(
                month=f"{year:04d}-{month:02d}",
                date=month_start,
                contract_count=len(in_month),
                billing_total=billing,
                mrr=mrr,
            )
        )
    return buckets


def compute_mrr_growth(buckets: Sequence[MonthBucket]) -> float:
    """Percent change of the last bucket's MRR over the one before it."""
    if len(buckets) < 2:
        return 0.0
    previous = buckets[-2].mrr
    if previous <= 0:
        return 0.0
    return (buckets[-1].mrr - previous) / previous * 100.0


def compute_product_breakdown(contracts: Iterable[Any]) -> List[Dict[str, Any]]:
    stats: Dict[str, Dict[str, Any]] = {}
    for c in _records(contracts):
        name = c.product or OTHER_LABEL
        entry = stats.setdefault(name, {"name": name, "count": 0, "revenue": 0.0})
        entry["count"] += 1
        entry["revenue"] += parse_ticket_value(c.ticket_value)
    return sorted(stats.values(), key=lambda row: (-row["revenue"], row["name"]))


def compute_duration_breakdown(contracts: Iterable[Any]) -> List[Dict[str, Any]]:
    counts: Counter[str] = Counter(
        DURATION_LABELS.get(c.contract_duration or "", OTHER_LABEL) for c in _records(contracts)
    )
    return [{"name": name, "count": count} for name, count in counts.most_common()]


def unique_products(contracts: Iterable[Any]) -> List[str]:
    return sorted({c.product for c in _records(contracts) if c.product})


def filter_by_start_cutoff(
    contracts: Iterable[Any],
    cutoff: Optional[datetime],
) -> List[ContractRecord]:
    """
    Contracts that started on or after cutoff. A start date that cannot be
    parsed never compares as earlier than the cutoff, so those contracts stay.
    """
    records = _records(contracts)
    if cutoff is None:
        return records
    out: List[ContractRecord] = []
    for c in records:
        start = parse_contract_datetime(c.start_date)
        if start is None or start >= cutoff:
            out.append(c)
    return out
