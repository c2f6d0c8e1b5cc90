from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Literal, Mapping, Optional, Tuple

from dateutil.relativedelta import relativedelta

from backend.app.analytics.mrr import resolve_duration_months

ContractStatusName = Literal["active", "expiring", "expired"]

DEFAULT_EXPIRING_WITHIN_DAYS = 30
SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class ContractRecord:
    id: str
    start_date: Any
    contract_duration: Optional[str]
    ticket_value: Optional[str]
    payment_frequency: Optional[str]
    product: Optional[str] = None


@dataclass(frozen=True)
class ContractStatus:
    status: ContractStatusName
    days_remaining: int
    expiration_date: datetime


def record_from_contract(contract: Any) -> ContractRecord:
    """Adapt an ORM row, a mapping or any attribute bag to a ContractRecord."""
    if isinstance(contract, ContractRecord):
        return contract
    if isinstance(contract, Mapping):
        get = contract.get
    else:
        def get(key: str, default: Any = None) -> Any:
            return getattr(contract, key, default)

    return ContractRecord(
        id=str(get("id") or ""),
        start_date=get("start_date"),
        contract_duration=get("contract_duration"),
        ticket_value=get("ticket_value"),
        payment_frequency=get("payment_frequency"),
        product=get("product"),
    )


def parse_contract_datetime(value: Any) -> Optional[datetime]:
    """
    Normalize a date-ish value to an aware UTC datetime.
    Naive values are taken as UTC. Returns None when unparsable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if not isinstance(value, str):
        return None

    raw = value.strip()
    if not raw:
        return None
    try:
        if "T" in raw or " " in raw:
            parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
            return parsed.astimezone(timezone.utc) if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
        parsed_date = date.fromisoformat(raw)
        return datetime(parsed_date.year, parsed_date.month, parsed_date.day, tzinfo=timezone.utc)
    except ValueError:
        return None


def coverage_interval(contract: ContractRecord) -> Optional[Tuple[datetime, datetime]]:
    """Half-open [start, start + duration) or None for an unparsable start."""
    start = parse_contract_datetime(contract.start_date)
    if start is None:
        return None
    months = resolve_duration_months(contract.contract_duration)
    return start, start + relativedelta(months=months)


def is_contract_active_on(contract: ContractRecord, reference: Any) -> bool:
    interval = coverage_interval(contract)
    ref = parse_contract_datetime(reference)
    if interval is None or ref is None:
        return False
    start, end = interval
    return start <= ref < end


def overlaps_period(contract: ContractRecord, period_start: datetime, period_end: datetime) -> bool:
    interval = coverage_interval(contract)
    if interval is None:
        return False
    start, end = interval
    return start <= period_end and end > period_start


def contract_status(
    contract: ContractRecord,
    now: Any,
    expiring_within_days: int = DEFAULT_EXPIRING_WITHIN_DAYS,
) -> Optional[ContractStatus]:
    interval = coverage_interval(contract)
    ref = parse_contract_datetime(now)
    if interval is None or ref is None:
        return None

    expiration = interval[1]
    days_remaining = math.ceil((expiration - ref).total_seconds() / SECONDS_PER_DAY)

    status: ContractStatusName = "active"
    if days_remaining < 0:
        status = "expired"
    elif days_remaining <= expiring_within_days:
        status = "expiring"

    return ContractStatus(status=status, days_remaining=days_remaining, expiration_date=expiration)
