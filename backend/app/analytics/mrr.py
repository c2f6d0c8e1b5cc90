from __future__ import annotations

from types import MappingProxyType
from typing import Any, Literal, Mapping, Optional

PaymentFrequency = Literal["monthly", "quarterly", "biannual", "annual", "one_time"]

ONE_TIME = "one_time"
FALLBACK_DURATION_MONTHS = 1

DURATION_MONTHS: Mapping[str, int] = MappingProxyType(
    {
        "3_months": 3,
        "6_months": 6,
        "1_year": 12,
        "2_years": 24,
    }
)

DURATION_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "3_months": "3 Meses",
        "6_months": "6 Meses",
        "1_year": "1 Ano",
        "2_years": "2 Anos",
    }
)

PAYMENT_FREQUENCY_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "monthly": "Mensal (12x/ano)",
        "quarterly": "Trimestral (4x/ano)",
        "biannual": "Semestral (2x/ano)",
        "annual": "Anual (1x/ano)",
        "one_time": "À Vista (Pagamento Único)",
    }
)

PAYMENT_FREQUENCIES = tuple(PAYMENT_FREQUENCY_LABELS.keys())


def resolve_duration_months(code: Any) -> int:
    return DURATION_MONTHS.get(str(code) if code is not None else "", FALLBACK_DURATION_MONTHS)


def is_recurring(payment_frequency: Optional[str]) -> bool:
    return payment_frequency != ONE_TIME


def calculate_mrr(
    ticket_value: float,
    duration_months: Optional[int],
    payment_frequency: Optional[str] = None,
) -> float:
    """
    Monthly recurring contribution of a contract: total value over the term.

    ticket_value is the contract's total over its whole term, so the payment
    cadence never changes the result. Callers drop one_time contracts before
    summing (see is_recurring).
    """
    months = duration_months if duration_months and duration_months > 0 else 1
    return float(ticket_value) / months
