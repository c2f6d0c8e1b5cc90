from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from backend.app.analytics.activity import ContractRecord
from backend.app.analytics.core import ALL
from backend.app.api.config import analytics_default_period
from backend.app.api.deps import get_contract_records
from backend.app.services import analytics_service

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


class MonthBucketOut(BaseModel):
    month: str
    date: datetime
    contract_count: int
    billing_total: float
    mrr: float


class MonthlySeriesOut(BaseModel):
    computation_version: str
    as_of: str
    series: List[MonthBucketOut]
    mrr_growth_pct: float


class CurrentMrrOut(BaseModel):
    computation_version: str
    as_of: str
    mrr: float
    active_recurring_count: int


class DashboardKpisOut(BaseModel):
    total_contracts: int
    total_revenue: float
    period_mrr: float
    current_mrr: float
    active_recurring_count: int
    ticket_monthly_avg: float
    average_ticket: float
    mrr_growth_pct: float


class DashboardOut(BaseModel):
    computation_version: str
    as_of: str
    filters: Dict[str, str]
    kpis: DashboardKpisOut
    series: List[MonthBucketOut]
    by_product: List[Dict[str, Any]]
    by_duration: List[Dict[str, Any]]
    products: List[str]
    filtered_count: int
    total_count: int
    labels: Dict[str, Dict[str, str]]


@router.get("/dashboard", response_model=DashboardOut)
def analytics_dashboard(
    period: Optional[str] = Query(None),
    product: str = Query(ALL),
    duration: str = Query(ALL),
    as_of: Optional[datetime] = Query(None),
    contracts: List[ContractRecord] = Depends(get_contract_records),
):
    return analytics_service.build_contract_analytics(
        contracts,
        as_of=as_of,
        period=period or analytics_default_period(),
        product_filter=product,
        duration_filter=duration,
    )


@router.get("/mrr", response_model=CurrentMrrOut)
def current_mrr(
    product: str = Query(ALL),
    duration: str = Query(ALL),
    as_of: Optional[datetime] = Query(None),
    contracts: List[ContractRecord] = Depends(get_contract_records),
):
    return analytics_service.build_current_mrr(
        contracts,
        as_of=as_of,
        product_filter=product,
        duration_filter=duration,
    )


@router.get("/monthly", response_model=MonthlySeriesOut)
def monthly_series(
    months: int = Query(6, ge=1, le=60),
    product: str = Query(ALL),
    duration: str = Query(ALL),
    as_of: Optional[datetime] = Query(None),
    contracts: List[ContractRecord] = Depends(get_contract_records),
):
    return analytics_service.build_monthly_series(
        contracts,
        months_back=months,
        as_of=as_of,
        product_filter=product,
        duration_filter=duration,
    )
