from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field

ContractDuration = Literal["3_months", "6_months", "1_year", "2_years"]
PaymentFrequencyName = Literal["monthly", "quarterly", "biannual", "annual", "one_time"]


class ContractCreateContract(BaseModel):
    client_name: str = Field(min_length=3, max_length=200)
    client_phone: str = Field(min_length=10, max_length=40)
    company_name: str = Field(min_length=3, max_length=200)
    document: str = Field(min_length=11, max_length=40)
    contract_duration: ContractDuration
    product: str = Field(min_length=2, max_length=120)
    ticket_value: str = Field(min_length=1, max_length=60)
    payment_frequency: PaymentFrequencyName = "monthly"
    start_date: Optional[Union[datetime, date]] = None
    pdf_url: str = Field(min_length=1)


class ContractRowContract(BaseModel):
    id: str
    client_name: str
    client_phone: str
    company_name: str
    document: str
    contract_duration: str
    product: str
    ticket_value: str
    payment_frequency: str
    start_date: datetime
    pdf_url: str
    submitted_at: datetime


class ContractStatusContract(BaseModel):
    status: Literal["active", "expiring", "expired"]
    days_remaining: int
    expiration_date: datetime


class ContractRowWithStatusContract(ContractRowContract):
    status: ContractStatusContract


class WebhookConfigContract(BaseModel):
    url: str = ""
    is_active: bool = False
    updated_at: Optional[datetime] = None


class WebhookEventContract(BaseModel):
    event: str
    data: Dict[str, Any]
    timestamp: datetime
