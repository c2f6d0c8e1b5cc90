# backend/app/api/deps.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from fastapi import Depends
from sqlalchemy.orm import Session

from backend.app.analytics.activity import ContractRecord
from backend.app.db import get_db
from backend.app.services import contract_service


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def get_contract_records(db: Session = Depends(get_db)) -> List[ContractRecord]:
    """
    Full, current list of contracts as analytics records.

    All I/O for analytics happens here, before any computation runs; the
    analytics functions only ever see this in-memory list.
    """
    return [contract_service.contract_to_record(row) for row in contract_service.list_contracts(db)]
