from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from backend.app.analytics.activity import (
    DEFAULT_EXPIRING_WITHIN_DAYS,
    ContractRecord,
    contract_status,
    parse_contract_datetime,
    record_from_contract,
)
from backend.app.domain.contracts import ContractCreateContract, ContractRowContract
from backend.app.models import Contract, utcnow

logger = logging.getLogger(__name__)


def get_contract(db: Session, contract_id: str) -> Optional[Contract]:
    return db.get(Contract, contract_id)


def require_contract(db: Session, contract_id: str) -> Contract:
    row = get_contract(db, contract_id)
    if not row:
        raise HTTPException(404, "contract not found")
    return row


def create_contract(db: Session, payload: ContractCreateContract) -> Contract:
    start_date = parse_contract_datetime(payload.start_date) or utcnow()
    row = Contract(
        client_name=payload.client_name.strip(),
        client_phone=payload.client_phone.strip(),
        company_name=payload.company_name.strip(),
        document=payload.document.strip(),
        contract_duration=payload.contract_duration,
        product=payload.product.strip(),
        ticket_value=payload.ticket_value.strip(),
        payment_frequency=payload.payment_frequency,
        start_date=start_date,
        pdf_url=payload.pdf_url,
        submitted_at=utcnow(),
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Created contract %s for %s (%s)", row.id, row.company_name, row.product)
    return row


def list_contracts(db: Session, search: Optional[str] = None) -> List[Contract]:
    """
    All contracts, newest submission first. search matches client name and
    product case-insensitively, phone as a plain substring.
    """
    query = select(Contract)
    term = (search or "").strip()
    if term:
        lowered = term.lower()
        query = query.where(
            or_(
                func.lower(Contract.client_name).contains(lowered, autoescape=True),
                func.lower(Contract.product).contains(lowered, autoescape=True),
                Contract.client_phone.contains(term, autoescape=True),
            )
        )
    return list(
        db.execute(query.order_by(Contract.submitted_at.desc(), Contract.id.desc())).scalars().all()
    )


def delete_contract(db: Session, contract_id: str) -> bool:
    row = get_contract(db, contract_id)
    if not row:
        return False
    db.delete(row)
    db.commit()
    logger.info("Deleted contract %s", contract_id)
    return True


def contract_to_dict(row: Contract) -> Dict[str, Any]:
    return ContractRowContract.model_validate(row, from_attributes=True).model_dump(mode="json")


def contract_to_record(row: Contract) -> ContractRecord:
    return record_from_contract(row)


def list_active_contracts(
    db: Session,
    *,
    now: datetime,
    expiring_within_days: int = DEFAULT_EXPIRING_WITHIN_DAYS,
    search: Optional[str] = None,
) -> List[Dict[str, Any]]:
    items: List[Dict[str, Any]] = []
    for row in list_contracts(db, search=search):
        status = contract_status(contract_to_record(row), now, expiring_within_days)
        if status is None or status.status == "expired":
            continue
        items.append(
            {
                **contract_to_dict(row),
                "status": {
                    "status": status.status,
                    "days_remaining": status.days_remaining,
                    "expiration_date": status.expiration_date,
                },
            }
        )
    return items
