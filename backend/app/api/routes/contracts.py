from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from backend.app.api.config import contract_expiring_days
from backend.app.api.deps import utcnow
from backend.app.db import get_db
from backend.app.domain.contracts import (
    ContractCreateContract,
    ContractRowContract,
    ContractRowWithStatusContract,
)
from backend.app.services import contract_service, webhook_service

router = APIRouter(prefix="/api/contracts", tags=["contracts"])


class DeleteOut(BaseModel):
    success: bool


@router.get("", response_model=List[ContractRowContract])
def list_contracts(
    search: Optional[str] = Query(None, max_length=200),
    db: Session = Depends(get_db),
):
    rows = contract_service.list_contracts(db, search=search)
    return [ContractRowContract.model_validate(row, from_attributes=True) for row in rows]


@router.post("", response_model=ContractRowContract, status_code=201)
def create_contract(
    payload: ContractCreateContract,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    row = contract_service.create_contract(db, payload)
    data = contract_service.contract_to_dict(row)

    url = webhook_service.active_webhook_url(db)
    if url:
        background_tasks.add_task(webhook_service.dispatch_contract_created, url, data)

    return data


@router.get("/active", response_model=List[ContractRowWithStatusContract])
def list_active_contracts(
    search: Optional[str] = Query(None, max_length=200),
    now: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
):
    return contract_service.list_active_contracts(
        db,
        now=now or utcnow(),
        expiring_within_days=contract_expiring_days(),
        search=search,
    )


@router.get("/{contract_id}", response_model=ContractRowContract)
def get_contract(contract_id: str, db: Session = Depends(get_db)):
    row = contract_service.require_contract(db, contract_id)
    return ContractRowContract.model_validate(row, from_attributes=True)


@router.delete("/{contract_id}", response_model=DeleteOut)
def delete_contract(contract_id: str, db: Session = Depends(get_db)):
    if not contract_service.delete_contract(db, contract_id):
        raise HTTPException(status_code=404, detail="contract not found")
    return DeleteOut(success=True)
