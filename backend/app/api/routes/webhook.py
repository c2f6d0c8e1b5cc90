from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from backend.app.db import get_db
from backend.app.domain.contracts import WebhookConfigContract
from backend.app.services import webhook_service

router = APIRouter(prefix="/api/webhook", tags=["webhook"])


class WebhookConfigIn(BaseModel):
    url: str
    is_active: bool = True


@router.get("", response_model=WebhookConfigContract)
def get_webhook_config(db: Session = Depends(get_db)):
    config = webhook_service.get_webhook_config(db)
    if config is None:
        return WebhookConfigContract()
    return WebhookConfigContract.model_validate(config, from_attributes=True)


@router.post("", response_model=WebhookConfigContract)
def update_webhook_config(payload: WebhookConfigIn, db: Session = Depends(get_db)):
    config = webhook_service.upsert_webhook_config(db, url=payload.url, is_active=payload.is_active)
    return WebhookConfigContract.model_validate(config, from_attributes=True)
