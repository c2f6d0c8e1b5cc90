from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx
from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.api.config import webhook_timeout_seconds
from backend.app.domain.contracts import WebhookEventContract
from backend.app.models import WebhookConfig, utcnow

logger = logging.getLogger(__name__)

CONTRACT_CREATED = "contract.created"
WEBHOOK_SCHEMES = ("http", "https")


def get_webhook_config(db: Session) -> Optional[WebhookConfig]:
    return db.execute(select(WebhookConfig).order_by(WebhookConfig.updated_at.asc())).scalars().first()


def upsert_webhook_config(db: Session, *, url: str, is_active: bool = True) -> WebhookConfig:
    cleaned = (url or "").strip()
    if not cleaned:
        raise HTTPException(400, "Webhook URL is required")
    if not is_deliverable_url(cleaned):
        raise HTTPException(400, "Webhook URL must be an absolute http(s) URL")

    config = get_webhook_config(db)
    if config is None:
        config = WebhookConfig(url=cleaned, is_active=is_active, updated_at=utcnow())
        db.add(config)
    else:
        config.url = cleaned
        config.is_active = is_active
        config.updated_at = utcnow()
    db.commit()
    db.refresh(config)
    logger.info("Webhook config updated: url=%s active=%s", config.url, config.is_active)
    return config


def is_deliverable_url(url: str) -> bool:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, ValueError):
        return False
    return parsed.scheme in WEBHOOK_SCHEMES and bool(parsed.host)


def active_webhook_url(db: Session) -> Optional[str]:
    config = get_webhook_config(db)
    if config is None or not config.is_active:
        return None
    return config.url


def build_event(event: str, data: Dict[str, Any]) -> Dict[str, Any]:
    return WebhookEventContract(
        event=event,
        data=data,
        timestamp=datetime.now(timezone.utc),
    ).model_dump(mode="json")


def dispatch_contract_created(
    url: str,
    contract_payload: Dict[str, Any],
    *,
    client: Optional[httpx.Client] = None,
) -> bool:
    """
    Fire-and-forget POST of a contract.created event. Any delivery failure,
    including a malformed URL, is logged and swallowed; returns whether
    delivery succeeded.
    """
    body = build_event(CONTRACT_CREATED, contract_payload)
    owns_client = client is None
    http = client or httpx.Client(timeout=webhook_timeout_seconds())
    try:
        response = http.post(url, json=body)
        response.raise_for_status()
        return True
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
        logger.warning("Webhook delivery to %s failed: %s", url, exc)
        return False
    finally:
        if owns_client:
            http.close()
