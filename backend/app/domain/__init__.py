"""Domain contracts and shared types."""

from backend.app.domain.contracts import (  # noqa: F401
    ContractRowContract,
    ContractCreateContract,
    ContractStatusContract,
    ContractRowWithStatusContract,
    WebhookConfigContract,
    WebhookEventContract,
)
