"""Typed envelopes for decoded webhook deliveries."""
from __future__ import annotations

import json
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import InvalidPayloadError

__all__ = ["WebhookEvent", "WebhookPayload", "parse_event"]


class WebhookEvent(str, Enum):
    """Event names an endpoint can subscribe to."""

    RECEIVER_NEW = "receiver.new"
    RECEIVER_UPDATE = "receiver.update"
    BANK_ACCOUNT_NEW = "bankAccount.new"
    PAYOUT_NEW = "payout.new"
    PAYOUT_UPDATE = "payout.update"
    PAYOUT_COMPLETE = "payout.complete"
    PAYOUT_PARTNER_FEE = "payout.partnerFee"
    BLOCKCHAIN_WALLET_NEW = "blockchainWallet.new"
    PAYIN_NEW = "payin.new"
    PAYIN_UPDATE = "payin.update"
    PAYIN_COMPLETE = "payin.complete"


class WebhookPayload(BaseModel):
    """Decoded webhook body; resource fields are kept as extras."""

    model_config = ConfigDict(extra="allow")

    webhook_event: str
    id: Optional[str] = None

    @property
    def event(self) -> Optional[WebhookEvent]:
        try:
            return WebhookEvent(self.webhook_event)
        except ValueError:
            return None

    @property
    def data(self) -> dict:
        """Resource fields of the delivery, without the envelope keys."""

        return dict(self.model_extra or {})


def parse_event(payload: Union[str, bytes]) -> WebhookPayload:
    """Decode a verified delivery body into a :class:`WebhookPayload`."""

    try:
        decoded = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidPayloadError(f"webhook payload is not valid JSON: {exc}") from exc
    if not isinstance(decoded, dict):
        raise InvalidPayloadError("webhook payload must be a JSON object")
    try:
        return WebhookPayload.model_validate(decoded)
    except ValidationError as exc:
        raise InvalidPayloadError(f"webhook payload is missing envelope fields: {exc}") from exc
