"""Header-aware verification of inbound BlindPay webhook requests."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from .config import WebhookSettings, get_settings
from .errors import ConfigurationError, InvalidInputError, SignatureExpiredError, WebhookVerificationFailed
from .events import WebhookPayload, parse_event
from .logging import configure_logging
from .webhooks import (
    DEFAULT_TOLERANCE_SECONDS,
    Payload,
    decode_secret,
    replay_window_active,
    timestamp_within_tolerance,
    verify_webhook_signature,
)

__all__ = ["HEADER_ALIASES", "Webhook", "WebhookHeaders"]

LOG = logging.getLogger(__name__)

# Svix names first, then the standard-webhooks spelling.
HEADER_ALIASES = {
    "id": ("svix-id", "webhook-id"),
    "timestamp": ("svix-timestamp", "webhook-timestamp"),
    "signature": ("svix-signature", "webhook-signature"),
}


@dataclass(frozen=True, slots=True)
class WebhookHeaders:
    """Signature headers pulled from an inbound request."""

    id: str
    timestamp: str
    signature: str


def _lookup(headers: Mapping[str, str], names: tuple[str, ...]) -> Optional[str]:
    lowered = {key.lower(): value for key, value in headers.items()}
    for name in names:
        value = lowered.get(name)
        if value:
            return value
    return None


class Webhook:
    """Verify deliveries for one webhook endpoint secret.

    The secret is decoded once at construction so a misconfigured endpoint
    fails at startup rather than on the first request.
    """

    def __init__(self, secret: str, *, tolerance_seconds: Optional[int] = DEFAULT_TOLERANCE_SECONDS) -> None:
        decode_secret(secret)
        self._secret = secret
        self.tolerance_seconds = tolerance_seconds if replay_window_active(tolerance_seconds) else None

    def __repr__(self) -> str:
        return f"Webhook(tolerance_seconds={self.tolerance_seconds!r})"

    @classmethod
    def from_settings(cls, settings: Optional[WebhookSettings] = None) -> "Webhook":
        settings = settings or get_settings()
        if settings.webhook_secret is None:
            raise ConfigurationError("BLINDPAY_WEBHOOK_SECRET is not configured")
        configure_logging(settings)
        return cls(settings.webhook_secret.get_secret_value(), tolerance_seconds=settings.replay_window)

    @staticmethod
    def extract_headers(headers: Mapping[str, str]) -> WebhookHeaders:
        values = {}
        for field, names in HEADER_ALIASES.items():
            value = _lookup(headers, names)
            if value is None:
                raise InvalidInputError(f"missing {names[0]} header", field=field)
            values[field] = value
        return WebhookHeaders(**values)

    def is_valid(self, payload: Payload, headers: Mapping[str, str], *, now: int | float | None = None) -> bool:
        """Return whether the request carries a valid signature."""

        extracted = self.extract_headers(headers)
        return verify_webhook_signature(
            self._secret,
            extracted.id,
            extracted.timestamp,
            payload,
            extracted.signature,
            tolerance_seconds=self.tolerance_seconds,
            now=now,
        )

    def verify(self, payload: Payload, headers: Mapping[str, str], *, now: int | float | None = None) -> WebhookPayload:
        """Verify the request and return its decoded event.

        Raises :class:`SignatureExpiredError` for a timestamp outside the
        replay window and :class:`WebhookVerificationFailed` when no
        signature matches.
        """

        extracted = self.extract_headers(headers)
        if replay_window_active(self.tolerance_seconds) and not timestamp_within_tolerance(
            extracted.timestamp, self.tolerance_seconds, now=now
        ):
            raise SignatureExpiredError(
                f"webhook timestamp {extracted.timestamp} is outside the {self.tolerance_seconds}s window",
                msg_id=extracted.id,
            )
        valid = verify_webhook_signature(
            self._secret,
            extracted.id,
            extracted.timestamp,
            payload,
            extracted.signature,
        )
        if not valid:
            raise WebhookVerificationFailed("no matching webhook signature", msg_id=extracted.id)
        event = parse_event(payload)
        LOG.debug("Verified webhook %s (%s)", extracted.id, event.webhook_event)
        return event
