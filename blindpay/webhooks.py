"""Webhook signature helpers for BlindPay deliveries.

BlindPay signs every webhook delivery with the Svix scheme: the endpoint
secret is distributed as ``whsec_<base64 key>`` and each request carries

* ``svix-id``: the unique message id,
* ``svix-timestamp``: Unix seconds at signing time,
* ``svix-signature``: one or more space separated ``v1,<base64 digest>``
  tokens, where the digest is ``HMAC-SHA256(key, "<id>.<timestamp>.<body>")``.

Several tokens appear while a secret is being rotated; a delivery is
authentic when any ``v1`` token matches. Verification must run on the raw
body as received, before any JSON decoding.
"""

from __future__ import annotations

import base64
import binascii
import hmac
import logging
import time
from dataclasses import dataclass
from hashlib import sha256
from typing import Optional, Union

from .errors import ConfigurationError, InvalidInputError

__all__ = [
    "DEFAULT_TOLERANCE_SECONDS",
    "SECRET_PREFIX",
    "SIGNATURE_VERSION",
    "SignatureToken",
    "compute_signature",
    "decode_secret",
    "parse_signature_header",
    "replay_window_active",
    "sign",
    "signed_content",
    "timestamp_within_tolerance",
    "verify_webhook_signature",
]

LOG = logging.getLogger(__name__)

SECRET_PREFIX = "whsec_"
SIGNATURE_VERSION = "v1"
DEFAULT_TOLERANCE_SECONDS = 300

Payload = Union[str, bytes]


@dataclass(frozen=True, slots=True)
class SignatureToken:
    """One ``version,signature`` pair from the signature header."""

    version: str
    signature: str


def decode_secret(secret: str) -> bytes:
    """Return the raw HMAC key encoded in a ``whsec_`` secret."""

    if not secret:
        raise ConfigurationError("webhook secret is required")
    if not secret.startswith(SECRET_PREFIX):
        raise ConfigurationError("invalid secret format, expected 'whsec_<base64>'")
    encoded = secret[len(SECRET_PREFIX) :]
    try:
        key = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ConfigurationError(f"failed to decode secret: {exc}") from exc
    if not key:
        raise ConfigurationError("webhook secret decodes to an empty key")
    return key


def _payload_bytes(payload: Payload) -> bytes:
    if isinstance(payload, bytes):
        return payload
    return payload.encode("utf-8")


def signed_content(msg_id: str, timestamp: str, payload: Payload) -> bytes:
    """Build the exact byte string covered by the signature."""

    return f"{msg_id}.{timestamp}.".encode("utf-8") + _payload_bytes(payload)


def _digest(key: bytes, msg_id: str, timestamp: str, payload: Payload) -> str:
    mac = hmac.new(key, signed_content(msg_id, timestamp, payload), sha256)
    return base64.b64encode(mac.digest()).decode("ascii")


def compute_signature(secret: str, msg_id: str, timestamp: str, payload: Payload) -> str:
    """Compute the base64 ``v1`` signature for a delivery."""

    return _digest(decode_secret(secret), msg_id, timestamp, payload)


def sign(secret: str, msg_id: str, timestamp: str | int, payload: Payload) -> str:
    """Return a ready-to-send ``svix-signature`` header value."""

    signature = compute_signature(secret, msg_id, str(timestamp), payload)
    return f"{SIGNATURE_VERSION},{signature}"


def parse_signature_header(header: str) -> list[SignatureToken]:
    """Split a signature header into its versioned tokens.

    Tokens without a comma carry no version and are skipped.
    """

    tokens: list[SignatureToken] = []
    for raw in header.split():
        version, sep, signature = raw.partition(",")
        if not sep:
            continue
        tokens.append(SignatureToken(version, signature))
    return tokens


def replay_window_active(tolerance_seconds: Optional[int]) -> bool:
    """Return whether ``tolerance_seconds`` enables the timestamp age check.

    ``None`` and ``0`` disable the check; negative values are rejected.
    """

    if tolerance_seconds is None:
        return False
    if tolerance_seconds < 0:
        raise ConfigurationError(f"tolerance_seconds must be >= 0, got {tolerance_seconds}")
    return tolerance_seconds > 0


def timestamp_within_tolerance(
    timestamp: str,
    tolerance_seconds: int,
    *,
    now: int | float | None = None,
) -> bool:
    """Return ``True`` when ``timestamp`` is within ``tolerance_seconds`` of now."""

    try:
        signed_at = int(timestamp)
    except ValueError as exc:
        raise InvalidInputError(
            f"timestamp must be integer Unix seconds, got {timestamp!r}", field="timestamp"
        ) from exc
    current = int(now if now is not None else time.time())
    return abs(current - signed_at) <= tolerance_seconds


def _constant_time_equal(candidate: str, expected: str) -> bool:
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("ascii"))


def _require(value: Payload, field: str) -> None:
    if not value:
        raise InvalidInputError(f"{field} must be provided", field=field)


def verify_webhook_signature(
    secret: str,
    msg_id: str,
    timestamp: str,
    payload: Payload,
    signature_header: str,
    *,
    tolerance_seconds: Optional[int] = None,
    now: int | float | None = None,
) -> bool:
    """Check that a webhook delivery was signed with ``secret``.

    Parameters
    ----------
    secret:
        Endpoint secret from the BlindPay dashboard (``whsec_<base64>``).
    msg_id:
        Value of the ``svix-id`` header.
    timestamp:
        Value of the ``svix-timestamp`` header, used verbatim.
    payload:
        Raw request body.
    signature_header:
        Value of the ``svix-signature`` header.
    tolerance_seconds:
        Replay window. ``None`` or ``0`` skips the timestamp age check.
        Negative values raise :class:`ConfigurationError`.
    now:
        Override the current time for deterministic testing.

    Returns
    -------
    bool
        ``True`` when a ``v1`` signature matches, ``False`` otherwise.

    Raises
    ------
    ConfigurationError
        The secret is empty, lacks the ``whsec_`` prefix or is not base64,
        or ``tolerance_seconds`` is negative.
    InvalidInputError
        Any other argument is empty.
    """

    key = decode_secret(secret)
    window_active = replay_window_active(tolerance_seconds)
    _require(msg_id, "msg_id")
    _require(timestamp, "timestamp")
    _require(payload, "payload")
    _require(signature_header, "signature_header")

    if window_active and not timestamp_within_tolerance(timestamp, tolerance_seconds, now=now):
        LOG.warning(
            "Rejecting webhook %s: timestamp %s outside %ss tolerance",
            msg_id,
            timestamp,
            tolerance_seconds,
        )
        return False

    expected = _digest(key, msg_id, timestamp, payload)
    tokens = parse_signature_header(signature_header)
    for token in tokens:
        if token.version != SIGNATURE_VERSION:
            continue
        if _constant_time_equal(token.signature, expected):
            return True

    # Unversioned header: the whole value is the signature.
    if not tokens and _constant_time_equal(signature_header, expected):
        return True

    LOG.debug("Webhook %s signature did not match any v1 token", msg_id)
    return False
