"""BlindPay webhook verification toolkit."""
from .errors import (
    BlindPayError,
    ConfigurationError,
    InvalidInputError,
    InvalidPayloadError,
    SignatureExpiredError,
    WebhookError,
    WebhookVerificationFailed,
)
from .events import WebhookEvent, WebhookPayload, parse_event
from .verifier import Webhook, WebhookHeaders
from .webhooks import compute_signature, sign, verify_webhook_signature

__version__ = "1.2.0"

__all__ = [
    "BlindPayError",
    "ConfigurationError",
    "InvalidInputError",
    "InvalidPayloadError",
    "SignatureExpiredError",
    "Webhook",
    "WebhookError",
    "WebhookEvent",
    "WebhookHeaders",
    "WebhookPayload",
    "WebhookVerificationFailed",
    "compute_signature",
    "parse_event",
    "sign",
    "verify_webhook_signature",
]
