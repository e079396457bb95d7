"""Exception hierarchy for the BlindPay webhook toolkit."""
from __future__ import annotations

from typing import Optional


class BlindPayError(Exception):
    """Base class for every error raised by the package."""


class WebhookError(BlindPayError):
    """Base error for webhook handling."""


class ConfigurationError(WebhookError):
    """Raised when the webhook secret is missing or malformed."""


class InvalidInputError(WebhookError):
    """Raised when a required verification input is empty or unusable."""

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class InvalidPayloadError(WebhookError):
    """Raised when a delivery body is not a JSON webhook envelope."""


class WebhookVerificationFailed(WebhookError):
    """Raised by the strict verifier when no signature matches."""

    def __init__(self, message: str, *, msg_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.msg_id = msg_id


class SignatureExpiredError(WebhookVerificationFailed):
    """Raised when the signature timestamp falls outside the replay window."""


def is_configuration_error(error: BaseException) -> bool:
    return isinstance(error, ConfigurationError)


def is_verification_failure(error: BaseException) -> bool:
    return isinstance(error, WebhookVerificationFailed)


__all__ = [
    "BlindPayError",
    "ConfigurationError",
    "InvalidInputError",
    "InvalidPayloadError",
    "SignatureExpiredError",
    "WebhookError",
    "WebhookVerificationFailed",
    "is_configuration_error",
    "is_verification_failure",
]
