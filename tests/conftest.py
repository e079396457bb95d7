from __future__ import annotations

import logging

import pytest

from blindpay.config import get_settings
from blindpay.logging import PACKAGE_LOGGER
from tests.helpers import MSG_ID, PAYLOAD, SECRET_KEY, TIMESTAMP, reference_signature


@pytest.fixture
def expected_signature() -> str:
    return reference_signature(SECRET_KEY, MSG_ID, TIMESTAMP, PAYLOAD)


@pytest.fixture
def signed_headers(expected_signature: str) -> dict[str, str]:
    return {
        "svix-id": MSG_ID,
        "svix-timestamp": TIMESTAMP,
        "svix-signature": f"v1,{expected_signature}",
    }


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    for name in ("BLINDPAY_WEBHOOK_SECRET", "BLINDPAY_WEBHOOK_TOLERANCE_SECONDS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    level = package_logger.level
    yield
    package_logger.setLevel(level)
    get_settings.cache_clear()
