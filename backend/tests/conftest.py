from __future__ import annotations

import logging
from typing import Iterator

import pytest

from rtmp_redact.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in ("RTMP_REDACT_LOG_LEVEL", "RTMP_REDACT_LOG_FORMAT", "RTMP_REDACT_REDACT_LOG_RECORDS"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)
