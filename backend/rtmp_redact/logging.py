from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any

from .config import get_settings
from .url_sanitizer import sanitize_rtmp_url


RTMP_URL_PATTERN = re.compile(r"\brtmp[a-z0-9+.\-]*://[^\s\"'<>]*", re.IGNORECASE)
TRAILING_PUNCTUATION = ".,;:!)}"


def _split_trailing(token: str) -> tuple[str, str]:
    url = token.rstrip(TRAILING_PUNCTUATION)
    return url, token[len(url) :]


def find_rtmp_urls(text: str) -> list[str]:
    return [_split_trailing(match.group(0))[0] for match in RTMP_URL_PATTERN.finditer(text)]


def _redact_match(match: re.Match[str]) -> str:
    url, trailer = _split_trailing(match.group(0))
    return f"{sanitize_rtmp_url(url)}{trailer}"


def redact_text(text: str) -> str:
    """Sanitize every RTMP-family URL embedded in free text."""
    return RTMP_URL_PATTERN.sub(_redact_match, text)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            payload["exc_info"] = record.exc_text
        return json.dumps(payload)


def _redact_arg(value: Any) -> Any:
    return redact_text(value) if isinstance(value, str) else value


class RtmpRedactingFilter(logging.Filter):
    """
    Logging filter that redacts stream keys from RTMP URLs in log records.

    The record is rewritten in place (msg formatted, args cleared, traceback
    and stack text redacted) so every handler downstream sees the redacted
    text. Records are never dropped.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.exc_info and not record.exc_text:
            record.exc_text = logging.Formatter().formatException(record.exc_info)
        if record.exc_text:
            record.exc_text = redact_text(record.exc_text)
        if record.stack_info:
            record.stack_info = redact_text(record.stack_info)

        try:
            message = record.getMessage()
        except Exception:
            # Bad format args; the handler reports these itself, args included.
            if isinstance(record.msg, str):
                record.msg = redact_text(record.msg)
            if isinstance(record.args, tuple):
                record.args = tuple(_redact_arg(arg) for arg in record.args)
            elif isinstance(record.args, dict):
                record.args = {key: _redact_arg(arg) for key, arg in record.args.items()}
            return True
        redacted = redact_text(message)
        if redacted != message:
            record.msg = redacted
            record.args = ()
        return True


def setup_logging() -> None:
    settings = get_settings()
    handler = logging.StreamHandler()
    if settings.log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(settings.plain_log_format))
    if settings.redact_log_records:
        handler.addFilter(RtmpRedactingFilter())
    root = logging.getLogger()
    root.setLevel(settings.log_level_value)
    root.handlers = [handler]
