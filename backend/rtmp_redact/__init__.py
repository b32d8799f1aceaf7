from .url_sanitizer import MASK, REDACTED_FALLBACK, sanitize_rtmp_url

__all__ = ["MASK", "REDACTED_FALLBACK", "sanitize_rtmp_url"]
