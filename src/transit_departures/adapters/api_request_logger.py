"""Utility for logging API requests when TRANSIT_LOG_REQUESTS is enabled."""

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

REDACTED = "***REDACTED***"

SENSITIVE_HEADERS = {"authorization", "cookie", "x-api-key"}
SENSITIVE_PARAMS = {"api_key", "apikey", "token"}


def should_log_requests() -> bool:
    """Check if request logging is enabled via TRANSIT_LOG_REQUESTS environment variable."""
    return os.getenv("TRANSIT_LOG_REQUESTS", "").lower() == "true"


def redact_params(params: dict[str, Any]) -> dict[str, Any]:
    """Redact credentials from query parameters."""
    return {k: REDACTED if k.lower() in SENSITIVE_PARAMS else v for k, v in params.items()}


def _build_url_with_params(url: str, params: dict[str, Any] | None) -> str:
    """Build full URL with query parameters, credentials redacted."""
    if not params:
        return url
    param_str = "&".join(f"{k}={v}" for k, v in sorted(redact_params(params).items()))
    return f"{url}?{param_str}" if "?" not in url else f"{url}&{param_str}"


def _redact_sensitive_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive headers from logging."""
    return {k: REDACTED if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()}


def log_api_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> None:
    """Log API request details if TRANSIT_LOG_REQUESTS is enabled.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Request URL without query string.
        params: Query parameters (optional, credentials are redacted).
        headers: Request headers (optional, sensitive headers are redacted).
    """
    if not should_log_requests():
        return

    full_url = _build_url_with_params(url, params)
    log_parts = [f"{method} {full_url}"]

    if headers:
        safe_headers = _redact_sensitive_headers(headers)
        log_parts.append(f"Headers: {json.dumps(safe_headers, indent=2)}")

    logger.info("API Request:\n" + "\n".join(log_parts))
