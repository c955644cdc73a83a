"""Provider failure taxonomy.

Maps whatever the completion call raised onto a small, stable set of codes
that is safe to persist and log.
"""
from __future__ import annotations

import asyncio
from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional

import openai


class ProviderErrorCode(str, Enum):
    MISSING_API_KEY = "missing_api_key"
    EMPTY_RESPONSE = "empty_response"
    INVALID_API_KEY = "invalid_api_key"
    TIMEOUT = "timeout"
    RATE_LIMIT = "rate_limit"
    PROVIDER_ERROR = "provider_error"


_TIMEOUT_CODES = {"ETIMEDOUT", "ECONNABORTED"}
_TIMEOUT_STATUSES = {408, 504}


def _nested(err: BaseException) -> Optional[Mapping[str, Any]]:
    for attr in ("error", "body"):
        value = getattr(err, attr, None)
        if isinstance(value, Mapping):
            inner = value.get("error")
            return inner if isinstance(inner, Mapping) else value
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def error_status(err: BaseException) -> Optional[int]:
    for attr in ("status_code", "status"):
        status = _as_int(getattr(err, attr, None))
        if status is not None:
            return status
    nested = _nested(err)
    if nested is not None:
        return _as_int(nested.get("status"))
    return None


def error_code(err: BaseException) -> Optional[str]:
    code = getattr(err, "code", None)
    if isinstance(code, str):
        return code
    nested = _nested(err)
    if nested is not None and isinstance(nested.get("code"), str):
        return nested["code"]
    return None


def _is_timeout(err: BaseException, status: Optional[int], code: Optional[str]) -> bool:
    if isinstance(err, (openai.APITimeoutError, asyncio.TimeoutError, TimeoutError)):
        return True
    if type(err).__name__ == "AbortError" or getattr(err, "name", None) == "AbortError":
        return True
    if code in _TIMEOUT_CODES or status in _TIMEOUT_STATUSES:
        return True
    message = str(err).lower()
    return "timeout" in message or "timed out" in message


def classify_provider_error(err: BaseException) -> ProviderErrorCode:
    """Classify a failed completion call.

    Precedence: credentials, then rate limiting, then timeouts; anything
    unrecognised is a generic provider error.
    """
    status = error_status(err)
    code = error_code(err)

    if status in (401, 403) or code == "invalid_api_key":
        return ProviderErrorCode.INVALID_API_KEY
    if status == 429 or code == "rate_limit_exceeded":
        return ProviderErrorCode.RATE_LIMIT
    if _is_timeout(err, status, code):
        return ProviderErrorCode.TIMEOUT
    return ProviderErrorCode.PROVIDER_ERROR
