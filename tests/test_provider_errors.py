"""Provider failure classification."""

import asyncio

import httpx
import openai
import pytest

from llm.errors import ProviderErrorCode, classify_provider_error

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def _status_error(cls, status, body=None):
    response = httpx.Response(status, request=REQUEST)
    return cls("provider said no", response=response, body=body)


class CustomError(Exception):
    def __init__(self, message="", **attrs):
        super().__init__(message)
        for key, value in attrs.items():
            setattr(self, key, value)


class TestOpenAIExceptions:
    def test_authentication_error(self):
        err = _status_error(openai.AuthenticationError, 401)
        assert classify_provider_error(err) == ProviderErrorCode.INVALID_API_KEY

    def test_permission_denied(self):
        err = _status_error(openai.PermissionDeniedError, 403)
        assert classify_provider_error(err) == ProviderErrorCode.INVALID_API_KEY

    def test_rate_limit(self):
        err = _status_error(openai.RateLimitError, 429)
        assert classify_provider_error(err) == ProviderErrorCode.RATE_LIMIT

    def test_invalid_key_code_on_other_status(self):
        err = _status_error(openai.BadRequestError, 400, body={"code": "invalid_api_key"})
        assert classify_provider_error(err) == ProviderErrorCode.INVALID_API_KEY

    def test_api_timeout(self):
        err = openai.APITimeoutError(request=REQUEST)
        assert classify_provider_error(err) == ProviderErrorCode.TIMEOUT

    def test_server_error(self):
        err = _status_error(openai.InternalServerError, 500)
        assert classify_provider_error(err) == ProviderErrorCode.PROVIDER_ERROR

    def test_connection_error(self):
        err = openai.APIConnectionError(message="Connection refused", request=REQUEST)
        assert classify_provider_error(err) == ProviderErrorCode.PROVIDER_ERROR


class TestGenericErrors:
    @pytest.mark.parametrize(
        "err,expected",
        [
            (CustomError(status=401), ProviderErrorCode.INVALID_API_KEY),
            (CustomError(status_code=403), ProviderErrorCode.INVALID_API_KEY),
            (CustomError(error={"status": 401}), ProviderErrorCode.INVALID_API_KEY),
            (CustomError(code="rate_limit_exceeded"), ProviderErrorCode.RATE_LIMIT),
            (CustomError(error={"code": "rate_limit_exceeded"}), ProviderErrorCode.RATE_LIMIT),
            (CustomError(code="ETIMEDOUT"), ProviderErrorCode.TIMEOUT),
            (CustomError(code="ECONNABORTED"), ProviderErrorCode.TIMEOUT),
            (CustomError(name="AbortError"), ProviderErrorCode.TIMEOUT),
            (CustomError(status=504), ProviderErrorCode.TIMEOUT),
            (CustomError("Request timed out"), ProviderErrorCode.TIMEOUT),
            (CustomError("upstream TIMEOUT"), ProviderErrorCode.TIMEOUT),
            (asyncio.TimeoutError(), ProviderErrorCode.TIMEOUT),
            (RuntimeError("boom"), ProviderErrorCode.PROVIDER_ERROR),
            (CustomError(status=500, code="server_error"), ProviderErrorCode.PROVIDER_ERROR),
        ],
    )
    def test_classification(self, err, expected):
        assert classify_provider_error(err) == expected

    def test_credentials_take_precedence_over_rate_limit(self):
        err = CustomError(status=401, code="rate_limit_exceeded")
        assert classify_provider_error(err) == ProviderErrorCode.INVALID_API_KEY

    def test_rate_limit_takes_precedence_over_timeout(self):
        err = CustomError("timed out", status=429)
        assert classify_provider_error(err) == ProviderErrorCode.RATE_LIMIT

    def test_bool_status_is_ignored(self):
        assert classify_provider_error(CustomError(status=True)) == ProviderErrorCode.PROVIDER_ERROR
