"""
Tests for the exceptions module.
"""

import asyncio
from unittest.mock import MagicMock

import aiohttp
import pytest

from poke_fetch.exceptions import (
    ConfigurationError,
    ConnectionError,
    DecodeError,
    ErrorHandler,
    HTTPError,
    NetworkError,
    NotFoundError,
    PokeFetchError,
    RateLimitError,
    RequestCancelledError,
    ServerError,
    TimeoutError,
    TransportError,
    UnsupportedNavigationFormatError,
)


class TestPokeFetchError:
    """Test the base PokeFetchError exception."""

    def test_basic_exception(self):
        """Test basic exception creation."""
        error = PokeFetchError("Test error message")
        assert str(error) == "Test error message"
        assert error.url is None
        assert error.details == {}

    def test_exception_with_details(self):
        """Test exception with additional details."""
        error = PokeFetchError("Test error", url="https://pokeapi.co/api/v2/pokemon/1/", kind="Pokemon")

        assert error.message == "Test error"
        assert error.url == "https://pokeapi.co/api/v2/pokemon/1/"
        assert error.details["kind"] == "Pokemon"

    def test_hierarchy(self):
        """Test the shape of the exception hierarchy."""
        for exc_class in (NetworkError, ConnectionError, TimeoutError, RequestCancelledError):
            assert issubclass(exc_class, TransportError)

        for exc_class in (RateLimitError, ServerError):
            assert issubclass(exc_class, HTTPError)
            assert issubclass(exc_class, TransportError)

        for exc_class in (
            ConfigurationError,
            UnsupportedNavigationFormatError,
            NotFoundError,
            DecodeError,
            TransportError,
        ):
            assert issubclass(exc_class, PokeFetchError)

    def test_not_found_is_not_a_transport_error(self):
        """Test that NotFoundError is distinguishable from transport failures."""
        assert not issubclass(NotFoundError, TransportError)


class TestHTTPErrors:
    """Test HTTP-specific errors."""

    def test_http_error_with_headers_and_response_text(self):
        """Test HTTP error with headers and response text."""
        headers = {"content-type": "text/plain"}
        error = HTTPError("Bad request", 400, "https://pokeapi.co/api/v2/x/", headers, "nope")

        assert error.status_code == 400
        assert error.headers == headers
        assert error.response_text == "nope"

    def test_http_error_default_headers(self):
        error = HTTPError("Server error", 500)
        assert error.headers == {}
        assert error.response_text is None

    def test_not_found_error(self):
        error = NotFoundError("Resource not found", "https://pokeapi.co/api/v2/pokemon/0/")
        assert error.status_code == 404
        assert error.headers == {}

    def test_rate_limit_error(self):
        """Test RateLimitError (429)."""
        error = RateLimitError("Rate limit exceeded", retry_after=60.0)
        assert error.status_code == 429
        assert error.retry_after == 60.0

    def test_decode_error(self):
        error = DecodeError("bad body", content_type="application/json", content_length=12)
        assert error.content_type == "application/json"
        assert error.content_length == 12


class TestHandleHttpStatusError:
    """Test classification of HTTP status codes."""

    def test_404(self):
        error = ErrorHandler.handle_http_status_error(404, "Not Found", "u", None, "Not Found")
        assert isinstance(error, NotFoundError)
        assert error.response_text == "Not Found"

    def test_429_with_retry_after(self):
        error = ErrorHandler.handle_http_status_error(
            429, "Too Many Requests", "u", {"Retry-After": "30"}
        )
        assert isinstance(error, RateLimitError)
        assert error.retry_after == 30.0

    def test_429_with_invalid_retry_after(self):
        error = ErrorHandler.handle_http_status_error(
            429, "Too Many Requests", "u", {"Retry-After": "soon"}
        )
        assert isinstance(error, RateLimitError)
        assert error.retry_after is None

    @pytest.mark.parametrize("status_code", [500, 502, 503, 504])
    def test_5xx(self, status_code):
        error = ErrorHandler.handle_http_status_error(status_code, "oops", "u")
        assert isinstance(error, ServerError)
        assert error.status_code == status_code

    def test_other_status(self):
        error = ErrorHandler.handle_http_status_error(400, "Bad Request", "u")
        assert type(error) is HTTPError
        assert error.status_code == 400


class TestHandleAiohttpError:
    """Test classification of aiohttp exceptions."""

    def test_timeout(self):
        error = ErrorHandler.handle_aiohttp_error(asyncio.TimeoutError(), "u")
        assert isinstance(error, TimeoutError)
        assert error.url == "u"

    def test_connection_error(self):
        original = aiohttp.ClientConnectionError("refused")
        error = ErrorHandler.handle_aiohttp_error(original, "u")
        assert isinstance(error, ConnectionError)

    def test_payload_error(self):
        error = ErrorHandler.handle_aiohttp_error(aiohttp.ClientPayloadError("truncated"), "u")
        assert isinstance(error, DecodeError)

    def test_response_error(self):
        original = aiohttp.ClientResponseError(
            request_info=MagicMock(), history=(), status=503, message="Service Unavailable"
        )
        error = ErrorHandler.handle_aiohttp_error(original, "u")
        assert isinstance(error, ServerError)
        assert error.status_code == 503

    def test_unexpected_error(self):
        error = ErrorHandler.handle_aiohttp_error(RuntimeError("boom"), "u")
        assert isinstance(error, NetworkError)

    def test_passthrough(self):
        original = NotFoundError("gone", "u")
        assert ErrorHandler.handle_aiohttp_error(original, "u") is original


class TestRetryability:
    """Test retry classification helpers."""

    @pytest.mark.parametrize(
        "error, expected",
        [
            (NetworkError("x"), True),
            (TimeoutError("x"), True),
            (ConnectionError("x"), True),
            (ServerError("x", 503), True),
            (RateLimitError("x"), True),
            (HTTPError("x", 408), True),
            (HTTPError("x", 400), False),
            (NotFoundError("x"), False),
            (DecodeError("x"), False),
            (RequestCancelledError("x"), False),
            (UnsupportedNavigationFormatError("x"), False),
        ],
    )
    def test_is_retryable_error(self, error, expected):
        assert ErrorHandler.is_retryable_error(error) is expected

    def test_retry_delay_uses_retry_after(self):
        error = RateLimitError("slow down", retry_after=7)
        assert ErrorHandler.get_retry_delay(error, attempt=3) == 7.0

    def test_retry_delay_backoff(self):
        assert ErrorHandler.get_retry_delay(NetworkError("x"), attempt=2, base_delay=0.5) == 2.0

    def test_no_delay_for_permanent_errors(self):
        assert ErrorHandler.get_retry_delay(NotFoundError("x"), attempt=0) == 0.0
