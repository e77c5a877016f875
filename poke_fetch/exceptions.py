"""
Exception hierarchy for the poke_fetch client.

This module provides the typed errors raised by the resolver and its transport,
plus helpers that classify aiohttp failures and HTTP status codes into them.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional, Union

import aiohttp


class PokeFetchError(Exception):
    """
    Base exception for all poke_fetch operations.

    Attributes:
        message: Human-readable error message
        url: URL that caused the error (if applicable)
        details: Additional error details as keyword arguments
    """

    def __init__(self, message: str, url: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.details = kwargs


class ConfigurationError(PokeFetchError):
    """
    Raised when the client is misconfigured.

    Covers resource kinds without a registered endpoint path, conflicting
    registrations and unreadable configuration files. These are startup
    invariant violations and are not meant to be recovered from at runtime.
    """

    pass


class UnsupportedNavigationFormatError(PokeFetchError):
    """Raised when a navigation link URL does not end in an integer id."""

    pass


class NotFoundError(PokeFetchError):
    """Raised when the remote service reports that a resource does not exist (404)."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        response_text: Optional[str] = None,
    ) -> None:
        super().__init__(message, url)
        self.status_code = 404
        self.headers = headers or {}
        self.response_text = response_text


class DecodeError(PokeFetchError):
    """Raised when a response body does not match the expected shape."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        content_type: Optional[str] = None,
        content_length: Optional[int] = None,
    ) -> None:
        super().__init__(message, url)
        self.content_type = content_type
        self.content_length = content_length


class TransportError(PokeFetchError):
    """
    Base exception for failures of the HTTP transport.

    Network failures, non-success statuses other than 404 and cancelled
    requests all derive from this class.
    """

    pass


class NetworkError(TransportError):
    """Raised for unexpected low-level network failures."""

    pass


class TimeoutError(TransportError):
    """
    Raised when a request times out.

    Attributes:
        timeout_value: The timeout value that was exceeded (in seconds)
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        timeout_value: Optional[float] = None,
    ) -> None:
        super().__init__(message, url)
        self.timeout_value = timeout_value


class ConnectionError(TransportError):
    """Raised when a connection to the remote service cannot be established."""

    pass


class RequestCancelledError(TransportError):
    """Raised when a caller's cancellation token fires while it waits for a fetch."""

    pass


class HTTPError(TransportError):
    """Raised for non-success HTTP statuses other than 404."""

    def __init__(
        self,
        message: str,
        status_code: int,
        url: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        response_text: Optional[str] = None,
    ) -> None:
        super().__init__(message, url)
        self.status_code = status_code
        self.headers = headers or {}
        self.response_text = response_text


class RateLimitError(HTTPError):
    """Raised when the remote service answers 429."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        retry_after: Optional[Union[int, float]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(message, 429, url, headers)
        self.retry_after = retry_after


class ServerError(HTTPError):
    """Raised for server errors (5xx)."""

    pass


class ErrorHandler:
    """
    Utility class for classifying transport failures.

    Converts aiohttp exceptions and raw HTTP status codes into the
    poke_fetch exception hierarchy, and tells callers which errors are
    worth retrying. The resolver itself never retries.
    """

    @staticmethod
    def handle_aiohttp_error(
        error: Exception, url: Optional[str] = None
    ) -> PokeFetchError:
        """
        Convert an aiohttp exception into a PokeFetchError subclass.

        Args:
            error: The original aiohttp exception
            url: The URL that caused the error

        Returns:
            Appropriate PokeFetchError subclass
        """
        if isinstance(error, PokeFetchError):
            return error

        if isinstance(error, asyncio.TimeoutError):
            return TimeoutError(f"Request timed out: {error}", url=url)

        elif isinstance(error, aiohttp.ClientResponseError):
            return ErrorHandler.handle_http_status_error(
                error.status,
                error.message or str(error),
                url,
                dict(error.headers) if error.headers else None,
            )

        elif isinstance(error, aiohttp.ClientPayloadError):
            return DecodeError(f"Payload error: {error}", url=url)

        elif isinstance(error, aiohttp.ClientConnectionError):
            return ConnectionError(f"Connection error: {error}", url=url)

        else:
            return NetworkError(f"Unexpected network error: {error}", url=url)

    @staticmethod
    def handle_http_status_error(
        status_code: int,
        message: str,
        url: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        response_text: Optional[str] = None,
    ) -> PokeFetchError:
        """
        Create the error matching a non-success HTTP status code.

        Args:
            status_code: HTTP status code
            message: Error message
            url: The URL that caused the error
            headers: Response headers
            response_text: Response body text

        Returns:
            NotFoundError for 404, otherwise an HTTPError subclass
        """
        if status_code == 404:
            return NotFoundError(
                f"Resource not found: {message}", url, headers, response_text
            )

        elif status_code == 429:
            retry_after = None
            if headers:
                retry_after_header = headers.get("Retry-After") or headers.get(
                    "retry-after"
                )
                if retry_after_header:
                    try:
                        retry_after = float(retry_after_header)
                    except ValueError:
                        pass

            return RateLimitError(
                f"Rate limit exceeded: {message}", url, retry_after, headers
            )

        elif 500 <= status_code < 600:
            return ServerError(
                f"Server error: {message}", status_code, url, headers, response_text
            )

        else:
            return HTTPError(
                f"HTTP {status_code}: {message}",
                status_code,
                url,
                headers,
                response_text,
            )

    @staticmethod
    def is_retryable_error(error: Exception) -> bool:
        """
        Determine whether a caller could reasonably retry after an error.

        Args:
            error: The exception to check

        Returns:
            True if the error is transient, False otherwise
        """
        if isinstance(error, RequestCancelledError):
            return False

        if isinstance(error, (NetworkError, ConnectionError, TimeoutError)):
            return True

        if isinstance(error, (ServerError, RateLimitError)):
            return True

        if isinstance(error, HTTPError) and error.status_code in (408, 502, 503, 504):
            return True

        # NotFound, decode, navigation and configuration errors are permanent
        return False

    @staticmethod
    def get_retry_delay(
        error: Exception, attempt: int, base_delay: float = 1.0
    ) -> float:
        """
        Suggest a delay before retrying after ``error``.

        Args:
            error: The exception that occurred
            attempt: Current attempt number (0-based)
            base_delay: Base delay in seconds

        Returns:
            Delay in seconds, 0.0 for errors that should not be retried
        """
        if isinstance(error, RateLimitError) and error.retry_after:
            return float(error.retry_after)

        if ErrorHandler.is_retryable_error(error):
            return base_delay * (2**attempt)

        return 0.0
