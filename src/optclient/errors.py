# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from collections.abc import Iterator
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    TOO_MANY_REDIRECTS = "TOO_MANY_REDIRECTS"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ClientError(Exception):
    """Base class for every error raised by optclient."""

    category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR

    def __init__(self, message: str, *, url: str | None = None, category: ErrorCategory | None = None):
        super().__init__(message)
        self.url = url
        if category is not None:
            self.category = category


class InvalidRequestError(ClientError):
    """The request target is not a well-formed absolute http(s) URL."""

    category = ErrorCategory.INVALID_REQUEST


class RequestTimeoutError(ClientError):
    """The transport did not complete within the configured timeout."""

    category = ErrorCategory.TIMEOUT


class TransportError(ClientError):
    """Connection, TLS, DNS or protocol failure reported by the transport."""

    category = ErrorCategory.CONNECTION_ERROR


def _iter_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.

    httpx re-raises low-level failures with the original exception chained, so
    TLS and DNS problems are found by walking ``__cause__``/``__context__``.
    """
    if isinstance(exc, ClientError):
        return exc.category

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return ErrorCategory.INVALID_REQUEST

    if isinstance(exc, httpx.TooManyRedirects):
        return ErrorCategory.TOO_MANY_REDIRECTS

    for link in _iter_chain(exc):
        if isinstance(link, (ssl_module.SSLError, ssl_module.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(link, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.TransportError, httpx.StreamError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, TimeoutError):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def wrap_transport_error(exc: BaseException, *, url: str | None = None) -> ClientError:
    """Return the typed optclient error for a transport-level exception."""
    if isinstance(exc, ClientError):
        return exc

    category = categorize_exception(exc)
    message = str(exc) or type(exc).__name__
    if category is ErrorCategory.TIMEOUT:
        return RequestTimeoutError(message, url=url)
    if category is ErrorCategory.INVALID_REQUEST:
        return InvalidRequestError(message, url=url)
    return TransportError(message, url=url, category=category)


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Request timed out",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.INVALID_REQUEST: "Invalid request target",
        ErrorCategory.TOO_MANY_REDIRECTS: "Redirect limit exceeded",
        ErrorCategory.UNKNOWN_ERROR: "Request failed",
        None: "",
    }
    return mapping.get(category, "Request failed")


__all__ = [
    "ClientError",
    "ErrorCategory",
    "InvalidRequestError",
    "RequestTimeoutError",
    "TransportError",
    "categorize_exception",
    "error_category_to_reason",
    "wrap_transport_error",
]
