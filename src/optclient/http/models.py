# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models shared by the client and its transports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import httpx

from ..errors import InvalidRequestError
from .headers import header_value

Headers = dict[str, str]

REDIRECT_STATUS_CODES = frozenset({301, 302, 303, 307, 308})


@dataclass(frozen=True)
class HttpRequest:
    """
    Request descriptor handed to an HttpTransport.

    Timeout and redirect policy travel with each request, so concurrent
    requests on one client never share them.
    """

    url: str
    method: str = "GET"
    headers: Headers = field(default_factory=dict)
    timeout: float | None = None
    allow_redirects: bool = True


class ResponseBody(Protocol):
    """Streaming body handle owned by an HttpResponse."""

    def read(self) -> bytes: ...

    def close(self) -> None: ...


@dataclass
class HttpResponse:
    """
    Final response returned by a transport.

    The body is a scoped resource: use the response as a context manager (or
    call ``close()``) on every path so the underlying connection is released.
    Transports that already hold the full body pass it as ``content`` and no
    ``body`` handle.
    """

    status_code: int
    headers: Headers = field(default_factory=dict)
    url: str | None = None
    encoding: str | None = None
    content: bytes | None = None
    request: HttpRequest | None = None
    body: ResponseBody | None = field(default=None, repr=False)
    closed: bool = False

    def read(self) -> bytes:
        """Load the body (once) and release the connection."""
        if self.content is None:
            if self.body is None or self.closed:
                self.content = b""
            else:
                try:
                    self.content = self.body.read()
                finally:
                    self.close()
        return self.content

    @property
    def text(self) -> str:
        content = self.read()
        encoding = self.encoding or "utf-8"
        try:
            return content.decode(encoding, errors="replace")
        except LookupError:
            return content.decode("utf-8", errors="replace")

    def header(self, name: str, default: str = "") -> str:
        return header_value(self.headers, name, default)

    @property
    def is_redirect(self) -> bool:
        return self.status_code in REDIRECT_STATUS_CODES and bool(self.header("location"))

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self.body is not None:
            self.body.close()

    def __enter__(self) -> HttpResponse:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


def build_request(
    url: str,
    *,
    method: str = "GET",
    headers: Headers | None = None,
    timeout: float | None = None,
    allow_redirects: bool = True,
) -> HttpRequest:
    """
    Validate the request target and return a request descriptor.

    The target must be an absolute http(s) URL with a host; anything else
    raises InvalidRequestError before a transport is involved.
    """
    target = url if isinstance(url, str) else ""
    if not target.strip():
        raise InvalidRequestError("Request URL is empty", url=url)

    try:
        parsed = httpx.URL(target)
    except httpx.InvalidURL as exc:
        raise InvalidRequestError(f"Invalid request URL {target!r}: {exc}", url=target) from exc

    if parsed.scheme not in ("http", "https"):
        raise InvalidRequestError(
            f"Request URL is missing an 'http://' or 'https://' scheme: {target!r}",
            url=target,
        )
    if not parsed.host:
        raise InvalidRequestError(f"Request URL has no host: {target!r}", url=target)

    return HttpRequest(
        url=target,
        method=method.upper(),
        headers=dict(headers or {}),
        timeout=timeout,
        allow_redirects=allow_redirects,
    )


__all__ = [
    "REDIRECT_STATUS_CODES",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "ResponseBody",
    "build_request",
]
