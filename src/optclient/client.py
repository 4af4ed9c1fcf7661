# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configurable HTTP client built from composable options."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from contextlib import suppress

from .config import ClientConfig, default_config
from .http.models import HttpResponse, build_request
from .http.transport import HttpTransport, create_default_transport
from .options import ConfigOption, apply_options

logger = logging.getLogger(__name__)


class Client:
    """
    HTTP client whose configuration is resolved once, at construction.

    Options are applied in order on top of ``default_config()``; the resulting
    record is fixed for the lifetime of the client. Unless a transport is
    injected, one is built from the resolved transport settings.

    Timeout and redirect policy are carried on each request rather than set on
    the shared transport, so the client can be used from several threads.

    Example::

        with Client(with_timeout(10), with_user_agent("optclient-test/1.0")) as client:
            with client.get("https://example.com/") as response:
                print(response.text)
    """

    def __init__(self, *options: ConfigOption, transport: HttpTransport | None = None):
        self._config = apply_options(default_config(), options)
        self._transport = transport or create_default_transport(self._config.transport)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def transport(self) -> HttpTransport:
        return self._transport

    def request(
        self,
        method: str,
        url: str,
        *,
        timeout: float | None = None,
        follow_redirects: bool | None = None,
    ) -> HttpResponse:
        """
        Send a request and return the final response.

        ``timeout`` and ``follow_redirects`` override the configured values for
        this call only. With redirects disabled the first 3xx response is
        returned unchanged. Error statuses are returned, not raised.

        Raises:
            InvalidRequestError: the URL is not an absolute http(s) URL.
            RequestTimeoutError: the transport exceeded the timeout.
            TransportError: connection, TLS, DNS or redirect-loop failure.
        """
        config = self._config
        request = build_request(
            url,
            method=method,
            headers={"User-Agent": config.user_agent},
            timeout=config.timeout if timeout is None else timeout,
            allow_redirects=config.follow_redirects if follow_redirects is None else follow_redirects,
        )
        logger.debug(
            "%s %s (timeout=%s, follow_redirects=%s)",
            request.method,
            request.url,
            request.timeout,
            request.allow_redirects,
        )
        return self._transport.send(request)

    def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        follow_redirects: bool | None = None,
    ) -> HttpResponse:
        """Send a GET request. See :meth:`request`."""
        return self.request("GET", url, timeout=timeout, follow_redirects=follow_redirects)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self._transport, "close"):
                self._transport.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


def build_client(options: Iterable[ConfigOption] = (), *, transport: HttpTransport | None = None) -> Client:
    """Build a Client from an ordered sequence of options."""
    return Client(*options, transport=transport)


__all__ = ["Client", "build_client"]
