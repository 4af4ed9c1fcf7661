# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpTransport implementation."""

from __future__ import annotations

import ssl

import httpx

from ..config import TransportSettings
from ..errors import wrap_transport_error
from .headers import normalize_headers
from .models import HttpRequest, HttpResponse
from .transport import HttpTransport


def _verify_option(settings: TransportSettings) -> ssl.SSLContext | bool:
    if not settings.verify_ssl:
        return False
    if settings.ca_bundle:
        return ssl.create_default_context(cafile=settings.ca_bundle)
    return True


class _HttpxBody:
    """Streaming body of an httpx response, with errors mapped to optclient errors."""

    def __init__(self, response: httpx.Response, url: str):
        self._response = response
        self._url = url

    def read(self) -> bytes:
        try:
            return self._response.read()
        except httpx.HTTPError as exc:
            raise wrap_transport_error(exc, url=self._url) from exc

    def close(self) -> None:
        self._response.close()


class HttpxTransport(HttpTransport):
    """Synchronous httpx transport.

    One ``httpx.Client`` (and its connection pool) is built from the transport
    settings and reused for every request. Environment proxy and certificate
    variables are ignored; the settings are the only source of configuration.
    """

    def __init__(self, settings: TransportSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or TransportSettings()
        self._client = client or httpx.Client(
            verify=_verify_option(self.settings),
            proxy=self.settings.proxy,
            trust_env=False,
        )

    def send(self, request: HttpRequest) -> HttpResponse:
        try:
            outgoing = self._client.build_request(
                request.method,
                request.url,
                headers=request.headers,
                timeout=request.timeout,
            )
            response = self._client.send(
                outgoing,
                stream=True,
                follow_redirects=request.allow_redirects,
            )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            # ValueError: socket.settimeout rejects negative timeouts.
            raise wrap_transport_error(exc, url=request.url) from exc

        return HttpResponse(
            status_code=response.status_code,
            headers=normalize_headers(response.headers),
            url=str(response.url),
            encoding=response.charset_encoding,
            request=request,
            body=_HttpxBody(response, request.url),
        )

    def close(self) -> None:
        self._client.close()
