# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory transports for tests and offline use."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import replace

from ..errors import ClientError, TransportError
from .models import HttpRequest, HttpResponse
from .transport import HttpTransport

Responder = Callable[[HttpRequest], HttpResponse]


class StubTransport(HttpTransport):
    """Deterministic, programmable HttpTransport for tests.

    Responses are registered per URL, either as a ready HttpResponse, a
    callable producing one, or an exception to raise. Every request is
    recorded in ``requests``.
    """

    def __init__(self, responses: dict[str, HttpResponse | Responder | ClientError] | None = None):
        self._responses = dict(responses or {})
        self._lock = threading.Lock()
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse | Responder | ClientError) -> None:
        self._responses[url] = response

    def send(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)
        entry = self._responses.get(request.url)
        if entry is None:
            raise TransportError("No stubbed response configured", url=request.url)
        if isinstance(entry, ClientError):
            raise entry
        if callable(entry):
            return entry(request)
        return replace(entry, request=request, url=entry.url or request.url, closed=False)

    def close(self) -> None:
        self.closed = True
