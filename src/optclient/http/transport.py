# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport abstraction and factory."""

from typing import Protocol

from ..config import TransportSettings
from .models import HttpRequest, HttpResponse


class HttpTransport(Protocol):
    """
    Collaborator that performs network I/O for a Client.

    ``send`` honors the request's timeout and redirect policy and raises
    optclient errors (InvalidRequestError, RequestTimeoutError, TransportError)
    on failure. TLS verification and proxying are fixed at construction.
    """

    def send(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_transport(settings: TransportSettings | None = None) -> HttpTransport:
    """Factory for the default httpx-backed transport."""
    from .httpx_transport import HttpxTransport

    return HttpxTransport(settings or TransportSettings())
