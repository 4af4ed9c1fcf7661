# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport exports."""

from .adapters import StubTransport
from .headers import header_value, normalize_headers
from .httpx_transport import HttpxTransport
from .models import Headers, HttpRequest, HttpResponse, ResponseBody, build_request
from .transport import HttpTransport, create_default_transport

__all__ = [
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "HttpTransport",
    "HttpxTransport",
    "ResponseBody",
    "StubTransport",
    "build_request",
    "create_default_transport",
    "header_value",
    "normalize_headers",
]
