# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
optclient package entrypoint.

A small HTTP client whose timeout, user agent, redirect policy and TLS
verification are set through composable options applied at construction.
Network I/O is delegated to an injectable transport; the default one is
built on httpx.
"""

from .client import Client, build_client
from .config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, ClientConfig, TransportSettings, default_config
from .errors import (
    ClientError,
    ErrorCategory,
    InvalidRequestError,
    RequestTimeoutError,
    TransportError,
)
from .http import (
    HttpRequest,
    HttpResponse,
    HttpTransport,
    HttpxTransport,
    StubTransport,
    create_default_transport,
)
from .log import setup_logging
from .options import (
    ConfigOption,
    apply_options,
    env_options,
    use_insecure_transport,
    with_ca_bundle,
    with_proxy,
    with_timeout,
    with_transport_settings,
    with_user_agent,
    without_redirects,
)
from .version import __version__

__all__ = [
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "Client",
    "ClientConfig",
    "ClientError",
    "ConfigOption",
    "ErrorCategory",
    "HttpRequest",
    "HttpResponse",
    "HttpTransport",
    "HttpxTransport",
    "InvalidRequestError",
    "RequestTimeoutError",
    "StubTransport",
    "TransportError",
    "TransportSettings",
    "apply_options",
    "build_client",
    "create_default_transport",
    "default_config",
    "env_options",
    "setup_logging",
    "use_insecure_transport",
    "with_ca_bundle",
    "with_proxy",
    "with_timeout",
    "with_transport_settings",
    "with_user_agent",
    "without_redirects",
    "__version__",
]
