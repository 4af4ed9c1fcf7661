# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Composable client options.

An option is any callable that takes a ClientConfig and returns a new one.
The built-in options carry a name that shows up in debug logs.
Options are applied in the order given; when two options touch the same field
the later one wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from datetime import timedelta

from .config import (
    DEFAULT_TIMEOUT,
    ENV_PREFIX,
    ClientConfig,
    TransportSettings,
    _bool_env,
    _float_env,
    _optional_str_env,
)

logger = logging.getLogger(__name__)

ConfigOption = Callable[[ClientConfig], ClientConfig]


@dataclass(frozen=True)
class _Option:
    """A named option; options with the same name compare equal."""

    name: str
    apply: ConfigOption = field(compare=False, repr=False)

    def __call__(self, config: ClientConfig) -> ClientConfig:
        return self.apply(config)

    def __str__(self) -> str:
        return self.name


def with_timeout(timeout: float | timedelta) -> ConfigOption:
    """
    Set the per-request timeout.

    Seconds or a timedelta. Zero and negative values are passed to the
    transport unchanged.
    """
    seconds = timeout.total_seconds() if isinstance(timeout, timedelta) else float(timeout)

    def apply(config: ClientConfig) -> ClientConfig:
        return replace(config, timeout=seconds)

    return _Option(f"with_timeout({seconds!r})", apply)


def with_user_agent(user_agent: str) -> ConfigOption:
    """Set the User-Agent header value. An empty string sends an empty header."""

    def apply(config: ClientConfig) -> ClientConfig:
        return replace(config, user_agent=user_agent)

    return _Option(f"with_user_agent({user_agent!r})", apply)


def without_redirects() -> ConfigOption:
    """Return redirect responses as-is instead of following them."""

    def apply(config: ClientConfig) -> ClientConfig:
        return replace(config, follow_redirects=False)

    return _Option("without_redirects()", apply)


def use_insecure_transport() -> ConfigOption:
    """
    Replace the transport settings with one that skips TLS verification.

    This discards any transport customization applied by earlier options
    (CA bundle, proxy). Apply it first if those should be kept, or use
    with_transport_settings() to build the exact settings wanted.
    """

    def apply(config: ClientConfig) -> ClientConfig:
        if not config.transport.is_default and config.transport != TransportSettings.insecure():
            logger.warning("Insecure transport discards earlier transport settings: %s", config.transport)
        return replace(config, transport=TransportSettings.insecure())

    return _Option("use_insecure_transport()", apply)


def with_ca_bundle(path: str) -> ConfigOption:
    """Verify server certificates against a custom CA bundle."""

    def apply(config: ClientConfig) -> ClientConfig:
        return replace(config, transport=replace(config.transport, verify_ssl=True, ca_bundle=path))

    return _Option(f"with_ca_bundle({path!r})", apply)


def with_proxy(proxy: str) -> ConfigOption:
    """Route requests through an HTTP(S) proxy."""

    def apply(config: ClientConfig) -> ClientConfig:
        return replace(config, transport=replace(config.transport, proxy=proxy))

    return _Option(f"with_proxy({proxy!r})", apply)


def with_transport_settings(settings: TransportSettings) -> ConfigOption:
    """Replace the transport settings wholesale."""

    def apply(config: ClientConfig) -> ClientConfig:
        return replace(config, transport=settings)

    return _Option(f"with_transport_settings({settings!r})", apply)


def apply_options(config: ClientConfig, options: Iterable[ConfigOption]) -> ClientConfig:
    """Fold options over a config in order and return the resolved record."""
    for option in options:
        config = option(config)
        logger.debug("Applied option %s", option)
    return config


def env_options() -> list[ConfigOption]:
    """
    Build options from OPTCLIENT_* environment variables (evaluated at call time).

    Only variables that are set produce an option, so the result can be
    prepended to explicit options and overridden by them. Malformed numbers
    fall back to the default.
    """
    options: list[ConfigOption] = []

    if _optional_str_env(f"{ENV_PREFIX}HTTP_TIMEOUT") is not None:
        options.append(with_timeout(_float_env(f"{ENV_PREFIX}HTTP_TIMEOUT", DEFAULT_TIMEOUT)))

    user_agent = _optional_str_env(f"{ENV_PREFIX}USER_AGENT")
    if user_agent is not None:
        options.append(with_user_agent(user_agent))

    if not _bool_env(f"{ENV_PREFIX}HTTP_REDIRECTS", True):
        options.append(without_redirects())

    ca_bundle = _optional_str_env(f"{ENV_PREFIX}CA_BUNDLE")
    if ca_bundle is not None:
        options.append(with_ca_bundle(ca_bundle))

    proxy = _optional_str_env(f"{ENV_PREFIX}PROXY")
    if proxy is not None:
        options.append(with_proxy(proxy))

    # Applied last: replaces CA bundle and proxy.
    if not _bool_env(f"{ENV_PREFIX}HTTP_VERIFY_SSL", True):
        options.append(use_insecure_transport())

    return options


__all__ = [
    "ConfigOption",
    "apply_options",
    "env_options",
    "use_insecure_transport",
    "with_ca_bundle",
    "with_proxy",
    "with_timeout",
    "with_transport_settings",
    "with_user_agent",
    "without_redirects",
]
