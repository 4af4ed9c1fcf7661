# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration records for optclient."""

import os
from dataclasses import dataclass, field

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "My HTTP Client"
ENV_PREFIX = "OPTCLIENT_"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_str_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class TransportSettings:
    """Connection-level settings fixed when the transport is constructed."""

    verify_ssl: bool = True
    ca_bundle: str | None = None
    proxy: str | None = None

    @classmethod
    def insecure(cls) -> "TransportSettings":
        """Transport that skips certificate and hostname verification."""
        return cls(verify_ssl=False)

    @property
    def is_default(self) -> bool:
        return self == TransportSettings()


@dataclass(frozen=True)
class ClientConfig:
    """
    Resolved client configuration.

    Every field has a default, so a record is always fully populated before any
    option runs. Instances are immutable; options derive new records with
    ``dataclasses.replace``.
    """

    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    follow_redirects: bool = True
    transport: TransportSettings = field(default_factory=TransportSettings)


def default_config() -> ClientConfig:
    """Return the configuration every client starts from."""
    return ClientConfig()
