# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
import ssl

import httpx
import pytest

from optclient.config import TransportSettings, default_config
from optclient.errors import (
    ClientError,
    ErrorCategory,
    InvalidRequestError,
    RequestTimeoutError,
    TransportError,
    categorize_exception,
    error_category_to_reason,
    wrap_transport_error,
)
from optclient.options import apply_options, env_options

ENV_VARS = (
    "OPTCLIENT_HTTP_TIMEOUT",
    "OPTCLIENT_USER_AGENT",
    "OPTCLIENT_HTTP_REDIRECTS",
    "OPTCLIENT_HTTP_VERIFY_SSL",
    "OPTCLIENT_CA_BUNDLE",
    "OPTCLIENT_PROXY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_env_options_empty_when_unset():
    assert env_options() == []


def test_env_options_overrides(monkeypatch):
    monkeypatch.setenv("OPTCLIENT_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("OPTCLIENT_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("OPTCLIENT_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("OPTCLIENT_PROXY", "http://proxy:3128")

    config = apply_options(default_config(), env_options())

    assert config.timeout == 5.5
    assert config.user_agent == "CustomAgent/1.0"
    assert config.follow_redirects is False
    assert config.transport == TransportSettings(proxy="http://proxy:3128")


def test_env_invalid_timeout_falls_back(monkeypatch):
    monkeypatch.setenv("OPTCLIENT_HTTP_TIMEOUT", "not-a-number")
    config = apply_options(default_config(), env_options())
    assert config.timeout == 30.0


def test_env_verify_ssl_off_wins_over_ca_bundle(monkeypatch):
    monkeypatch.setenv("OPTCLIENT_CA_BUNDLE", "/tmp/ca.pem")
    monkeypatch.setenv("OPTCLIENT_HTTP_VERIFY_SSL", "0")
    config = apply_options(default_config(), env_options())
    assert config.transport == TransportSettings.insecure()


@pytest.mark.parametrize("value", ["1", "true", "on", "YES"])
def test_env_redirects_truthy_variants(monkeypatch, value):
    monkeypatch.setenv("OPTCLIENT_HTTP_REDIRECTS", value)
    assert apply_options(default_config(), env_options()).follow_redirects is True


def test_env_is_read_at_call_time(monkeypatch):
    monkeypatch.setenv("OPTCLIENT_HTTP_TIMEOUT", "7.7")
    assert apply_options(default_config(), env_options()).timeout == 7.7
    monkeypatch.setenv("OPTCLIENT_HTTP_TIMEOUT", "8.8")
    assert apply_options(default_config(), env_options()).timeout == 8.8


def _chained(outer: Exception, inner: BaseException) -> Exception:
    try:
        try:
            raise inner
        except BaseException as exc:
            raise outer from exc
    except Exception as chained:
        return chained


def test_categorize_httpx_exceptions():
    request = httpx.Request("GET", "https://example.com/")
    assert categorize_exception(httpx.ConnectTimeout("t", request=request)) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ReadTimeout("t", request=request)) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused", request=request)) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(httpx.RemoteProtocolError("bad", request=request)) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(httpx.UnsupportedProtocol("ftp")) is ErrorCategory.INVALID_REQUEST
    assert categorize_exception(httpx.InvalidURL("bad")) is ErrorCategory.INVALID_REQUEST
    assert categorize_exception(httpx.TooManyRedirects("loop", request=request)) is ErrorCategory.TOO_MANY_REDIRECTS


def test_categorize_walks_cause_chain():
    request = httpx.Request("GET", "https://example.com/")
    tls = _chained(httpx.ConnectError("handshake failed", request=request), ssl.SSLError("certificate verify failed"))
    dns = _chained(httpx.ConnectError("lookup failed", request=request), socket.gaierror(-2, "Name or service not known"))
    assert categorize_exception(tls) is ErrorCategory.SSL_ERROR
    assert categorize_exception(dns) is ErrorCategory.DNS_ERROR


def test_categorize_stdlib_and_unknown():
    assert categorize_exception(ConnectionRefusedError()) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(TimeoutError()) is ErrorCategory.TIMEOUT
    assert categorize_exception(RuntimeError("boom")) is ErrorCategory.UNKNOWN_ERROR
    assert categorize_exception(InvalidRequestError("bad")) is ErrorCategory.INVALID_REQUEST


def test_wrap_transport_error_kinds():
    request = httpx.Request("GET", "https://example.com/")
    timeout = wrap_transport_error(httpx.ReadTimeout("slow", request=request), url="https://example.com/")
    assert isinstance(timeout, RequestTimeoutError)
    assert timeout.url == "https://example.com/"
    assert str(timeout) == "slow"

    invalid = wrap_transport_error(httpx.UnsupportedProtocol("missing scheme"))
    assert isinstance(invalid, InvalidRequestError)

    tls = wrap_transport_error(_chained(httpx.ConnectError("x", request=request), ssl.SSLError("bad cert")))
    assert isinstance(tls, TransportError)
    assert tls.category is ErrorCategory.SSL_ERROR

    existing = TransportError("already typed")
    assert wrap_transport_error(existing) is existing


def test_error_hierarchy():
    for cls in (InvalidRequestError, RequestTimeoutError, TransportError):
        assert issubclass(cls, ClientError)
    assert not issubclass(RequestTimeoutError, TransportError)
    assert TransportError("x", category=ErrorCategory.DNS_ERROR).category is ErrorCategory.DNS_ERROR
    assert TransportError("x").category is ErrorCategory.CONNECTION_ERROR


def test_error_category_reasons():
    assert error_category_to_reason(ErrorCategory.TIMEOUT) == "Request timed out"
    assert error_category_to_reason(None) == ""
