# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import socket
import ssl

import httpx

from reachprobe import config
from reachprobe.config import DEFAULT_USER_AGENT, ProbeSettings
from reachprobe.errors import ErrorCategory, InvalidInputError, categorize_exception, error_category_to_reason


def test_probe_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("REACHPROBE_TIMEOUT", "5.5")
    monkeypatch.setenv("REACHPROBE_MAX_CONCURRENCY", "3")
    monkeypatch.setenv("REACHPROBE_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("REACHPROBE_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("REACHPROBE_HTTP_VERIFY_SSL", "0")
    monkeypatch.setenv("REACHPROBE_HEAD_FALLBACK_GET", "no")
    monkeypatch.setenv("REACHPROBE_SIMULATE_BREAKDOWN", "off")

    settings = config.load_probe_settings()

    assert settings.timeout == 5.5
    assert settings.max_concurrency == 3
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.allow_redirects is False
    assert settings.verify_ssl is False
    assert settings.head_fallback_get is False
    assert settings.simulate_breakdown is False


def test_probe_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("REACHPROBE_TIMEOUT", "not-a-number")
    monkeypatch.setenv("REACHPROBE_MAX_CONCURRENCY", "0")

    settings = config.load_probe_settings()

    assert settings.timeout == ProbeSettings.timeout
    assert settings.max_concurrency == ProbeSettings.max_concurrency
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_negative_timeout_env_falls_back(monkeypatch):
    monkeypatch.setenv("REACHPROBE_TIMEOUT", "-1")
    assert config.load_probe_settings().timeout == ProbeSettings.timeout


def test_load_probe_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("REACHPROBE_TIMEOUT", "7.7")
    assert config.load_probe_settings().timeout == 7.7
    monkeypatch.setenv("REACHPROBE_TIMEOUT", "8.8")
    assert config.load_probe_settings().timeout == 8.8


def test_categorize_exception_buckets():
    request = httpx.Request("HEAD", "https://example.com")
    assert categorize_exception(httpx.ReadTimeout("slow", request=request)) == ErrorCategory.TIMEOUT
    assert categorize_exception(asyncio.TimeoutError()) == ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("[Errno 111] Connection refused", request=request)) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ConnectionRefusedError()) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(socket.gaierror(-2, "Name or service not known")) == ErrorCategory.DNS_ERROR
    assert categorize_exception(ssl.SSLError("handshake failure")) == ErrorCategory.SSL_ERROR
    assert categorize_exception(RuntimeError("boom")) == ErrorCategory.UNKNOWN_ERROR


def test_categorize_exception_follows_cause_chain():
    request = httpx.Request("HEAD", "https://nope.invalid")
    try:
        try:
            raise socket.gaierror(-2, "Name or service not known")
        except socket.gaierror as inner:
            raise httpx.ConnectError("connect failed", request=request) from inner
    except httpx.ConnectError as exc:
        assert categorize_exception(exc) == ErrorCategory.DNS_ERROR


def test_error_category_reason_strings():
    assert error_category_to_reason(ErrorCategory.DNS_ERROR) == "DNS resolution failure"
    assert error_category_to_reason(None) == ""


def test_invalid_input_is_value_error():
    assert issubclass(InvalidInputError, ValueError)
