"""
Tests for the shared HTTP client.
"""

import threading
import time
from unittest.mock import MagicMock, patch

import pytest

from revival_scout import http_client
from revival_scout.config import get_verify_ssl, set_verify_ssl


@pytest.fixture(autouse=True)
def fresh_client():
    """Start and finish every test without a shared client."""
    original_verify = get_verify_ssl()
    http_client.close_http_client()
    yield
    http_client.close_http_client()
    set_verify_ssl(original_verify)


def _fake_client(*args, **kwargs):
    client = MagicMock()
    client.is_closed = False

    def close():
        client.is_closed = True

    client.close.side_effect = close
    return client


def test_concurrent_first_use_builds_one_client():
    built = []

    def slow_build(verify_ssl):
        time.sleep(0.05)
        client = _fake_client()
        built.append(client)
        return client

    barrier = threading.Barrier(2)
    seen = []

    def worker():
        barrier.wait()
        seen.append(http_client._get_http_client())

    with patch.object(http_client, "_build_client", side_effect=slow_build):
        threads = [threading.Thread(target=worker) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    assert len(built) == 1
    assert seen[0] is seen[1] is built[0]


def test_client_is_reused():
    with patch.object(http_client, "_build_client", side_effect=_fake_client):
        first = http_client._get_http_client()
        second = http_client._get_http_client()
    assert first is second


def test_ssl_setting_change_replaces_client():
    with patch.object(http_client, "_build_client", side_effect=_fake_client) as build:
        set_verify_ssl(True)
        first = http_client._get_http_client()
        set_verify_ssl(False)
        second = http_client._get_http_client()

    assert first is not second
    assert first.is_closed
    assert build.call_args.args == (False,)


def test_close_http_client():
    with patch.object(http_client, "_build_client", side_effect=_fake_client):
        client = http_client._get_http_client()
        http_client.close_http_client()
        replacement = http_client._get_http_client()

    assert client.is_closed
    assert replacement is not client


def test_real_client_settings(monkeypatch):
    monkeypatch.setenv("REVIVAL_SCOUT_TIMEOUT", "7")
    client = http_client._build_client(True)
    try:
        assert client.timeout.connect == 7.0
        assert client.follow_redirects is True
    finally:
        client.close()
