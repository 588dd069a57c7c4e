"""
Process-wide httpx client shared by the GitHub provider.

Issue and commit fetches run on worker threads, so creating, replacing and
closing the client all happen under one lock.
"""

import threading

import httpx

from revival_scout.config import get_request_timeout, get_verify_ssl

_lock = threading.Lock()
_client: httpx.Client | None = None
_client_verify_ssl: bool | None = None


def _build_client(verify_ssl: bool) -> httpx.Client:
    return httpx.Client(
        verify=verify_ssl,
        timeout=get_request_timeout(),
        follow_redirects=True,
        limits=httpx.Limits(
            max_connections=10,
            max_keepalive_connections=5,
            keepalive_expiry=30.0,
        ),
    )


def _get_http_client() -> httpx.Client:
    """
    Return the shared client, building it on first use.

    A client built under a different SSL verification setting is closed and
    replaced.
    """
    global _client, _client_verify_ssl
    verify_ssl = get_verify_ssl()

    with _lock:
        if (
            _client is not None
            and not _client.is_closed
            and _client_verify_ssl == verify_ssl
        ):
            return _client

        if _client is not None and not _client.is_closed:
            _client.close()
        _client = _build_client(verify_ssl)
        _client_verify_ssl = verify_ssl
        return _client


def close_http_client() -> None:
    """Close the shared client. The next request builds a fresh one."""
    global _client, _client_verify_ssl
    with _lock:
        if _client is not None and not _client.is_closed:
            _client.close()
        _client = None
        _client_verify_ssl = None
