"""httpx client plumbing shared by the clock probe, token exchange and API calls."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

import httpx

from .config import GitHubSettings, get_settings
from .github_exceptions import GithubTransportError


def build_http_client(settings: Optional[GitHubSettings] = None) -> httpx.Client:
    settings = settings or get_settings()
    return httpx.Client(
        timeout=settings.request_timeout,
        headers={"User-Agent": settings.user_agent},
    )


@contextmanager
def http_session(
    http: Optional[httpx.Client], settings: Optional[GitHubSettings] = None
) -> Iterator[httpx.Client]:
    """Yield the injected client untouched, or a short-lived one we close."""
    if http is not None:
        yield http
        return
    client = build_http_client(settings)
    try:
        yield client
    finally:
        client.close()


def send(http: httpx.Client, method: str, url: str, **kwargs) -> httpx.Response:
    try:
        return http.request(method, url, **kwargs)
    except httpx.TransportError as exc:
        raise GithubTransportError(f"{method} {url} failed: {exc}") from exc
