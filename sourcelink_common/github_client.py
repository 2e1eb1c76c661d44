"""GitHub REST dispatch with rate-limit accounting and normalized errors."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Union

import httpx

from .clock import Clock, default_clock
from .config import GitHubSettings, get_settings
from .github_auth import exchange_installation_token
from .github_exceptions import ApiCallError, ApiRateLimitError
from .http import build_http_client, send
from .models.api_result import ApiCallResult, HttpMethod
from .models.source import GithubApp, ensure_github_app

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUSES = {403, 429}

_Sender = Callable[["GitHubClient", str, Any], httpx.Response]

_DISPATCH: Dict[HttpMethod, _Sender] = {
    HttpMethod.GET: lambda c, url, data: c._send("GET", url),
    HttpMethod.DELETE: lambda c, url, data: c._send("DELETE", url),
    HttpMethod.POST: lambda c, url, data: c._send("POST", url, data),
    HttpMethod.PATCH: lambda c, url, data: c._send("PATCH", url, data),
    HttpMethod.PUT: lambda c, url, data: c._send("PUT", url, data),
}


class GitHubClient:
    """Client bound to one API base URL and an optional bearer token."""

    def __init__(
        self,
        api_url: str,
        token: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        settings: Optional[GitHubSettings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._api_url = api_url.rstrip("/")
        self._token = token
        self._owns_http = http is None
        self._http = http if http is not None else build_http_client(self._settings)

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": self._settings.api_accept,
            "X-GitHub-Api-Version": self._settings.api_version,
            "User-Agent": self._settings.user_agent,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _url(self, endpoint: str) -> str:
        return f"{self._api_url}/{endpoint.lstrip('/')}"

    def _send(self, method: str, url: str, data: Any = None) -> httpx.Response:
        kwargs: Dict[str, Any] = {"headers": self._headers()}
        if data is not None:
            kwargs["json"] = data
        return send(self._http, method, url, **kwargs)

    def request(
        self,
        method: Union[HttpMethod, str],
        endpoint: str,
        data: Any = None,
    ) -> ApiCallResult:
        """Send one request. ``data`` is only sent for POST, PATCH and PUT."""
        verb = HttpMethod.parse(method)
        response = _DISPATCH[verb](self, self._url(endpoint), data)
        return ApiCallResult.from_response(response)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def raise_for_result(result: ApiCallResult) -> ApiCallResult:
    if result.succeeded:
        return result

    message = result.error_message
    is_rate_limited = result.status_code in RATE_LIMIT_STATUSES and (
        "rate limit" in message.lower() or result.rate_limit_remaining == 0
    )
    error_cls = ApiRateLimitError if is_rate_limited else ApiCallError
    raise error_cls(
        message,
        status_code=result.status_code,
        remaining_calls=result.rate_limit_remaining,
        reset_time=result.rate_limit_reset,
        payload=result.data,
    )


def github_api(
    source: Optional[GithubApp],
    endpoint: str,
    method: Union[HttpMethod, str] = HttpMethod.GET,
    data: Any = None,
    throw_error: bool = True,
    http: Optional[httpx.Client] = None,
    clock: Clock = default_clock,
    settings: Optional[GitHubSettings] = None,
) -> ApiCallResult:
    """
    Call the GitHub API as the given App.

    Private Apps get a fresh installation token per call; public Apps are
    called anonymously. Non-success responses raise ``ApiCallError`` unless
    ``throw_error`` is false, in which case the result has ``succeeded=False``.
    """
    app = ensure_github_app(source)
    verb = HttpMethod.parse(method)
    settings = settings or get_settings()

    owns_http = http is None
    client = http if http is not None else build_http_client(settings)
    try:
        token = None
        if not app.is_public:
            token = exchange_installation_token(
                app, http=client, clock=clock, settings=settings
            )
        github = GitHubClient(app.api_url, token=token, http=client, settings=settings)
        result = github.request(verb, endpoint, data)
    finally:
        if owns_http:
            client.close()

    if not result.succeeded:
        logger.warning(
            f"GitHub API call {verb.value} {endpoint} failed for {app.name}: "
            f"status={result.status_code} remaining={result.rate_limit_remaining}"
        )
        if throw_error:
            raise_for_result(result)
    return result
