"""GitHub App authentication: JWT minting and installation token exchange."""

from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path
from typing import Any, Optional, Union

import httpx
from jose import jwt
from jose.exceptions import JOSEError

from .clock import Clock, default_clock, utc_now_seconds
from .config import GitHubSettings, get_settings
from .github_clock import check_clock_skew
from .github_exceptions import ExchangeError, SigningError
from .http import http_session, send
from .models.api_result import NO_ERROR_MESSAGE, parse_body
from .models.source import GithubApp, ensure_github_app
from .models.token import SignedAssertion, TokenType

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "RS256"
# iat is backdated to absorb small clock drift; exp stays under GitHub's 10 minute cap
JWT_ISSUED_AT_OFFSET = timedelta(minutes=1)
JWT_EXPIRES_IN = timedelta(minutes=8)


def load_private_key(raw: str) -> str:
    """Load private key from PEM string or file path."""
    if "-----BEGIN" in raw:
        return raw.replace("\\n", "\n")
    try:
        path = Path(raw.strip().strip('"'))
        if path.is_file():
            return path.read_text()
    except OSError as exc:
        raise SigningError(f"Could not read GitHub App private key: {exc}") from exc
    raise SigningError(
        "GitHub App private key must be a PEM string or path to a private key file"
    )


def generate_jwt(
    app_id: str, private_key: str, clock: Clock = default_clock
) -> SignedAssertion:
    """Sign a JWT for GitHub App authentication. No clock check is made here."""
    now = utc_now_seconds(clock)
    issued_at = now - JWT_ISSUED_AT_OFFSET
    expires_at = now + JWT_EXPIRES_IN
    payload = {
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
        "iss": str(app_id),
    }
    pem = load_private_key(private_key)
    try:
        token = jwt.encode(payload, pem, algorithm=JWT_ALGORITHM)
    except (JOSEError, ValueError, TypeError) as exc:
        raise SigningError(f"Could not sign GitHub App JWT: {exc}") from exc

    logger.debug(
        f"JWT token generated for app {app_id}: "
        f"issued_at={issued_at:%Y-%m-%d %H:%M:%S} expires_at={expires_at:%Y-%m-%d %H:%M:%S}"
    )
    return SignedAssertion(
        token=token, issuer=str(app_id), issued_at=issued_at, expires_at=expires_at
    )


def mint_assertion(
    source: Optional[GithubApp],
    http: Optional[httpx.Client] = None,
    clock: Clock = default_clock,
    settings: Optional[GitHubSettings] = None,
) -> SignedAssertion:
    """Check clock skew against GitHub, then sign a JWT for the App."""
    app = ensure_github_app(source)
    check_clock_skew(app, http=http, clock=clock, settings=settings)
    return generate_jwt(app.app_id, app.private_key.get_secret_value(), clock=clock)


def request_installation_token(
    assertion: Union[SignedAssertion, str],
    installation_id: Optional[str],
    api_url: str,
    http: Optional[httpx.Client] = None,
    app_name: str = "GitHub App",
    settings: Optional[GitHubSettings] = None,
) -> str:
    """Redeem a signed JWT for an installation access token."""
    settings = settings or get_settings()
    if not installation_id:
        raise ExchangeError(app_name, "installation id is required")

    url = f"{api_url.rstrip('/')}/app/installations/{installation_id}/access_tokens"
    headers = {
        "Authorization": f"Bearer {assertion}",
        "Accept": settings.installation_token_accept,
    }
    logger.debug(f"Requesting installation token for installation {installation_id}")

    with http_session(http, settings) as client:
        response = send(client, "POST", url, headers=headers)

    body: Any = parse_body(response)
    if not response.is_success:
        error = (body.get("message") if isinstance(body, dict) else None) or NO_ERROR_MESSAGE
        logger.error(
            f"Failed to get installation token for {app_name}: "
            f"status={response.status_code} error={error}"
        )
        raise ExchangeError(app_name, error, status_code=response.status_code)

    token = body.get("token") if isinstance(body, dict) else None
    if not token:
        raise ExchangeError(
            app_name, "response missing token", status_code=response.status_code
        )

    logger.debug(f"Obtained installation token for installation {installation_id}")
    return token


def exchange_installation_token(
    source: Optional[GithubApp],
    http: Optional[httpx.Client] = None,
    clock: Clock = default_clock,
    settings: Optional[GitHubSettings] = None,
) -> str:
    """Mint a fresh JWT and exchange it. Nothing is cached between calls."""
    app = ensure_github_app(source)
    settings = settings or get_settings()
    with http_session(http, settings) as client:
        assertion = mint_assertion(app, http=client, clock=clock, settings=settings)
        return request_installation_token(
            assertion,
            app.installation_id,
            app.api_url,
            http=client,
            app_name=app.name,
            settings=settings,
        )


def generate_github_token(
    source: Optional[GithubApp],
    token_type: Union[TokenType, str],
    http: Optional[httpx.Client] = None,
    clock: Clock = default_clock,
    settings: Optional[GitHubSettings] = None,
) -> str:
    kind = TokenType.parse(token_type)
    app = ensure_github_app(source)
    logger.debug(
        f"Generating GitHub token: app_id={app.app_id} type={kind.value} api_url={app.api_url}"
    )
    if kind is TokenType.JWT:
        return mint_assertion(app, http=http, clock=clock, settings=settings).token
    return exchange_installation_token(app, http=http, clock=clock, settings=settings)
