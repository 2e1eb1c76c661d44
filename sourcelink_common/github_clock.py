"""Clock skew guard run before every GitHub App JWT is minted."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

import httpx
from pydantic import BaseModel, ConfigDict

from .clock import Clock, default_clock, utc_now
from .config import GitHubSettings, get_settings
from .github_exceptions import ClockProbeError, ClockSkewError, GithubTransportError
from .http import http_session, send
from .models.source import GithubApp

logger = logging.getLogger(__name__)


class ClockSkewReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    local_time: datetime
    remote_time: datetime
    difference_seconds: int


def parse_http_date(raw: Optional[str]) -> datetime:
    if not raw:
        raise ClockProbeError("GitHub response carried no Date header")
    try:
        parsed = parsedate_to_datetime(raw)
    except (TypeError, ValueError) as exc:
        raise ClockProbeError(f"Unparseable Date header from GitHub: {raw!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def fetch_remote_time(
    api_url: str,
    http: Optional[httpx.Client] = None,
    settings: Optional[GitHubSettings] = None,
) -> datetime:
    """Read GitHub's clock from the Date header of an unauthenticated probe."""
    settings = settings or get_settings()
    url = f"{api_url.rstrip('/')}{settings.clock_probe_path}"
    with http_session(http, settings) as client:
        try:
            response = send(client, "GET", url)
        except GithubTransportError as exc:
            raise ClockProbeError(f"Could not reach {url} to read GitHub time") from exc
    return parse_http_date(response.headers.get("Date"))


def check_clock_skew(
    source: GithubApp,
    http: Optional[httpx.Client] = None,
    clock: Clock = default_clock,
    settings: Optional[GitHubSettings] = None,
) -> ClockSkewReport:
    settings = settings or get_settings()
    remote_time = fetch_remote_time(source.api_url, http=http, settings=settings)
    local_time = utc_now(clock)
    drift = abs((local_time - remote_time).total_seconds())
    difference = math.ceil(drift)

    logger.debug(
        f"Time synchronization check: server={local_time:%Y-%m-%d %H:%M:%S} "
        f"github={remote_time:%Y-%m-%d %H:%M:%S} difference={difference}s"
    )

    if drift > settings.max_clock_skew_seconds:
        logger.error(
            f"System time out of sync with GitHub by {difference}s "
            f"(app_id={source.app_id}, api_url={source.api_url})"
        )
        raise ClockSkewError(local_time, remote_time, difference)

    return ClockSkewReport(
        local_time=local_time, remote_time=remote_time, difference_seconds=difference
    )
