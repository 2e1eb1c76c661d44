from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict

from ..github_exceptions import UnsupportedMethodError

NO_ERROR_MESSAGE = "no error message found"


class HttpMethod(str, Enum):

    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, value: Any) -> "HttpMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise UnsupportedMethodError(value) from None


class ApiCallResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status_code: int
    succeeded: bool
    data: Any = None
    rate_limit_remaining: Optional[int] = None
    rate_limit_reset: Optional[datetime] = None

    @property
    def error_message(self) -> str:
        if isinstance(self.data, dict) and self.data.get("message"):
            return str(self.data["message"])
        return NO_ERROR_MESSAGE

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiCallResult":
        return cls(
            status_code=response.status_code,
            succeeded=response.is_success,
            data=parse_body(response),
            rate_limit_remaining=parse_remaining(
                response.headers.get("X-RateLimit-Remaining")
            ),
            rate_limit_reset=parse_reset(response.headers.get("X-RateLimit-Reset")),
        )


def parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return response.text


def parse_remaining(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def parse_reset(raw: Optional[str]) -> Optional[datetime]:
    """X-RateLimit-Reset carries Unix seconds."""
    if raw is None:
        return None
    try:
        return datetime.fromtimestamp(int(float(raw)), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return None
