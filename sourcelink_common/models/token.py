"""Short-lived credentials minted for a GitHub App. Never persisted."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from ..github_exceptions import UnsupportedTokenTypeError


class TokenType(str, Enum):

    JWT = "jwt"
    INSTALLATION = "installation"

    @classmethod
    def parse(cls, value: Any) -> "TokenType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedTokenTypeError(value) from None


class SignedAssertion(BaseModel):
    """RS256 JWT asserting the App identity, valid from issued_at to expires_at."""

    model_config = ConfigDict(frozen=True)

    token: str
    issuer: str
    issued_at: datetime
    expires_at: datetime

    def __str__(self) -> str:
        return self.token
