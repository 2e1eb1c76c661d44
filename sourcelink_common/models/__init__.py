"""Data model of the GitHub App auth core"""

from .api_result import NO_ERROR_MESSAGE, ApiCallResult, HttpMethod
from .base import BaseEntity
from .source import (
    GithubApp,
    GitlabApp,
    GitSource,
    SourceKind,
    ensure_github_app,
    parse_source,
)
from .token import SignedAssertion, TokenType

__all__ = [
    "BaseEntity",
    "GithubApp",
    "GitlabApp",
    "GitSource",
    "SourceKind",
    "ensure_github_app",
    "parse_source",
    "SignedAssertion",
    "ApiCallResult",
    "NO_ERROR_MESSAGE",
    # Enums
    "HttpMethod",
    "TokenType",
]
