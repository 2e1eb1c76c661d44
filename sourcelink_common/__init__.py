"""GitHub App authentication and API dispatch."""

from .logging import OTelJSONFormatter, setup_logging
from .config import GitHubSettings, get_settings
from .github_exceptions import (
    GithubError,
    GithubConfigurationError,
    GithubTransportError,
    SigningError,
    MissingSourceError,
    UnsupportedSourceError,
    UnsupportedMethodError,
    UnsupportedTokenTypeError,
    ClockProbeError,
    ClockSkewError,
    ExchangeError,
    ApiCallError,
    ApiRateLimitError,
)
from .github_clock import ClockSkewReport, check_clock_skew
from .github_auth import (
    exchange_installation_token,
    generate_github_token,
    generate_jwt,
    mint_assertion,
    request_installation_token,
)
from .github_client import GitHubClient, github_api
from .models import (
    ApiCallResult,
    GithubApp,
    GitlabApp,
    HttpMethod,
    SignedAssertion,
    TokenType,
    parse_source,
)

__all__ = [
    "OTelJSONFormatter",
    "setup_logging",
    "GitHubSettings",
    "get_settings",
    "GithubError",
    "GithubConfigurationError",
    "GithubTransportError",
    "SigningError",
    "MissingSourceError",
    "UnsupportedSourceError",
    "UnsupportedMethodError",
    "UnsupportedTokenTypeError",
    "ClockProbeError",
    "ClockSkewError",
    "ExchangeError",
    "ApiCallError",
    "ApiRateLimitError",
    "ClockSkewReport",
    "check_clock_skew",
    "generate_jwt",
    "mint_assertion",
    "request_installation_token",
    "exchange_installation_token",
    "generate_github_token",
    "GitHubClient",
    "github_api",
    "ApiCallResult",
    "GithubApp",
    "GitlabApp",
    "HttpMethod",
    "SignedAssertion",
    "TokenType",
    "parse_source",
]
