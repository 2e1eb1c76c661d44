from datetime import datetime
from typing import Any, Optional


class GithubError(Exception):
    pass


class GithubConfigurationError(GithubError):
    pass


class SigningError(GithubConfigurationError):
    """The App private key could not be loaded or used to sign a JWT."""


class MissingSourceError(GithubConfigurationError):
    def __init__(self, message: str = "Source is required for API calls"):
        super().__init__(message)


class UnsupportedSourceError(GithubConfigurationError):
    def __init__(self, source_type: str):
        super().__init__(f"Unsupported source type: {source_type}")
        self.source_type = source_type


class UnsupportedMethodError(GithubConfigurationError, ValueError):
    def __init__(self, method: Any):
        super().__init__(f"Unsupported HTTP method: {method}")
        self.method = method


class UnsupportedTokenTypeError(GithubConfigurationError, ValueError):
    def __init__(self, token_type: Any):
        super().__init__(f"Unsupported token type: {token_type}")
        self.token_type = token_type


class GithubTransportError(GithubError):
    pass


class ClockProbeError(GithubError):
    pass


class ClockSkewError(GithubError):
    def __init__(
        self, local_time: datetime, remote_time: datetime, difference_seconds: int
    ):
        super().__init__(
            "System time is out of sync with GitHub API time:\n"
            f"- System time: {local_time:%Y-%m-%d %H:%M:%S} UTC\n"
            f"- GitHub time: {remote_time:%Y-%m-%d %H:%M:%S} UTC\n"
            f"- Difference: {difference_seconds} seconds\n"
            "Please synchronize your system clock."
        )
        self.local_time = local_time
        self.remote_time = remote_time
        self.difference_seconds = difference_seconds


class ExchangeError(GithubError):
    def __init__(
        self,
        app_name: str,
        remote_message: str,
        status_code: Optional[int] = None,
    ):
        super().__init__(
            f"Failed to get installation token for {app_name} with error: {remote_message}"
        )
        self.app_name = app_name
        self.remote_message = remote_message
        self.status_code = status_code


class ApiCallError(GithubError):
    def __init__(
        self,
        message: str,
        status_code: int,
        remaining_calls: Optional[int] = None,
        reset_time: Optional[datetime] = None,
        payload: Any = None,
    ):
        reset_text = (
            f"{reset_time:%Y-%m-%d %H:%M:%S} UTC" if reset_time else "unknown"
        )
        super().__init__(
            "GitHub API call failed:\n"
            f"Error: {message}\n"
            "Rate Limit Status:\n"
            f"- Remaining Calls: {remaining_calls if remaining_calls is not None else 0}\n"
            f"- Reset Time: {reset_text}"
        )
        self.message = message
        self.status_code = status_code
        self.remaining_calls = remaining_calls
        self.reset_time = reset_time
        self.payload = payload


class ApiRateLimitError(ApiCallError):
    pass
