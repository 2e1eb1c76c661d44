from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.github.com"


class GitHubSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GITHUB_", env_file=".env", extra="ignore"
    )

    api_url: str = DEFAULT_API_URL
    request_timeout: float = 15.0

    # GitHub rejects JWTs whose iat/exp look implausible against its own clock
    max_clock_skew_seconds: int = 50
    clock_probe_path: str = "/zen"

    installation_token_accept: str = "application/vnd.github.machine-man-preview+json"
    api_accept: str = "application/vnd.github+json"
    api_version: str = "2022-11-28"
    user_agent: str = "sourcelink-common"

    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> GitHubSettings:
    return GitHubSettings()
