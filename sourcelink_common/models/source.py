"""Credential sources - App registrations read from the credential store"""

from enum import Enum
from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import Field, SecretStr, TypeAdapter, field_validator

from ..config import get_settings
from ..github_exceptions import MissingSourceError, UnsupportedSourceError
from .base import BaseEntity


class SourceKind(str, Enum):

    GITHUB = "github"
    GITLAB = "gitlab"


class _SourceBase(BaseEntity):
    uuid: str
    name: str
    api_url: str = Field(
        default_factory=lambda: get_settings().api_url, validate_default=True
    )
    html_url: Optional[str] = None
    is_public: bool = False

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class GithubApp(_SourceBase):
    kind: Literal["github"] = SourceKind.GITHUB.value
    app_id: str
    installation_id: Optional[str] = None
    private_key: SecretStr  # PEM text or path to a PEM file
    html_url: Optional[str] = "https://github.com"


class GitlabApp(_SourceBase):
    kind: Literal["gitlab"] = SourceKind.GITLAB.value
    app_id: Optional[str] = None


GitSource = Annotated[Union[GithubApp, GitlabApp], Field(discriminator="kind")]

_source_adapter: TypeAdapter = TypeAdapter(GitSource)


def parse_source(raw: Mapping[str, Any]) -> Union[GithubApp, GitlabApp]:
    """Validate a raw credential-store record into its source variant."""
    return _source_adapter.validate_python(dict(raw))


def ensure_github_app(source: Any) -> GithubApp:
    """Capability check for every GitHub App operation."""
    if source is None:
        raise MissingSourceError()
    if not isinstance(source, GithubApp):
        raise UnsupportedSourceError(getattr(source, "kind", None) or type(source).__name__)
    return source
