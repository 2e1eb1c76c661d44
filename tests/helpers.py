from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Callable, Dict, List, Optional, Tuple

import httpx
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from sourcelink_common.config import GitHubSettings
from sourcelink_common.models import GithubApp, GitlabApp

API_URL = "https://api.github.test"
# 2023-11-14 22:13:20 UTC
EPOCH = 1_700_000_000

_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
PRIVATE_KEY_PEM = _key.private_bytes(
    serialization.Encoding.PEM,
    serialization.PrivateFormat.TraditionalOpenSSL,
    serialization.NoEncryption(),
).decode()
PUBLIC_KEY_PEM = (
    _key.public_key()
    .public_bytes(
        serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo
    )
    .decode()
)


class FakeClock:
    def __init__(self, now: float = EPOCH + 0.75):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def http_date(epoch: float) -> str:
    return format_datetime(datetime.fromtimestamp(epoch, tz=timezone.utc), usegmt=True)


def make_settings(**overrides) -> GitHubSettings:
    return GitHubSettings(api_url=API_URL, **overrides)


def make_app(**overrides) -> GithubApp:
    fields = {
        "uuid": "a1b2c3",
        "name": "Deploy Bot",
        "app_id": "12345",
        "installation_id": "987",
        "api_url": API_URL,
        "private_key": PRIVATE_KEY_PEM,
        "is_public": False,
    }
    fields.update(overrides)
    return GithubApp(**fields)


def make_gitlab_app() -> GitlabApp:
    return GitlabApp(uuid="g1", name="Gitlab Mirror", api_url="https://gitlab.test")


Route = Callable[[httpx.Request], httpx.Response]


class FakeGitHub:
    """Routes requests by (method, path) and records everything it sees."""

    def __init__(self, remote_epoch: Optional[float] = EPOCH):
        self.requests: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.remote_epoch = remote_epoch
        self.route("GET", "/zen", self._zen)
        self.route(
            "POST",
            "/app/installations/987/access_tokens",
            lambda request: httpx.Response(
                201, json={"token": "ghs_installation", "expires_at": "2023-11-14T23:13:20Z"}
            ),
        )

    def _zen(self, request: httpx.Request) -> httpx.Response:
        headers = {}
        if self.remote_epoch is not None:
            headers["Date"] = http_date(self.remote_epoch)
        return httpx.Response(200, text="Keep it logically awesome.", headers=headers)

    def route(self, method: str, path: str, handler: Route) -> None:
        self.routes[(method, path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return handler(request)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handle))

    def calls_to(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]
