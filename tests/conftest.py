import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional
from urllib.parse import unquote

import httpx
import pytest

from clawmark.config import ClawMarkSettings
from clawmark.identity import IdentifierGenerator
from clawmark.platform import MoltbookClient

T0 = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
PLATFORM_URL = "https://moltbook.test/api/v1"


class FakeClock:
    def __init__(self, start: datetime = T0):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **delta) -> datetime:
        self.current += timedelta(**delta)
        return self.current


class FakeMoltbook:
    """In-process stand-in for the Moltbook REST API"""

    def __init__(self):
        self.profiles: Dict[str, dict] = {}
        self.posts: Dict[str, object] = {}
        self.fail_status: Optional[int] = None
        self.timeout = False
        self.requests: List[httpx.Request] = []
        self.on_posts_request: Optional[Callable[[str], None]] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.timeout:
            raise httpx.ReadTimeout("read timed out", request=request)
        if self.fail_status is not None:
            return httpx.Response(self.fail_status, json={"error": "upstream failure"})

        tail = request.url.path.split("/agents/", 1)[1]
        if tail.endswith("/posts"):
            username = unquote(tail[: -len("/posts")])
            if self.on_posts_request is not None:
                self.on_posts_request(username)
            return httpx.Response(200, json=self.posts.get(username, []))

        username = unquote(tail)
        if username not in self.profiles:
            return httpx.Response(404, json={"error": "not found"})
        return httpx.Response(200, json=self.profiles[username])

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def id_generator(clock) -> IdentifierGenerator:
    return IdentifierGenerator(clock=clock, random_source=random.Random(1234))


@pytest.fixture
def moltbook() -> FakeMoltbook:
    return FakeMoltbook()


@pytest.fixture
def settings() -> ClawMarkSettings:
    return ClawMarkSettings(
        platform_api_url=PLATFORM_URL,
        platform_api_key="test-key",
        cleanup_interval_minutes=0,
    )


@pytest.fixture
def platform_client(moltbook, settings) -> MoltbookClient:
    return MoltbookClient.from_settings(settings, transport=moltbook.transport)
