"""
Moltbook platform client
Fetches agent profiles and recent posts for ownership checks and scoring
"""

import logging
from typing import List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PydanticValidationError

from clawmark.exceptions import ExternalServiceError, NotFoundError

from .models import PlatformAgentPayload, PlatformPost, PlatformProfile, extract_posts

logger = logging.getLogger(__name__)

DEFAULT_PLATFORM_API = "https://www.moltbook.com/api/v1"
DEFAULT_TIMEOUT_SECONDS = 10.0


class AgentNotFoundError(NotFoundError):
    """The platform does not know the requested username"""


class MoltbookClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or DEFAULT_PLATFORM_API).rstrip("/")
        self.api_key = api_key
        headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self.http_client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "MoltbookClient":
        return cls(
            base_url=settings.platform_api_url,
            api_key=settings.platform_api_key,
            timeout=settings.platform_timeout_seconds,
            transport=transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self.http_client.request(method, path, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            raise ExternalServiceError(
                f"Moltbook API error: {e.response.status_code}",
                upstream_status=e.response.status_code,
            ) from e
        except httpx.TimeoutException as e:
            raise ExternalServiceError("Moltbook API timed out") from e
        except httpx.RequestError as e:
            raise ExternalServiceError(f"Moltbook request error: {e}") from e

    def _json(self, response: httpx.Response):
        try:
            return response.json()
        except ValueError as e:
            raise ExternalServiceError("Moltbook API returned invalid JSON") from e

    async def get_agent(self, username: str) -> PlatformProfile:
        """Fetch agent profile; unknown users raise AgentNotFoundError"""
        try:
            response = await self._request("GET", f"/agents/{quote(username, safe='')}")
        except ExternalServiceError as e:
            if e.upstream_status == 404:
                raise AgentNotFoundError("Agent not found on Moltbook", username=username) from e
            raise

        try:
            payload = PlatformAgentPayload.model_validate(self._json(response))
        except PydanticValidationError as e:
            raise ExternalServiceError("Moltbook API returned an unexpected profile shape") from e
        return PlatformProfile.from_payload(payload)

    async def get_recent_posts(self, username: str, limit: int = 5) -> List[PlatformPost]:
        response = await self._request(
            "GET",
            f"/agents/{quote(username, safe='')}/posts",
            params={"limit": limit},
        )
        posts = extract_posts(self._json(response))
        logger.debug(f"Fetched {len(posts)} posts for {username}")
        return posts[:limit]

    async def aclose(self) -> None:
        await self.http_client.aclose()
