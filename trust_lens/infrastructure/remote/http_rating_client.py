"""HTTP client for the live TrustLens rating backend."""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from ...domain.errors import DuplicateVoteError, RemoteUnavailableError, ValidationError
from ...domain.models.rating import DomainRating, VoteOutcome

logger = logging.getLogger(__name__)


class HttpRatingClientConfig(BaseModel):
    """Configuration for the HTTP rating client."""

    base_url: str = "http://localhost:3000"
    timeout: float = 5.0


def _parse_rating(data: Dict[str, Any]) -> DomainRating:
    return DomainRating(
        domain=data["domain"],
        rating=float(data["rating"]),
        total_votes=data.get("total_votes"),
        created_at=data.get("created_at"),
        updated_at=data.get("last_updated") or data.get("updated_at"),
    )


def _error_message(response: httpx.Response) -> str:
    try:
        return response.json().get("error") or response.text
    except ValueError:
        return response.text


class HttpRatingClient:
    """Remote rating source speaking the backend's JSON API.

    Every transport failure, timeout or unexpected status is raised as
    ``RemoteUnavailableError``.
    """

    def __init__(
        self,
        config: Optional[HttpRatingClientConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the client.

        Args:
            config: Client configuration
            client: Preconfigured HTTP client (created lazily if omitted)
        """
        self._config = config or HttpRatingClientConfig()
        self._client = client

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                headers={"Content-Type": "application/json"},
            )
        return self._client

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return await self._http().request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.debug(f"Remote request {method} {path} failed: {e}")
            raise RemoteUnavailableError(f"Remote rating source unreachable: {e}")

    async def fetch_rating(self, domain: str) -> Optional[DomainRating]:
        """Get the rating of a domain.

        Args:
            domain: Normalized domain

        Returns:
            Rating, or None when the backend answers 404

        Raises:
            RemoteUnavailableError: On any other failure
        """
        response = await self._request("GET", f"/api/rating/{quote(domain, safe='')}")
        if response.status_code == 404:
            return None
        if not response.is_success:
            raise RemoteUnavailableError(
                f"Remote rating source returned HTTP {response.status_code}"
            )
        try:
            return _parse_rating(response.json())
        except (ValueError, KeyError, TypeError) as e:
            raise RemoteUnavailableError(f"Malformed rating payload: {e}")

    async def submit_vote(
        self,
        domain: str,
        rating: int,
        user_id: Optional[str] = None,
    ) -> VoteOutcome:
        """Submit a vote.

        Raises:
            ValidationError: Backend rejected the payload
            DuplicateVoteError: Voter already voted for the domain
            RemoteUnavailableError: Any other failure
        """
        payload: Dict[str, Any] = {"domain": domain, "rating": rating}
        if user_id:
            payload["user_id"] = user_id

        response = await self._request("POST", "/api/rating", json=payload)
        if response.status_code == 400:
            raise ValidationError(_error_message(response))
        if response.status_code == 409:
            raise DuplicateVoteError(_error_message(response))
        if not response.is_success:
            raise RemoteUnavailableError(
                f"Remote rating source returned HTTP {response.status_code}"
            )

        data = response.json()
        return VoteOutcome(
            domain=data["domain"],
            rating=float(data.get("new_rating", data.get("rating"))),
            total_votes=int(data.get("total_votes") or 1),
        )

    async def _ordered(self, path: str, limit: int) -> List[DomainRating]:
        response = await self._request("GET", path, params={"limit": limit})
        if not response.is_success:
            raise RemoteUnavailableError(
                f"Remote rating source returned HTTP {response.status_code}"
            )
        try:
            return [_parse_rating(item) for item in response.json()]
        except (ValueError, KeyError, TypeError) as e:
            raise RemoteUnavailableError(f"Malformed rating payload: {e}")

    async def top_rated(self, limit: int = 5) -> List[DomainRating]:
        """Highest rated domains."""
        return await self._ordered("/api/domains/top", limit)

    async def lowest_rated(self, limit: int = 5) -> List[DomainRating]:
        """Lowest rated domains."""
        return await self._ordered("/api/domains/lowest", limit)

    async def ping(self) -> Dict[str, Any]:
        """Probe the backend health endpoint."""
        response = await self._request("GET", "/health")
        if not response.is_success:
            raise RemoteUnavailableError(
                f"HTTP {response.status_code}: {response.text}"
            )
        return response.json()

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def base_url(self) -> str:
        """Configured backend URL."""
        return self._config.base_url
