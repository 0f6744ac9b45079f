"""Tests for the HTTP rating client."""

import httpx
import pytest

from trust_lens.domain.errors import DuplicateVoteError, RemoteUnavailableError, ValidationError
from trust_lens.infrastructure.remote.http_rating_client import (
    HttpRatingClient,
    HttpRatingClientConfig,
)

BASE_URL = "http://ratings.test"


def _client_for(handler) -> HttpRatingClient:
    transport = httpx.MockTransport(handler)
    return HttpRatingClient(
        HttpRatingClientConfig(base_url=BASE_URL),
        client=httpx.AsyncClient(base_url=BASE_URL, transport=transport),
    )


@pytest.fixture
def requests_seen():
    """Collect requests made through the mock transport."""
    return []


@pytest.mark.asyncio
async def test_fetch_rating(requests_seen):
    """Test a 200 response is parsed into a rating."""
    def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        return httpx.Response(
            200,
            json={
                "domain": "bbc.com",
                "rating": 8.5,
                "total_votes": 40,
                "last_updated": "2024-02-01T12:00:00+00:00",
            },
        )

    client = _client_for(handler)
    rating = await client.fetch_rating("bbc.com")
    await client.shutdown()

    assert rating.domain == "bbc.com"
    assert rating.rating == 8.5
    assert rating.total_votes == 40
    assert rating.updated_at.year == 2024
    assert requests_seen[0].url.path == "/api/rating/bbc.com"


@pytest.mark.asyncio
async def test_fetch_rating_not_found():
    """Test a 404 means the domain has no rating."""
    client = _client_for(lambda request: httpx.Response(404, json={"error": "Domain not found"}))

    assert await client.fetch_rating("unknown.com") is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "Internal server error"}),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"unexpected": True}),
    ],
)
async def test_fetch_rating_bad_responses(response):
    """Test server errors and malformed payloads are remote failures."""
    client = _client_for(lambda request: response)

    with pytest.raises(RemoteUnavailableError):
        await client.fetch_rating("bbc.com")


@pytest.mark.asyncio
async def test_transport_errors_are_wrapped():
    """Test connection failures and timeouts become remote failures."""
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    def slow(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(RemoteUnavailableError, match="unreachable"):
        await _client_for(refuse).fetch_rating("bbc.com")
    with pytest.raises(RemoteUnavailableError):
        await _client_for(slow).ping()


@pytest.mark.asyncio
async def test_submit_vote(requests_seen):
    """Test a vote is posted and the new mean returned."""
    def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        return httpx.Response(
            200,
            json={
                "message": "Rating submitted successfully",
                "domain": "bbc.com",
                "new_rating": 7.5,
                "total_votes": 2,
            },
        )

    outcome = await _client_for(handler).submit_vote("bbc.com", 7, user_id="u1")

    assert outcome.rating == 7.5
    assert outcome.total_votes == 2
    assert requests_seen[0].method == "POST"
    assert b'"user_id":"u1"' in requests_seen[0].content.replace(b" ", b"")


@pytest.mark.asyncio
async def test_submit_vote_errors():
    """Test 400 and 409 map to their domain errors."""
    invalid = _client_for(lambda request: httpx.Response(400, json={"error": "Invalid domain format"}))
    duplicate = _client_for(
        lambda request: httpx.Response(409, json={"error": "Vote already recorded for this domain"})
    )

    with pytest.raises(ValidationError, match="Invalid domain format"):
        await invalid.submit_vote("bad", 5)
    with pytest.raises(DuplicateVoteError):
        await duplicate.submit_vote("bbc.com", 5)


@pytest.mark.asyncio
async def test_top_and_lowest_rated(requests_seen):
    """Test list endpoints and the limit parameter."""
    def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        return httpx.Response(
            200,
            json=[{"domain": "a.com", "rating": 9.1, "total_votes": 6, "updated_at": None}],
        )

    client = _client_for(handler)
    top = await client.top_rated(3)
    lowest = await client.lowest_rated()

    assert [r.domain for r in top] == ["a.com"]
    assert len(lowest) == 1
    assert requests_seen[0].url.path == "/api/domains/top"
    assert requests_seen[0].url.params["limit"] == "3"
    assert requests_seen[1].url.path == "/api/domains/lowest"


@pytest.mark.asyncio
async def test_ping():
    """Test the health probe returns the response body."""
    client = _client_for(lambda request: httpx.Response(200, json={"status": "OK"}))

    assert await client.ping() == {"status": "OK"}


def test_default_config():
    """Test client defaults."""
    client = HttpRatingClient()

    assert client.base_url == "http://localhost:3000"
