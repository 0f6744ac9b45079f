"""Tests for the extension message handler."""

import pytest
from unittest.mock import AsyncMock

from trust_lens.domain.errors import RemoteUnavailableError
from trust_lens.domain.models.reliability import BadgeBand
from trust_lens.domain.services.engagement_log import EngagementLog
from trust_lens.domain.services.extension_messages import ExtensionMessageHandler
from trust_lens.domain.services.fallback_resolver import FallbackResolver


@pytest.fixture
def remote():
    """Create an unreachable remote rating source."""
    client = AsyncMock()
    client.fetch_rating.side_effect = RemoteUnavailableError("offline")
    client.top_rated.side_effect = RemoteUnavailableError("offline")
    client.ping.side_effect = RemoteUnavailableError("offline")
    return client


@pytest.fixture
def engagement(clock):
    """Create an engagement log on the fake clock."""
    return EngagementLog(clock=clock)


@pytest.fixture
def handler(remote, external_service, mock_table, engagement):
    """Create a handler over an offline resolver."""
    resolver = FallbackResolver(remote=remote, external=external_service, mock=mock_table)
    return ExtensionMessageHandler(resolver, engagement)


@pytest.mark.asyncio
async def test_get_domain_rating(handler):
    """Test ratings come back as JSON-ready payloads."""
    response = await handler.handle({"action": "getDomainRating", "domain": "bbc.com"})

    assert response["domain"] == "bbc.com"
    assert response["rating"] == 8.8
    assert response["source"] == "mock"
    assert response["last_updated"].startswith("2024-01-15")


@pytest.mark.asyncio
async def test_get_domain_rating_unknown(handler):
    """Test unknown domains answer None."""
    assert await handler.handle({"action": "getDomainRating", "domain": "nope-none.com"}) is None


@pytest.mark.asyncio
async def test_log_engagement_and_weekly_summary(handler):
    """Test logged engagements show up in the summary."""
    logged = await handler.handle(
        {"action": "logEngagement", "payload": {"domain": "bbc.com", "rating": 8.8, "reliable": True}}
    )
    summary = await handler.handle({"action": "getWeeklySummary"})

    assert logged == {"ok": True}
    assert summary["total"] == 1
    assert summary["reliablePct"] == 100
    assert summary["topDomains"] == [{"domain": "bbc.com", "count": 1}]


@pytest.mark.asyncio
async def test_invalid_engagement_payload(handler):
    """Test bad payloads answer an error instead of raising."""
    response = await handler.handle({"action": "logEngagement", "payload": {"rating": 3}})

    assert response["ok"] is False
    assert "Invalid engagement event" in response["error"]


@pytest.mark.asyncio
async def test_set_logging(handler, engagement):
    """Test the logging toggle."""
    response = await handler.handle({"action": "setLogging", "enabled": False})

    assert response == {"ok": True, "enabled": False}
    assert engagement.enabled is False


@pytest.mark.asyncio
async def test_get_stats_offline(handler):
    """Test stats fall back to mock data."""
    response = await handler.handle({"action": "getStats"})

    assert response["source"] == "mock"
    assert response["top_rated"][0]["domain"] in {"wikipedia.org", "reuters.com", "gov.uk", "cdc.gov", "who.int"}


@pytest.mark.asyncio
async def test_test_connection(handler):
    """Test connectivity failures are reported, not raised."""
    response = await handler.handle({"action": "testConnection"})

    assert response["success"] is False
    assert "offline" in response["error"]


@pytest.mark.asyncio
@pytest.mark.parametrize("message", [{"action": "explode"}, {}, None])
async def test_unknown_action(handler, message):
    """Test unknown actions answer an error."""
    response = await handler.handle(message)

    assert response["ok"] is False
    assert "Unknown action" in response["error"]


@pytest.mark.asyncio
async def test_check_page_logs_and_badges(handler, engagement):
    """Test a rated page yields a badge and an engagement."""
    badge = await handler.check_page("https://www.infowars.com/some/article")

    assert badge.band == BadgeBand.UNRELIABLE
    events = engagement.events()
    assert [(e.domain, e.reliable) for e in events] == [("infowars.com", False)]


@pytest.mark.asyncio
async def test_check_page_unrated(handler, engagement):
    """Test unrated pages clear the badge and log nothing."""
    assert await handler.check_page("https://example-unrated.net/") is None
    assert engagement.events() == []


@pytest.mark.asyncio
async def test_check_page_respects_disabled_logging(handler, engagement):
    """Test no engagement is logged while logging is off."""
    engagement.set_enabled(False)

    badge = await handler.check_page("https://bbc.com/")

    assert badge.band == BadgeBand.RELIABLE
    assert engagement.events() == []
