"""Tests for the static MBFC source."""

import pytest

from trust_lens.infrastructure.mbfc.static_source import (
    MBFC_TABLE,
    StaticBiasFactualSource,
    StaticSourceConfig,
)


@pytest.mark.asyncio
async def test_lookup_known_domain():
    """Test table entries are returned with their metadata."""
    source = StaticBiasFactualSource()

    entry = await source.lookup("Reuters.com")

    assert entry.domain == "reuters.com"
    assert entry.bias == "center"
    assert entry.factual == "very-high"
    assert entry.country == "International"


@pytest.mark.asyncio
async def test_lookup_unknown_domain():
    """Test missing domains return None."""
    assert await StaticBiasFactualSource().lookup("example.com") is None


@pytest.mark.asyncio
async def test_custom_table_and_latency():
    """Test a custom table with simulated latency."""
    source = StaticBiasFactualSource(
        table={"tiny.net": {"bias": "satire", "factual": "mixed"}},
        config=StaticSourceConfig(simulated_latency=0.01),
        source_name="Test",
    )

    entry = await source.lookup("tiny.net")

    assert entry.bias == "satire"
    assert entry.country is None
    assert source.source_name == "Test"
    assert source.known_domains() == ["tiny.net"]


def test_capabilities():
    """Test the declared capabilities."""
    source = StaticBiasFactualSource()

    assert source.capabilities["bias"] is True
    assert source.capabilities["live"] is False
    assert source.known_domains() == sorted(MBFC_TABLE)
