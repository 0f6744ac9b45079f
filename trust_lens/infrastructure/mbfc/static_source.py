"""Simulated Media Bias/Fact Check source backed by a fixed table."""

import asyncio
import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ...domain.models.reliability import BiasFactualEntry

logger = logging.getLogger(__name__)

MBFC_TABLE: Dict[str, Dict[str, str]] = {
    "cnn.com": {
        "bias": "left-center",
        "factual": "high",
        "country": "US",
        "language": "English",
        "traffic": "very-high",
        "credibility": "high",
    },
    "foxnews.com": {
        "bias": "right",
        "factual": "high",
        "country": "US",
        "language": "English",
        "traffic": "very-high",
        "credibility": "high",
    },
    "bbc.com": {
        "bias": "center",
        "factual": "very-high",
        "country": "UK",
        "language": "English",
        "traffic": "very-high",
        "credibility": "very-high",
    },
    "reuters.com": {
        "bias": "center",
        "factual": "very-high",
        "country": "International",
        "language": "English",
        "traffic": "high",
        "credibility": "very-high",
    },
    "infowars.com": {
        "bias": "conspiracy",
        "factual": "very-low",
        "country": "US",
        "language": "English",
        "traffic": "medium",
        "credibility": "very-low",
    },
    "breitbart.com": {
        "bias": "right",
        "factual": "low",
        "country": "US",
        "language": "English",
        "traffic": "high",
        "credibility": "low",
    },
    "huffpost.com": {
        "bias": "left",
        "factual": "mostly-factual",
        "country": "US",
        "language": "English",
        "traffic": "high",
        "credibility": "medium",
    },
    "theonion.com": {
        "bias": "satire",
        "factual": "not-rated",
        "country": "US",
        "language": "English",
        "traffic": "medium",
        "credibility": "satire",
    },
}


class StaticSourceConfig(BaseModel):
    """Configuration for the static MBFC source."""

    simulated_latency: float = Field(
        default=0.0, description="Delay added to each lookup in seconds"
    )


class StaticBiasFactualSource:
    """Bias/factual source answering from ``MBFC_TABLE``.

    Stands in for a real third-party API; no network access.
    """

    def __init__(
        self,
        table: Optional[Dict[str, Dict[str, str]]] = None,
        config: Optional[StaticSourceConfig] = None,
        source_name: str = "MBFC",
    ):
        """Initialize the source.

        Args:
            table: Domain -> category mapping (defaults to ``MBFC_TABLE``)
            config: Source configuration
            source_name: Name reported in report metadata
        """
        self._table = table if table is not None else MBFC_TABLE
        self._config = config or StaticSourceConfig()
        self._name = source_name

    async def lookup(self, domain: str) -> Optional[BiasFactualEntry]:
        """Get the categories for a domain, None if not in the table."""
        if self._config.simulated_latency > 0:
            await asyncio.sleep(self._config.simulated_latency)

        data = self._table.get(domain.lower())
        if data is None:
            logger.debug(f"MBFC: no entry for {domain}")
            return None
        return BiasFactualEntry(domain=domain.lower(), **data)

    def known_domains(self) -> List[str]:
        """Domains present in the table."""
        return sorted(self._table)

    @property
    def source_name(self) -> str:
        """Get the source name."""
        return self._name

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the source capabilities."""
        return {
            "bias": True,
            "factual": True,
            "live": False,
        }
