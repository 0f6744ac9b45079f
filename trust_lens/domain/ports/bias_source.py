"""Protocol for bias/factual-reporting data sources."""

from typing import Dict, List, Optional, Protocol

from ..models.reliability import BiasFactualEntry


class BiasFactualSource(Protocol):
    """Source of bias and factual-reporting categories per domain.

    The combination math never reads a concrete table; a real third-party
    integration can replace the simulated one behind this protocol.
    """

    async def lookup(self, domain: str) -> Optional[BiasFactualEntry]:
        """Get the categories known for a domain, None if unknown."""
        ...

    def known_domains(self) -> List[str]:
        """Domains the source has entries for."""
        ...

    @property
    def source_name(self) -> str:
        """Get the source name."""
        ...

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the source capabilities."""
        ...
