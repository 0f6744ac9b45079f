"""Static ratings used when the live backend is unreachable."""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from ...domain.models.rating import DomainRating

MOCK_TIMESTAMP = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)

MOCK_RATINGS: Dict[str, float] = {
    "wikipedia.org": 8.9,
    "cnn.com": 8.6,
    "bbc.com": 8.8,
    "reuters.com": 8.9,
    "ap.org": 8.7,
    "nytimes.com": 8.4,
    "washingtonpost.com": 8.2,
    "theguardian.com": 8.0,
    "npr.org": 8.3,
    "pbs.org": 8.5,
    "aljazeera.com": 7.9,
    "bloomberg.com": 8.1,
    "wsj.com": 8.0,
    "foxnews.com": 5.6,
    "msnbc.com": 6.2,
    "breitbart.com": 2.2,
    "infowars.com": 1.4,
    "naturalnews.com": 1.8,
    "theonion.com": 7.2,
    "buzzfeed.com": 5.8,
    "huffpost.com": 6.8,
    "vox.com": 7.6,
    "fivethirtyeight.com": 8.8,
    "twitter.com": 5.8,
    "facebook.com": 5.0,
    "reddit.com": 6.2,
    "youtube.com": 5.8,
    "medium.com": 6.8,
    "gov.uk": 8.9,
    "whitehouse.gov": 8.6,
    "cdc.gov": 8.9,
    "who.int": 8.9,
}


class MockRatingTable:
    """Read-only table of fallback community ratings."""

    def __init__(self, ratings: Optional[Dict[str, float]] = None):
        """Initialize the table.

        Args:
            ratings: Domain -> rating (0-10), defaults to ``MOCK_RATINGS``
        """
        source = MOCK_RATINGS if ratings is None else ratings
        self._entries = {
            domain: DomainRating(
                domain=domain,
                rating=rating,
                created_at=MOCK_TIMESTAMP,
                updated_at=MOCK_TIMESTAMP,
            )
            for domain, rating in source.items()
        }

    def get(self, domain: str) -> Optional[DomainRating]:
        """Mock rating of a domain, None if absent."""
        return self._entries.get(domain)

    def top_rated(self, limit: int = 10) -> List[DomainRating]:
        """Highest rated mock entries."""
        return sorted(self._entries.values(), key=lambda r: (-r.rating, r.domain))[:limit]

    def lowest_rated(self, limit: int = 10) -> List[DomainRating]:
        """Lowest rated mock entries."""
        return sorted(self._entries.values(), key=lambda r: (r.rating, r.domain))[:limit]

    def stats(self) -> Dict[str, float]:
        """Entry count and average rating rounded to one decimal."""
        total = len(self._entries)
        average = sum(r.rating for r in self._entries.values()) / total if total else 0.0
        return {"total_domains": total, "average_rating": round(average, 1)}

    def __len__(self) -> int:
        return len(self._entries)
