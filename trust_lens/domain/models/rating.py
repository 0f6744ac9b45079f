"""Domain models for community ratings and votes."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class DomainRating(BaseModel):
    """Current community rating of a domain (0-10 scale)."""

    domain: str = Field(..., description="Normalized hostname without www. prefix")
    rating: float = Field(..., description="Mean community rating (0-10)")
    total_votes: Optional[int] = Field(
        None, ge=0, description="Number of votes; absent when votes are not tracked"
    )
    created_at: Optional[datetime] = Field(None, description="When the rating was first stored")
    updated_at: Optional[datetime] = Field(None, description="When the rating last changed")

    class Config:
        """Pydantic model configuration."""
        frozen = True
        json_schema_extra = {
            "example": {
                "domain": "bbc.com",
                "rating": 8.8,
                "total_votes": 42,
            }
        }

    def to_public_dict(self) -> Dict[str, Any]:
        """Shape used by the list endpoints."""
        return {
            "domain": self.domain,
            "rating": self.rating,
            "total_votes": self.total_votes,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class Vote(BaseModel):
    """A single user's rating for a domain. Append-only."""

    id: Optional[int] = None
    domain: str
    rating: int = Field(..., ge=1, le=10)
    user_id: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)

    class Config:
        """Pydantic model configuration."""
        frozen = True


class VoteOutcome(BaseModel):
    """Aggregate after an accepted vote."""

    domain: str
    rating: float
    total_votes: int
    created: bool = Field(False, description="True when this vote created the domain entry")


class VoteSummary(BaseModel):
    """Per-domain vote statistics."""

    domain: str
    rating: float
    total_votes: Optional[int] = None
    min_vote: Optional[int] = None
    max_vote: Optional[int] = None
    distribution: Dict[int, int] = Field(default_factory=dict)
    first_vote_at: Optional[datetime] = None
    last_vote_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Pagination(BaseModel):
    """Pagination block of a paged listing."""

    page: int
    limit: int
    total: int
    pages: int


class DomainPage(BaseModel):
    """One page of domain ratings."""

    data: List[DomainRating]
    pagination: Pagination


class PlatformStats(BaseModel):
    """Aggregate counts across the whole store."""

    total_domains: int
    total_votes: int
    total_users: int
    average_rating: float
