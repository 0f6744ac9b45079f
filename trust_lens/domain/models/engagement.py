from typing import List

from pydantic import BaseModel, Field


class EngagementEvent(BaseModel):
    """A visit to a rated page."""

    domain: str
    rating: float
    reliable: bool = False
    ts: int = Field(..., description="Visit time in epoch milliseconds")

    class Config:
        frozen = True


class DomainCount(BaseModel):
    """Number of engagements with one domain."""

    domain: str
    count: int


class WeeklySummary(BaseModel):
    """Engagement totals over the last seven days."""

    total: int = 0
    reliable: int = 0
    unreliable: int = 0
    reliablePct: int = 0
    unreliablePct: int = 0
    topDomains: List[DomainCount] = Field(default_factory=list)
