"""Domain models for reliability classification and bias/factual reports."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class BiasCategory(str, Enum):
    """Political bias categories of the simulated MBFC table."""

    LEFT = "left"
    LEFT_CENTER = "left-center"
    CENTER = "center"  # Least biased
    RIGHT_CENTER = "right-center"
    RIGHT = "right"
    CONSPIRACY = "conspiracy"
    PSEUDOSCIENCE = "pseudoscience"
    SATIRE = "satire"
    FAKE_NEWS = "fake-news"
    QUESTIONABLE = "questionable"


class FactualCategory(str, Enum):
    """Factual reporting categories of the simulated MBFC table."""

    VERY_HIGH = "very-high"
    HIGH = "high"
    MOSTLY_FACTUAL = "mostly-factual"
    MIXED = "mixed"
    LOW = "low"
    VERY_LOW = "very-low"
    NOT_RATED = "not-rated"


class Grade(str, Enum):
    """Letter grades on the 0-100 composite scale."""

    A_PLUS = "A+"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class BadgeBand(str, Enum):
    """Short-form bands used by the toolbar badge and page widget."""

    RELIABLE = "reliable"
    MIXED = "mixed"
    UNRELIABLE = "unreliable"


class CategoryRating(BaseModel):
    """Fixed score and descriptor of a bias or factual category."""

    score: float = Field(..., description="Category score (0-100)")
    color: str
    label: str
    description: str

    class Config:
        """Pydantic model configuration."""
        frozen = True


class RatingClassification(BaseModel):
    """A 0-100 score with its grade, color and label."""

    score: float
    grade: Grade
    color: str
    label: str

    class Config:
        """Pydantic model configuration."""
        frozen = True


class Badge(BaseModel):
    """Three-band badge for a 0-10 rating."""

    band: BadgeBand
    text: str
    color: str


class BiasFactualEntry(BaseModel):
    """Bias and factual categories known for a domain."""

    domain: str
    bias: str
    factual: str
    country: Optional[str] = None
    language: Optional[str] = None
    traffic: Optional[str] = None
    credibility: Optional[str] = None


class CategoryDetail(BaseModel):
    """A category rating together with the raw category it came from."""

    rating: str
    score: float
    label: str
    color: str
    description: str


class MBFCReport(BaseModel):
    """Full simulated MBFC report for a domain."""

    domain: str
    bias: CategoryDetail
    factual: CategoryDetail
    combined: RatingClassification
    metadata: Dict[str, Any] = Field(default_factory=dict)


class EnhancedRating(BaseModel):
    """Rating built from community data, the MBFC report, or both."""

    domain: str
    score: float
    grade: Grade
    color: str
    label: str
    sources: List[str]
    last_updated: Optional[datetime] = None
    details: Dict[str, Any] = Field(default_factory=dict)


class RatingSource(str, Enum):
    """Where a resolved rating came from."""

    REMOTE = "remote"
    EXTERNAL = "external"
    CACHE = "cache"
    MOCK = "mock"


class ResolvedRating(BaseModel):
    """Rating chosen for display by the fallback resolver."""

    domain: str
    rating: float = Field(..., description="Display rating (0-10)")
    score: float = Field(..., description="Composite score (0-100)")
    grade: Grade
    label: str
    color: str
    total_votes: Optional[int] = None
    last_updated: Optional[datetime] = None
    source: RatingSource
    sources: List[str] = Field(default_factory=list)
