"""
Recommendation-related data models.

Filters double as recommendation strategies: each one is a partial
combination of the categorical fields the artwork source can filter on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .artwork_models import Artwork


PreferenceCount = Tuple[str, int]


@dataclass(frozen=True, slots=True)
class ArtworkFilters:
    """Filter set for artwork queries. An empty filter set means unfiltered."""

    department: Optional[str] = None
    artwork_type: Optional[str] = None
    place_of_origin: Optional[str] = None
    medium: Optional[str] = None

    def is_empty(self) -> bool:
        return not any(
            (self.department, self.artwork_type, self.place_of_origin, self.medium)
        )

    def to_dict(self) -> Dict[str, str]:
        """Return only the set fields, keyed the way the web client reports them."""
        pairs = {
            "department": self.department,
            "artworkType": self.artwork_type,
            "placeOfOrigin": self.place_of_origin,
            "medium": self.medium,
        }
        return {key: value for key, value in pairs.items() if value}

    def describe(self) -> str:
        if self.is_empty():
            return "<no filters>"
        return ", ".join(f"{key}={value!r}" for key, value in self.to_dict().items())


@dataclass(slots=True)
class PreferenceProfile:
    """Top preferences derived from saved artworks, highest count first."""

    departments: List[PreferenceCount] = field(default_factory=list)
    artwork_types: List[PreferenceCount] = field(default_factory=list)
    places_of_origin: List[PreferenceCount] = field(default_factory=list)
    mediums: List[PreferenceCount] = field(default_factory=list)
    artists: List[PreferenceCount] = field(default_factory=list)

    def top(self, name: str) -> Optional[PreferenceCount]:
        """Return the leading (value, count) pair of a preference list, if any."""
        ranked = getattr(self, name)
        return ranked[0] if ranked else None


@dataclass(slots=True)
class RecommendationSummary:
    """Human readable explanation of a recommendation run."""

    total_recommendations: int
    reasons: List[str] = field(default_factory=list)
    filters: ArtworkFilters = field(default_factory=ArtworkFilters)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRecommendations": self.total_recommendations,
            "reasons": list(self.reasons),
            "filters": self.filters.to_dict(),
        }


@dataclass(slots=True)
class RecommendationResult:
    """Container for engine output."""

    recommendations: List[Artwork]
    summary: RecommendationSummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recommendations": [artwork.model_dump() for artwork in self.recommendations],
            "summary": self.summary.to_dict(),
        }
