"""
Models package for artwork and recommendation data.

This package contains the Pydantic artwork records and the dataclasses
used by the recommendation engine.
"""

from .artwork_models import (
    ARTWORK_FIELDS,
    DEFAULT_IIIF_URL,
    Artwork,
    ArtworkDetail,
    ArtworkPage,
    DislikedArtwork,
    Pagination,
    SavedArtwork,
)

from .recommendation_models import (
    ArtworkFilters,
    PreferenceCount,
    PreferenceProfile,
    RecommendationResult,
    RecommendationSummary,
)

__all__ = [
    # Artwork models
    "ARTWORK_FIELDS",
    "DEFAULT_IIIF_URL",
    "Artwork",
    "ArtworkDetail",
    "ArtworkPage",
    "DislikedArtwork",
    "Pagination",
    "SavedArtwork",

    # Recommendation models
    "ArtworkFilters",
    "PreferenceCount",
    "PreferenceProfile",
    "RecommendationResult",
    "RecommendationSummary",
]
