"""
Recommendation engine package for personalized artwork suggestions.

Provides an engine that only depends on the ArtworkSource and HistoryStore
interfaces, so the CLI, tests, or any future front end can plug in their own
collaborators.
"""

from .engine import (
    MAX_PAGES_PER_STRATEGY,
    NO_HISTORY_REASON,
    PAGE_SIZE,
    TARGET_RECOMMENDATIONS,
    PageOutcome,
    RecommendationEngine,
    analyze_preferences,
    build_default_engine,
    build_strategies,
    build_summary,
)

__all__ = [
    "MAX_PAGES_PER_STRATEGY",
    "NO_HISTORY_REASON",
    "PAGE_SIZE",
    "TARGET_RECOMMENDATIONS",
    "PageOutcome",
    "RecommendationEngine",
    "analyze_preferences",
    "build_default_engine",
    "build_strategies",
    "build_summary",
]
