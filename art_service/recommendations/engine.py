"""
Recommendation engine for suggesting artworks from a user's history.

Preferences are counted from saved artworks, turned into an ordered list of
filter strategies (most specific first), and the artwork source is then paged
strategy by strategy until enough fresh, displayable artworks are collected.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..models import (
    Artwork,
    ArtworkFilters,
    PreferenceCount,
    PreferenceProfile,
    RecommendationResult,
    RecommendationSummary,
)
from ..sources import ArtworkSource, HistoryStore

logger = logging.getLogger(__name__)


TARGET_RECOMMENDATIONS = 20
PAGE_SIZE = 12
MAX_PAGES_PER_STRATEGY = 3
TOP_PREFERENCES = 3

NO_HISTORY_REASON = "No saved artworks found. Save some artworks to get recommendations!"

# Profile list name -> artwork attribute it is counted from
_PREFERENCE_FIELDS = {
    "departments": "department_title",
    "artwork_types": "artwork_type_title",
    "places_of_origin": "place_of_origin",
    "mediums": "medium_display",
    "artists": "artist_title",
}


# ---------------------------------------------------------------------------
# Preference analysis
# ---------------------------------------------------------------------------


def analyze_preferences(saved_artworks: Iterable[Artwork], limit: int = TOP_PREFERENCES) -> PreferenceProfile:
    """Count categorical values across saved artworks and keep the top entries per field."""
    counters: Dict[str, Counter] = {name: Counter() for name in _PREFERENCE_FIELDS}

    for artwork in saved_artworks:
        for name, attribute in _PREFERENCE_FIELDS.items():
            value = getattr(artwork, attribute)
            if value:
                counters[name][value] += 1

    return PreferenceProfile(
        **{name: _rank_by_frequency(counter, limit) for name, counter in counters.items()}
    )


def _rank_by_frequency(counter: Counter, limit: int) -> List[PreferenceCount]:
    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(counter.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


# ---------------------------------------------------------------------------
# Strategy construction
# ---------------------------------------------------------------------------


def build_strategies(profile: PreferenceProfile) -> List[ArtworkFilters]:
    """Build filter strategies ordered from most to least specific.

    Artist preferences are reported in the summary but never used as a filter.
    """
    top_department = profile.top("departments")
    top_type = profile.top("artwork_types")
    top_place = profile.top("places_of_origin")
    top_medium = profile.top("mediums")

    strategies: List[ArtworkFilters] = []
    if top_department and top_type:
        strategies.append(
            ArtworkFilters(department=top_department[0], artwork_type=top_type[0])
        )
    if top_department:
        strategies.append(ArtworkFilters(department=top_department[0]))
    if top_type:
        strategies.append(ArtworkFilters(artwork_type=top_type[0]))
    if top_place:
        strategies.append(ArtworkFilters(place_of_origin=top_place[0]))
    if top_medium:
        strategies.append(ArtworkFilters(medium=top_medium[0]))
    return strategies


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def build_summary(
    profile: PreferenceProfile,
    total_recommendations: int,
    target: int = TARGET_RECOMMENDATIONS,
) -> RecommendationSummary:
    """Explain a recommendation run in terms of the user's top preferences."""
    reasons: List[str] = []
    department = profile.top("departments")
    artwork_type = profile.top("artwork_types")
    place = profile.top("places_of_origin")
    medium = profile.top("mediums")
    artist = profile.top("artists")

    if department:
        reasons.append(f"Based on your interest in {department[0]} ({department[1]} saved artworks)")
    if artwork_type:
        reasons.append(f"You seem to enjoy {artwork_type[0]} ({artwork_type[1]} saved)")
    if place:
        reasons.append(f"You've shown interest in art from {place[0]} ({place[1]} saved)")
    if medium:
        reasons.append(f"You favor {medium[0]} ({medium[1]} saved)")
    if artist:
        reasons.append(f"You appreciate works by {artist[0]} ({artist[1]} saved)")

    if not reasons:
        reasons.append("Based on your saved artworks")

    if total_recommendations == target:
        reasons.append("✨ Found a rich collection matching your preferences")
    elif total_recommendations > 15:
        reasons.append("📚 Curated selection from available artworks")
    elif total_recommendations > 0:
        reasons.append("🔍 Explored multiple strategies to find these gems")

    # Reported filters follow the top preferences, not the strategies actually fetched
    if department:
        filters = ArtworkFilters(department=department[0])
    elif artwork_type:
        filters = ArtworkFilters(artwork_type=artwork_type[0])
    else:
        filters = ArtworkFilters()

    return RecommendationSummary(
        total_recommendations=total_recommendations,
        reasons=reasons,
        filters=filters,
    )


# ---------------------------------------------------------------------------
# Progressive fetch
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class PageOutcome:
    """What a single fetched page contributed to the accumulator."""

    accepted: int
    returned: int
    complete: bool


class _Accumulator:
    """Collects fresh, displayable artworks for one recommendation run."""

    def __init__(self, target: int, saved_ids: Set[int], disliked_ids: Set[int]):
        self.target = target
        self.saved_ids = saved_ids
        self.disliked_ids = disliked_ids
        self.artworks: List[Artwork] = []
        self.seen_ids: Set[int] = set()

    @property
    def complete(self) -> bool:
        return len(self.artworks) >= self.target

    def accepts(self, artwork: Artwork) -> bool:
        return (
            artwork.id not in self.seen_ids
            and artwork.id not in self.saved_ids
            and artwork.id not in self.disliked_ids
            and artwork.has_image
        )

    def add_batch(self, artworks: Sequence[Artwork]) -> PageOutcome:
        accepted = 0
        for artwork in artworks:
            if not self.accepts(artwork):
                continue
            self.artworks.append(artwork.to_artwork())
            self.seen_ids.add(artwork.id)
            accepted += 1
            if self.complete:
                break
        return PageOutcome(accepted=accepted, returned=len(artworks), complete=self.complete)


class RecommendationEngine:
    """Turns saved/disliked history into a ranked set of suggested artworks."""

    def __init__(
        self,
        artwork_source: ArtworkSource,
        history_store: HistoryStore,
        target_count: int = TARGET_RECOMMENDATIONS,
        page_size: int = PAGE_SIZE,
        max_pages_per_strategy: int = MAX_PAGES_PER_STRATEGY,
    ):
        if target_count <= 0 or page_size <= 0 or max_pages_per_strategy <= 0:
            raise ValueError("Recommendation limits must be positive.")
        self.artwork_source = artwork_source
        self.history_store = history_store
        self.target_count = target_count
        self.page_size = page_size
        self.max_pages_per_strategy = max_pages_per_strategy

    def generate(self) -> RecommendationResult:
        """Generate recommendations from the current history snapshot."""
        try:
            saved = self.history_store.get_saved()
            disliked = self.history_store.get_disliked()
        except Exception as e:
            logger.error(f"Error loading artwork history for recommendations: {e}")
            raise

        if not saved:
            return RecommendationResult(
                recommendations=[],
                summary=RecommendationSummary(
                    total_recommendations=0,
                    reasons=[NO_HISTORY_REASON],
                    filters=ArtworkFilters(),
                ),
            )

        profile = analyze_preferences(saved)
        accumulator = _Accumulator(
            target=self.target_count,
            saved_ids={artwork.id for artwork in saved},
            disliked_ids={artwork.id for artwork in disliked},
        )

        for strategy in build_strategies(profile):
            self._fetch_progressively(strategy, accumulator)
            if accumulator.complete:
                break

        if not accumulator.complete:
            logger.info(
                f"Only found {len(accumulator.artworks)} recommendations, trying fallback without filters"
            )
            self._fetch_progressively(ArtworkFilters(), accumulator)

        recommendations = accumulator.artworks
        summary = build_summary(profile, len(recommendations), target=self.target_count)
        logger.debug(f"Generated {len(recommendations)} recommendations from {len(saved)} saved artworks")
        return RecommendationResult(recommendations=recommendations, summary=summary)

    def _fetch_progressively(self, filters: ArtworkFilters, accumulator: _Accumulator) -> None:
        """Page through one strategy until it is exhausted or the target is met.

        A failed fetch ends the strategy; it never aborts the whole run.
        """
        page = 1
        while not accumulator.complete and page <= self.max_pages_per_strategy:
            outcome = self._fetch_page(page, filters, accumulator)
            if outcome is None or outcome.complete:
                return
            if outcome.accepted == 0 or outcome.returned < self.page_size:
                return
            page += 1

    def _fetch_page(
        self, page: int, filters: ArtworkFilters, accumulator: _Accumulator
    ) -> Optional[PageOutcome]:
        try:
            result = self.artwork_source.fetch_page(page, self.page_size, filters)
        except Exception as e:
            logger.warning(f"Error fetching page {page} for strategy ({filters.describe()}): {e}")
            return None
        return accumulator.add_batch(result.artworks)


def build_default_engine(config=None) -> RecommendationEngine:
    """Factory wiring the engine to the Art Institute API and local JSON history."""
    from config_manager import config_manager
    from ..artic_client import ArticApiClient
    from ..repositories import (
        ArticArtworkRepository,
        DislikedArtworkRepository,
        JsonStorage,
        LocalHistoryStore,
        SavedArtworkRepository,
    )

    config = config or config_manager
    api_config = config.get_api_config()
    rec_config = config.get_recommendation_config()
    paths_config = config.get_paths_config()

    client = ArticApiClient(
        base_url=api_config.base_url,
        timeout=api_config.timeout,
        user_agent=api_config.user_agent,
    )
    storage = JsonStorage(paths_config.data_dir)
    history = LocalHistoryStore(
        SavedArtworkRepository(storage),
        DislikedArtworkRepository(storage),
    )
    return RecommendationEngine(
        artwork_source=ArticArtworkRepository(client),
        history_store=history,
        target_count=rec_config.target_count,
        page_size=rec_config.page_size,
        max_pages_per_strategy=rec_config.max_pages_per_strategy,
    )
