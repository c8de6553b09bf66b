"""
Collaborator interfaces consumed by the recommendation engine.
"""

from typing import List, Protocol

from .models import ArtworkFilters, ArtworkPage, DislikedArtwork, SavedArtwork


class ArtworkSource(Protocol):
    """Paginated, filterable artwork lookup."""

    def fetch_page(self, page: int, page_size: int, filters: ArtworkFilters) -> ArtworkPage:
        """Return one page of artworks matching ``filters`` (empty filters = unfiltered)."""


class HistoryStore(Protocol):
    """Read access to the user's saved and disliked history."""

    def get_saved(self) -> List[SavedArtwork]:
        ...

    def get_disliked(self) -> List[DislikedArtwork]:
        ...
