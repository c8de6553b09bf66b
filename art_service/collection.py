"""
Collection service for saving and disliking artworks.
"""

import logging
from typing import List, Optional

from .models import Artwork, DislikedArtwork, SavedArtwork
from .repositories import ArticArtworkRepository, DislikedArtworkRepository, SavedArtworkRepository

logger = logging.getLogger(__name__)


class CollectionService:
    """Manages the user's saved and disliked artworks."""

    def __init__(
        self,
        saved_repository: SavedArtworkRepository,
        disliked_repository: DislikedArtworkRepository,
        artwork_repository: Optional[ArticArtworkRepository] = None,
    ):
        """
        Initialize CollectionService.

        Args:
            saved_repository: Repository for saved artworks
            disliked_repository: Repository for disliked artworks
            artwork_repository: Used to look artworks up when only an id is given
        """
        self.saved_repository = saved_repository
        self.disliked_repository = disliked_repository
        self.artwork_repository = artwork_repository

    def resolve(self, artwork_id: int) -> Artwork:
        """Look up an artwork by id through the artwork repository."""
        if self.artwork_repository is None:
            raise ValueError("No artwork repository configured to look up artworks by id.")
        return self.artwork_repository.get_artwork_by_id(artwork_id)

    def save(self, artwork: Artwork) -> None:
        self.saved_repository.save_artwork(artwork)
        logger.info(f"Saved artwork {artwork.id}: {artwork.title}")

    def remove_saved(self, artwork_id: int) -> None:
        self.saved_repository.remove_artwork(artwork_id)

    def clear_saved(self) -> None:
        self.saved_repository.clear_artworks()

    def is_saved(self, artwork_id: int) -> bool:
        return self.saved_repository.is_artwork_saved(artwork_id)

    def dislike(self, artwork: Artwork) -> None:
        # Saved state is left untouched; the recommender excludes disliked ids either way
        self.disliked_repository.dislike_artwork(artwork)
        logger.info(f"Disliked artwork {artwork.id}: {artwork.title}")

    def remove_disliked(self, artwork_id: int) -> None:
        self.disliked_repository.remove_disliked_artwork(artwork_id)

    def is_disliked(self, artwork_id: int) -> bool:
        return self.disliked_repository.is_artwork_disliked(artwork_id)

    def list_saved(self) -> List[SavedArtwork]:
        """Saved artworks, most recently saved first."""
        saved = self.saved_repository.get_all_saved_artworks()
        return sorted(saved, key=lambda item: item.saved_at, reverse=True)

    def list_disliked(self) -> List[DislikedArtwork]:
        """Disliked artworks, most recently disliked first."""
        disliked = self.disliked_repository.get_all_disliked_artworks()
        return sorted(disliked, key=lambda item: item.disliked_at, reverse=True)
