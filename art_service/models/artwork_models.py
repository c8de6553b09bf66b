"""
Artwork-related data models.

This module contains Pydantic models for artworks as returned by the
Art Institute of Chicago API, the user's saved/disliked records, and
paginated API pages.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


# Fields requested from the API for every artwork payload
ARTWORK_FIELDS = [
    "id",
    "title",
    "artist_title",
    "date_display",
    "image_id",
    "description",
    "provenance_text",
    "publication_history",
    "exhibition_history",
    "credit_line",
    "place_of_origin",
    "medium_display",
    "dimensions",
    "artwork_type_title",
    "department_title",
    "artist_display",
]

DEFAULT_IIIF_URL = "https://www.artic.edu/iiif/2"


class Artwork(BaseModel):
    """Core displayable museum item."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: int = Field(description="Unique artwork identifier")
    title: Optional[str] = Field(default="", description="Artwork title")
    artist_title: Optional[str] = Field(default=None, description="Primary artist name")
    date_display: Optional[str] = Field(default=None, description="Human readable date")
    image_id: Optional[str] = Field(default=None, description="IIIF image identifier")
    description: Optional[str] = Field(default=None, description="Descriptive text (HTML)")
    provenance_text: Optional[str] = Field(default=None, description="Provenance")
    publication_history: Optional[str] = Field(default=None, description="Publication history")
    exhibition_history: Optional[str] = Field(default=None, description="Exhibition history")
    credit_line: Optional[str] = Field(default=None, description="Credit line")
    place_of_origin: Optional[str] = Field(default=None, description="Place of origin")
    medium_display: Optional[str] = Field(default=None, description="Medium")
    dimensions: Optional[str] = Field(default=None, description="Dimensions")
    artwork_type_title: Optional[str] = Field(default=None, description="Artwork type")
    department_title: Optional[str] = Field(default=None, description="Museum department")
    artist_display: Optional[str] = Field(default=None, description="Full artist display line")

    @property
    def has_image(self) -> bool:
        """Artworks without an image reference are not displayable."""
        return bool(self.image_id)

    def image_url(self, iiif_url: str = DEFAULT_IIIF_URL, size: int = 843) -> Optional[str]:
        """Build the IIIF image URL for this artwork, if it has an image."""
        if not self.has_image:
            return None
        return f"{iiif_url.rstrip('/')}/{self.image_id}/full/{size},/0/default.jpg"

    def to_artwork(self) -> "Artwork":
        """Strip any history timestamps and return the plain artwork record."""
        return Artwork.model_validate(self.model_dump(include=set(ARTWORK_FIELDS)))


class SavedArtwork(Artwork):
    """An artwork in the user's collection, stamped when it was saved."""

    saved_at: int = Field(alias="savedAt", description="Save time in epoch milliseconds")


class DislikedArtwork(Artwork):
    """An artwork the user disliked, stamped when it was disliked."""

    disliked_at: int = Field(alias="dislikedAt", description="Dislike time in epoch milliseconds")


class Pagination(BaseModel):
    """Pagination block returned by the API."""

    model_config = ConfigDict(extra="ignore")

    total: int = 0
    limit: int = 0
    offset: int = 0
    total_pages: int = 0
    current_page: int = 1


class ArtworkPage(BaseModel):
    """A single page of artworks."""

    artworks: List[Artwork] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)
    iiif_url: str = Field(default=DEFAULT_IIIF_URL, description="IIIF base URL from the API config block")

    @property
    def has_more(self) -> bool:
        return self.pagination.current_page < self.pagination.total_pages


class ArtworkDetail(BaseModel):
    """A single artwork together with the IIIF base URL its images are served from."""

    artwork: Artwork
    iiif_url: str = Field(default=DEFAULT_IIIF_URL, description="IIIF base URL from the API config block")

    @property
    def image_url(self) -> Optional[str]:
        return self.artwork.image_url(self.iiif_url)
