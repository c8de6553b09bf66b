"""
Repositories for artworks and the user's saved/disliked history.

History is kept in JSON files under a data directory, one file per
storage key, so it survives between CLI runs.
"""

import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import ValidationError

from .artic_client import ArticApiClient
from .models import Artwork, ArtworkDetail, ArtworkFilters, ArtworkPage, DislikedArtwork, SavedArtwork

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when local history cannot be read or written."""


def _now_ms() -> int:
    return int(time.time() * 1000)


class JsonStorage:
    """Key-value storage backed by one JSON file per key."""

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def _key_file(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[Any]:
        """Return the stored value or None if the key was never written."""
        path = self._key_file(key)
        if not path.exists():
            return None
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error getting item '{key}' from storage: {e}")
            raise StorageError(f"Could not read '{key}' from {path}: {e}") from e

    def set_item(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value, replacing the file atomically."""
        path = self._key_file(key)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(value, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error setting item '{key}' in storage: {e}")
            raise StorageError(f"Could not write '{key}' to {path}: {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            self._key_file(key).unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Error removing item '{key}' from storage: {e}")
            raise StorageError(f"Could not remove '{key}': {e}") from e


class SavedArtworkRepository:
    """The user's collection of saved artworks."""

    STORAGE_KEY = "saved_artworks"

    def __init__(self, storage: JsonStorage):
        self.storage = storage

    def save_artwork(self, artwork: Artwork) -> None:
        """Add an artwork to the collection; saving twice keeps the first timestamp."""
        saved = self.get_all_saved_artworks()
        if any(item.id == artwork.id for item in saved):
            return
        record = SavedArtwork(**artwork.to_artwork().model_dump(), saved_at=_now_ms())
        self._write(saved + [record])

    def remove_artwork(self, artwork_id: int) -> None:
        saved = self.get_all_saved_artworks()
        self._write([item for item in saved if item.id != artwork_id])

    def get_all_saved_artworks(self) -> List[SavedArtwork]:
        raw = self.storage.get_item(self.STORAGE_KEY) or []
        return _load_records(raw, SavedArtwork, self.STORAGE_KEY)

    def is_artwork_saved(self, artwork_id: int) -> bool:
        return any(item.id == artwork_id for item in self.get_all_saved_artworks())

    def clear_artworks(self) -> None:
        self.storage.remove_item(self.STORAGE_KEY)

    def _write(self, records: List[SavedArtwork]) -> None:
        self.storage.set_item(self.STORAGE_KEY, [r.model_dump(by_alias=True) for r in records])


class DislikedArtworkRepository:
    """Artworks the user has disliked; kept independently of saved ones."""

    STORAGE_KEY = "disliked_artworks"

    def __init__(self, storage: JsonStorage):
        self.storage = storage

    def dislike_artwork(self, artwork: Artwork) -> None:
        disliked = self.get_all_disliked_artworks()
        if any(item.id == artwork.id for item in disliked):
            return
        record = DislikedArtwork(**artwork.to_artwork().model_dump(), disliked_at=_now_ms())
        self._write(disliked + [record])

    def remove_disliked_artwork(self, artwork_id: int) -> None:
        disliked = self.get_all_disliked_artworks()
        self._write([item for item in disliked if item.id != artwork_id])

    def get_all_disliked_artworks(self) -> List[DislikedArtwork]:
        raw = self.storage.get_item(self.STORAGE_KEY) or []
        return _load_records(raw, DislikedArtwork, self.STORAGE_KEY)

    def is_artwork_disliked(self, artwork_id: int) -> bool:
        return any(item.id == artwork_id for item in self.get_all_disliked_artworks())

    def _write(self, records: List[DislikedArtwork]) -> None:
        self.storage.set_item(self.STORAGE_KEY, [r.model_dump(by_alias=True) for r in records])


def _load_records(raw: Any, model, key: str) -> list:
    if not isinstance(raw, list):
        raise StorageError(f"Stored '{key}' is not a list")
    try:
        return [model.model_validate(item) for item in raw]
    except ValidationError as e:
        raise StorageError(f"Stored '{key}' contains an invalid record: {e}") from e


class LocalHistoryStore:
    """HistoryStore backed by the local saved/disliked repositories."""

    def __init__(self, saved_repository: SavedArtworkRepository, disliked_repository: DislikedArtworkRepository):
        self.saved_repository = saved_repository
        self.disliked_repository = disliked_repository

    def get_saved(self) -> List[SavedArtwork]:
        return self.saved_repository.get_all_saved_artworks()

    def get_disliked(self) -> List[DislikedArtwork]:
        return self.disliked_repository.get_all_disliked_artworks()


class ArticArtworkRepository:
    """ArtworkSource backed by the AIC API."""

    def __init__(self, client: ArticApiClient):
        self.client = client

    def fetch_page(self, page: int, page_size: int, filters: ArtworkFilters) -> ArtworkPage:
        if filters.is_empty():
            return self.client.fetch_artworks(page=page, limit=page_size)
        return self.client.fetch_filtered_artworks(page=page, limit=page_size, filters=filters)

    def get_artwork_by_id(self, artwork_id: int) -> Artwork:
        return self.client.fetch_artwork_by_id(artwork_id)

    def get_artwork_detail(self, artwork_id: int) -> ArtworkDetail:
        return self.client.fetch_artwork_detail(artwork_id)

    def search_artworks(
        self,
        query: str,
        filters: Optional[ArtworkFilters] = None,
        page: int = 1,
        limit: int = 20,
    ) -> ArtworkPage:
        return self.client.search_artworks(query, filters=filters, page=page, limit=limit)
