"""
Tests for local JSON storage, the history repositories and the collection service.
"""

import json
from pathlib import Path

import pytest

from art_service.collection import CollectionService
from art_service.models import Artwork
from art_service.repositories import (
    DislikedArtworkRepository,
    JsonStorage,
    LocalHistoryStore,
    SavedArtworkRepository,
    StorageError,
)


def _art(artwork_id: int, **fields) -> Artwork:
    return Artwork(id=artwork_id, title=f"Artwork {artwork_id}", image_id=f"img-{artwork_id}", **fields)


@pytest.fixture
def storage(tmp_path: Path) -> JsonStorage:
    return JsonStorage(tmp_path / "user_data")


def test_storage_missing_key_returns_none(storage):
    assert storage.get_item("nothing") is None


def test_storage_round_trip_and_remove(storage):
    storage.set_item("prefs", {"theme": "dark"})

    assert storage.get_item("prefs") == {"theme": "dark"}
    storage.remove_item("prefs")
    assert storage.get_item("prefs") is None
    # Removing twice is harmless
    storage.remove_item("prefs")


def test_storage_corrupt_file_raises(storage):
    storage.data_dir.mkdir(parents=True)
    (storage.data_dir / "saved_artworks.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError):
        storage.get_item("saved_artworks")


def test_save_artwork_is_idempotent_and_stamped(storage, monkeypatch):
    monkeypatch.setattr("art_service.repositories._now_ms", lambda: 1_000)
    repository = SavedArtworkRepository(storage)

    repository.save_artwork(_art(1, department_title="Modern Art"))
    monkeypatch.setattr("art_service.repositories._now_ms", lambda: 2_000)
    repository.save_artwork(_art(1, department_title="Modern Art"))

    saved = repository.get_all_saved_artworks()
    assert len(saved) == 1
    assert saved[0].saved_at == 1_000
    assert saved[0].department_title == "Modern Art"
    assert repository.is_artwork_saved(1)
    assert not repository.is_artwork_saved(2)


def test_saved_file_uses_camel_case_timestamp(storage):
    SavedArtworkRepository(storage).save_artwork(_art(5))

    raw = json.loads((storage.data_dir / "saved_artworks.json").read_text(encoding="utf-8"))
    assert raw[0]["id"] == 5
    assert "savedAt" in raw[0]


def test_remove_and_clear_saved(storage):
    repository = SavedArtworkRepository(storage)
    for i in (1, 2, 3):
        repository.save_artwork(_art(i))

    repository.remove_artwork(2)
    assert [a.id for a in repository.get_all_saved_artworks()] == [1, 3]

    repository.clear_artworks()
    assert repository.get_all_saved_artworks() == []


def test_invalid_stored_record_raises(storage):
    storage.set_item("disliked_artworks", [{"title": "no id"}])

    with pytest.raises(StorageError):
        DislikedArtworkRepository(storage).get_all_disliked_artworks()


def test_disliked_repository_is_independent_of_saved(storage):
    saved = SavedArtworkRepository(storage)
    disliked = DislikedArtworkRepository(storage)

    saved.save_artwork(_art(1))
    disliked.dislike_artwork(_art(1))
    disliked.dislike_artwork(_art(2))
    disliked.remove_disliked_artwork(2)

    assert saved.is_artwork_saved(1)
    assert disliked.is_artwork_disliked(1)
    assert not disliked.is_artwork_disliked(2)

    history = LocalHistoryStore(saved, disliked)
    assert [a.id for a in history.get_saved()] == [1]
    assert [a.id for a in history.get_disliked()] == [1]


class FakeArtworkRepository:
    def get_artwork_by_id(self, artwork_id):
        return _art(artwork_id, artist_title="Hokusai")


def test_collection_service_lists_newest_first(storage, monkeypatch):
    service = CollectionService(SavedArtworkRepository(storage), DislikedArtworkRepository(storage))
    for stamp, artwork_id in ((100, 1), (300, 2), (200, 3)):
        monkeypatch.setattr("art_service.repositories._now_ms", lambda stamp=stamp: stamp)
        service.save(_art(artwork_id))
        service.dislike(_art(artwork_id + 10))

    assert [a.id for a in service.list_saved()] == [2, 3, 1]
    assert [a.id for a in service.list_disliked()] == [12, 13, 11]


def test_collection_service_resolves_ids(storage):
    service = CollectionService(
        SavedArtworkRepository(storage),
        DislikedArtworkRepository(storage),
        FakeArtworkRepository(),
    )

    service.save(service.resolve(42))

    assert service.is_saved(42)
    assert service.list_saved()[0].artist_title == "Hokusai"
    service.remove_saved(42)
    assert not service.is_saved(42)


def test_collection_service_without_lookup_cannot_resolve(storage):
    service = CollectionService(SavedArtworkRepository(storage), DislikedArtworkRepository(storage))

    with pytest.raises(ValueError):
        service.resolve(1)
