# Art service package: artwork models, AIC API access, local history and recommendations

from .artic_client import ArticApiClient, ArticApiError
from .collection import CollectionService
from .repositories import (
    ArticArtworkRepository,
    DislikedArtworkRepository,
    JsonStorage,
    LocalHistoryStore,
    SavedArtworkRepository,
    StorageError,
)
from .sources import ArtworkSource, HistoryStore
from .recommendations import RecommendationEngine, build_default_engine
from .logging_config import (
    setup_logging,
    stop_logging,
)

__all__ = [
    "ArticApiClient",
    "ArticApiError",
    "ArticArtworkRepository",
    "ArtworkSource",
    "CollectionService",
    "DislikedArtworkRepository",
    "HistoryStore",
    "JsonStorage",
    "LocalHistoryStore",
    "RecommendationEngine",
    "SavedArtworkRepository",
    "StorageError",
    "build_default_engine",
    "setup_logging",
    "stop_logging",
]
