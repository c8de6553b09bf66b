#!/usr/bin/env python3
"""
Command line front end for the art recommender.

Browse the Art Institute of Chicago collection, keep a local list of saved
and disliked artworks, and get recommendations based on that history.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config_manager import ConfigManager
from art_service import (
    ArticApiClient,
    ArticApiError,
    ArticArtworkRepository,
    CollectionService,
    DislikedArtworkRepository,
    JsonStorage,
    LocalHistoryStore,
    RecommendationEngine,
    SavedArtworkRepository,
    StorageError,
    setup_logging,
    stop_logging,
)
from art_service.models import Artwork, ArtworkDetail, ArtworkFilters, ArtworkPage

logger = logging.getLogger(__name__)


class ArtRecommenderApp:
    """Wires configuration, storage, API access and the engine together."""

    def __init__(self, config: ConfigManager, data_dir: Optional[Path] = None, client: Optional[ArticApiClient] = None):
        api_config = config.get_api_config()
        rec_config = config.get_recommendation_config()

        self.client = client or ArticApiClient(
            base_url=api_config.base_url,
            timeout=api_config.timeout,
            user_agent=api_config.user_agent,
        )
        storage = JsonStorage(data_dir or Path(config.get_paths_config().data_dir))
        saved_repository = SavedArtworkRepository(storage)
        disliked_repository = DislikedArtworkRepository(storage)
        self.artwork_repository = ArticArtworkRepository(self.client)

        self.collection = CollectionService(saved_repository, disliked_repository, self.artwork_repository)
        self.engine = RecommendationEngine(
            artwork_source=self.artwork_repository,
            history_store=LocalHistoryStore(saved_repository, disliked_repository),
            target_count=rec_config.target_count,
            page_size=rec_config.page_size,
            max_pages_per_strategy=rec_config.max_pages_per_strategy,
        )


def _format_artwork(artwork: Artwork) -> str:
    artist = artwork.artist_title or "Unknown artist"
    date = f", {artwork.date_display}" if artwork.date_display else ""
    return f"[{artwork.id}] {artwork.title} - {artist}{date}"


def _print_artworks(artworks: List[Artwork]) -> None:
    if not artworks:
        print("(none)")
    for artwork in artworks:
        print(_format_artwork(artwork))


def _print_page(page: ArtworkPage) -> None:
    _print_artworks(page.artworks)
    pagination = page.pagination
    print()
    if page.has_more:
        print(f"Page {pagination.current_page} of {pagination.total_pages} "
              f"(more available, use --page {pagination.current_page + 1})")
    else:
        print(f"Page {pagination.current_page} of {max(pagination.total_pages, 1)} (no more results)")


# Detail line label -> Artwork attribute
_DETAIL_FIELDS = [
    ("Artist", "artist_display"),
    ("Date", "date_display"),
    ("Type", "artwork_type_title"),
    ("Department", "department_title"),
    ("Place of origin", "place_of_origin"),
    ("Medium", "medium_display"),
    ("Dimensions", "dimensions"),
    ("Credit line", "credit_line"),
    ("Description", "description"),
    ("Provenance", "provenance_text"),
    ("Exhibition history", "exhibition_history"),
    ("Publication history", "publication_history"),
]


def _print_detail(detail: ArtworkDetail) -> None:
    artwork = detail.artwork
    print(f"[{artwork.id}] {artwork.title}")
    for label, attribute in _DETAIL_FIELDS:
        value = getattr(artwork, attribute)
        if value:
            print(f"{label}: {value}")
    print(f"Image: {detail.image_url or '(no image)'}")


def _filters_from_args(args: argparse.Namespace) -> ArtworkFilters:
    return ArtworkFilters(
        department=args.department,
        artwork_type=args.artwork_type,
        place_of_origin=args.place_of_origin,
        medium=args.medium,
    )


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--department", help="Exact department title, e.g. 'Modern Art'")
    parser.add_argument("--type", dest="artwork_type", help="Exact artwork type, e.g. 'Painting'")
    parser.add_argument("--origin", dest="place_of_origin", help="Exact place of origin, e.g. 'France'")
    parser.add_argument("--medium", help="Phrase contained in the medium description")
    parser.add_argument("--page", type=int, default=1, help="Result page to show (starts at 1)")


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Artwork browser and recommender")
    parser.add_argument("--config", default="art_recommender_config.json",
                        help="Path to the JSON configuration file")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Directory holding saved/disliked artwork files")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    recommend = subparsers.add_parser("recommend", help="Recommend artworks from your saved history")
    recommend.add_argument("--json", action="store_true", help="Print the raw result as JSON")

    for name, help_text in (
        ("save", "Save an artwork to your collection"),
        ("unsave", "Remove an artwork from your collection"),
        ("dislike", "Mark an artwork as disliked"),
        ("undislike", "Remove an artwork from your disliked list"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("artwork_id", type=int)

    subparsers.add_parser("clear-saved", help="Remove every saved artwork")

    listing = subparsers.add_parser("list", help="List saved or disliked artworks")
    listing.add_argument("which", choices=["saved", "disliked"])

    browse = subparsers.add_parser("browse", help="Browse the collection, optionally filtered")
    _add_filter_arguments(browse)

    search = subparsers.add_parser("search", help="Search the collection")
    search.add_argument("query")
    search.add_argument("--limit", type=int, default=20)
    _add_filter_arguments(search)

    show = subparsers.add_parser("show", help="Show the full record of one artwork")
    show.add_argument("artwork_id", type=int)

    return parser.parse_args(argv)


def run(args: argparse.Namespace, app: ArtRecommenderApp) -> int:
    """Execute a parsed command; returns the process exit code."""
    collection = app.collection

    if args.command == "recommend":
        result = app.engine.generate()
        if args.json:
            print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
            return 0
        for reason in result.summary.reasons:
            print(f"- {reason}")
        print()
        _print_artworks(result.recommendations)
    elif args.command == "save":
        collection.save(collection.resolve(args.artwork_id))
    elif args.command == "unsave":
        collection.remove_saved(args.artwork_id)
    elif args.command == "dislike":
        collection.dislike(collection.resolve(args.artwork_id))
    elif args.command == "undislike":
        collection.remove_disliked(args.artwork_id)
    elif args.command == "clear-saved":
        collection.clear_saved()
    elif args.command == "list":
        items = collection.list_saved() if args.which == "saved" else collection.list_disliked()
        _print_artworks(items)
    elif args.command == "browse":
        page_size = app.engine.page_size
        _print_page(app.artwork_repository.fetch_page(args.page, page_size, _filters_from_args(args)))
    elif args.command == "search":
        _print_page(app.artwork_repository.search_artworks(
            args.query, filters=_filters_from_args(args), page=args.page, limit=args.limit,
        ))
    elif args.command == "show":
        _print_detail(app.artwork_repository.get_artwork_detail(args.artwork_id))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    setup_logging(args.debug)
    try:
        app = ArtRecommenderApp(ConfigManager(args.config), data_dir=args.data_dir)
        return run(args, app)
    except (ArticApiError, StorageError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    finally:
        stop_logging()


if __name__ == "__main__":
    sys.exit(main())
