"""
Art Institute of Chicago API Client

This module provides a thin requests-based client for the public
Art Institute of Chicago (AIC) API at https://api.artic.edu/api/v1.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from .models import (
    ARTWORK_FIELDS,
    DEFAULT_IIIF_URL,
    Artwork,
    ArtworkDetail,
    ArtworkFilters,
    ArtworkPage,
    Pagination,
)
from .search_query import build_search_body

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.artic.edu/api/v1"
DEFAULT_USER_AGENT = "art-recommender (https://github.com/art-recommender/art-recommender)"


class ArticApiError(Exception):
    """Raised when the AIC API cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ArticApiClient:
    """Client for the artworks endpoints of the AIC API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the client.

        Args:
            base_url: API root, without trailing slash
            timeout: Per-request timeout in seconds
            user_agent: Sent as both User-Agent and the AIC-User-Agent header the API asks for
            session: Optional pre-configured session (mainly for tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "AIC-User-Agent": user_agent,
        })

    def fetch_artworks(self, page: int = 1, limit: int = 10) -> ArtworkPage:
        """Fetch a page of artworks in the API's default order."""
        params = {"page": page, "limit": limit, "fields": ",".join(ARTWORK_FIELDS)}
        payload = self._request("GET", "/artworks", params=params)
        return self._parse_page(payload)

    def fetch_artwork_by_id(self, artwork_id: int) -> Artwork:
        """Fetch a single artwork."""
        return self.fetch_artwork_detail(artwork_id).artwork

    def fetch_artwork_detail(self, artwork_id: int) -> ArtworkDetail:
        """Fetch a single artwork along with the IIIF base URL for its image."""
        params = {"fields": ",".join(ARTWORK_FIELDS)}
        payload = self._request("GET", f"/artworks/{artwork_id}", params=params)
        data = payload.get("data")
        if not isinstance(data, dict):
            raise ArticApiError(f"Artwork {artwork_id} response has no data block")
        try:
            artwork = Artwork.model_validate(data)
        except ValidationError as e:
            raise ArticApiError(f"Artwork {artwork_id} response is not a valid artwork: {e}") from e
        return ArtworkDetail(artwork=artwork, iiif_url=self._iiif_url(payload))

    def search_artworks(
        self,
        query: str,
        filters: Optional[ArtworkFilters] = None,
        page: int = 1,
        limit: int = 20,
    ) -> ArtworkPage:
        """Full-text search, optionally narrowed by filters."""
        body = build_search_body(query=query, filters=filters, page=page, limit=limit)
        payload = self._request("POST", "/artworks/search", json=body)
        return self._parse_page(payload)

    def fetch_filtered_artworks(self, page: int, limit: int, filters: ArtworkFilters) -> ArtworkPage:
        """Fetch a page of artworks matching the filters, without a text query."""
        body = build_search_body(filters=filters, page=page, limit=limit)
        payload = self._request("POST", "/artworks/search", json=body)
        return self._parse_page(payload)

    # Internals ----------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise ArticApiError(f"Request to {url} failed: {e}") from e

        if not response.ok:
            raise ArticApiError(f"API error: {response.status_code}", status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise ArticApiError(f"Invalid JSON from {url}: {e}") from e
        if not isinstance(payload, dict):
            raise ArticApiError(f"Unexpected response shape from {url}")
        return payload

    @staticmethod
    def _iiif_url(payload: Dict[str, Any]) -> str:
        return (payload.get("config") or {}).get("iiif_url") or DEFAULT_IIIF_URL

    @classmethod
    def _parse_page(cls, payload: Dict[str, Any]) -> ArtworkPage:
        items: List[Dict[str, Any]] = payload.get("data") or []
        artworks: List[Artwork] = []
        for item in items:
            if not isinstance(item, dict):
                continue
            try:
                artworks.append(Artwork.model_validate(item))
            except ValidationError as e:
                # One broken record should not cost the rest of the page
                logger.warning(f"Skipping invalid artwork record {item.get('id')!r}: {e}")
        try:
            pagination = Pagination.model_validate(payload.get("pagination") or {})
        except ValidationError as e:
            raise ArticApiError(f"Invalid pagination block: {e}") from e
        return ArtworkPage(artworks=artworks, pagination=pagination, iiif_url=cls._iiif_url(payload))
