"""
Search Query Builder Module

Helpers for building Elasticsearch-style request bodies for the
Art Institute of Chicago ``/artworks/search`` endpoint.
"""

from typing import Any, Dict, List, Optional, Union

from .models import ARTWORK_FIELDS, ArtworkFilters

Scalar = Union[str, int, float, bool]

# Filter attribute -> (query type, indexed field)
_FILTER_FIELDS = {
    "department": ("term", "department_title.keyword"),
    "artwork_type": ("term", "artwork_type_title.keyword"),
    "place_of_origin": ("term", "place_of_origin.keyword"),
    # Medium strings are long free text, so match the phrase instead of the exact keyword
    "medium": ("match_phrase", "medium_display"),
}


def must_term(field: str, value: Scalar) -> Dict[str, Any]:
    """Build an exact term clause."""
    return {"term": {field: value}}


def match_phrase(field: str, value: str) -> Dict[str, Any]:
    return {"match_phrase": {field: value}}


def filters_query(filters: ArtworkFilters) -> Optional[Dict[str, Any]]:
    """Translate a filter set into a bool query, or ``None`` when it is empty."""
    clauses: List[Dict[str, Any]] = []
    for attribute, (kind, field) in _FILTER_FIELDS.items():
        value = getattr(filters, attribute)
        if not value:
            continue
        if kind == "term":
            clauses.append(must_term(field, value))
        else:
            clauses.append(match_phrase(field, value))

    if not clauses:
        return None
    return {"bool": {"must": clauses}}


def build_search_body(
    query: Optional[str] = None,
    filters: Optional[ArtworkFilters] = None,
    page: int = 1,
    limit: int = 20,
    fields: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Build the JSON body for a POST to ``/artworks/search``."""
    body: Dict[str, Any] = {
        "page": page,
        "limit": limit,
        "fields": list(fields or ARTWORK_FIELDS),
    }
    if query:
        body["q"] = query

    filter_clause = filters_query(filters) if filters else None
    if filter_clause:
        body["query"] = filter_clause
    return body
