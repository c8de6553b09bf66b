"""
Tests for the Art Institute of Chicago API client and the artwork repository.
"""

import logging
from types import SimpleNamespace

import pytest
import requests

from art_service.artic_client import ArticApiClient, ArticApiError
from art_service.models import ARTWORK_FIELDS, ArtworkFilters
from art_service.repositories import ArticArtworkRepository


class FakeResponse:
    def __init__(self, status_code=200, payload=None, invalid_json=False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._invalid_json:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.requests = []

    def request(self, method, url, timeout=None, **kwargs):
        self.requests.append(SimpleNamespace(method=method, url=url, timeout=timeout, kwargs=kwargs))
        if self.error:
            raise self.error
        return self.response


def _page_payload(ids, current_page=1, total_pages=5):
    return {
        "data": [{"id": i, "title": f"Work {i}", "image_id": f"img{i}", "unknown_field": "x"} for i in ids],
        "pagination": {"total": 60, "limit": 12, "offset": 0, "total_pages": total_pages, "current_page": current_page},
        "config": {"iiif_url": "https://www.artic.edu/iiif/2", "website_url": "http://www.artic.edu"},
    }


def test_client_sets_user_agent_headers():
    session = FakeSession()
    ArticApiClient(user_agent="tester", session=session)

    assert session.headers["User-Agent"] == "tester"
    assert session.headers["AIC-User-Agent"] == "tester"


def test_fetch_artworks_parses_page():
    session = FakeSession(FakeResponse(payload=_page_payload([1, 2, 3])))
    client = ArticApiClient(base_url="https://api.example.org/v1/", timeout=3, session=session)

    page = client.fetch_artworks(page=2, limit=12)

    sent = session.requests[0]
    assert sent.method == "GET"
    assert sent.url == "https://api.example.org/v1/artworks"
    assert sent.timeout == 3
    assert sent.kwargs["params"]["page"] == 2
    assert sent.kwargs["params"]["limit"] == 12
    assert sent.kwargs["params"]["fields"] == ",".join(ARTWORK_FIELDS)
    assert [a.id for a in page.artworks] == [1, 2, 3]
    assert page.pagination.total_pages == 5
    assert page.has_more


def test_fetch_filtered_artworks_posts_search_body():
    session = FakeSession(FakeResponse(payload=_page_payload([9])))
    client = ArticApiClient(session=session)

    client.fetch_filtered_artworks(1, 12, ArtworkFilters(department="Modern Art", artwork_type="Painting"))

    sent = session.requests[0]
    assert sent.method == "POST"
    assert sent.url.endswith("/artworks/search")
    body = sent.kwargs["json"]
    assert body["page"] == 1
    assert body["limit"] == 12
    assert "q" not in body
    assert body["query"] == {
        "bool": {
            "must": [
                {"term": {"department_title.keyword": "Modern Art"}},
                {"term": {"artwork_type_title.keyword": "Painting"}},
            ]
        }
    }


def test_fetch_artwork_by_id():
    payload = {"data": {"id": 27992, "title": "A Sunday on La Grande Jatte", "image_id": "abc"}}
    session = FakeSession(FakeResponse(payload=payload))
    client = ArticApiClient(session=session)

    artwork = client.fetch_artwork_by_id(27992)

    assert session.requests[0].url.endswith("/artworks/27992")
    assert artwork.title == "A Sunday on La Grande Jatte"
    assert artwork.image_url() == "https://www.artic.edu/iiif/2/abc/full/843,/0/default.jpg"


def test_http_error_raises_api_error():
    client = ArticApiClient(session=FakeSession(FakeResponse(status_code=503)))

    with pytest.raises(ArticApiError) as exc_info:
        client.fetch_artworks()
    assert exc_info.value.status_code == 503


def test_network_error_raises_api_error():
    client = ArticApiClient(session=FakeSession(error=requests.exceptions.ConnectTimeout("slow")))

    with pytest.raises(ArticApiError):
        client.fetch_artworks()


def test_invalid_json_raises_api_error():
    client = ArticApiClient(session=FakeSession(FakeResponse(invalid_json=True)))

    with pytest.raises(ArticApiError):
        client.fetch_artworks()


def test_repository_uses_plain_listing_for_empty_filters():
    session = FakeSession(FakeResponse(payload=_page_payload([1])))
    repository = ArticArtworkRepository(ArticApiClient(session=session))

    repository.fetch_page(3, 12, ArtworkFilters())
    repository.fetch_page(1, 12, ArtworkFilters(medium="Ink"))

    assert session.requests[0].method == "GET"
    assert session.requests[0].kwargs["params"]["page"] == 3
    assert session.requests[1].method == "POST"
    assert session.requests[1].kwargs["json"]["query"] == {
        "bool": {"must": [{"match_phrase": {"medium_display": "Ink"}}]}
    }


def test_repository_search_returns_page():
    session = FakeSession(FakeResponse(payload=_page_payload([4, 5])))
    repository = ArticArtworkRepository(ArticApiClient(session=session))

    page = repository.search_artworks("cats", page=2, limit=5)

    assert [a.id for a in page.artworks] == [4, 5]
    assert page.has_more
    assert session.requests[0].kwargs["json"]["page"] == 2
    assert session.requests[0].kwargs["json"]["q"] == "cats"
    assert session.requests[0].kwargs["json"]["limit"] == 5


def test_invalid_record_is_skipped_and_rest_of_page_kept(caplog):
    payload = {
        "data": [{"id": None}, {"title": "No id"}, {"id": 5, "image_id": "x"}],
        "pagination": {"total": 3, "total_pages": 1, "current_page": 1},
    }
    repository = ArticArtworkRepository(ArticApiClient(session=FakeSession(FakeResponse(payload=payload))))

    with caplog.at_level(logging.WARNING, logger="art_service.artic_client"):
        page = repository.search_artworks("monet")

    assert [a.id for a in page.artworks] == [5]
    assert "Skipping invalid artwork record" in caplog.text


def test_invalid_pagination_raises_api_error():
    payload = {"data": [], "pagination": {"total_pages": "many"}}
    client = ArticApiClient(session=FakeSession(FakeResponse(payload=payload)))

    with pytest.raises(ArticApiError):
        client.fetch_artworks()


def test_fetch_artwork_by_id_invalid_record_raises_api_error():
    payload = {"data": {"id": "not-a-number", "title": "Broken"}}
    client = ArticApiClient(session=FakeSession(FakeResponse(payload=payload)))

    with pytest.raises(ArticApiError):
        client.fetch_artwork_by_id(1)


def test_fetch_artwork_detail_keeps_iiif_url():
    payload = {
        "data": {"id": 111628, "title": "Nighthawks", "image_id": "831a05de"},
        "config": {"iiif_url": "https://iiif.example.org/iiif/2"},
    }
    repository = ArticArtworkRepository(ArticApiClient(session=FakeSession(FakeResponse(payload=payload))))

    detail = repository.get_artwork_detail(111628)

    assert detail.artwork.id == 111628
    assert detail.iiif_url == "https://iiif.example.org/iiif/2"
    assert detail.image_url == "https://iiif.example.org/iiif/2/831a05de/full/843,/0/default.jpg"
