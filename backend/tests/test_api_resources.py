from unittest.mock import patch

from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.routes import categories as categories_router
from api.routes import location as location_router
from api.routes import resources as resources_router
from domain.models import CodeEntry, SubcategoryEntry, ZipRecord
from services.geocoding import ZipGeocoder
from services.ranking import RankingEngine
from services.search_client import UpstreamUnavailable
from services.taxonomy import TaxonomyResolver


class FakeClient:
    def __init__(self, results=None, detail=None, error=None):
        self.results = results or []
        self.detail = detail
        self.error = error
        self.calls = []

    def search(self, term, is_code, location=None):
        self.calls.append((term, is_code, location))
        if self.error:
            raise self.error
        return list(self.results)

    def fetch_detail(self, resource_id):
        if self.error:
            raise self.error
        return self.detail


def _resolver():
    return TaxonomyResolver(
        [
            CodeEntry(
                "food",
                "Food",
                "BD-5000",
                keywords=("food",),
                subcategories=(SubcategoryEntry("food-pantries", "Food Pantries", "BD-1800.2000"),),
            )
        ]
    )


def _geocoder():
    return ZipGeocoder(
        [
            ZipRecord("93101", 34.41889, -119.69810, "Santa Barbara", "CA"),
            ZipRecord("90028", 34.09778, -118.32639, "Hollywood", "CA"),
        ]
    )


def _app() -> TestClient:
    app = FastAPI()
    app.include_router(resources_router.router, prefix="/resources")
    app.include_router(categories_router.router, prefix="/categories")
    app.include_router(location_router.router, prefix="/location")
    return TestClient(app)


def _engine(client):
    return RankingEngine(_resolver(), client, _geocoder())


def test_search_endpoint_reports_effective_sort_and_total():
    client = FakeClient(
        [
            {"id": "la", "name": "LA Pantry", "address": {"postalCode": "90028"}},
            {"id": "sb", "name": "SB Pantry", "address": {"postalCode": "93101"}},
            {"id": "none", "name": "Somewhere"},
        ]
    )
    with patch.object(resources_router, "get_default_ranking_engine", return_value=_engine(client)):
        resp = _app().get(
            "/resources",
            params={"category_id": "food", "zip_code": "93101", "sort_by": "relevance", "take": 2},
        )

    assert resp.status_code == 200
    data = resp.json()
    assert data["sort_by"] == "distance"
    assert data["total"] == 3
    assert data["skip"] == 0
    assert data["take"] == 2
    assert [r["id"] for r in data["resources"]] == ["sb", "la"]
    assert data["resources"][0]["distance_miles"] == 0
    assert data["resources"][0]["languages"] == ["English"]


def test_search_endpoint_upstream_failure_is_empty_200():
    client = FakeClient(error=UpstreamUnavailable("down", status_code=503))
    with patch.object(resources_router, "get_default_ranking_engine", return_value=_engine(client)):
        resp = _app().get("/resources", params={"category_id": "food"})

    assert resp.status_code == 200
    assert resp.json()["resources"] == []
    assert resp.json()["total"] == 0


def test_search_endpoint_rejects_missing_search_dimension():
    with patch.object(resources_router, "get_default_ranking_engine", return_value=_engine(FakeClient())):
        resp = _app().get("/resources", params={"zip_code": "93101"})
    assert resp.status_code == 400


def test_search_endpoint_rejects_half_coordinates():
    with patch.object(resources_router, "get_default_ranking_engine", return_value=_engine(FakeClient())):
        resp = _app().get("/resources", params={"keyword": "food", "latitude": 34.4})
    assert resp.status_code == 400


def test_detail_endpoint_statuses():
    found = FakeClient(detail={"serviceName": "Pantry", "servicePhones": [{"type": "TTY", "number": "711"}]})
    with patch.object(resources_router, "get_default_ranking_engine", return_value=_engine(found)):
        resp = _app().get("/resources/abc/details")
    assert resp.status_code == 200
    assert resp.json()["resource"]["id"] == "abc"
    assert resp.json()["resource"]["name"] == "Pantry"
    assert resp.json()["tty_phone"] == "711"

    missing = FakeClient(detail=None)
    with patch.object(resources_router, "get_default_ranking_engine", return_value=_engine(missing)):
        assert _app().get("/resources/abc/details").status_code == 404

    broken = FakeClient(error=UpstreamUnavailable("down"))
    with patch.object(resources_router, "get_default_ranking_engine", return_value=_engine(broken)):
        assert _app().get("/resources/abc/details").status_code == 502


@patch.object(categories_router, "get_default_taxonomy_resolver", return_value=_resolver())
def test_category_routes(mock_resolver):
    client = _app()

    resp = client.get("/categories")
    assert resp.status_code == 200
    assert resp.json() == [{"id": "food", "name": "Food", "taxonomy_code": "BD-5000", "keywords": ["food"]}]

    resp = client.get("/categories/FOOD/subcategories")
    assert resp.status_code == 200
    assert resp.json()[0]["id"] == "food-pantries"
    assert resp.json()[0]["category_id"] == "food"

    assert client.get("/categories/astrology/subcategories").status_code == 404


@patch.object(location_router, "get_default_zip_geocoder", return_value=_geocoder())
def test_zipcode_route(mock_geocoder):
    client = _app()

    resp = client.get("/location/zipcode/93101")
    assert resp.status_code == 200
    assert resp.json()["city"] == "Santa Barbara"
    assert resp.json()["latitude"] == 34.41889

    assert client.get("/location/zipcode/99999").status_code == 404
    assert client.get("/location/zipcode/abc").status_code == 400


def test_health_routes():
    from api.main import app

    client = TestClient(app)
    assert client.get("/").json()["status"] == "ok"
    assert client.get("/health").json() == {"status": "healthy"}


def test_importing_app_leaves_root_logger_alone():
    import importlib

    import api.main

    with patch("logging.basicConfig") as mock_basic_config:
        importlib.reload(api.main)

    mock_basic_config.assert_not_called()
