import logging
import threading
from unittest.mock import MagicMock

import pytest
import requests

from domain.models import CoordLocation, ZipLocation
from services import search_client
from services.search_client import UpstreamSearchClient, UpstreamUnavailable, extract_results


class DummyResponse:
    def __init__(self, payload=None, status_code=200, bad_json=False):
        self._payload = payload
        self.status_code = status_code
        self._bad_json = bad_json
        self.url = "https://api.example.test/search/keyword"

    def json(self):
        if self._bad_json:
            raise ValueError("Expecting value")
        return self._payload


def _client(method="GET", api_key="secret", session=None):
    return UpstreamSearchClient(
        base_url="https://api.example.test/",
        api_key=api_key,
        api_key_header="Api-Key",
        method=method,
        timeout=10,
        radius_miles=25,
        page_size=50,
        session=session or MagicMock(),
    )


def test_get_search_sends_code_flag_and_zip():
    client = _client()
    client.session.get.return_value = DummyResponse({"results": [{"id": "1"}]})

    results = client.search("BD-5000", True, ZipLocation("93101"))

    assert results == [{"id": "1"}]
    args, kwargs = client.session.get.call_args
    assert args[0] == "https://api.example.test/search/keyword"
    assert kwargs["params"]["keywords"] == "BD-5000"
    assert kwargs["params"]["keywordIsTaxonomyCode"] == "true"
    assert kwargs["params"]["location"] == "93101"
    assert kwargs["params"]["distance"] == "25"
    assert kwargs["headers"]["Api-Key"] == "secret"
    assert kwargs["headers"]["locationMode"] == "Within"
    assert kwargs["timeout"] == 10


def test_get_search_free_text_without_location_is_global():
    client = _client()
    client.session.get.return_value = DummyResponse({"results": []})

    client.search("rent help", False, None)

    _, kwargs = client.session.get.call_args
    assert kwargs["params"]["keywordIsTaxonomyCode"] == "false"
    assert "location" not in kwargs["params"]
    assert "distance" not in kwargs["params"]
    assert "locationMode" not in kwargs["headers"]


def test_post_search_body_with_coordinates():
    client = _client(method="post")
    client.session.post.return_value = DummyResponse({"resources": [{"id": "a"}, {"id": "b"}]})

    results = client.search("LN", True, CoordLocation(lat=34.42, lon=-119.7))

    assert [r["id"] for r in results] == ["a", "b"]
    _, kwargs = client.session.post.call_args
    body = kwargs["json"]
    assert body["search"] == "LN"
    assert body["input"] == "LN"
    assert body["keywordIsTaxonomyCode"] is True
    assert body["location"] == "lon:-119.7_lat:34.42"
    assert body["locationMode"] == "Near"
    assert body["distance"] == 25
    client.session.get.assert_not_called()


def test_unsupported_method_rejected():
    with pytest.raises(ValueError):
        _client(method="PUT")


def test_success_without_results_key_is_empty():
    client = _client()
    client.session.get.return_value = DummyResponse({"count": 0})
    assert client.search("food", False, None) == []


def test_top_level_array_is_accepted():
    assert extract_results([{"id": "x"}]) == [{"id": "x"}]


def test_non_2xx_raises_with_status():
    client = _client()
    client.session.get.return_value = DummyResponse({"error": "nope"}, status_code=503)
    with pytest.raises(UpstreamUnavailable) as excinfo:
        client.search("food", False, None)
    assert excinfo.value.status_code == 503


def test_malformed_json_raises():
    client = _client()
    client.session.get.return_value = DummyResponse(bad_json=True)
    with pytest.raises(UpstreamUnavailable):
        client.search("food", False, None)


def test_unexpected_json_type_raises():
    client = _client()
    client.session.get.return_value = DummyResponse("surprise")
    with pytest.raises(UpstreamUnavailable):
        client.search("food", False, None)


def test_timeout_maps_to_upstream_unavailable():
    client = _client()
    client.session.get.side_effect = requests.Timeout("slow")
    with pytest.raises(UpstreamUnavailable) as excinfo:
        client.search("food", False, None)
    assert excinfo.value.status_code is None


def test_connection_error_maps_to_upstream_unavailable():
    client = _client()
    client.session.get.side_effect = requests.ConnectionError("refused")
    with pytest.raises(UpstreamUnavailable):
        client.search("food", False, None)


def test_missing_api_key_warns_once(monkeypatch, caplog):
    monkeypatch.setattr(search_client, "_logged_missing_key", False)
    client = _client(api_key="")
    client.session.get.return_value = DummyResponse({"results": []})

    with caplog.at_level(logging.WARNING, logger="services.search_client"):
        client.search("food", False, None)
        client.search("food", False, None)

    warnings = [r for r in caplog.records if "NATIONAL_211_API_KEY" in r.getMessage()]
    assert len(warnings) == 1
    _, kwargs = client.session.get.call_args
    assert "Api-Key" not in kwargs["headers"]


def test_fetch_detail_returns_record():
    client = _client()
    client.session.get.return_value = DummyResponse({"serviceName": "Pantry"})

    assert client.fetch_detail("abc 123") == {"serviceName": "Pantry"}
    args, _ = client.session.get.call_args
    assert args[0] == "https://api.example.test/query/service-at-location-details/abc%20123"


def test_fetch_detail_unwraps_resource_envelope():
    client = _client()
    client.session.get.return_value = DummyResponse({"resource": {"serviceName": "Pantry"}})
    assert client.fetch_detail("abc") == {"serviceName": "Pantry"}


def test_fetch_detail_404_is_none_and_500_raises():
    client = _client()
    client.session.get.return_value = DummyResponse(status_code=404)
    assert client.fetch_detail("missing") is None

    client.session.get.return_value = DummyResponse(status_code=500)
    with pytest.raises(UpstreamUnavailable):
        client.fetch_detail("broken")


def test_default_session_is_per_thread():
    client = UpstreamSearchClient(base_url="https://api.example.test", api_key="k")
    main_session = client.session
    assert client.session is main_session

    seen = []
    worker = threading.Thread(target=lambda: seen.append(client.session))
    worker.start()
    worker.join()

    assert isinstance(seen[0], requests.Session)
    assert seen[0] is not main_session


def test_injected_session_is_shared():
    session = MagicMock()
    client = _client(session=session)
    assert client.session is session
