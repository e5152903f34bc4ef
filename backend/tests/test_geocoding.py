import math

import pytest

from domain.models import Coordinates, ZipRecord
from services.geocoding import (
    EARTH_RADIUS_MILES,
    ZipGeocoder,
    get_default_zip_geocoder,
    haversine_miles,
    normalize_zip,
)


def _geocoder() -> ZipGeocoder:
    return ZipGeocoder(
        [
            ZipRecord("93101", 34.41889, -119.69810, "Santa Barbara", "CA"),
            ZipRecord("00101", 18.0, -66.0),
            ZipRecord("90028", 34.09778, -118.32639, "Hollywood", "CA"),
        ]
    )


def test_haversine_identical_points_is_exactly_zero():
    for lat, lon in [(0.0, 0.0), (34.41889, -119.69810), (-33.9, 151.2), (89.9, 179.9)]:
        assert haversine_miles(lat, lon, lat, lon) == 0


def test_haversine_is_symmetric():
    a = (34.41889, -119.69810)
    b = (40.74844, -73.99639)
    forward = haversine_miles(a[0], a[1], b[0], b[1])
    backward = haversine_miles(b[0], b[1], a[0], a[1])
    assert forward == pytest.approx(backward)
    assert forward > 0


def test_haversine_one_degree_on_equator():
    expected = EARTH_RADIUS_MILES * math.pi / 180
    assert haversine_miles(0.0, 0.0, 0.0, 1.0) == pytest.approx(expected)


def test_haversine_antipodal_points_do_not_blow_up():
    d = haversine_miles(0.0, 0.0, 0.0, 180.0)
    assert d == pytest.approx(EARTH_RADIUS_MILES * math.pi)


def test_normalize_zip_pads_and_rejects():
    assert normalize_zip("101") == "00101"
    assert normalize_zip(" 93101 ") == "93101"
    assert normalize_zip(93101) == "93101"
    assert normalize_zip("abc") is None
    assert normalize_zip("123456") is None
    assert normalize_zip("") is None
    assert normalize_zip(None) is None
    assert normalize_zip(True) is None


def test_lookup_zip_short_input_matches_padded_input():
    geo = _geocoder()
    assert geo.lookup_zip("101") == geo.lookup_zip("00101")
    assert geo.lookup_zip("101") == Coordinates(lat=18.0, lon=-66.0)


def test_lookup_zip_bad_input_returns_none():
    geo = _geocoder()
    assert geo.lookup_zip("abc") is None
    assert geo.lookup_zip("123456") is None
    assert geo.lookup_zip("99999") is None


def test_lookup_record_returns_city_and_state():
    record = _geocoder().lookup_record("93101")
    assert record is not None
    assert record.city == "Santa Barbara"
    assert record.state == "CA"


def test_malformed_rows_are_skipped():
    geo = ZipGeocoder([ZipRecord("nope", 1.0, 1.0), ZipRecord("93101", 34.4, -119.7)])
    assert len(geo) == 1


def test_from_csv_accepts_alternate_headers(tmp_path):
    path = tmp_path / "zips.csv"
    path.write_text(
        "zip_code,latitude,longitude,city,state\n"
        "93101,34.41889,-119.69810,Santa Barbara,CA\n"
        "501,40.81,-73.04,Holtsville,NY\n"
        "99999,not-a-number,1.0,Nowhere,ZZ\n",
        encoding="utf-8",
    )
    geo = ZipGeocoder.from_csv(str(path))
    assert len(geo) == 2
    assert geo.lookup_zip("00501") == Coordinates(lat=40.81, lon=-73.04)
    assert geo.lookup_zip("99999") is None


def test_default_geocoder_uses_bundled_table(monkeypatch):
    from services import geocoding
    from settings import settings

    monkeypatch.setattr(geocoding, "_default_zip_geocoder", None)
    monkeypatch.setattr(settings, "ZIP_DATA_CSV", None)
    geo = get_default_zip_geocoder()
    assert geo.lookup_zip("93101") == Coordinates(lat=34.41889, lon=-119.69810)
