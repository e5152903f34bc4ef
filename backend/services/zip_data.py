"""
Bundled ZIP centroid table.

A curated subset: Santa Barbara County first, then the rest of California
and a handful of major metros. Point ZIP_DATA_CSV at a full nationwide file
to replace it.
"""
from typing import Tuple

from domain.models import ZipRecord

# (zip, lat, lon, city, state)
_ROWS: Tuple[Tuple[str, float, float, str, str], ...] = (
    # Santa Barbara County
    ("93101", 34.41889, -119.69810, "Santa Barbara", "CA"),
    ("93105", 34.43611, -119.76972, "Santa Barbara", "CA"),
    ("93110", 34.45833, -119.71667, "Santa Barbara", "CA"),
    ("93111", 34.46389, -119.78750, "Goleta", "CA"),
    ("93117", 34.44167, -119.84444, "Goleta", "CA"),
    ("93454", 34.61639, -120.41417, "Santa Maria", "CA"),
    # Los Angeles County
    ("90210", 34.10237, -118.41047, "Beverly Hills", "CA"),
    ("91303", 34.22834, -118.61842, "Canoga Park", "CA"),
    ("90028", 34.09778, -118.32639, "Hollywood", "CA"),
    ("90401", 34.01750, -118.49611, "Santa Monica", "CA"),
    ("91501", 34.15889, -118.25278, "Burbank", "CA"),
    ("91711", 34.09167, -117.73944, "Claremont", "CA"),
    ("90245", 33.89167, -118.34889, "El Segundo", "CA"),
    ("90740", 33.84722, -118.07028, "Seal Beach", "CA"),
    # Orange County
    ("92602", 33.66000, -117.76000, "Irvine", "CA"),
    ("92637", 33.62889, -117.92917, "Laguna Woods", "CA"),
    # San Diego County
    ("92037", 32.84889, -117.22639, "La Jolla", "CA"),
    ("92101", 32.71611, -117.16028, "San Diego", "CA"),
    # San Francisco Bay Area
    ("94102", 37.78167, -122.41639, "San Francisco", "CA"),
    ("94103", 37.77056, -122.40833, "San Francisco", "CA"),
    ("94301", 37.44194, -122.17306, "Palo Alto", "CA"),
    ("95014", 37.32306, -122.04528, "Cupertino", "CA"),
    # Major US cities
    ("10001", 40.74844, -73.99639, "New York", "NY"),
    ("10010", 40.73946, -73.98194, "New York", "NY"),
    ("20001", 38.90000, -77.00000, "Washington", "DC"),
    ("60601", 41.88389, -87.62278, "Chicago", "IL"),
    ("75201", 32.78306, -96.80667, "Dallas", "TX"),
    ("77002", 29.75889, -95.36778, "Houston", "TX"),
    ("98101", 47.60621, -122.33207, "Seattle", "WA"),
)

BUNDLED_ZIP_RECORDS: Tuple[ZipRecord, ...] = tuple(
    ZipRecord(zip_code=z, lat=lat, lon=lon, city=city, state=state)
    for z, lat, lon, city, state in _ROWS
)
