"""Offline ZIP geocoding and great-circle distance helpers.

ZIP codes are resolved against a static centroid table; there is no network
lookup. Build a ZipGeocoder explicitly and hand it to whatever needs it, so
tests can run against a tiny fixture table.
"""

from __future__ import annotations

import csv
import logging
import math
from typing import Dict, Iterable, Optional

from domain.models import Coordinates, ZipRecord

logger = logging.getLogger(__name__)

EARTH_RADIUS_MILES = 3959.0


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in miles between two (lat, lon) points."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    # Float noise can push `a` a hair past 1 for antipodal points.
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def normalize_zip(zip_code: object) -> Optional[str]:
    """Zero-pad a numeric ZIP to five characters; None for anything else."""
    if zip_code is None or isinstance(zip_code, bool):
        return None
    if isinstance(zip_code, int):
        zip_code = str(zip_code)
    if not isinstance(zip_code, str):
        return None
    text = zip_code.strip()
    if not text or len(text) > 5 or not text.isdigit():
        return None
    return text.zfill(5)


class ZipGeocoder:
    """Pure lookup from a 5-digit ZIP to its centroid."""

    def __init__(self, records: Iterable[ZipRecord]):
        self._records: Dict[str, ZipRecord] = {}
        for record in records:
            key = normalize_zip(record.zip_code)
            if key is None:
                logger.warning("Skipping malformed ZIP row %r", record.zip_code)
                continue
            self._records[key] = record

    def __len__(self) -> int:
        return len(self._records)

    @classmethod
    def from_csv(cls, path: str) -> "ZipGeocoder":
        """
        Load a table from a CSV file with a header row.

        Recognized columns: zip (or zip_code), lat (or latitude),
        lon (or lng / longitude), and optional city and state.
        Rows with unparseable coordinates are skipped.
        """
        records = []
        with open(path, newline="", encoding="utf-8") as fh:
            for row in csv.DictReader(fh):
                zip_code = row.get("zip") or row.get("zip_code") or ""
                try:
                    lat = float(row.get("lat") or row.get("latitude") or "")
                    lon = float(row.get("lon") or row.get("lng") or row.get("longitude") or "")
                except ValueError:
                    continue
                records.append(
                    ZipRecord(
                        zip_code=zip_code,
                        lat=lat,
                        lon=lon,
                        city=row.get("city") or None,
                        state=row.get("state") or None,
                    )
                )
        logger.debug("Loaded %d ZIP rows from %s", len(records), path)
        return cls(records)

    def lookup_record(self, zip_code: object) -> Optional[ZipRecord]:
        key = normalize_zip(zip_code)
        if key is None:
            return None
        return self._records.get(key)

    def lookup_zip(self, zip_code: object) -> Optional[Coordinates]:
        """Return the centroid for a ZIP, or None when unknown or malformed."""
        record = self.lookup_record(zip_code)
        return record.coordinates if record else None


_default_zip_geocoder: Optional[ZipGeocoder] = None


def get_default_zip_geocoder() -> ZipGeocoder:
    global _default_zip_geocoder
    if _default_zip_geocoder is None:
        from settings import settings

        if settings.ZIP_DATA_CSV:
            _default_zip_geocoder = ZipGeocoder.from_csv(settings.ZIP_DATA_CSV)
        else:
            from services.zip_data import BUNDLED_ZIP_RECORDS

            _default_zip_geocoder = ZipGeocoder(BUNDLED_ZIP_RECORDS)
    return _default_zip_geocoder
