"""
Ranking engine: the one entry point the HTTP layer calls for searches.

Resolves the search term, issues a single upstream call, normalizes every
record, attaches ZIP-based distances and returns a sorted, paginated page.
Upstream and configuration failures degrade to an empty list; only a
malformed SearchRequest raises.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from domain.models import (
    CoordLocation,
    Coordinates,
    Resource,
    ResolvedTerm,
    SearchLocation,
    SearchRequest,
    SortBy,
    ZipLocation,
)
from services.geocoding import ZipGeocoder, get_default_zip_geocoder, haversine_miles
from services.normalizer import normalize_resource
from services.search_client import UpstreamSearchClient, UpstreamUnavailable, get_default_search_client
from services.taxonomy import TaxonomyResolver, UnknownCategory, get_default_taxonomy_resolver

logger = logging.getLogger(__name__)


class InvalidSearchRequest(ValueError):
    """The request is missing a search dimension or carries bad paging/coordinates."""


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_request(request: SearchRequest) -> None:
    if _blank(request.category_id) and _blank(request.keyword):
        raise InvalidSearchRequest("A category_id or keyword is required")
    if not _blank(request.subcategory_id) and _blank(request.category_id):
        raise InvalidSearchRequest("subcategory_id requires category_id")
    if request.skip < 0:
        raise InvalidSearchRequest("skip must be >= 0")
    if request.take is not None and request.take <= 0:
        raise InvalidSearchRequest("take must be > 0")
    if request.coords is not None:
        if not -90.0 <= request.coords.lat <= 90.0:
            raise InvalidSearchRequest("latitude must be between -90 and 90")
        if not -180.0 <= request.coords.lon <= 180.0:
            raise InvalidSearchRequest("longitude must be between -180 and 180")


def effective_sort(request: SearchRequest) -> SortBy:
    """
    Sort mode actually applied.

    A supplied location turns a relevance request into a distance sort;
    name ordering is always honored.
    """
    if request.has_location and request.sort_by != SortBy.NAME:
        return SortBy.DISTANCE
    return request.sort_by


def sort_by_distance(resources: Sequence[Resource]) -> List[Resource]:
    """Ascending distance; unknown distances trail in their original order."""
    return sorted(
        resources,
        key=lambda r: (r.distance_miles is None, r.distance_miles if r.distance_miles is not None else 0.0),
    )


def sort_by_name(resources: Sequence[Resource]) -> List[Resource]:
    """Alphabetical ignoring case first; lower case wins ties, as locale collation does."""
    return sorted(resources, key=lambda r: (r.name.casefold(), r.name.swapcase()))


def sort_resources(resources: Sequence[Resource], sort_by: SortBy) -> List[Resource]:
    if sort_by == SortBy.DISTANCE:
        return sort_by_distance(resources)
    if sort_by == SortBy.NAME:
        return sort_by_name(resources)
    return list(resources)


class RankingEngine:
    def __init__(
        self,
        resolver: TaxonomyResolver,
        client: UpstreamSearchClient,
        geocoder: ZipGeocoder,
    ):
        self.resolver = resolver
        self.client = client
        self.geocoder = geocoder

    def resolve_term(self, request: SearchRequest) -> ResolvedTerm:
        """
        Pick the upstream term. An explicit category wins over a keyword;
        a keyword that matches a category's keyword list searches as that
        category, otherwise it goes upstream as free text.
        """
        if not _blank(request.category_id):
            return self.resolver.resolve(request.category_id.strip(), request.subcategory_id)
        keyword = request.keyword.strip()
        matched = self.resolver.match_keyword(keyword)
        if matched:
            logger.debug("Keyword %r matched category %s", keyword, matched)
            return self.resolver.resolve(matched)
        return ResolvedTerm(term=keyword, is_code=False)

    @staticmethod
    def upstream_location(request: SearchRequest) -> Optional[SearchLocation]:
        if not _blank(request.zip_code):
            return ZipLocation(zip_code=request.zip_code.strip())
        if request.coords is not None:
            return CoordLocation(lat=request.coords.lat, lon=request.coords.lon)
        return None

    def user_coordinates(self, request: SearchRequest) -> Optional[Coordinates]:
        if request.coords is not None:
            return request.coords
        if not _blank(request.zip_code):
            coords = self.geocoder.lookup_zip(request.zip_code)
            if coords is None:
                logger.debug("User ZIP %r not in table; skipping distances", request.zip_code)
            return coords
        return None

    def attach_distances(self, resources: Sequence[Resource], origin: Coordinates) -> List[Resource]:
        out = []
        for resource in resources:
            coords = self.geocoder.lookup_zip(resource.zip_code) if resource.has_rankable_zip else None
            if coords is None:
                out.append(resource)
                continue
            miles = haversine_miles(origin.lat, origin.lon, coords.lat, coords.lon)
            out.append(replace(resource, distance_miles=miles))
        logger.debug(
            "Resolved distances for %d of %d resources",
            sum(1 for r in out if r.distance_miles is not None),
            len(out),
        )
        return out

    def search_all(self, request: SearchRequest) -> List[Resource]:
        """Full sorted result list before pagination."""
        validate_request(request)
        try:
            resolved = self.resolve_term(request)
        except UnknownCategory as exc:
            logger.warning("No taxonomy entry for category %r; returning no results", exc.category_id)
            return []

        try:
            raw_results = self.client.search(resolved.term, resolved.is_code, self.upstream_location(request))
        except UpstreamUnavailable as exc:
            logger.warning("211 upstream unavailable (status=%s): %s", exc.status_code, exc)
            return []

        resources = [
            normalize_resource(raw, self.resolver, fallback_id=f"upstream-{i}")
            for i, raw in enumerate(raw_results)
        ]

        origin = self.user_coordinates(request)
        if origin is not None:
            resources = self.attach_distances(resources, origin)

        return sort_resources(resources, effective_sort(request))

    @staticmethod
    def paginate(resources: Sequence[Resource], request: SearchRequest) -> List[Resource]:
        if request.take is None:
            return list(resources[request.skip:])
        return list(resources[request.skip:request.skip + request.take])

    def rank(self, request: SearchRequest) -> List[Resource]:
        """Sorted page of resources for the request; [] when the upstream fails."""
        return self.paginate(self.search_all(request), request)


_default_ranking_engine: Optional[RankingEngine] = None


def get_default_ranking_engine() -> RankingEngine:
    global _default_ranking_engine
    if _default_ranking_engine is None:
        _default_ranking_engine = RankingEngine(
            get_default_taxonomy_resolver(),
            get_default_search_client(),
            get_default_zip_geocoder(),
        )
    return _default_ranking_engine
