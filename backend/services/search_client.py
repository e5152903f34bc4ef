"""
HTTP client for the National 211 resource search API.

The upstream is loosely specified and known to be flaky: every transport,
status, or decoding problem surfaces as UpstreamUnavailable so callers can
degrade to an empty result set.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from domain.models import CoordLocation, SearchLocation, ZipLocation
from settings import settings

logger = logging.getLogger(__name__)

SEARCH_PATH = "search/keyword"
DETAIL_PATH = "query/service-at-location-details"
_logged_missing_key = False


class UpstreamUnavailable(RuntimeError):
    """The upstream could not produce a usable response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def format_location(location: Optional[SearchLocation]) -> tuple[Optional[str], Optional[str]]:
    """Return the upstream (location, locationMode) pair for a spatial filter."""
    if isinstance(location, ZipLocation):
        return location.zip_code.strip(), "Within"
    if isinstance(location, CoordLocation):
        return f"lon:{location.lon}_lat:{location.lat}", "Near"
    return None, None


def extract_results(payload: Any) -> List[Any]:
    """
    Pull the result records out of a decoded search response.

    Accepts `results` or `resources` arrays (or a bare array). A successful
    response without either means zero results. Anything that is not a JSON
    object or array is malformed.
    """
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, dict):
        raise UpstreamUnavailable(f"Unexpected response type {type(payload).__name__}")
    for key in ("results", "resources"):
        value = payload.get(key)
        if isinstance(value, list):
            return value
    return []


class UpstreamSearchClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        *,
        api_key_header: Optional[str] = None,
        method: Optional[str] = None,
        timeout: Optional[float] = None,
        radius_miles: Optional[int] = None,
        page_size: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.NATIONAL_211_API_URL).rstrip("/")
        self.api_key = settings.NATIONAL_211_API_KEY if api_key is None else api_key
        self.api_key_header = api_key_header or settings.NATIONAL_211_API_KEY_HEADER
        self.method = (method or settings.NATIONAL_211_SEARCH_METHOD).upper()
        if self.method not in ("GET", "POST"):
            raise ValueError(f"Unsupported search method {self.method!r}")
        self.timeout = timeout if timeout is not None else settings.NATIONAL_211_TIMEOUT_SECONDS
        self.radius_miles = radius_miles if radius_miles is not None else settings.NATIONAL_211_SEARCH_RADIUS_MILES
        self.page_size = page_size if page_size is not None else settings.NATIONAL_211_PAGE_SIZE
        self._session = session
        # requests.Session is not guaranteed thread-safe; one per worker thread
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
        return session

    @property
    def search_url(self) -> str:
        return f"{self.base_url}/{SEARCH_PATH}"

    def _headers(self) -> Dict[str, str]:
        global _logged_missing_key
        headers = {"Accept": "application/json", "Cache-Control": "no-cache"}
        if self.api_key:
            headers[self.api_key_header] = self.api_key
        elif not _logged_missing_key:
            logger.warning("NATIONAL_211_API_KEY not set; upstream requests will likely be rejected.")
            _logged_missing_key = True
        return headers

    def build_query_params(
        self, term: str, is_code: bool, location: Optional[SearchLocation]
    ) -> Dict[str, str]:
        """Query string for the GET convention."""
        params = {
            "keywords": term,
            "keywordIsTaxonomyCode": "true" if is_code else "false",
            "size": str(self.page_size),
        }
        loc, _ = format_location(location)
        if loc:
            params["location"] = loc
            params["distance"] = str(self.radius_miles)
        return params

    def build_json_body(
        self, term: str, is_code: bool, location: Optional[SearchLocation]
    ) -> Dict[str, Any]:
        """JSON body for the POST convention."""
        body: Dict[str, Any] = {
            "search": term,
            "input": term,
            "keywordIsTaxonomyCode": is_code,
            "size": self.page_size,
        }
        loc, mode = format_location(location)
        if loc:
            body["location"] = loc
            body["locationMode"] = mode
            body["distance"] = self.radius_miles
        return body

    def search(
        self, term: str, is_code: bool, location: Optional[SearchLocation] = None
    ) -> List[Any]:
        """
        Run one search against the upstream and return its raw records.

        Raises UpstreamUnavailable on timeout, connection errors, non-2xx
        responses, or undecodable JSON.
        """
        headers = self._headers()
        logger.debug(
            "211 search %s term=%r is_code=%s location=%s", self.method, term, is_code, location
        )
        try:
            if self.method == "POST":
                resp = self.session.post(
                    self.search_url,
                    json=self.build_json_body(term, is_code, location),
                    headers=headers,
                    timeout=self.timeout,
                )
            else:
                _, mode = format_location(location)
                if mode:
                    # GET carries the location mode as a header
                    headers["locationMode"] = mode
                resp = self.session.get(
                    self.search_url,
                    params=self.build_query_params(term, is_code, location),
                    headers=headers,
                    timeout=self.timeout,
                )
        except requests.Timeout as exc:
            raise UpstreamUnavailable(f"211 search timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            raise UpstreamUnavailable(f"211 search failed: {exc}") from exc

        if settings.LOG_UPSTREAM_REQUESTS:
            logger.info("211 search %s -> %s", getattr(resp, "url", self.search_url), resp.status_code)

        if not 200 <= resp.status_code < 300:
            raise UpstreamUnavailable(
                f"211 search returned HTTP {resp.status_code}", status_code=resp.status_code
            )
        try:
            payload = resp.json()
        except ValueError as exc:
            raise UpstreamUnavailable("211 search returned malformed JSON") from exc

        results = extract_results(payload)
        logger.debug("211 search returned %d records", len(results))
        return results

    def fetch_detail(self, resource_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch the service-at-location detail record for one resource.

        Returns None when the upstream does not know the id.
        """
        url = f"{self.base_url}/{DETAIL_PATH}/{quote(resource_id, safe='')}"
        headers = self._headers()
        headers["locationMode"] = "manual"
        try:
            resp = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.Timeout as exc:
            raise UpstreamUnavailable(f"211 detail timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            raise UpstreamUnavailable(f"211 detail failed: {exc}") from exc

        if resp.status_code == 404:
            return None
        if not 200 <= resp.status_code < 300:
            raise UpstreamUnavailable(
                f"211 detail returned HTTP {resp.status_code}", status_code=resp.status_code
            )
        try:
            payload = resp.json()
        except ValueError as exc:
            raise UpstreamUnavailable("211 detail returned malformed JSON") from exc
        if not isinstance(payload, dict):
            raise UpstreamUnavailable(f"Unexpected detail type {type(payload).__name__}")
        # Some versions wrap the record as {"resource": {...}}
        inner = payload.get("resource")
        return inner if isinstance(inner, dict) else payload


_default_search_client: Optional[UpstreamSearchClient] = None


def get_default_search_client() -> UpstreamSearchClient:
    global _default_search_client
    if _default_search_client is None:
        _default_search_client = UpstreamSearchClient()
    return _default_search_client
