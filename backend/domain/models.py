"""
Core domain models for the resource finder.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


class SortBy(str, Enum):
    """Requested ordering of search results."""
    RELEVANCE = "relevance"  # upstream order, untouched
    DISTANCE = "distance"
    NAME = "name"


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float


@dataclass(frozen=True)
class ZipLocation:
    """Spatial filter expressed as a postal code."""
    zip_code: str


@dataclass(frozen=True)
class CoordLocation:
    """Spatial filter expressed as a coordinate pair."""
    lat: float
    lon: float


SearchLocation = Union[ZipLocation, CoordLocation]


@dataclass(frozen=True)
class ZipRecord:
    """One row of the static ZIP table."""
    zip_code: str
    lat: float
    lon: float
    city: Optional[str] = None
    state: Optional[str] = None

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(lat=self.lat, lon=self.lon)


@dataclass(frozen=True)
class SubcategoryEntry:
    """A subcategory row; not every subcategory carries its own taxonomy code."""
    subcategory_id: str
    label: str
    taxonomy_code: Optional[str] = None


@dataclass(frozen=True)
class CodeEntry:
    """A category searched upstream by taxonomy code."""
    category_id: str
    label: str
    taxonomy_code: str
    keywords: Tuple[str, ...] = ()
    subcategories: Tuple[SubcategoryEntry, ...] = ()


@dataclass(frozen=True)
class KeywordEntry:
    """A category with no taxonomy code, searched upstream by free text."""
    category_id: str
    label: str
    keywords: Tuple[str, ...]
    subcategories: Tuple[SubcategoryEntry, ...] = ()

    def __post_init__(self) -> None:
        if not self.keywords:
            raise ValueError(f"Keyword category {self.category_id!r} needs at least one keyword")


TaxonomyEntry = Union[CodeEntry, KeywordEntry]


@dataclass(frozen=True)
class ResolvedTerm:
    """The upstream vocabulary term for a category search."""
    term: str
    is_code: bool


@dataclass(frozen=True)
class Resource:
    """
    A social-service resource in the application's canonical shape.

    Built fresh for every search from one upstream record and never persisted.
    `distance_miles` is None when the distance is unknown; it is only ever
    filled in by the ranking engine from ZIP-resolved coordinates.
    """
    id: str
    name: str
    description: str
    category_id: str
    subcategory_id: Optional[str]
    location: str
    zip_code: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    url: Optional[str] = None
    distance_miles: Optional[float] = None
    languages: List[str] = field(default_factory=lambda: ["English"])
    organization_name: Optional[str] = None
    schedules: Optional[str] = None
    accessibility: Optional[str] = None
    eligibility: Optional[str] = None

    @property
    def has_rankable_zip(self) -> bool:
        """True when the postal code can take part in distance ranking."""
        return bool(self.zip_code) and len(self.zip_code) == 5 and self.zip_code.isdigit()


@dataclass(frozen=True)
class ResourceDetail:
    """Extended view of a single resource from the detail endpoint."""
    resource: Resource
    hours: Optional[str] = None
    fees: Optional[str] = None
    application_process: Optional[str] = None
    documents_required: Optional[str] = None
    service_area: Optional[str] = None
    tty_phone: Optional[str] = None
    crisis_phone: Optional[str] = None
    fax_phone: Optional[str] = None
    last_updated: Optional[str] = None


@dataclass(frozen=True)
class SearchRequest:
    """
    Input of a ranked search.

    At least one of `category_id` or `keyword` is required. When both are
    given the category wins. `zip_code` and `coords` both describe the user's
    location; coordinates are preferred for distance, the ZIP for the upstream
    spatial filter.
    """
    category_id: Optional[str] = None
    subcategory_id: Optional[str] = None
    keyword: Optional[str] = None
    zip_code: Optional[str] = None
    coords: Optional[Coordinates] = None
    sort_by: SortBy = SortBy.RELEVANCE
    skip: int = 0
    take: Optional[int] = None

    @property
    def has_location(self) -> bool:
        return bool(self.zip_code and self.zip_code.strip()) or self.coords is not None
