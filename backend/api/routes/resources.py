"""
Resource search API routes.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from domain.models import Coordinates, Resource, ResourceDetail, SearchRequest, SortBy
from services.normalizer import normalize_detail
from services.ranking import InvalidSearchRequest, effective_sort, get_default_ranking_engine
from services.search_client import UpstreamUnavailable
from settings import settings

router = APIRouter()
logger = logging.getLogger(__name__)


class ResourceResponse(BaseModel):
    id: str
    name: str
    description: str
    category_id: str
    subcategory_id: Optional[str] = None
    location: str
    zip_code: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    url: Optional[str] = None
    distance_miles: Optional[float] = None
    languages: List[str]
    organization_name: Optional[str] = None
    schedules: Optional[str] = None
    accessibility: Optional[str] = None
    eligibility: Optional[str] = None


class ResourceListResponse(BaseModel):
    resources: List[ResourceResponse]
    total: int
    skip: int
    take: int
    sort_by: str


class ResourceDetailResponse(BaseModel):
    resource: ResourceResponse
    hours: Optional[str] = None
    fees: Optional[str] = None
    application_process: Optional[str] = None
    documents_required: Optional[str] = None
    service_area: Optional[str] = None
    tty_phone: Optional[str] = None
    crisis_phone: Optional[str] = None
    fax_phone: Optional[str] = None
    last_updated: Optional[str] = None


def resource_to_response(resource: Resource) -> ResourceResponse:
    """Convert domain Resource to API response."""
    return ResourceResponse(
        id=resource.id,
        name=resource.name,
        description=resource.description,
        category_id=resource.category_id,
        subcategory_id=resource.subcategory_id,
        location=resource.location,
        zip_code=resource.zip_code,
        address=resource.address,
        phone=resource.phone,
        email=resource.email,
        url=resource.url,
        distance_miles=resource.distance_miles,
        languages=list(resource.languages),
        organization_name=resource.organization_name,
        schedules=resource.schedules,
        accessibility=resource.accessibility,
        eligibility=resource.eligibility,
    )


def detail_to_response(detail: ResourceDetail) -> ResourceDetailResponse:
    return ResourceDetailResponse(
        resource=resource_to_response(detail.resource),
        hours=detail.hours,
        fees=detail.fees,
        application_process=detail.application_process,
        documents_required=detail.documents_required,
        service_area=detail.service_area,
        tty_phone=detail.tty_phone,
        crisis_phone=detail.crisis_phone,
        fax_phone=detail.fax_phone,
        last_updated=detail.last_updated,
    )


@router.get("", response_model=ResourceListResponse)
def search_resources(
    category_id: Optional[str] = None,
    subcategory_id: Optional[str] = None,
    keyword: Optional[str] = None,
    zip_code: Optional[str] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    sort_by: SortBy = SortBy.RELEVANCE,
    skip: int = 0,
    take: Optional[int] = None,
):
    """Search resources by category or keyword, optionally near a location."""
    if (latitude is None) != (longitude is None):
        raise HTTPException(status_code=400, detail="latitude and longitude must be given together")
    coords = Coordinates(lat=latitude, lon=longitude) if latitude is not None else None
    request = SearchRequest(
        category_id=category_id,
        subcategory_id=subcategory_id,
        keyword=keyword,
        zip_code=zip_code,
        coords=coords,
        sort_by=sort_by,
        skip=skip,
        take=take if take is not None else settings.RESULTS_DEFAULT_TAKE,
    )

    engine = get_default_ranking_engine()
    try:
        ranked = engine.search_all(request)
    except InvalidSearchRequest as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    page = engine.paginate(ranked, request)
    return ResourceListResponse(
        resources=[resource_to_response(r) for r in page],
        total=len(ranked),
        skip=request.skip,
        take=request.take,
        sort_by=effective_sort(request).value,
    )


@router.get("/{resource_id}/details", response_model=ResourceDetailResponse)
def get_resource_details(resource_id: str):
    """Fetch the extended record for one resource."""
    engine = get_default_ranking_engine()
    try:
        raw = engine.client.fetch_detail(resource_id)
    except UpstreamUnavailable as exc:
        logger.warning("Detail lookup for %s failed: %s", resource_id, exc)
        raise HTTPException(status_code=502, detail="Resource directory unavailable")
    if raw is None:
        raise HTTPException(status_code=404, detail="Resource not found")
    detail = normalize_detail(raw, engine.resolver, fallback_id=resource_id)
    return detail_to_response(detail)
