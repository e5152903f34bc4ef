"""
Resource normalizer.

Turns one loosely-typed upstream record into a canonical Resource. Field
names drift between API versions, so every field is probed through a list
of candidate keys in priority order. Both entry points are total: any input,
including non-dict junk, produces a well-formed result with defaults.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping, Optional

from domain.models import Resource, ResourceDetail
from services.taxonomy import TaxonomyResolver

DEFAULT_NAME = "Unnamed Service"
DEFAULT_DESCRIPTION = "No description available"
DEFAULT_LOCATION = "Unknown location"
DEFAULT_LANGUAGES = ("English",)

TAG_RE = re.compile(r"<[^>]*>")
PHONE_RE = re.compile(r"\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
URL_RE = re.compile(r"https?://\S+")
ZIP_PLUS4_RE = re.compile(r"^(\d{5})-?\d{4}$")
SLUG_RE = re.compile(r"[^a-z0-9]+")

NAME_KEYS = ("nameService", "nameServiceAtLocation", "name", "serviceName", "nameOrganization")
DESCRIPTION_KEYS = (
    "descriptionService",
    "description",
    "serviceDescription",
    "descriptionServiceAtLocation",
    "descriptionOrganization",
)
ID_KEYS = ("idServiceAtLocation", "id", "serviceAtLocationId", "idService", "resourceId")
ZIP_KEYS = ("postalCode", "postalCodePhysical", "zipCode", "zip")


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _text(value: Any) -> Optional[str]:
    """Non-empty trimmed string for scalars, else None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            return str(value)
        except ValueError:
            # ints past the interpreter's digit limit
            return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return None


def _first_text(sources: Iterable[Mapping[str, Any]], keys: Iterable[str]) -> Optional[str]:
    keys = tuple(keys)
    for source in sources:
        for key in keys:
            value = _text(source.get(key))
            if value:
                return value
    return None


def strip_tags(text: str) -> str:
    """Drop anything that looks like an HTML tag. Entities are left alone."""
    return TAG_RE.sub("", text).strip()


def slugify(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    slug = SLUG_RE.sub("-", text.lower()).strip("-")
    return slug or None


def normalize_zip_code(value: Any) -> Optional[str]:
    """
    Clean up an upstream postal code.

    ZIP+4 collapses to its 5-digit prefix; anything else is kept verbatim
    (trimmed) and simply won't take part in distance ranking.
    """
    text = _text(value)
    if text is None:
        return None
    match = ZIP_PLUS4_RE.match(text)
    if match:
        return match.group(1)
    return text


def _address_block(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    for candidate in (
        raw.get("address"),
        _as_mapping(raw.get("location")).get("address"),
        raw.get("physicalAddress"),
        raw.get("location"),
    ):
        if isinstance(candidate, Mapping):
            return candidate
    return {}


def _format_address(block: Mapping[str, Any]) -> Optional[str]:
    street = _first_text([block], ("streetAddress", "streetLine1", "address1", "street"))
    street2 = _first_text([block], ("streetLine2", "address2"))
    city = _first_text([block], ("city",))
    state = _first_text([block], ("stateProvince", "state"))
    postal = _first_text([block], ZIP_KEYS)
    parts = [p for p in (street, street2, city) if p]
    tail = " ".join(p for p in (state, postal) if p)
    if tail:
        parts.append(tail)
    return ", ".join(parts) or None


def _phone_entries(sources: Iterable[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    entries: List[Mapping[str, Any]] = []
    for source in sources:
        for key in ("phones", "servicePhones"):
            value = source.get(key)
            if not isinstance(value, list):
                continue
            for item in value:
                if isinstance(item, Mapping):
                    entries.append(item)
                elif _text(item):
                    entries.append({"number": item})
    return entries


def _phone_number(entry: Mapping[str, Any]) -> Optional[str]:
    return _first_text([entry], ("number", "phoneNumber", "phone"))


def _phone_type(entry: Mapping[str, Any]) -> str:
    return (_first_text([entry], ("type", "phoneType", "name")) or "").lower()


def _typed_phone(entries: Iterable[Mapping[str, Any]], kind: str) -> Optional[str]:
    for entry in entries:
        if kind in _phone_type(entry):
            number = _phone_number(entry)
            if number:
                return number
    return None


def _main_phone(sources: List[Mapping[str, Any]]) -> Optional[str]:
    direct = _first_text(sources, ("phone", "phoneNumber", "mainPhone"))
    if direct:
        return direct
    for entry in _phone_entries(sources):
        if any(kind in _phone_type(entry) for kind in ("fax", "tty")):
            continue
        number = _phone_number(entry)
        if number:
            return number
    return None


def _languages(sources: Iterable[Mapping[str, Any]]) -> List[str]:
    for source in sources:
        for key in ("languagesOffered", "languages", "additionalLanguages"):
            value = source.get(key)
            found: List[str] = []
            if isinstance(value, str):
                found = [part.strip() for part in value.split(",") if part.strip()]
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, Mapping):
                        item = item.get("language") or item.get("name")
                    text = _text(item)
                    if text:
                        found.append(text)
            if found:
                return found
    return list(DEFAULT_LANGUAGES)


def _schedule_text(sources: Iterable[Mapping[str, Any]]) -> Optional[str]:
    sources = list(sources)
    direct = _first_text(sources, ("serviceHoursText", "hoursOfOperation", "hours"))
    if direct:
        return direct
    for source in sources:
        schedules = source.get("schedules")
        if isinstance(schedules, str):
            if schedules.strip():
                return schedules.strip()
            continue
        if not isinstance(schedules, list):
            continue
        lines = []
        for item in schedules:
            if isinstance(item, Mapping):
                text = _first_text([item], ("description", "hours"))
                if not text:
                    day = _text(item.get("days") or item.get("dayOfWeek") or item.get("day"))
                    opens = _text(item.get("opensAt") or item.get("open"))
                    closes = _text(item.get("closesAt") or item.get("close"))
                    if day and opens and closes:
                        text = f"{day} {opens}-{closes}"
                    else:
                        text = day
            else:
                text = _text(item)
            if text:
                lines.append(text)
        if lines:
            return "; ".join(lines)
    return None


def _eligibility(sources: Iterable[Mapping[str, Any]]) -> Optional[str]:
    for source in sources:
        value = source.get("eligibility")
        text = _text(value)
        if text:
            return text
        if isinstance(value, Mapping):
            text = _first_text([value], ("description", "text"))
            if text:
                return text
            types = value.get("types")
            if isinstance(types, list):
                labels = [t for t in (_text(x) for x in types) if t]
                if labels:
                    return ", ".join(labels)
    return None


def _joined(value: Any) -> Optional[str]:
    """Flatten a string or a list of strings / {value|name} objects."""
    text = _text(value)
    if text:
        return text
    if isinstance(value, list):
        parts = []
        for item in value:
            if isinstance(item, Mapping):
                item = item.get("value") or item.get("name")
            item_text = _text(item)
            if item_text:
                parts.append(item_text)
        return ", ".join(parts) or None
    return None


def _taxonomy_pair(sources: Iterable[Mapping[str, Any]]) -> tuple[Optional[str], Optional[str]]:
    for source in sources:
        entries = source.get("taxonomy")
        if not isinstance(entries, list):
            continue
        for entry in entries:
            entry = _as_mapping(entry)
            code = _first_text([entry], ("taxonomyCode", "code"))
            term = _first_text([entry], ("taxonomyTerm", "term", "name"))
            if code or term:
                return code, term
    return None, None


def _extract(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(0) if match else None


def _extract_url(text: str) -> Optional[str]:
    url = _extract(URL_RE, text)
    return url.rstrip(".,;:)") if url else None


def normalize_resource(
    raw: Any,
    resolver: TaxonomyResolver,
    *,
    fallback_id: str = "",
) -> Resource:
    """
    Map one upstream record to a Resource.

    Contact fields use the structured value when present, then the first
    match in the description text, then None. Category comes from the first
    taxonomy code via the resolver's reverse lookup.
    """
    record = _as_mapping(raw)
    detailed = _as_mapping(record.get("detailedService"))
    sources = [record, detailed]

    raw_description = _first_text(sources, DESCRIPTION_KEYS)
    description = strip_tags(raw_description) if raw_description else ""
    description = description or DEFAULT_DESCRIPTION
    # Only scan real upstream text; the placeholder never contains contacts.
    scan_text = description if raw_description else ""

    address_block = _address_block(record)
    zip_code = normalize_zip_code(_first_text([address_block, record], ZIP_KEYS))
    location = (
        _first_text([address_block], ("city",))
        or _first_text(sources, ("nameLocation", "locationName"))
        or _text(record.get("location"))
        or DEFAULT_LOCATION
    )

    code, term = _taxonomy_pair(sources)
    organization = _as_mapping(record.get("organization"))

    return Resource(
        id=_first_text(sources, ID_KEYS) or fallback_id,
        name=_first_text(sources, NAME_KEYS) or DEFAULT_NAME,
        description=description,
        category_id=resolver.category_for_code(code),
        subcategory_id=slugify(term),
        location=location,
        zip_code=zip_code,
        address=_format_address(address_block),
        phone=_main_phone(sources) or _extract(PHONE_RE, scan_text),
        email=_first_text(sources, ("email", "emailService", "emailOrganization"))
        or _extract(EMAIL_RE, scan_text),
        url=_first_text(sources, ("website", "url", "websiteService", "websiteOrganization"))
        or _extract_url(scan_text),
        languages=_languages(sources),
        organization_name=_first_text(sources, ("nameOrganization", "organizationName"))
        or _text(organization.get("name")),
        schedules=_schedule_text(sources),
        accessibility=_first_text(sources, ("disabilitiesAccess", "accessibility")),
        eligibility=_eligibility(sources),
    )


def normalize_detail(raw: Any, resolver: TaxonomyResolver, *, fallback_id: str = "") -> ResourceDetail:
    """Map a service-at-location detail record to a ResourceDetail."""
    record = _as_mapping(raw)
    detailed = _as_mapping(record.get("detailedService"))
    sources = [record, detailed]
    phones = _phone_entries(sources)
    phone_numbers = _as_mapping(record.get("phoneNumbers"))

    return ResourceDetail(
        resource=normalize_resource(record, resolver, fallback_id=fallback_id),
        hours=_schedule_text(sources),
        fees=_first_text(sources, ("fees",)),
        application_process=_first_text(sources, ("applicationProcess",)),
        documents_required=_joined(record.get("documentsRequired") or record.get("documents")),
        service_area=_joined(record.get("serviceAreas")),
        tty_phone=_typed_phone(phones, "tty") or _text(phone_numbers.get("tty")),
        crisis_phone=_typed_phone(phones, "crisis") or _text(phone_numbers.get("crisis")),
        fax_phone=_typed_phone(phones, "fax") or _text(phone_numbers.get("fax")),
        last_updated=_first_text(sources, ("lastUpdated", "dateLastVerified", "dateUpdated")),
    )
