"""
Rate-limited reference feeds from the SmartOLT API.

Responsible for:
- Fetching ONU details (customer name, OLT name, zone name), 3 calls/hour
- Fetching the zone id → name list, which rarely changes
- Serving both from the TtlCache and only caching well-formed successes,
  so a failed call is retried on the next cycle
"""
import logging

from custom_components.smartolt.cache import TtlCache
from custom_components.smartolt.const import (
    DETAILS_ENDPOINT,
    ZONES_ENDPOINT,
    DETAILS_CACHE_KEY,
    ZONES_CACHE_KEY,
    DETAILS_CACHE_TTL,
    ZONES_CACHE_TTL,
    LIMITED_REQUEST_ATTEMPTS,
)
from custom_components.smartolt.models import OnuDetailRecord, ZoneRecord, as_text
from custom_components.smartolt.requests import fetch_payload, extract_records

_LOGGER = logging.getLogger(__name__)

_DETAIL_FIELDS = (
    "unique_external_id", "name", "olt_id", "olt_name", "board",
    "port", "onu", "zone", "zone_id", "odb_id",
)


def _parse_detail(raw: dict) -> OnuDetailRecord | None:
    """Map a raw details dict onto an OnuDetailRecord, keeping unknown keys in extra."""
    sn = as_text(raw.get("sn"))
    if not sn:
        _LOGGER.debug("Detail entry without serial number, skipping")
        return None
    known = {field: as_text(raw.get(field)) for field in _DETAIL_FIELDS}
    extra = {key: value for key, value in raw.items() if key != "sn" and key not in known}
    return OnuDetailRecord(sn=sn, extra=extra, **known)


def _parse_zone(raw: dict) -> ZoneRecord | None:
    zone_id = as_text(raw.get("id"))
    if not zone_id:
        return None
    return ZoneRecord(
        id=zone_id,
        name=as_text(raw.get("name")),
        imported_date=as_text(raw.get("imported_date")),
        imported_from_olt=as_text(raw.get("imported_from_olt")),
    )


async def fetch_details(base_url: str, headers: dict, cache: TtlCache) -> list[OnuDetailRecord]:
    """
    Fetch details for every configured ONU. Rate limited to 3 calls/hour,
    cached for DETAILS_CACHE_TTL seconds.

    Corresponding CURL command:
    curl -H 'X-Token: TOKEN' 'https://SUBDOMAIN.smartolt.com/api/onu/get_all_onus_details'
    """
    cached = cache.get(DETAILS_CACHE_KEY)
    if cached is not None:
        _LOGGER.debug("Using cached ONU details (%s items)", len(cached))
        return cached

    _LOGGER.info("Fetching ONU details (rate-limited: 3/hour)")
    payload = await fetch_payload(
        base_url, DETAILS_ENDPOINT, headers, max_attempts=LIMITED_REQUEST_ATTEMPTS
    )
    if not payload or not isinstance(payload.get("onus"), list):
        _LOGGER.warning("get_all_onus_details returned no data")
        return []

    details = extract_records(payload, "onus", _parse_detail)
    cache.set(DETAILS_CACHE_KEY, details, DETAILS_CACHE_TTL)
    _LOGGER.info("Cached %s ONU details for %s min", len(details), DETAILS_CACHE_TTL // 60)
    return details


async def fetch_zones(base_url: str, headers: dict, cache: TtlCache) -> list[ZoneRecord]:
    """
    Fetch the zone list, cached for ZONES_CACHE_TTL seconds.

    Corresponding CURL command:
    curl -H 'X-Token: TOKEN' 'https://SUBDOMAIN.smartolt.com/api/system/get_zones'
    """
    cached = cache.get(ZONES_CACHE_KEY)
    if cached is not None:
        return cached

    payload = await fetch_payload(base_url, ZONES_ENDPOINT, headers)
    if not payload or not isinstance(payload.get("response"), list):
        return []

    zones = extract_records(payload, "response", _parse_zone)
    cache.set(ZONES_CACHE_KEY, zones, ZONES_CACHE_TTL)
    _LOGGER.debug("Cached %s zones", len(zones))
    return zones
