"""
GPS coordinate fetching from the SmartOLT API.

Responsible for:
- Fetching GPS coordinates for all ONUs from the bulk endpoint (3 calls/hour)
- Falling back to one request per OLT when the bulk endpoint yields nothing;
  some account permission setups answer 403 on the bulk call while the
  per-OLT variant succeeds
- Caching only non-empty results
"""
import logging

from custom_components.smartolt.cache import TtlCache
from custom_components.smartolt.const import (
    GPS_ENDPOINT,
    COORDINATES_CACHE_KEY,
    COORDINATES_CACHE_TTL,
    LIMITED_REQUEST_ATTEMPTS,
)
from custom_components.smartolt.models import OnuCoordinateRecord, as_text
from custom_components.smartolt.requests import fetch_payload, extract_records

_LOGGER = logging.getLogger(__name__)


def _parse_coordinate(raw: dict) -> OnuCoordinateRecord | None:
    sn = as_text(raw.get("sn"))
    if not sn:
        return None
    return OnuCoordinateRecord(
        sn=sn,
        latitude=as_text(raw.get("latitude")),
        longitude=as_text(raw.get("longitude")),
        unique_external_id=as_text(raw.get("unique_external_id")),
        name=as_text(raw.get("name")),
        olt_id=as_text(raw.get("olt_id")),
        olt_name=as_text(raw.get("olt_name")),
        zone=as_text(raw.get("zone")),
    )


async def _fetch_gps(base_url: str, headers: dict, params: dict | None = None) -> list[OnuCoordinateRecord]:
    payload = await fetch_payload(
        base_url, GPS_ENDPOINT, headers, params=params, max_attempts=LIMITED_REQUEST_ATTEMPTS
    )
    return extract_records(payload, "onus", _parse_coordinate)


async def fetch_coordinates(
    base_url: str,
    headers: dict,
    cache: TtlCache,
    olt_ids: list[str] | None = None,
) -> list[OnuCoordinateRecord]:
    """
    Fetch GPS coordinates for all ONUs, cached for COORDINATES_CACHE_TTL seconds.

    Per-OLT fallback requests are issued one after another, never in
    parallel, so they do not trip the same rate limit.

    Corresponding CURL commands:
    curl -H 'X-Token: TOKEN' 'https://SUBDOMAIN.smartolt.com/api/onu/get_all_onus_gps_coordinates'
    curl -H 'X-Token: TOKEN' 'https://SUBDOMAIN.smartolt.com/api/onu/get_all_onus_gps_coordinates?olt_id=OLT_ID'
    """
    cached = cache.get(COORDINATES_CACHE_KEY)
    if cached is not None:
        _LOGGER.debug("Using cached GPS coordinates (%s items)", len(cached))
        return cached

    _LOGGER.info("Fetching GPS coordinates (rate-limited: 3/hour)")
    coordinates = await _fetch_gps(base_url, headers)
    if coordinates:
        cache.set(COORDINATES_CACHE_KEY, coordinates, COORDINATES_CACHE_TTL)
        _LOGGER.info("Cached %s GPS coordinates", len(coordinates))
        return coordinates

    if not olt_ids:
        return []

    _LOGGER.info("Bulk GPS fetch returned nothing, trying per-OLT for %s OLTs", len(olt_ids))
    coordinates = []
    for olt_id in olt_ids:
        coordinates.extend(await _fetch_gps(base_url, headers, params={"olt_id": olt_id}))

    if coordinates:
        cache.set(COORDINATES_CACHE_KEY, coordinates, COORDINATES_CACHE_TTL)
        _LOGGER.info("Cached %s GPS coordinates (per-OLT fallback)", len(coordinates))
    return coordinates
