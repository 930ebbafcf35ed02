"""
Live (unlimited) ONU feeds from the SmartOLT API.

Responsible for:
- Fetching the ONU status list, refreshed on every dashboard cycle
- Fetching the unconfigured ONU list
- Mapping the JSON response fields onto the raw record models

Neither feed is cached; both return an empty list on any failure.
"""
import logging

from custom_components.smartolt.const import STATUSES_ENDPOINT, UNCONFIGURED_ENDPOINT
from custom_components.smartolt.models import OnuStatusRecord, UnconfiguredOnuRecord, as_text
from custom_components.smartolt.requests import fetch_payload, extract_records

_LOGGER = logging.getLogger(__name__)


def _parse_status(raw: dict) -> OnuStatusRecord | None:
    """Map a single raw status dict onto an OnuStatusRecord."""
    sn = as_text(raw.get("sn"))
    if not sn:
        _LOGGER.debug("Status entry without serial number, skipping: %s", raw)
        return None
    return OnuStatusRecord(
        sn=sn,
        unique_external_id=as_text(raw.get("unique_external_id")),
        olt_id=as_text(raw.get("olt_id")),
        board=as_text(raw.get("board")),
        port=as_text(raw.get("port")),
        onu=as_text(raw.get("onu")),
        zone_id=as_text(raw.get("zone_id")),
        odb_id=as_text(raw.get("odb_id")),
        status=as_text(raw.get("status")),
        last_status_change=as_text(raw.get("last_status_change")),
    )


def _parse_unconfigured(raw: dict) -> UnconfiguredOnuRecord | None:
    """Map a single raw unconfigured-ONU dict onto an UnconfiguredOnuRecord."""
    sn = as_text(raw.get("sn"))
    if not sn:
        _LOGGER.debug("Unconfigured entry without serial number, skipping: %s", raw)
        return None
    return UnconfiguredOnuRecord(
        sn=sn,
        olt_id=as_text(raw.get("olt_id")),
        olt_name=as_text(raw.get("olt_name")),
        board=as_text(raw.get("board")),
        port=as_text(raw.get("port")),
    )


async def fetch_statuses(base_url: str, headers: dict) -> list[OnuStatusRecord]:
    """
    Fetch the status of every configured ONU. No rate limit.

    Corresponding CURL command:
    curl -H 'X-Token: TOKEN' 'https://SUBDOMAIN.smartolt.com/api/onu/get_onus_statuses'
    """
    payload = await fetch_payload(base_url, STATUSES_ENDPOINT, headers)
    return extract_records(payload, "response", _parse_status)


async def fetch_unconfigured(base_url: str, headers: dict) -> list[UnconfiguredOnuRecord]:
    """
    Fetch ONUs that are registered on an OLT but not yet configured.

    Corresponding CURL command:
    curl -H 'X-Token: TOKEN' 'https://SUBDOMAIN.smartolt.com/api/onu/unconfigured_onus'
    """
    payload = await fetch_payload(base_url, UNCONFIGURED_ENDPOINT, headers)
    return extract_records(payload, "response", _parse_unconfigured)
