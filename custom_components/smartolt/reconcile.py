"""
Reconciliation of the SmartOLT feeds into one normalized ONU list.

Data flow:
    statuses, unconfigured, details, zones  (fetched concurrently)
        → OLT ids from details → coordinates (bulk, or per-OLT fallback)
        → merge_feeds() → list[DashboardOnu]

The statuses feed is authoritative for identity and liveness; details supply
human-readable names; zones fill in zone names; coordinates place the marker.
Every missing piece has a fallback, so a device present in the statuses or
unconfigured feed always produces exactly one record.
"""
from __future__ import annotations

import asyncio
import dataclasses
import logging

from .api.client import SmartOltClient
from .const import FALLBACK_RADIUS_KM
from .coordinate_resolver import build_gps_map, resolve_coordinate
from .models import (
    FEED_STATES,
    DashboardOnu,
    MapCenter,
    OnuCoordinateRecord,
    OnuDetailRecord,
    OnuState,
    OnuStatusRecord,
    UnconfiguredOnuRecord,
    ZoneRecord,
)

_LOGGER = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class RawFeeds:
    """The five raw feeds a merge works on."""

    statuses: list[OnuStatusRecord] = dataclasses.field(default_factory=list)
    unconfigured: list[UnconfiguredOnuRecord] = dataclasses.field(default_factory=list)
    details: list[OnuDetailRecord] = dataclasses.field(default_factory=list)
    zones: list[ZoneRecord] = dataclasses.field(default_factory=list)
    coordinates: list[OnuCoordinateRecord] = dataclasses.field(default_factory=list)


def coerce_status(raw_status: str) -> OnuState:
    """Map a statuses-feed value onto the closed set; unknown values become Offline."""
    return FEED_STATES.get(raw_status, OnuState.OFFLINE)


def collect_olt_ids(details: list[OnuDetailRecord]) -> list[str]:
    """Distinct non-empty OLT ids in first-seen order."""
    return list(dict.fromkeys(d.olt_id for d in details if d.olt_id))


def build_olt_name_map(details: list[OnuDetailRecord]) -> dict[str, str]:
    """
    OLT id → OLT name. When details disagree on the name for one id, the
    first non-empty name seen wins.
    """
    olt_names: dict[str, str] = {}
    for detail in details:
        if detail.olt_id and detail.olt_name and detail.olt_id not in olt_names:
            olt_names[detail.olt_id] = detail.olt_name
    return olt_names


def merge_feeds(
    feeds: RawFeeds,
    center: MapCenter,
    radius_km: float = FALLBACK_RADIUS_KM,
) -> list[DashboardOnu]:
    """
    Merge the raw feeds into the normalized ONU list.

    Status-feed ONUs come first, then unconfigured ONUs not already present
    in the statuses feed, each in the order its feed returned them.
    """
    detail_map = {d.sn: d for d in feeds.details}
    zone_map = {z.id: z.name for z in feeds.zones}
    gps_map = build_gps_map(feeds.coordinates)
    olt_names = build_olt_name_map(feeds.details)

    onus: list[DashboardOnu] = []

    for status in feeds.statuses:
        detail = detail_map.get(status.sn)
        coord = resolve_coordinate(status.sn, gps_map, center, radius_km)
        onus.append(DashboardOnu(
            id=status.unique_external_id or status.sn,
            sn=status.sn,
            name=(detail and detail.name) or status.sn,
            status=coerce_status(status.status),
            lat=coord.lat,
            lng=coord.lng,
            olt_name=(
                (detail and detail.olt_name)
                or olt_names.get(status.olt_id)
                or f"OLT-{status.olt_id}"
            ),
            zone=(
                (detail and detail.zone)
                or zone_map.get(status.zone_id)
                or f"Zone-{status.zone_id}"
            ),
            board=status.board,
            port=status.port,
        ))

    status_sns = {status.sn for status in feeds.statuses}
    for unconfigured in feeds.unconfigured:
        if unconfigured.sn in status_sns:
            continue
        detail = detail_map.get(unconfigured.sn)
        coord = resolve_coordinate(unconfigured.sn, gps_map, center, radius_km)
        onus.append(DashboardOnu(
            id=unconfigured.sn,
            sn=unconfigured.sn,
            name=(detail and detail.name) or unconfigured.sn,
            status=OnuState.UNCONFIGURED,
            lat=coord.lat,
            lng=coord.lng,
            # The unconfigured feed often sends an empty olt_name
            olt_name=(
                unconfigured.olt_name
                or olt_names.get(unconfigured.olt_id)
                or (detail and detail.olt_name)
                or f"OLT-{unconfigured.olt_id}"
            ),
            # No zone id on this feed, so the zone list cannot be consulted
            zone=(detail and detail.zone) or "Zone-unknown",
            board=unconfigured.board,
            port=unconfigured.port,
        ))

    return onus


async def fetch_feeds(client: SmartOltClient) -> RawFeeds:
    """Fetch all five feeds; coordinates wait for the OLT ids found in details."""
    statuses, unconfigured, details, zones = await asyncio.gather(
        client.fetch_statuses(),
        client.fetch_unconfigured(),
        client.fetch_details(),
        client.fetch_zones(),
    )
    coordinates = await client.fetch_coordinates(collect_olt_ids(details))
    return RawFeeds(
        statuses=statuses,
        unconfigured=unconfigured,
        details=details,
        zones=zones,
        coordinates=coordinates,
    )


async def reconcile(
    client: SmartOltClient,
    center: MapCenter,
    radius_km: float = FALLBACK_RADIUS_KM,
) -> list[DashboardOnu]:
    """Fetch every feed and return the merged ONU list. Never raises on feed failures."""
    feeds = await fetch_feeds(client)
    _LOGGER.debug(
        "Merge: %s statuses, %s unconfigured, %s details, %s zones, %s coords",
        len(feeds.statuses), len(feeds.unconfigured), len(feeds.details),
        len(feeds.zones), len(feeds.coordinates),
    )
    onus = merge_feeds(feeds, center, radius_km)
    if not onus:
        _LOGGER.warning("Reconciliation produced no ONUs")
    return onus
