"""
Domain models for the SmartOLT integration.

This module contains pure data classes representing the raw SmartOLT feeds and
the normalized ONU record the dashboard works with.
These classes have no dependencies on HTTP, API logic, or Home Assistant internals.
"""
from __future__ import annotations

import dataclasses
import enum
from typing import Any


class OnuState(str, enum.Enum):
    """Closed set of statuses a normalized ONU can carry."""

    ONLINE = "Online"
    POWER_FAIL = "Power fail"
    LOS = "LOS"
    OFFLINE = "Offline"
    UNCONFIGURED = "Unconfigured"


# Statuses the statuses feed is allowed to report; anything else becomes Offline.
FEED_STATES: dict[str, OnuState] = {
    OnuState.ONLINE.value: OnuState.ONLINE,
    OnuState.POWER_FAIL.value: OnuState.POWER_FAIL,
    OnuState.LOS.value: OnuState.LOS,
    OnuState.OFFLINE.value: OnuState.OFFLINE,
}


@dataclasses.dataclass(frozen=True)
class OnuStatusRecord:
    """Entry of /api/onu/get_onus_statuses (no rate limit)."""

    sn: str
    unique_external_id: str = ""
    olt_id: str = ""
    board: str = ""
    port: str = ""
    onu: str = ""
    zone_id: str = ""
    odb_id: str = ""
    status: str = ""
    last_status_change: str = ""


@dataclasses.dataclass(frozen=True)
class OnuDetailRecord:
    """
    Entry of /api/onu/get_all_onus_details (3 calls/hour).

    Only the fields the merge relies on are typed; every other key the API
    sends is preserved in ``extra``.
    """

    sn: str
    unique_external_id: str = ""
    name: str = ""
    olt_id: str = ""
    olt_name: str = ""
    board: str = ""
    port: str = ""
    onu: str = ""
    zone: str = ""
    zone_id: str = ""
    odb_id: str = ""
    extra: dict[str, Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class ZoneRecord:
    """Entry of /api/system/get_zones."""

    id: str
    name: str = ""
    imported_date: str = ""
    imported_from_olt: str = ""


@dataclasses.dataclass(frozen=True)
class UnconfiguredOnuRecord:
    """Entry of /api/onu/unconfigured_onus; olt_name is often empty."""

    sn: str
    olt_id: str = ""
    olt_name: str = ""
    board: str = ""
    port: str = ""


@dataclasses.dataclass(frozen=True)
class OnuCoordinateRecord:
    """Entry of /api/onu/get_all_onus_gps_coordinates (3 calls/hour)."""

    sn: str
    latitude: str = ""
    longitude: str = ""
    unique_external_id: str = ""
    name: str = ""
    olt_id: str = ""
    olt_name: str = ""
    zone: str = ""


@dataclasses.dataclass(frozen=True)
class MapCenter:
    lat: float
    lng: float


@dataclasses.dataclass(frozen=True)
class DashboardOnu:
    """Normalized ONU record produced by the reconciliation engine."""

    id: str
    sn: str
    name: str
    status: OnuState
    lat: float
    lng: float
    olt_name: str
    zone: str
    board: str | None = None
    port: str | None = None

    def as_dict(self) -> dict[str, Any]:
        data = dataclasses.asdict(self)
        data["status"] = self.status.value
        return data


def as_text(value: Any) -> str:
    """Normalise an upstream scalar (str, int, None) to a string."""
    if value is None:
        return ""
    return str(value)
