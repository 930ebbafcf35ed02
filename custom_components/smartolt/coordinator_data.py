"""
DashboardSnapshot: immutable snapshot of the SmartOLT dashboard shared with entities.

This is a pure data module with no HA or network dependencies.
"""
from __future__ import annotations

import dataclasses
from datetime import datetime

from .const import DEFAULT_CENTER_LAT, DEFAULT_CENTER_LNG, DEFAULT_REFRESH_INTERVAL, DEFAULT_ZOOM
from .models import DashboardOnu, MapCenter


@dataclasses.dataclass(frozen=True)
class MapConfig:
    center_lat: float = DEFAULT_CENTER_LAT
    center_lng: float = DEFAULT_CENTER_LNG
    zoom: int = DEFAULT_ZOOM
    refresh_interval: int = DEFAULT_REFRESH_INTERVAL  # seconds

    @property
    def center(self) -> MapCenter:
        return MapCenter(self.center_lat, self.center_lng)


@dataclasses.dataclass(frozen=True)
class DashboardStats:
    """ONU counts per status."""

    total: int = 0
    online: int = 0
    los: int = 0
    offline: int = 0
    power_fail: int = 0
    unconfigured: int = 0


@dataclasses.dataclass(frozen=True)
class DashboardSnapshot:
    """
    Typed snapshot of one dashboard refresh.

    Always replace via dataclasses.replace(), never mutate in place.
    """

    # Normalized ONUs, statuses-feed ONUs first
    onus: list[DashboardOnu] = dataclasses.field(default_factory=list)

    stats: DashboardStats = dataclasses.field(default_factory=DashboardStats)

    map_config: MapConfig = dataclasses.field(default_factory=MapConfig)

    # UTC time the snapshot was built; None until the first refresh
    timestamp: datetime | None = None

    # True when onus were generated by mock_data instead of fetched
    is_mock: bool = False

    def get_onu(self, onu_id: str) -> DashboardOnu | None:
        for onu in self.onus:
            if onu.id == onu_id:
                return onu
        return None
