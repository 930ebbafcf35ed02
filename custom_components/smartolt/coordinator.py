"""
DataUpdateCoordinator for the SmartOLT integration.

Responsibilities:
- Own the single SmartOltClient (and its TtlCache) for the lifetime of a config entry.
- Rebuild the dashboard snapshot every refresh_interval seconds. The update
  tiers fall out of the client's cache:
    Fast: statuses + unconfigured   live on every refresh
    Slow: details + GPS             cached DETAILS/COORDINATES_CACHE_TTL
    Slow: zones                     cached ZONES_CACHE_TTL
- Hand DashboardSnapshot objects to entities.
"""
from __future__ import annotations

import logging
from datetime import timedelta

from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .api.client import SmartOltClient
from .const import (
    DOMAIN,
    VERSION,
    MANUFACTURER,
    CONF_BASE_URL,
    CONF_API_TOKEN,
    CONF_CENTER_LAT,
    CONF_CENTER_LNG,
    CONF_ZOOM,
    CONF_REFRESH_INTERVAL,
    CONF_MOCK_FALLBACK,
    DEFAULT_CENTER_LAT,
    DEFAULT_CENTER_LNG,
    DEFAULT_ZOOM,
    DEFAULT_REFRESH_INTERVAL,
)
from .coordinator_data import DashboardSnapshot, MapConfig
from .dashboard import build_dashboard
from .models import DashboardOnu
from .sync import OnuStore, async_sync_onus

_LOGGER = logging.getLogger(__name__)


class SmartOltCoordinator(DataUpdateCoordinator[DashboardSnapshot]):
    """Coordinator for the SmartOLT integration."""

    def __init__(self, hass: HomeAssistant, entry_data: dict) -> None:
        """Initialize the coordinator from config-entry data."""
        self.map_config = MapConfig(
            center_lat=float(entry_data.get(CONF_CENTER_LAT, DEFAULT_CENTER_LAT)),
            center_lng=float(entry_data.get(CONF_CENTER_LNG, DEFAULT_CENTER_LNG)),
            zoom=int(entry_data.get(CONF_ZOOM, DEFAULT_ZOOM)),
            refresh_interval=int(entry_data.get(CONF_REFRESH_INTERVAL, DEFAULT_REFRESH_INTERVAL)),
        )
        super().__init__(
            hass,
            _LOGGER,
            name=DOMAIN,
            update_interval=timedelta(seconds=self.map_config.refresh_interval),
        )

        self.client = SmartOltClient(
            base_url=entry_data.get(CONF_BASE_URL, ""),
            token=entry_data.get(CONF_API_TOKEN, ""),
        )
        self._entry_data = entry_data
        self._mock_fallback = entry_data.get(CONF_MOCK_FALLBACK, True)

        # Snapshot starts empty; entities must handle it until first refresh
        self.data = DashboardSnapshot(map_config=self.map_config)

    async def _async_update_data(self) -> DashboardSnapshot:
        """Called by HA on every update_interval tick."""
        try:
            return await build_dashboard(
                self.client,
                self.map_config,
                mock_fallback=self._mock_fallback,
            )
        except Exception as exc:  # noqa: BLE001
            raise UpdateFailed(f"SmartOLT dashboard refresh failed: {exc}") from exc

    def get_onu(self, onu_id: str) -> DashboardOnu | None:
        if self.data is None:
            return None
        return self.data.get_onu(onu_id)

    def get_device_info(self, onu_id: str) -> dict | None:
        """Return the HA DeviceInfo dict for the given ONU id."""
        onu = self.get_onu(onu_id)
        if onu is None:
            return None
        return {
            "identifiers": {(DOMAIN, f"{self._entry_data['guid']}_{onu.id}")},
            "name": onu.name or onu.sn,
            "manufacturer": MANUFACTURER,
            "model": "ONU",
            "serial_number": onu.sn,
            "sw_version": VERSION,
        }

    def get_hub_device_info(self) -> dict:
        """DeviceInfo for the account-level entities (status counters)."""
        return {
            "identifiers": {(DOMAIN, self._entry_data["guid"])},
            "name": self._entry_data.get("entry_name") or "SmartOLT",
            "manufacturer": MANUFACTURER,
            "model": "SmartOLT account",
            "sw_version": VERSION,
        }

    async def async_sync_storage(self) -> int:
        """
        Reconcile and upsert every ONU into this entry's store.

        Returns the number of rows written; raises SyncError when nothing came back.
        """
        store = OnuStore(self.hass, self._entry_data["guid"])
        await store.async_load()
        synced = await async_sync_onus(self.client, self.map_config.center, store.async_upsert)
        await store.async_save()
        return synced

    async def async_shutdown(self) -> None:
        """Clean up all resources owned by this coordinator."""
        await super().async_shutdown()
        self.client.clear_cache()

    @property
    def entry_data(self):
        return self._entry_data
