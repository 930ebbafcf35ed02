"""
Platform for ONU status counters.
This module is responsible for setting up one sensor per ONU status (plus a
total), mirroring the counts shown in the dashboard stats bar.
"""
from __future__ import annotations

import logging
from typing import Any

from homeassistant import config_entries
from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.core import HomeAssistant
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .coordinator import SmartOltCoordinator

_LOGGER = logging.getLogger(__name__)

# DashboardStats field → (name, icon)
STATUS_COUNTERS: dict[str, tuple[str, str]] = {
    "total": ("ONUs Total", "mdi:router-network"),
    "online": ("ONUs Online", "mdi:lan-connect"),
    "los": ("ONUs LOS", "mdi:signal-off"),
    "offline": ("ONUs Offline", "mdi:lan-disconnect"),
    "power_fail": ("ONUs Power Fail", "mdi:power-plug-off"),
    "unconfigured": ("ONUs Unconfigured", "mdi:lan-pending"),
}


class SmartOltStatusCountSensor(CoordinatorEntity[SmartOltCoordinator], SensorEntity):
    """Number of ONUs currently in one status."""

    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_native_unit_of_measurement = "ONUs"

    def __init__(self, coordinator: SmartOltCoordinator, stat_key: str) -> None:
        super().__init__(coordinator)
        self._stat_key = stat_key
        name, icon = STATUS_COUNTERS[stat_key]
        entry_name = coordinator.entry_data.get("entry_name") or "SmartOLT"
        self._attr_unique_id = f"smartolt_{coordinator.entry_data['guid']}_{stat_key}"
        self._attr_name = f"{entry_name} {name}"
        self._attr_icon = icon

    @property
    def device_info(self) -> DeviceInfo | None:
        return self.coordinator.get_hub_device_info()

    @property
    def native_value(self) -> int | None:
        if self.coordinator.data is None:
            return None
        return getattr(self.coordinator.data.stats, self._stat_key)

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:
        # Only the total carries the snapshot metadata
        if self._stat_key != "total" or self.coordinator.data is None:
            return None
        snapshot = self.coordinator.data
        return {
            "is_mock": snapshot.is_mock,
            "timestamp": snapshot.timestamp.isoformat() if snapshot.timestamp else None,
            "center_lat": snapshot.map_config.center_lat,
            "center_lng": snapshot.map_config.center_lng,
            "zoom": snapshot.map_config.zoom,
            "refresh_interval": snapshot.map_config.refresh_interval,
        }


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: config_entries.ConfigEntry,
    async_add_entities,
):
    """Add status counters for passed config_entry in HA."""
    _LOGGER.debug("Starting sensor setup for SmartOLT integration")
    coordinator: SmartOltCoordinator = config_entry.runtime_data
    async_add_entities(
        [SmartOltStatusCountSensor(coordinator, stat_key) for stat_key in STATUS_COUNTERS]
    )
