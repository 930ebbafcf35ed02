"""
Platform for ONU map markers.
This module is responsible for setting up one tracker entity per ONU,
positioned at the coordinate the reconciliation engine resolved for it.
"""
from __future__ import annotations

import logging
from typing import Any

from homeassistant import config_entries
from homeassistant.components.device_tracker import SourceType, TrackerEntity
from homeassistant.core import HomeAssistant

from .coordinator import SmartOltCoordinator
from .entity import SmartOltOnuEntity, add_onu_entities

_LOGGER = logging.getLogger(__name__)


class SmartOltOnuTracker(SmartOltOnuEntity, TrackerEntity):
    """Representation of a single ONU location on the map."""

    def __init__(self, coordinator: SmartOltCoordinator, onu_id: str) -> None:
        super().__init__(coordinator, onu_id, "location")
        self._attr_name = f"{self._device_name} Location"
        self._attr_icon = "mdi:router-network"

    @property
    def latitude(self) -> float | None:
        onu = self.onu
        return onu.lat if onu is not None else None

    @property
    def longitude(self) -> float | None:
        onu = self.onu
        return onu.lng if onu is not None else None

    @property
    def source_type(self) -> SourceType:
        return SourceType.GPS

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:
        onu = self.onu
        if onu is None:
            return None
        return {
            "serial_number": onu.sn,
            "status": onu.status.value,
            "olt_name": onu.olt_name,
            "zone": onu.zone,
            "board": onu.board,
            "port": onu.port,
        }


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: config_entries.ConfigEntry,
    async_add_entities,
):
    """Add ONU trackers for passed config_entry in HA."""
    coordinator: SmartOltCoordinator = config_entry.runtime_data
    add_onu_entities(coordinator, config_entry, async_add_entities, SmartOltOnuTracker)
