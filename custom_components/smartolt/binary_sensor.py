"""
Platform for ONU connectivity.
One binary sensor per ONU, on while the ONU reports Online.
"""
from __future__ import annotations

from homeassistant import config_entries
from homeassistant.components.binary_sensor import BinarySensorDeviceClass, BinarySensorEntity
from homeassistant.core import HomeAssistant

from .coordinator import SmartOltCoordinator
from .entity import SmartOltOnuEntity, add_onu_entities
from .models import OnuState


class SmartOltOnuConnectivitySensor(SmartOltOnuEntity, BinarySensorEntity):
    """Representation of an ONU link state."""

    _attr_device_class = BinarySensorDeviceClass.CONNECTIVITY

    def __init__(self, coordinator: SmartOltCoordinator, onu_id: str) -> None:
        super().__init__(coordinator, onu_id, "connectivity")
        self._attr_name = f"{self._device_name} Connectivity"

    @property
    def is_on(self) -> bool | None:
        onu = self.onu
        if onu is None:
            return None
        return onu.status == OnuState.ONLINE

    @property
    def icon(self) -> str | None:
        onu = self.onu
        if onu is None:
            return "mdi:lan-pending"
        if onu.status == OnuState.ONLINE:
            return "mdi:lan-connect"
        if onu.status == OnuState.UNCONFIGURED:
            return "mdi:lan-pending"
        return "mdi:lan-disconnect"


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: config_entries.ConfigEntry,
    async_add_entities,
):
    """Add ONU connectivity sensors for passed config_entry in HA."""
    coordinator: SmartOltCoordinator = config_entry.runtime_data
    add_onu_entities(coordinator, config_entry, async_add_entities, SmartOltOnuConnectivitySensor)
