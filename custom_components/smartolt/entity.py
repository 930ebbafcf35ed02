"""
Shared base for per-ONU entities and the helper that adds entities for ONUs
as they appear in coordinator snapshots.
"""
from __future__ import annotations

import logging
from typing import Callable

from homeassistant import config_entries
from homeassistant.core import callback
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity import Entity
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .coordinator import SmartOltCoordinator
from .models import DashboardOnu

_LOGGER = logging.getLogger(__name__)


class SmartOltOnuEntity(CoordinatorEntity[SmartOltCoordinator]):
    """Entity bound to one ONU id; unavailable while the ONU is missing from the snapshot."""

    def __init__(self, coordinator: SmartOltCoordinator, onu_id: str, suffix: str) -> None:
        super().__init__(coordinator)
        self.onu_id = onu_id
        onu = coordinator.get_onu(onu_id)
        self._device_name = onu.name if onu is not None else onu_id
        self._attr_unique_id = f"smartolt_{coordinator.entry_data['guid']}_{onu_id}_{suffix}"

    @property
    def onu(self) -> DashboardOnu | None:
        return self.coordinator.get_onu(self.onu_id)

    @property
    def available(self) -> bool:
        return super().available and self.onu is not None

    @property
    def device_info(self) -> DeviceInfo | None:
        return self.coordinator.get_device_info(self.onu_id)


def add_onu_entities(
    coordinator: SmartOltCoordinator,
    config_entry: config_entries.ConfigEntry,
    async_add_entities,
    factory: Callable[[SmartOltCoordinator, str], Entity],
) -> None:
    """Add one entity per ONU now, and for every new ONU in later snapshots."""
    known_ids: set[str] = set()

    @callback
    def _add_new_onus() -> None:
        if coordinator.data is None:
            return
        new_ids = [onu.id for onu in coordinator.data.onus if onu.id not in known_ids]
        if not new_ids:
            return
        known_ids.update(new_ids)
        _LOGGER.debug("Adding entities for %s new ONUs", len(new_ids))
        async_add_entities([factory(coordinator, onu_id) for onu_id in new_ids])

    _add_new_onus()
    config_entry.async_on_unload(coordinator.async_add_listener(_add_new_onus))
