"""Diagnostics support for SmartOLT."""
from __future__ import annotations

import dataclasses
from typing import Any

from homeassistant import config_entries
from homeassistant.components.diagnostics import async_redact_data
from homeassistant.core import HomeAssistant

from .const import CONF_API_TOKEN, COORDINATES_CACHE_KEY, DETAILS_CACHE_KEY, ZONES_CACHE_KEY
from .coordinator import SmartOltCoordinator

TO_REDACT = {CONF_API_TOKEN}


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, config_entry: config_entries.ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator: SmartOltCoordinator = config_entry.runtime_data
    snapshot = coordinator.data
    cache = coordinator.client.cache
    return {
        "entry_data": async_redact_data(dict(config_entry.data), TO_REDACT),
        "has_credentials": coordinator.client.has_credentials,
        "cached_feeds": {
            key: key in cache
            for key in (DETAILS_CACHE_KEY, ZONES_CACHE_KEY, COORDINATES_CACHE_KEY)
        },
        "is_mock": snapshot.is_mock if snapshot else None,
        "timestamp": snapshot.timestamp.isoformat() if snapshot and snapshot.timestamp else None,
        "stats": dataclasses.asdict(snapshot.stats) if snapshot else None,
        "onus_sample": [onu.as_dict() for onu in snapshot.onus[:20]] if snapshot else [],
    }
