"""
Storage sync: upserts the reconciled ONU list into a persistent store.

The store is handed in as an ``upsert(onu_id, row)`` coroutine. Rows are keyed
by the normalized ONU id and stamped with the time of the sync. OnuStore keeps
them in Home Assistant's .storage directory, one file per config entry.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

from homeassistant.core import HomeAssistant
from homeassistant.helpers.storage import Store

from .api.client import SmartOltClient
from .const import DOMAIN, STORAGE_VERSION
from .models import DashboardOnu, MapCenter
from .reconcile import reconcile

_LOGGER = logging.getLogger(__name__)

Upsert = Callable[[str, dict[str, Any]], Awaitable[None]]


class SyncError(Exception):
    """Raised when SmartOLT returns nothing to sync."""


def build_sync_row(onu: DashboardOnu, now: datetime) -> dict[str, Any]:
    """Map a normalized ONU onto a storage row. Zone and OLT are stored by name."""
    return {
        "sn": onu.sn,
        "name": onu.name,
        "zone_id": onu.zone,
        "zone_name": onu.zone,
        "olt_id": onu.olt_name,
        "olt_name": onu.olt_name,
        "status": onu.status.value,
        "signal": None,
        "latitude": onu.lat,
        "longitude": onu.lng,
        "last_online": now,
    }


async def async_sync_onus(
    client: SmartOltClient,
    center: MapCenter,
    upsert: Upsert,
    now: datetime | None = None,
) -> int:
    """
    Reconcile and upsert every ONU. Returns the number of rows written.

    Raises SyncError when reconciliation returns no ONUs; errors raised by
    upsert propagate to the caller.
    """
    onus = await reconcile(client, center)
    if not onus:
        raise SyncError("No data returned from SmartOLT (or rate limits blocked every feed)")

    _LOGGER.info("Fetched %s ONUs from SmartOLT, starting upsert", len(onus))
    stamp = now or datetime.now(timezone.utc)
    synced = 0
    for onu in onus:
        await upsert(onu.id, build_sync_row(onu, stamp))
        synced += 1
    return synced


class OnuStore:
    """ONU rows persisted under .storage/smartolt.<guid>, keyed by ONU id."""

    def __init__(self, hass: HomeAssistant, guid: str) -> None:
        self._store: Store[dict[str, dict[str, Any]]] = Store(hass, STORAGE_VERSION, f"{DOMAIN}.{guid}")
        self.rows: dict[str, dict[str, Any]] = {}

    async def async_load(self) -> None:
        self.rows = dict(await self._store.async_load() or {})

    async def async_upsert(self, onu_id: str, row: dict[str, Any]) -> None:
        # Stored as JSON
        self.rows[onu_id] = dict(row, last_online=row["last_online"].isoformat())

    async def async_save(self) -> None:
        await self._store.async_save(self.rows)
