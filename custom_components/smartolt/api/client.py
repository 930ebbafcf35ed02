"""
SmartOltClient: typed access to every SmartOLT feed the dashboard merges.

Owns the base URL, the API token and the TtlCache that keeps the rate-limited
feeds under quota. Every method is fail-soft: failures are logged by the
feed modules and surface here as empty lists, never as exceptions.
"""
from __future__ import annotations

from custom_components.smartolt.api import coordinates, details, statuses
from custom_components.smartolt.api.auth import get_standard_headers
from custom_components.smartolt.cache import TtlCache
from custom_components.smartolt.models import (
    OnuCoordinateRecord,
    OnuDetailRecord,
    OnuStatusRecord,
    UnconfiguredOnuRecord,
    ZoneRecord,
)


class SmartOltClient:
    """Client for one SmartOLT account."""

    def __init__(self, base_url: str, token: str, cache: TtlCache | None = None) -> None:
        self.base_url = (base_url or "").rstrip("/")
        self.token = token or ""
        self.cache = cache if cache is not None else TtlCache()

    @property
    def has_credentials(self) -> bool:
        return bool(self.base_url and self.token)

    @property
    def headers(self) -> dict:
        return get_standard_headers(self.token)

    async def fetch_statuses(self) -> list[OnuStatusRecord]:
        """Live status of every configured ONU; never cached."""
        return await statuses.fetch_statuses(self.base_url, self.headers)

    async def fetch_details(self) -> list[OnuDetailRecord]:
        """ONU details, cache-first."""
        return await details.fetch_details(self.base_url, self.headers, self.cache)

    async def fetch_zones(self) -> list[ZoneRecord]:
        """Zone list, cache-first."""
        return await details.fetch_zones(self.base_url, self.headers, self.cache)

    async def fetch_unconfigured(self) -> list[UnconfiguredOnuRecord]:
        """Unconfigured ONUs; never cached."""
        return await statuses.fetch_unconfigured(self.base_url, self.headers)

    async def fetch_coordinates(self, olt_ids: list[str] | None = None) -> list[OnuCoordinateRecord]:
        """GPS coordinates, cache-first, with per-OLT fallback driven by olt_ids."""
        return await coordinates.fetch_coordinates(self.base_url, self.headers, self.cache, olt_ids)

    def clear_cache(self) -> None:
        self.cache.clear()
