"""
Live dashboard feed: the reconciled ONU list plus per-status counts.

Falls back to mock data when the account has no credentials, or when
SmartOLT returns zero usable ONUs (expired token, no devices, quota
exhausted on every feed).
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from .api.client import SmartOltClient
from .const import MOCK_DEVICE_COUNT
from .coordinator_data import DashboardSnapshot, DashboardStats, MapConfig
from .mock_data import generate_mock_data
from .models import DashboardOnu, OnuState
from .reconcile import reconcile

_LOGGER = logging.getLogger(__name__)


def compute_stats(onus: list[DashboardOnu]) -> DashboardStats:
    counts = {state: 0 for state in OnuState}
    for onu in onus:
        counts[onu.status] += 1
    return DashboardStats(
        total=len(onus),
        online=counts[OnuState.ONLINE],
        los=counts[OnuState.LOS],
        offline=counts[OnuState.OFFLINE],
        power_fail=counts[OnuState.POWER_FAIL],
        unconfigured=counts[OnuState.UNCONFIGURED],
    )


async def build_dashboard(
    client: SmartOltClient,
    map_config: MapConfig,
    mock_count: int = MOCK_DEVICE_COUNT,
    mock_fallback: bool = True,
) -> DashboardSnapshot:
    """Build one dashboard snapshot from SmartOLT, or from mock data."""
    is_mock = False
    if client.has_credentials:
        _LOGGER.debug("Fetching dashboard data from SmartOLT")
        onus = await reconcile(client, map_config.center)
        if not onus and mock_fallback:
            _LOGGER.warning("SmartOLT returned 0 ONUs, falling back to mock data")
            onus = generate_mock_data(mock_count, map_config.center)
            is_mock = True
    else:
        _LOGGER.info("No SmartOLT credentials, using mock data")
        onus = generate_mock_data(mock_count, map_config.center)
        is_mock = True

    return DashboardSnapshot(
        onus=onus,
        stats=compute_stats(onus),
        map_config=map_config,
        timestamp=datetime.now(timezone.utc),
        is_mock=is_mock,
    )
