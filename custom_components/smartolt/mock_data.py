"""
Synthetic ONU data for demo mode.

Used when no SmartOLT credentials are configured, or when the API returns no
usable ONUs. Output has the same shape as reconcile() so callers can swap
sources without branching.
"""
from __future__ import annotations

import math
import random

from .const import DEFAULT_CENTER_LAT, DEFAULT_CENTER_LNG, KM_PER_DEGREE, MOCK_DEVICE_COUNT, MOCK_RADIUS_KM
from .models import DashboardOnu, MapCenter, OnuState

# Weighted pool: 16 of 20 slots are Online
STATUS_POOL: list[OnuState] = (
    [OnuState.ONLINE] * 8
    + [OnuState.LOS, OnuState.POWER_FAIL, OnuState.OFFLINE]
    + [OnuState.ONLINE] * 3
    + [OnuState.UNCONFIGURED]
    + [OnuState.ONLINE] * 5
)

OLT_NAMES = ["OLT-JAKARTA-01", "OLT-JAKARTA-02", "OLT-BOGOR-01", "OLT-TANGERANG-01", "OLT-BEKASI-01"]
ZONES = ["Zone-A", "Zone-B", "Zone-C", "Zone-D", "Zone-E"]


def _random_coord(rng: random.Random, center: MapCenter, radius_km: float) -> tuple[float, float]:
    radius = radius_km / KM_PER_DEGREE
    angle = rng.random() * math.pi * 2
    dist = rng.random() * radius
    return center.lat + dist * math.cos(angle), center.lng + dist * math.sin(angle)


def generate_mock_data(
    count: int = MOCK_DEVICE_COUNT,
    center: MapCenter | None = None,
    rng: random.Random | None = None,
) -> list[DashboardOnu]:
    """Generate count ONUs scattered within MOCK_RADIUS_KM of center."""
    if center is None:
        center = MapCenter(DEFAULT_CENTER_LAT, DEFAULT_CENTER_LNG)
    if rng is None:
        rng = random.Random()

    onus = []
    for i in range(count):
        lat, lng = _random_coord(rng, center, MOCK_RADIUS_KM)
        onus.append(DashboardOnu(
            id=f"ONU-{i + 1:05d}",
            sn=f"ZTEG{rng.randrange(99999999):08d}",
            name=f"Customer-{i + 1}",
            status=rng.choice(STATUS_POOL),
            lat=lat,
            lng=lng,
            olt_name=rng.choice(OLT_NAMES),
            zone=rng.choice(ZONES),
            board=str(rng.randrange(4)),
            port=str(rng.randrange(16)),
        ))
    return onus
