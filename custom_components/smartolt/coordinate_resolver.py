"""
Coordinate resolution for ONU map markers.

Chooses, per serial number, between a GPS fix from the coordinates feed and a
synthetic position seeded by the serial number. The synthetic position is
deterministic so markers stay put across refreshes.

Pure functions only: no logging, no I/O.
"""
from __future__ import annotations

import dataclasses
import math
import re

from .const import FALLBACK_RADIUS_KM, KM_PER_DEGREE
from .models import MapCenter, OnuCoordinateRecord

SOURCE_GPS = "gps"
SOURCE_SYNTHETIC = "synthetic"

# Leading decimal number, the part of a string JavaScript's parseFloat would read
_NUMBER_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclasses.dataclass(frozen=True)
class ResolvedCoordinate:
    lat: float
    lng: float
    source: str


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def seeded_hash(seed: str) -> int:
    """
    Signed 32-bit string hash: hash = hash * 31 + code unit, wrapped each step.

    Iterates UTF-16 code units so non-BMP characters hash the same way they
    do in browser-side code reading the same serials.
    """
    encoded = seed.encode("utf-16-le")
    hash_value = 0
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        hash_value = _to_int32(hash_value * 31 + code_unit)
    return hash_value


def seeded_offset(seed: str, radius_km: float) -> tuple[float, float]:
    """
    Return a (dlat, dlng) offset in degrees, at most radius_km from the origin.

    The low 16 bits of the hash pick the angle, the high 16 bits the distance.
    """
    hash_value = seeded_hash(seed)
    radius = radius_km / KM_PER_DEGREE
    angle = ((hash_value & 0xFFFF) / 0xFFFF) * math.pi * 2
    dist = (((hash_value & 0xFFFFFFFF) >> 16) / 0xFFFF) * radius
    return dist * math.cos(angle), dist * math.sin(angle)


def _parse_number(raw) -> float:
    if isinstance(raw, (int, float)):
        return float(raw)
    match = _NUMBER_RE.match(str(raw or ""))
    if match is None:
        return math.nan
    return float(match.group(1))


def parse_coordinate(latitude, longitude) -> tuple[float, float] | None:
    """
    Parse a latitude/longitude pair of decimal strings.

    Returns None unless both are finite numbers; (0, 0) is treated as absent.
    """
    lat = _parse_number(latitude)
    lng = _parse_number(longitude)
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return None
    if lat == 0 and lng == 0:
        return None
    return lat, lng


def build_gps_map(records: list[OnuCoordinateRecord]) -> dict[str, tuple[float, float]]:
    """serial number → usable GPS fix; later records override earlier ones."""
    gps_map = {}
    for record in records:
        fix = parse_coordinate(record.latitude, record.longitude)
        if fix is not None:
            gps_map[record.sn] = fix
    return gps_map


def resolve_coordinate(
    sn: str,
    gps_map: dict[str, tuple[float, float]],
    center: MapCenter,
    radius_km: float = FALLBACK_RADIUS_KM,
) -> ResolvedCoordinate:
    """Resolve the marker position for one ONU. Never fails."""
    fix = gps_map.get(sn)
    if fix is not None:
        return ResolvedCoordinate(fix[0], fix[1], SOURCE_GPS)

    dlat, dlng = seeded_offset(sn, radius_km)
    return ResolvedCoordinate(center.lat + dlat, center.lng + dlng, SOURCE_SYNTHETIC)
