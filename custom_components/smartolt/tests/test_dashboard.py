"""
Tests for the dashboard feed: per-status counts and the mock-data fallbacks.
"""

from __future__ import annotations

import unittest

from custom_components.smartolt.api.client import SmartOltClient
from custom_components.smartolt.coordinator_data import MapConfig
from custom_components.smartolt.dashboard import build_dashboard, compute_stats
from custom_components.smartolt.models import OnuState

from .test_common import make_client, make_onu, make_status, make_unconfigured

MAP_CONFIG = MapConfig(center_lat=-6.2088, center_lng=106.8456, zoom=12, refresh_interval=30)


class TestComputeStats(unittest.TestCase):

    def test_empty(self):
        stats = compute_stats([])
        self.assertEqual(stats.total, 0)
        self.assertEqual(stats.online, 0)

    def test_counts_every_status(self):
        onus = [
            make_onu("1", OnuState.ONLINE),
            make_onu("2", OnuState.ONLINE),
            make_onu("3", OnuState.LOS),
            make_onu("4", OnuState.OFFLINE),
            make_onu("5", OnuState.POWER_FAIL),
            make_onu("6", OnuState.UNCONFIGURED),
        ]
        stats = compute_stats(onus)
        self.assertEqual(stats.total, 6)
        self.assertEqual(stats.online, 2)
        self.assertEqual(stats.los, 1)
        self.assertEqual(stats.offline, 1)
        self.assertEqual(stats.power_fail, 1)
        self.assertEqual(stats.unconfigured, 1)


class TestBuildDashboard(unittest.IsolatedAsyncioTestCase):

    async def test_live_data(self):
        client = make_client(statuses=[make_status("X1")], unconfigured=[make_unconfigured("Y9")])

        snapshot = await build_dashboard(client, MAP_CONFIG)

        self.assertFalse(snapshot.is_mock)
        self.assertEqual([o.sn for o in snapshot.onus], ["X1", "Y9"])
        self.assertEqual(snapshot.stats.online, 1)
        self.assertEqual(snapshot.stats.unconfigured, 1)
        self.assertEqual(snapshot.map_config, MAP_CONFIG)
        self.assertIsNotNone(snapshot.timestamp.tzinfo)

    async def test_mock_data_without_credentials(self):
        client = SmartOltClient("", "")

        snapshot = await build_dashboard(client, MAP_CONFIG, mock_count=25)

        self.assertTrue(snapshot.is_mock)
        self.assertEqual(len(snapshot.onus), 25)
        self.assertEqual(snapshot.stats.total, 25)

    async def test_mock_fallback_on_empty_result(self):
        client = make_client()

        snapshot = await build_dashboard(client, MAP_CONFIG, mock_count=10)

        self.assertTrue(snapshot.is_mock)
        self.assertEqual(len(snapshot.onus), 10)
        client.fetch_statuses.assert_awaited_once()

    async def test_no_mock_fallback_when_disabled(self):
        client = make_client()

        snapshot = await build_dashboard(client, MAP_CONFIG, mock_fallback=False)

        self.assertFalse(snapshot.is_mock)
        self.assertEqual(snapshot.onus, [])
        self.assertEqual(snapshot.stats.total, 0)
