"""
Tests for the storage sync adapter.
"""

from __future__ import annotations

import unittest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

from custom_components.smartolt.models import OnuState
from custom_components.smartolt.sync import OnuStore, SyncError, async_sync_onus, build_sync_row

from .test_common import CENTER, make_client, make_detail, make_onu, make_status, make_unconfigured

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
STORE_PATH = "custom_components.smartolt.sync.Store"


class TestBuildSyncRow(unittest.TestCase):

    def test_row_mapping(self):
        onu = make_onu("ONU-1", OnuState.LOS, sn="ZTEG1", name="Budi", olt_name="OLT-MAIN", zone="North", lat=-6.1, lng=106.8)
        self.assertEqual(build_sync_row(onu, NOW), {
            "sn": "ZTEG1",
            "name": "Budi",
            "zone_id": "North",
            "zone_name": "North",
            "olt_id": "OLT-MAIN",
            "olt_name": "OLT-MAIN",
            "status": "LOS",
            "signal": None,
            "latitude": -6.1,
            "longitude": 106.8,
            "last_online": NOW,
        })


class TestSyncOnus(unittest.IsolatedAsyncioTestCase):

    async def test_upserts_every_onu_in_order(self):
        client = make_client(
            statuses=[make_status("X1"), make_status("X2", unique_external_id="EXT-2")],
            unconfigured=[make_unconfigured("Y9")],
            details=[make_detail("X1")],
        )
        upsert = AsyncMock()

        count = await async_sync_onus(client, CENTER, upsert, now=NOW)

        self.assertEqual(count, 3)
        self.assertEqual([c.args[0] for c in upsert.await_args_list], ["X1", "EXT-2", "Y9"])
        first_row = upsert.await_args_list[0].args[1]
        self.assertEqual(first_row["name"], "Budi")
        self.assertEqual(first_row["last_online"], NOW)

    async def test_empty_reconciliation_raises(self):
        upsert = AsyncMock()
        with self.assertRaises(SyncError):
            await async_sync_onus(make_client(), CENTER, upsert)
        upsert.assert_not_awaited()

    async def test_upsert_error_propagates(self):
        client = make_client(statuses=[make_status("X1")])
        upsert = AsyncMock(side_effect=OSError("store down"))
        with self.assertRaises(OSError):
            await async_sync_onus(client, CENTER, upsert)

    async def test_stamps_current_time_by_default(self):
        client = make_client(statuses=[make_status("X1")])
        upsert = AsyncMock()
        await async_sync_onus(client, CENTER, upsert)
        stamp = upsert.await_args.args[1]["last_online"]
        self.assertIsNotNone(stamp.tzinfo)


class TestOnuStore(unittest.IsolatedAsyncioTestCase):

    def _make_store(self, stored=None):
        backing = MagicMock()
        backing.async_load = AsyncMock(return_value=stored)
        backing.async_save = AsyncMock()
        hass = MagicMock()
        with patch(STORE_PATH, return_value=backing) as MockStore:
            store = OnuStore(hass, "test-guid")
        MockStore.assert_called_once_with(hass, 1, "smartolt.test-guid")
        return store, backing

    async def test_load_without_file_starts_empty(self):
        store, _ = self._make_store(stored=None)
        await store.async_load()
        self.assertEqual(store.rows, {})

    async def test_upsert_replaces_row_and_keeps_others(self):
        store, backing = self._make_store(stored={
            "ONU-1": {"sn": "OLD", "last_online": "2024-04-01T00:00:00+00:00"},
            "ONU-9": {"sn": "KEPT", "last_online": "2024-04-01T00:00:00+00:00"},
        })
        await store.async_load()

        await store.async_upsert("ONU-1", build_sync_row(make_onu("ONU-1", sn="NEW"), NOW))
        await store.async_save()

        saved = backing.async_save.await_args.args[0]
        self.assertEqual(set(saved), {"ONU-1", "ONU-9"})
        self.assertEqual(saved["ONU-1"]["sn"], "NEW")
        self.assertEqual(saved["ONU-1"]["last_online"], "2024-05-01T12:00:00+00:00")
        self.assertEqual(saved["ONU-9"]["sn"], "KEPT")

    async def test_sync_through_store(self):
        store, backing = self._make_store()
        await store.async_load()
        client = make_client(statuses=[make_status("X1")], unconfigured=[make_unconfigured("Y9")])

        count = await async_sync_onus(client, CENTER, store.async_upsert, now=NOW)
        await store.async_save()

        self.assertEqual(count, 2)
        self.assertEqual(list(backing.async_save.await_args.args[0]), ["X1", "Y9"])
