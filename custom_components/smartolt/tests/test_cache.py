"""
Tests for TtlCache: storage, lazy expiry, isolation between instances.
"""

from __future__ import annotations

import unittest

from custom_components.smartolt.cache import TtlCache

from .test_common import FakeClock


class TestTtlCache(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.cache = TtlCache(clock=self.clock)

    def test_missing_key_is_absent(self):
        self.assertIsNone(self.cache.get("nope"))

    def test_value_returned_within_ttl(self):
        self.cache.set("zones", ["a"], 60)
        self.clock.advance(59)
        self.assertEqual(self.cache.get("zones"), ["a"])

    def test_value_still_returned_exactly_at_expiry(self):
        self.cache.set("zones", ["a"], 60)
        self.clock.advance(60)
        self.assertEqual(self.cache.get("zones"), ["a"])

    def test_expired_entry_is_absent_and_evicted(self):
        self.cache.set("zones", ["a"], 60)
        self.clock.advance(61)
        self.assertIsNone(self.cache.get("zones"))
        self.assertEqual(len(self.cache), 0)

    def test_expired_entry_kept_until_read(self):
        """No background sweep: expiry only happens on get."""
        self.cache.set("zones", ["a"], 60)
        self.clock.advance(120)
        self.assertEqual(len(self.cache), 1)

    def test_empty_list_is_a_cached_value(self):
        self.cache.set("onu_details", [], 60)
        self.assertEqual(self.cache.get("onu_details"), [])
        self.assertIn("onu_details", self.cache)

    def test_set_overwrites_and_restarts_ttl(self):
        self.cache.set("k", 1, 60)
        self.clock.advance(50)
        self.cache.set("k", 2, 60)
        self.clock.advance(50)
        self.assertEqual(self.cache.get("k"), 2)

    def test_clear(self):
        self.cache.set("a", 1, 60)
        self.cache.set("b", 2, 60)
        self.cache.clear()
        self.assertIsNone(self.cache.get("a"))
        self.assertEqual(len(self.cache), 0)

    def test_instances_are_isolated(self):
        other = TtlCache(clock=self.clock)
        self.cache.set("zones", ["a"], 60)
        self.assertIsNone(other.get("zones"))
