import unittest

from tlb_hierarchy.data_structures.caches.translation_cache import TLBEntry, TranslationCache


class TestTLBEntry(unittest.TestCase):

    def test_starts_zeroed(self):
        entry = TLBEntry()
        self.assertFalse(entry.valid)
        self.assertFalse(entry.dirty)
        self.assertEqual(entry.last_access, 0)

    def test_copy_from_takes_full_state(self):
        src = TLBEntry(valid=True, dirty=True, last_access=12, vpn=0x33, ppn=0x44)
        dst = TLBEntry(valid=True, vpn=1, ppn=2, last_access=3)
        dst.copy_from(src)
        self.assertEqual(dst, src)
        self.assertIsNot(dst, src)

    def test_snapshot_is_independent(self):
        entry = TLBEntry(valid=True, vpn=1, ppn=2, last_access=3)
        snap = entry.snapshot()
        entry.mark_dirty()
        self.assertFalse(snap.dirty)


class TestTranslationCache(unittest.TestCase):

    def setUp(self):
        self.level = TranslationCache("L1", 4, latency_ns=2)

    def test_lookup_ignores_invalid_slots(self):
        self.level[1].fill(7, 70, False, 1)
        self.level[1].valid = False
        self.assertIsNone(self.level.lookup(7))
        self.level[3].fill(7, 71, False, 2)
        self.assertEqual(self.level.lookup(7), 3)

    def test_find_victim_uses_replacement_policy(self):
        for i, stamp in enumerate([4, 2, 8, 6]):
            self.level[i].fill(i, i, False, stamp)
        self.assertEqual(self.level.find_victim(), 1)
        self.assertEqual(self.level.find_victim(exclude=1), 0)

    def test_reset_clears_slots_and_counters(self):
        self.level[0].fill(1, 2, True, 3)
        self.level.hits = 4
        self.level.invalidations = 1
        self.level.reset()
        self.assertEqual(self.level.occupancy(), 0)
        self.assertEqual(self.level.get_stats(),
                         {"hits": 0, "misses": 0, "invalidations": 0, "hit rate": 0})

    def test_hit_rate(self):
        self.level.hits = 3
        self.level.misses = 1
        self.assertAlmostEqual(self.level.get_stats()["hit rate"], 0.75)


if __name__ == "__main__":
    unittest.main()
