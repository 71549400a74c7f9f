from .level_core import MemoryLevel
from ..caches import L1TLB, L2TLB
from ..result_structures import AccessResult, DirtyEviction
from tlb_hierarchy.operations import check_operation, WRITE
from tlb_hierarchy.protocols.policies import (AsymmetricWriteBack, StrictWriteBack, L1_FILL_EVICTION,
                                              L2_FILL_EVICTION, DEMOTION_OVERWRITE, DEMOTION_DROP,
                                              L1_INVALIDATION, L2_INVALIDATION)


class TLBHierarchy(MemoryLevel):
    """
    Two level inclusive TLB. L1 is searched first, then L2, then the page table walker below.
    L2 hits are promoted into L1 and a dirty L1 victim is demoted into L2.

    All recency bookkeeping uses one access counter shared by both levels, so last_access values
    are comparable across L1 and L2.
    """
    def __init__(self, l1, l2, page_bits, lower_level, backing_store=None, clock=None,
                 dirty_eviction_policy=None, invalidation_bus=None):
        super().__init__("TLB", lower_level)
        self.l1 = l1
        self.l2 = l2
        self.page_bits = page_bits
        self.page_mask = (1 << page_bits) - 1
        self.backing_store = backing_store
        self.clock = clock
        self.dirty_eviction_policy = dirty_eviction_policy or AsymmetricWriteBack()
        if invalidation_bus:
            invalidation_bus.register_listener(self)
        self.init()

    @classmethod
    def from_config(cls, config, lower_level, backing_store=None, clock=None, invalidation_bus=None):
        policy = StrictWriteBack() if config.strict_write_back else AsymmetricWriteBack()
        return cls(L1TLB(config), L2TLB(config), config.page_bits, lower_level, backing_store=backing_store,
                   clock=clock, dirty_eviction_policy=policy, invalidation_bus=invalidation_bus)

    def init(self):
        """
        Zero both levels, every counter and the shared access counter
        :return: None
        """
        self.l1.reset()
        self.l2.reset()
        self.access_counter = 0
        self.write_backs = 0
        self.dirty_evictions = []

    # read-only counters
    @property
    def l1_hits(self):
        return self.l1.hits

    @property
    def l1_misses(self):
        return self.l1.misses

    @property
    def l1_invalidations(self):
        return self.l1.invalidations

    @property
    def l2_hits(self):
        return self.l2.hits

    @property
    def l2_misses(self):
        return self.l2.misses

    @property
    def l2_invalidations(self):
        return self.l2.invalidations

    def _next_access(self):
        self.access_counter += 1
        return self.access_counter

    def _charge(self, nanoseconds):
        if self.clock is not None:
            self.clock.increment(nanoseconds)

    def _write_back(self, entry):
        self.write_backs += 1
        if self.backing_store is not None:
            self.backing_store.write_back(entry.ppn << self.page_bits)

    def _discard(self, level, site, entry):
        """
        Called before a slot holding entry is overwritten or invalidated. Dirty entries are either written
        back or recorded as lost, depending on the site and the dirty eviction policy.
        :param level: TranslationCache that owns the slot
        :param site: eviction site constant
        :param entry: TLBEntry about to be discarded
        :return: None
        """
        if not (entry.valid and entry.dirty):
            return
        if self.dirty_eviction_policy.writes_back(site, entry):
            self._write_back(entry)
        else:
            self.dirty_evictions.append(DirtyEviction(level.name, site, entry.vpn, entry.ppn))

    def split_address(self, virtual_address):
        return virtual_address >> self.page_bits, virtual_address & self.page_mask

    def translate(self, virtual_address, operation):
        """
        Translate a virtual address through L1, L2 and finally the page table
        :param virtual_address: int
        :param operation: "R" or "W"
        :return: int physical address
        """
        return self.lookup(virtual_address, operation).physical_address

    def lookup(self, virtual_address, operation, line=None):
        """
        Same as translate but returns the full AccessResult
        :param virtual_address: int
        :param operation: "R" or "W"
        :param line: optional AccessLine handed to the page table walker on a full miss
        :return: AccessResult
        """
        check_operation(operation)
        vpn, offset = self.split_address(virtual_address)
        result = AccessResult(operation, virtual_address, vpn, offset)

        # L1 lookup
        i = self.l1.lookup(vpn)
        self._charge(self.l1.latency_ns)
        if i is not None:
            self.l1.hits += 1
            entry = self.l1[i]
            entry.last_access = self._next_access()
            if operation == WRITE:
                entry.mark_dirty()
            result.l1_hit = True
            result.ppn = entry.ppn
            result.physical_address = (entry.ppn << self.page_bits) | offset
            return result
        self.l1.misses += 1
        result.l1_hit = False

        # L2 lookup
        i = self.l2.lookup(vpn)
        self._charge(self.l2.latency_ns)
        if i is not None:
            self.l2.hits += 1
            entry = self.l2[i]
            entry.last_access = self._next_access()
            if operation == WRITE:
                entry.mark_dirty()
            self._promote(i)
            result.l2_hit = True
            result.ppn = entry.ppn
            result.physical_address = (entry.ppn << self.page_bits) | offset
            return result
        self.l2.misses += 1
        result.l2_hit = False

        # full miss, walk the page table
        physical_address = self.lower_level.resolve(virtual_address, operation, line)
        ppn = physical_address >> self.page_bits
        self._fill(vpn, ppn, operation == WRITE)
        result.page_table_walk = True
        result.ppn = ppn
        result.physical_address = physical_address
        return result

    def _promote(self, hit_index):
        """
        Copy the L2 entry at hit_index into L1, demoting a dirty L1 victim into L2 first
        :param hit_index: int, L2 slot that produced the hit
        :return: None
        """
        hit_entry = self.l2[hit_index]
        l1_pos = self.l1.find_victim()
        victim = self.l1[l1_pos]
        if victim.valid and victim.dirty:
            self._demote(victim, hit_index)
        victim.copy_from(hit_entry)
        hit_entry.last_access = victim.last_access

    def _demote(self, victim, hit_index):
        # the victim is normally still resident in L2, refresh that slot rather than duplicating it
        l2_pos = self.l2.lookup(victim.vpn)
        if l2_pos is None:
            # never overwrite the entry being promoted
            l2_pos = self.l2.find_victim(exclude=hit_index)
            if l2_pos is None:
                self._discard(self.l1, DEMOTION_DROP, victim)
                return
            self._discard(self.l2, DEMOTION_OVERWRITE, self.l2[l2_pos])
        self.l2[l2_pos].copy_from(victim)

    def _fill(self, vpn, ppn, dirty):
        """
        Insert a translation returned by the page table into both levels with one timestamp
        :param vpn: int
        :param ppn: int
        :param dirty: bool
        :return: None
        """
        stamp = self._next_access()

        l2_pos = self.l2.find_victim()
        self._discard(self.l2, L2_FILL_EVICTION, self.l2[l2_pos])
        self.l2[l2_pos].fill(vpn, ppn, dirty, stamp)

        l1_pos = self.l1.find_victim()
        self._discard(self.l1, L1_FILL_EVICTION, self.l1[l1_pos])
        self.l1[l1_pos].fill(vpn, ppn, dirty, stamp)

    def invalidate(self, vpn):
        """
        Remove a virtual page from both levels. A dirty L2 copy is written back, a dirty L1 copy only
        when the dirty eviction policy says so.
        :param vpn: int virtual page number
        :return: None
        """
        i = self.l1.lookup(vpn)
        if i is not None:
            self.l1.invalidations += 1
            self._discard(self.l1, L1_INVALIDATION, self.l1[i])
            self.l1[i].valid = False

        i = self.l2.lookup(vpn)
        if i is not None:
            self.l2.invalidations += 1
            self._discard(self.l2, L2_INVALIDATION, self.l2[i])
            self.l2[i].valid = False

    def on_page_evicted(self, evicted_entry):
        vpn = getattr(evicted_entry, "vpn", None)
        if vpn is None:
            return
        self.invalidate(vpn)

    def access(self, operation, address, line):
        result = self.lookup(address, operation, line)
        if line is not None:
            line.record(result)
        return result

    def l1_entries(self):
        """
        Copies of every L1 slot, valid or not, in slot order
        :return: list of TLBEntry
        """
        return [entry.snapshot() for entry in self.l1.entries]

    def l2_entries(self):
        return [entry.snapshot() for entry in self.l2.entries]

    def get_stats(self):
        stats = {
            "l1": self.l1.get_stats(),
            "l2": self.l2.get_stats(),
            "write backs": self.write_backs,
            "silent_dirty_evictions": len(self.dirty_evictions),
        }
        return stats
