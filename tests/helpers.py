from tlb_hierarchy.clock import SimulatedClock
from tlb_hierarchy.data_structures.caches.translation_cache import TranslationCache
from tlb_hierarchy.data_structures.mem_levels.tlb_level import TLBHierarchy

PAGE_BITS = 12
PPN_BASE = 0x100


def expected_ppn(vpn):
    return vpn + PPN_BASE


class RecordingWalker:
    """Page table stand-in that maps vpn to vpn + 0x100 and records each walk."""
    def __init__(self):
        self.calls = []

    def resolve(self, virtual_address, operation, line=None):
        self.calls.append((virtual_address, operation))
        vpn = virtual_address >> PAGE_BITS
        offset = virtual_address & ((1 << PAGE_BITS) - 1)
        return (expected_ppn(vpn) << PAGE_BITS) | offset


class RecordingMemory:
    """Backing store stand-in that records write-back addresses."""
    def __init__(self):
        self.written_back = []

    def write_back(self, physical_address):
        self.written_back.append(physical_address)


def make_hierarchy(l1_size=2, l2_size=4, policy=None, l1_latency=1, l2_latency=5):
    walker = RecordingWalker()
    memory = RecordingMemory()
    clock = SimulatedClock()
    tlb = TLBHierarchy(TranslationCache("L1", l1_size, l1_latency), TranslationCache("L2", l2_size, l2_latency),
                       PAGE_BITS, walker, backing_store=memory, clock=clock, dirty_eviction_policy=policy)
    return tlb, walker, memory, clock


def vpns(level):
    return sorted(entry.vpn for entry in level.valid_entries())
