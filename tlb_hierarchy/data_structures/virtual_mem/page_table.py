from collections import OrderedDict

from tlb_hierarchy.operations import check_operation, WRITE


class EvictedPageTableEntry:
    """
    Represents an evicted page table entry
    """
    def __init__(self, ppn, vpn, page_offset_bits=0):
        self.ppn = ppn
        self.vpn = vpn
        self.page_offset_bits = page_offset_bits

class TranslationResult:
    """
    Represents the result of a page table translation
    """
    def __init__(self, hit, vpn, ppn, physical_address, offset, evicted_entry=None):
        self.hit = hit
        self.vpn = vpn
        self.ppn = ppn
        self.physical_address = physical_address
        self.evicted_entry = evicted_entry
        self.offset = offset

class PageTable:
    """
    Page table implementation with LRU eviction of physical frames
    """
    def __init__(self, config):
        # page table config
        self.n_virtual_pages = config.pt.n_virtual_pages
        self.n_physical_pages = config.pt.n_physical_pages
        self.page_size = config.pt.page_size
        self.vpn_bits = config.bits.vpn_bits
        self.ppn_bits = config.bits.ppn_bits
        self.page_offset_bits = config.bits.page_offset_bits
        self.virt_bits = self.vpn_bits + self.page_offset_bits
        self.phys_bits = self.ppn_bits + self.page_offset_bits

        # masks
        self._offset_mask = (1 << self.page_offset_bits) - 1
        self._vpn_mask = (1 << self.vpn_bits) - 1
        self._ppn_mask = (1 << self.ppn_bits) - 1
        self._virt_mask = (1 << self.virt_bits) - 1
        self._phys_mask = (1 << self.phys_bits) - 1

        self.reset()

    def reset(self):
        # page table state
        self.vpn_to_ppn = {}
        self.ppn_to_vpn = {}
        self.free_ppns = list(range(self.n_physical_pages))
        # ppn -> None, least recently used first
        self.lru_ppns = OrderedDict()

        # stats for tracking
        self.hits = 0
        self.misses = 0
        self.accesses = 0
        self.reads = 0
        self.writes = 0
        self.disk_references = 0

    def _touch_ppn_mru(self, ppn):
        """
        Mark a ppn as most recently used
        :param ppn: int, the ppn to mark as most recently used
        :return: None
        """
        self.lru_ppns.pop(ppn, None)
        self.lru_ppns[ppn] = None

    def _allocate_ppn(self):
        """
        Allocate a PPN, evicting if necessary
        :return: the allocated ppn and the evicted entry, if any
        """
        # if there are free ppns, use one of those
        if self.free_ppns:
            return self.free_ppns.pop(0), None
        # if no free ppns, lru eviction. allocated ppn is the lru ppn
        victim_ppn, _ = self.lru_ppns.popitem(last=False)
        victim_vpn = self.ppn_to_vpn.pop(victim_ppn)
        del self.vpn_to_ppn[victim_vpn]
        return victim_ppn, EvictedPageTableEntry(victim_ppn, victim_vpn, page_offset_bits=self.page_offset_bits)

    def parse_address(self, address):
        """
        Parse an address into its page offset and page number components
        :param address: int, the address to parse
        :return: int, int; the page offset and vpn
        """
        address = address & self._virt_mask
        offset = address & self._offset_mask
        vpn = (address >> self.page_offset_bits) & self._vpn_mask
        return offset, vpn

    def build_physical_address(self, ppn, offset):
        """
        Build a physical address from a ppn and offset
        :param ppn: int, the ppn
        :param offset: int, the page offset
        :return: int, the physical address
        """
        return ((ppn & self._ppn_mask) << self.page_offset_bits | (offset & self._offset_mask)) & self._phys_mask

    def translate(self, virtual_address, operation="R"):
        """
        Translate a virtual address to a physical address
        :param virtual_address: int, the virtual address to translate
        :param operation: "R" or "W"
        :return: TranslationResult
        """
        check_operation(operation)
        self.accesses += 1
        if operation == WRITE:
            self.writes += 1
        else:
            self.reads += 1
        page_offset, vpn = self.parse_address(virtual_address)
        ppn = self.vpn_to_ppn.get(vpn, None)
        # pt hit
        if ppn is not None:
            self.hits += 1
            self._touch_ppn_mru(ppn)
            physical_address = self.build_physical_address(ppn, page_offset)
            return TranslationResult(True, vpn, ppn, physical_address, page_offset)
        # pt miss
        self.misses += 1
        self.disk_references += 1
        ppn, evicted_entry = self._allocate_ppn()
        self.vpn_to_ppn[vpn] = ppn
        self.ppn_to_vpn[ppn] = vpn
        self._touch_ppn_mru(ppn)
        physical_address = self.build_physical_address(ppn, page_offset)
        return TranslationResult(False, vpn, ppn, physical_address, page_offset, evicted_entry=evicted_entry)

    def get_stats(self):
        """
        Get page table stats
        :return: dict of stats
        """
        stats = {
            "accesses": self.accesses,
            "hits": self.hits,
            "misses": self.misses,
            "hit rate": self.hits / self.accesses if self.accesses > 0 else 0,
            "disk refs": self.disk_references
        }
        return stats
