from tlb_hierarchy.protocols.policies import LRUReplacement


class TLBEntry:
    """
    A single slot of a TLB level. Zeroed (invalid) until filled.
    """
    __slots__ = ("valid", "dirty", "last_access", "vpn", "ppn")

    def __init__(self, valid=False, dirty=False, last_access=0, vpn=0, ppn=0):
        self.valid = valid
        self.dirty = dirty
        self.last_access = last_access
        self.vpn = vpn
        self.ppn = ppn

    def mark_dirty(self):
        """
        Marks the entry as dirty.
        :return: None
        """
        self.dirty = True

    def fill(self, vpn, ppn, dirty, last_access):
        self.valid = True
        self.vpn = vpn
        self.ppn = ppn
        self.dirty = dirty
        self.last_access = last_access

    def copy_from(self, other):
        """
        Overwrite this slot with the full state of another entry
        :param other: TLBEntry
        :return: None
        """
        self.valid = other.valid
        self.dirty = other.dirty
        self.last_access = other.last_access
        self.vpn = other.vpn
        self.ppn = other.ppn

    def snapshot(self):
        return TLBEntry(self.valid, self.dirty, self.last_access, self.vpn, self.ppn)

    def clear(self):
        self.valid = False
        self.dirty = False
        self.last_access = 0
        self.vpn = 0
        self.ppn = 0

    def __eq__(self, other):
        if not isinstance(other, TLBEntry):
            return NotImplemented
        return (self.valid == other.valid and self.dirty == other.dirty and
                self.last_access == other.last_access and self.vpn == other.vpn and self.ppn == other.ppn)

    def __repr__(self):
        return (f"TLBEntry(valid={self.valid}, dirty={self.dirty}, last_access={self.last_access}, "
                f"vpn={self.vpn:#x}, ppn={self.ppn:#x})")


class TranslationCache:
    """
    A fixed-capacity, fully associative level of translation entries.
    Lookups and victim selection are linear scans over the slots.
    """
    def __init__(self, name, num_entries, latency_ns=0, replacement_policy=None):
        self.name = name
        self.num_entries = num_entries
        self.latency_ns = latency_ns
        self.replacement_policy = replacement_policy or LRUReplacement()
        self.entries = [TLBEntry() for _ in range(self.num_entries)]

        # stats
        self.hits = 0
        self.misses = 0
        self.invalidations = 0

    def __len__(self):
        return self.num_entries

    def __getitem__(self, index):
        return self.entries[index]

    def reset(self):
        """
        Zero every slot and counter
        :return: None
        """
        for entry in self.entries:
            entry.clear()
        self.hits = 0
        self.misses = 0
        self.invalidations = 0

    def lookup(self, vpn):
        """
        Find the slot holding a valid mapping for this vpn
        :param vpn: int
        :return: slot index, or None on a miss
        """
        for i, entry in enumerate(self.entries):
            if entry.valid and entry.vpn == vpn:
                return i
        return None

    def find_victim(self, exclude=None):
        """
        Choose the slot to overwrite next
        :param exclude: optional slot index that must not be chosen
        :return: slot index, or None if no slot is eligible
        """
        return self.replacement_policy.select_victim(self.entries, exclude=exclude)

    def valid_entries(self):
        return [entry for entry in self.entries if entry.valid]

    def occupancy(self):
        return sum(1 for entry in self.entries if entry.valid)

    def get_stats(self):
        """
        Get level stats
        :return: dict of stats
        """
        lookups = self.hits + self.misses
        stats = {"hits": self.hits,
                 "misses": self.misses,
                 "invalidations": self.invalidations,
                 "hit rate": self.hits / lookups if lookups > 0 else 0}
        return stats


class L1TLB(TranslationCache):
    """ Lightweight wrapper around TranslationCache for the first level """
    def __init__(self, config):
        super().__init__("L1", config.l1.num_entries, latency_ns=config.l1.latency_ns)


class L2TLB(TranslationCache):
    """ Lightweight wrapper around TranslationCache for the second level """
    def __init__(self, config):
        super().__init__("L2", config.l2.num_entries, latency_ns=config.l2.latency_ns)
