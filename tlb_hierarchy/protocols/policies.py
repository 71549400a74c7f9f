from abc import abstractmethod, ABC


class ReplacementPolicy(ABC):
    """
    Abstract base class for replacement policies
    """
    @abstractmethod
    def select_victim(self, entries, exclude=None):
        pass

class LRUReplacement(ReplacementPolicy):
    """
    Least recently used replacement with a preference for free slots
    """
    def select_victim(self, entries, exclude=None):
        """
        Pick the slot to overwrite. The first invalid slot wins outright, otherwise the slot with the
        smallest last_access is chosen, ties going to the lowest index.
        :param entries: list of TLBEntry
        :param exclude: slot index that may not be chosen
        :return: index of the victim slot, or None if every slot is excluded
        """
        for i, entry in enumerate(entries):
            if i != exclude and not entry.valid:
                return i
        lru_index = None
        oldest_time = None
        for i, entry in enumerate(entries):
            if i == exclude:
                continue
            if oldest_time is None or entry.last_access < oldest_time:
                oldest_time = entry.last_access
                lru_index = i
        return lru_index


# sites where a valid dirty entry can leave the hierarchy
L1_FILL_EVICTION = "l1 fill eviction"
L2_FILL_EVICTION = "l2 fill eviction"
DEMOTION_OVERWRITE = "l2 demotion overwrite"
DEMOTION_DROP = "l1 demotion drop"
L1_INVALIDATION = "l1 invalidation"
L2_INVALIDATION = "l2 invalidation"


class DirtyEvictionPolicy(ABC):
    """
    Abstract base class deciding whether a dirty entry discarded at a given site is written back.
    L2 fill evictions and L2 invalidations always write back and are not consulted here.
    """
    @abstractmethod
    def on_l1_fill_eviction(self, entry):
        pass

    @abstractmethod
    def on_demotion_overwrite(self, entry):
        pass

    @abstractmethod
    def on_demotion_drop(self, entry):
        pass

    @abstractmethod
    def on_l1_invalidation(self, entry):
        pass

    def writes_back(self, site, entry):
        """
        Dispatch on the eviction site
        :param site: one of the site constants in this module
        :param entry: TLBEntry about to be discarded
        :return: bool, True if the entry must be written back first
        """
        if site in (L2_FILL_EVICTION, L2_INVALIDATION):
            return True
        handlers = {
            L1_FILL_EVICTION: self.on_l1_fill_eviction,
            DEMOTION_OVERWRITE: self.on_demotion_overwrite,
            DEMOTION_DROP: self.on_demotion_drop,
            L1_INVALIDATION: self.on_l1_invalidation,
        }
        if site not in handlers:
            raise ValueError(f"Unknown eviction site: {site}")
        return handlers[site](entry)

class AsymmetricWriteBack(DirtyEvictionPolicy):
    """
    Only entries leaving L2 are written back. L1 victims, L2 slots overwritten by a demotion and
    L1 invalidations drop their dirty state.
    """
    def on_l1_fill_eviction(self, entry):
        return False

    def on_demotion_overwrite(self, entry):
        return False

    def on_demotion_drop(self, entry):
        return False

    def on_l1_invalidation(self, entry):
        return False

class StrictWriteBack(DirtyEvictionPolicy):
    """
    Every dirty entry is written back before its slot is reused or invalidated.
    """
    def on_l1_fill_eviction(self, entry):
        return True

    def on_demotion_overwrite(self, entry):
        return True

    def on_demotion_drop(self, entry):
        return True

    def on_l1_invalidation(self, entry):
        return True
