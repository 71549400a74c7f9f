from .caches import *
from .mem_levels import *
from .virtual_mem import *
from .result_structures import *

__all__ = ["TLBEntry", "TranslationCache", "L1TLB", "L2TLB", "MainMemoryLevel", "PageTableLevel", "TLBHierarchy",
           "PageTable", "TranslationResult", "EvictedPageTableEntry", "AccessResult", "AccessLine", "DirtyEviction"]
