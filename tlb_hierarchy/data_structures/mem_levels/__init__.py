from .main_mem_level import MainMemoryLevel
from .virtual_memory_level import PageTableLevel
from .tlb_level import TLBHierarchy

__all__ = ["MainMemoryLevel", "PageTableLevel", "TLBHierarchy"]
