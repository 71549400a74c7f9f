from .simulator import TLBHierarchySimulator
from .clock import SimulatedClock
from .operations import READ, WRITE
from .data_structures import TLBHierarchy, TLBEntry, TranslationCache, L1TLB, L2TLB, DirtyEviction
from .protocols import AsymmetricWriteBack, StrictWriteBack, LRUReplacement, InvalidationBus

__all__ = ["TLBHierarchySimulator", "SimulatedClock", "READ", "WRITE", "TLBHierarchy", "TLBEntry",
           "TranslationCache", "L1TLB", "L2TLB", "DirtyEviction", "AsymmetricWriteBack", "StrictWriteBack",
           "LRUReplacement", "InvalidationBus"]
