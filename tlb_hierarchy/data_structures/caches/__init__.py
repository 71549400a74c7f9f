from .translation_cache import TLBEntry, TranslationCache, L1TLB, L2TLB

__all__ = ['TLBEntry', 'TranslationCache', 'L1TLB', 'L2TLB']
