from .page_table import PageTable, TranslationResult, EvictedPageTableEntry

__all__ = ["PageTable", "TranslationResult", "EvictedPageTableEntry"]
