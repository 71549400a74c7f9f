from .access_results import AccessResult, AccessLine, DirtyEviction

__all__ = ["AccessResult", "AccessLine", "DirtyEviction"]
