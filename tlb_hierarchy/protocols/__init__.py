from .invalidation_bus import InvalidationBus
from .policies import (ReplacementPolicy, LRUReplacement, DirtyEvictionPolicy, AsymmetricWriteBack,
                       StrictWriteBack)

__all__ = ["InvalidationBus", "ReplacementPolicy", "LRUReplacement", "DirtyEvictionPolicy",
           "AsymmetricWriteBack", "StrictWriteBack"]
