from .collection import OrderedCollectionManager, SwapMove, Pin, Recompact

__all__ = ["OrderedCollectionManager", "SwapMove", "Pin", "Recompact"]
