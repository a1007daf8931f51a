from .resource import IResourceRepository
from .member import IMemberRepository
from .positioned_item import IPositionedItemRepository
from .role import IRoleRepository
from .step import IStepRepository

__all__ = [
    "IResourceRepository",
    "IMemberRepository",
    "IPositionedItemRepository",
    "IRoleRepository",
    "IStepRepository",
]
