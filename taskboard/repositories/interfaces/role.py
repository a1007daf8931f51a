from abc import abstractmethod
from typing import Any
from .positioned_item import IPositionedItemRepository

class IRoleRepository(IPositionedItemRepository):
    @abstractmethod
    def new(self, parent_id: Any, **fields) -> Any:
        """부모에 속한 (아직 저장되지 않은) 역할 모델을 생성합니다."""
        pass
