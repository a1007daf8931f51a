from abc import abstractmethod
from typing import Any
from .positioned_item import IPositionedItemRepository

class IStepRepository(IPositionedItemRepository):
    @abstractmethod
    def new(self, board_id: Any, **fields) -> Any:
        """보드에 속한 (아직 저장되지 않은) 스텝 모델을 생성합니다."""
        pass
