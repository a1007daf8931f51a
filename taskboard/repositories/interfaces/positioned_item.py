from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

class IPositionedItemRepository(ABC):
    """부모(보드/프로젝트) 안에서 position으로 정렬되는 항목(스텝, 역할)의 저장소."""

    @abstractmethod
    def list_by_parent(self, parent_id: Any) -> List[Any]:
        """부모의 모든 항목을 position 오름차순으로 조회합니다."""
        pass

    @abstractmethod
    def find_by_id(self, item_id: Any, parent_id: Any) -> Optional[Any]:
        """부모에 속한 특정 항목을 조회합니다."""
        pass

    @abstractmethod
    def persist(self, items: Sequence[Any], removed: Sequence[Any] = ()) -> None:
        """
        항목들을 한 트랜잭션으로 저장(upsert)하고, removed의 항목은 삭제합니다.

        위치 재계산 결과가 중간 상태(빈틈/중복)로 노출되지 않도록 반드시 원자적으로 반영해야 합니다.
        """
        pass
