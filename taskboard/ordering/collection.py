"""
Ordered collection manager

부모(보드/프로젝트) 하나에 속한 항목들의 position이 항상 1..N의 빈틈없는 순열이 되도록
유지합니다. 스텝 컬렉션은 "고정된 마지막 항목"(완료 스텝)을 최대 하나 가질 수 있으며,
그 항목은 항상 마지막 위치(N)에 있습니다.

모든 연산은 전달받은 항목 객체의 position(과 고정 플래그)을 직접 수정할 뿐, 저장하지 않습니다.
변경된 컬렉션을 한 트랜잭션으로 저장하는 것은 호출자(서비스)의 책임입니다.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple, Union

from taskboard.services.exceptions import (
    AlreadyPinnedError,
    CannotDisplacePinnedStepError,
    CannotMovePinnedStepError,
    ItemNotFoundError,
    NoOtherStepsError,
    SingleItemCollectionError,
    TargetPositionNotFoundError,
)
from taskboard.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SwapMove:
    item_id: Any
    position: int


@dataclass(frozen=True)
class Pin:
    item_id: Any


@dataclass(frozen=True)
class Recompact:
    pass


ReorderOperation = Union[SwapMove, Pin, Recompact]


def _position_key(item) -> Tuple[bool, int]:
    # position이 아직 없는 항목(새로 만든 항목)은 맨 뒤로 보냅니다.
    return (item.position is None, item.position or 0)


def _updated_key(item) -> datetime:
    return getattr(item, "updated_at", None) or datetime.min


class OrderedCollectionManager:
    """
    Args:
        label: 오류 메시지에 쓸 항목 이름. (예: 'step', 'role')
        parent: 오류 메시지에 쓸 부모 이름. (예: 'board', 'project')
        pinned_attribute: 고정 플래그 속성 이름. (예: 'finish_step') 없으면 고정을 지원하지 않습니다.
    """

    def __init__(self, label: str = "item", parent: str = "collection", pinned_attribute: Optional[str] = None):
        self.label = label
        self.parent = parent
        self.pinned_attribute = pinned_attribute

    # --- 조회 헬퍼 ---

    def is_pinned(self, item) -> bool:
        return bool(self.pinned_attribute and getattr(item, self.pinned_attribute, False))

    def find_pinned(self, items: Sequence) -> Optional[Any]:
        return next((item for item in items if self.is_pinned(item)), None)

    @staticmethod
    def find(items: Sequence, item_id: Any) -> Optional[Any]:
        return next((item for item in items if item.id == item_id), None)

    @staticmethod
    def find_at(items: Sequence, position: int) -> Optional[Any]:
        return next((item for item in items if item.position == position), None)

    @staticmethod
    def is_dense(items: Sequence) -> bool:
        """position이 정확히 {1, ..., N}인지 확인합니다."""
        return sorted(item.position for item in items) == list(range(1, len(items) + 1))

    # --- 연산 ---

    @staticmethod
    def next_position(items: Sequence) -> int:
        """새 항목의 기본 위치: count + 1."""
        return len(items) + 1

    def append(self, items: Sequence, item) -> List:
        """
        새 항목을 컬렉션 끝에 추가합니다.

        고정된 항목이 있으면 새 항목이 그 자리를 차지하고, 고정된 항목은 새 마지막 위치로
        밀려납니다. 따라서 고정된 항목은 항상 마지막에 남습니다.

        Returns:
            새 항목을 포함한, position 순으로 정렬된 컬렉션.

        Raises:
            AlreadyPinnedError: 고정된 항목이 이미 있는데 고정된 새 항목을 추가할 때.
        """
        position = self.next_position(items)
        pinned = self.find_pinned(items)

        if pinned is not None and self.is_pinned(item):
            raise AlreadyPinnedError(f"The {self.parent} already has a finished {self.label}.")

        if pinned is not None:
            item.position = pinned.position
            pinned.position = position
        else:
            item.position = position
        return sorted([*items, item], key=_position_key)

    def swap_move(self, items: Sequence, source_id: Any, target_position: int) -> Tuple[Any, Any]:
        """
        source 항목을 target_position으로 옮기고, 그 위치에 있던 항목을 source의 이전 위치로 보냅니다.
        (전체 이동이 아닌 두 항목의 맞바꿈)

        Returns:
            (source, target) 튜플. 자기 위치로의 이동이면 (source, source)이며 아무것도 바뀌지 않습니다.

        Raises:
            SingleItemCollectionError: 항목이 하나 이하일 때.
            ItemNotFoundError: source 항목이 없을 때.
            CannotMovePinnedStepError: source가 고정된 항목일 때.
            TargetPositionNotFoundError: target_position을 차지한 항목이 없을 때.
            CannotDisplacePinnedStepError: target이 고정된 항목일 때.
        """
        if len(items) <= 1:
            raise SingleItemCollectionError(
                f"The {self.parent} has no other {self.label}s to move positions."
            )

        source = self.find(items, source_id)
        if source is None:
            raise ItemNotFoundError(f"Could not find the {self.label} to move from the {self.parent}.")

        if self.is_pinned(source):
            raise CannotMovePinnedStepError(
                f"You are trying to move a {self.label} that is marked as finished. This {self.label} cannot be moved."
            )

        target = self.find_at(items, target_position)
        if target is None:
            raise TargetPositionNotFoundError(
                f"You are trying to move the {self.label} to a position that is not on the {self.parent}."
            )

        if target is source:
            return source, target

        if self.is_pinned(target):
            raise CannotDisplacePinnedStepError(
                f"You are trying to move a {self.label} to the position of the finished {self.label}. "
                f"This {self.label} cannot be moved."
            )

        source.position, target.position = target.position, source.position
        logger.info(
            "Swapped %s %s <-> %s (positions %s <-> %s)",
            self.label, source.id, target.id, source.position, target.position,
        )
        return source, target

    def recompact(self, items: Sequence, preferred: Optional[Any] = None) -> List:
        """
        현재 position 순으로 정렬한 뒤 1..N을 다시 매깁니다. (삭제 후 빈틈 제거, 명시적 재정렬)

        같은 position이면 preferred 항목(방금 위치를 지정한 항목)이 가장 앞에 오고, 나머지는
        가장 최근에 수정된 항목이 앞에 옵니다. 고정된 항목은 항상 마지막에 둡니다.

        Args:
            items: 재정렬할 컬렉션.
            preferred: 같은 position에서 다른 항목보다 앞에 둘 항목. (없으면 None)

        Returns:
            position 순으로 정렬된 컬렉션.
        """
        ordered = sorted(items, key=_updated_key, reverse=True)
        ordered.sort(key=lambda item: (_position_key(item), item is not preferred))

        pinned = self.find_pinned(ordered)
        if pinned is not None:
            ordered.remove(pinned)
            ordered.append(pinned)

        for index, item in enumerate(ordered, start=1):
            item.position = index
        return ordered

    def pin(self, items: Sequence, target_id: Any) -> Tuple[Any, Optional[Any]]:
        """
        항목을 고정(완료 스텝으로 지정)합니다.

        이전에 고정된 항목이 있으면 고정을 해제하고 두 항목의 위치를 맞바꿉니다.
        없으면 대상 항목을 마지막 위치의 항목과 맞바꿉니다. (이미 마지막이면 이동 없음)

        Returns:
            (새로 고정된 항목, 이전에 고정되어 있던 항목 또는 None)

        Raises:
            NoOtherStepsError: 항목이 하나 이하일 때.
            ItemNotFoundError: 대상 항목이 없을 때.
            AlreadyPinnedError: 대상이 이미 고정된 항목일 때.
        """
        if not self.pinned_attribute:
            raise TypeError(f"{self.label} collections do not support pinning.")

        if len(items) <= 1:
            raise NoOtherStepsError(f"The {self.parent} has no other {self.label}s to mark as finished.")

        target = self.find(items, target_id)
        if target is None:
            raise ItemNotFoundError(
                f"The {self.label} was not found on the {self.parent} to mark as a finished {self.label}."
            )

        if self.is_pinned(target):
            raise AlreadyPinnedError(f"The {self.label} is already marked as finished.")

        previous = self.find_pinned(items)
        if previous is not None:
            setattr(previous, self.pinned_attribute, False)
            target.position, previous.position = previous.position, target.position
        else:
            if not self.is_dense(items):
                self.recompact(items)
            last = self.find_at(items, len(items))
            if last is not target:
                target.position, last.position = last.position, target.position

        setattr(target, self.pinned_attribute, True)
        logger.info(
            "Marked %s %s as finished at position %s (previous: %s)",
            self.label, target.id, target.position, previous.id if previous is not None else None,
        )
        return target, previous

    def reorder(self, items: Sequence, operation: ReorderOperation) -> List:
        """
        reorder(collection, op): 연산 하나를 적용하고 position 순으로 정렬된 컬렉션을 반환합니다.
        """
        if isinstance(operation, SwapMove):
            self.swap_move(items, operation.item_id, operation.position)
        elif isinstance(operation, Pin):
            self.pin(items, operation.item_id)
        elif isinstance(operation, Recompact):
            return self.recompact(items)
        else:
            raise TypeError(f"Unsupported reorder operation: {operation!r}")
        return sorted(items, key=_position_key)
