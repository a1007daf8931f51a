from typing import Any, Dict, List, Optional

from taskboard.ordering import OrderedCollectionManager
from taskboard.repositories.interfaces import IStepRepository
from taskboard.services.exceptions import FinishStepConflictError, StepNotFoundError
from taskboard.utils.logger import get_logger

logger = get_logger(__name__)


class StepService:
    """
    보드 스텝(칼럼)의 생성, 수정, 이동, 완료 스텝 지정, 삭제를 관리합니다.

    보드의 스텝 position은 항상 1..N이며, 완료 스텝(finish_step)은 최대 하나이고
    항상 마지막 위치에 있습니다.
    """

    def __init__(self, step_repo: IStepRepository):
        """
        Args:
            step_repo: 스텝 데이터에 접근하기 위한 리포지토리.
        """
        self.step_repo = step_repo
        self.ordering = OrderedCollectionManager(label="step", parent="board", pinned_attribute="finish_step")

    @staticmethod
    def _to_dict(step) -> Dict[str, Any]:
        return {
            "id": step.id,
            "name": step.name,
            "description": step.description,
            "max": step.max,
            "position": step.position,
            "finish_step": bool(step.finish_step),
        }

    def list_steps(self, board_id: Any) -> List[Dict[str, Any]]:
        """보드의 모든 스텝을 position 순으로 조회합니다."""
        return [self._to_dict(s) for s in self.step_repo.list_by_parent(board_id)]

    def create(self, board_id: Any, name: str, description: Optional[str] = None,
               max: Optional[int] = None, finish_step: bool = False) -> Dict[str, Any]:
        """
        새 스텝을 보드 끝에 추가합니다.

        완료 스텝이 이미 있으면 새 스텝은 그 바로 앞에 들어가고 완료 스텝은 마지막에 남습니다.

        Raises:
            FinishStepConflictError: 완료 스텝이 이미 있는데 새 완료 스텝을 만들려고 할 때.
        """
        steps = self.step_repo.list_by_parent(board_id)

        if finish_step and self.ordering.find_pinned(steps) is not None:
            raise FinishStepConflictError(
                "You cannot mark another step as the end of the step flow because it already exists."
            )

        step = self.step_repo.new(
            board_id, name=name, description=description, max=max, finish_step=finish_step
        )
        steps = self.ordering.append(steps, step)
        self.step_repo.persist(steps)

        logger.info("Created step '%s' on board %s at position %s", name, board_id, step.position)
        return self._to_dict(step)

    def update(self, board_id: Any, step_id: Any, name: Optional[str] = None,
               description: Optional[str] = None, max: Optional[int] = None,
               finish_step: Optional[bool] = None) -> Dict[str, Any]:
        """
        스텝의 이름, 설명, 최대 작업 수를 수정합니다.

        finish_step=True이면 해당 스텝을 완료 스텝으로 지정합니다. (mark_as_finished와 동일)

        Raises:
            StepNotFoundError: 해당 스텝을 찾을 수 없을 때.
            ValueError: 완료 스텝의 지정을 직접 해제하려고 할 때.
        """
        steps = self.step_repo.list_by_parent(board_id)
        step = self.ordering.find(steps, step_id)
        if step is None:
            raise StepNotFoundError("Could not find the step to update from the board.")

        if finish_step is False and step.finish_step:
            raise ValueError("A finished step can only be replaced by marking another step as finished.")

        # pin이 실패하면 다른 필드도 바뀌지 않아야 합니다.
        if finish_step and not step.finish_step:
            self.ordering.pin(steps, step.id)
        if name is not None:
            step.name = name
        if description is not None:
            step.description = description
        if max is not None:
            step.max = max

        self.step_repo.persist(steps)
        return self._to_dict(step)

    def move(self, board_id: Any, step_id: Any, position: int) -> List[Dict[str, Any]]:
        """
        스텝을 position으로 옮기고, 그 자리의 스텝과 위치를 맞바꿉니다.

        Returns:
            위치가 바뀐 스텝 목록. (자기 위치로의 이동이면 스텝 하나)
        """
        steps = self.step_repo.list_by_parent(board_id)
        source, target = self.ordering.swap_move(steps, step_id, position)
        if source is target:
            return [self._to_dict(source)]

        self.step_repo.persist([source, target])
        return [self._to_dict(source), self._to_dict(target)]

    def mark_as_finished(self, board_id: Any, step_id: Any) -> List[Dict[str, Any]]:
        """
        스텝을 보드의 완료 스텝으로 지정하고 마지막 위치로 옮깁니다.

        Returns:
            변경된 스텝 목록. 새 완료 스텝이 첫 번째입니다.
        """
        steps = self.step_repo.list_by_parent(board_id)
        self.ordering.pin(steps, step_id)
        self.step_repo.persist(steps)

        steps = sorted(steps, key=lambda s: s.position)
        finished = self.ordering.find(steps, step_id)
        return [self._to_dict(finished)] + [self._to_dict(s) for s in steps if s is not finished]

    def remove(self, board_id: Any, step_id: Any) -> str:
        """
        스텝을 삭제하고 남은 스텝들의 위치를 다시 매깁니다.

        Raises:
            StepNotFoundError: 해당 스텝을 찾을 수 없을 때.
        """
        steps = self.step_repo.list_by_parent(board_id)
        step = self.ordering.find(steps, step_id)
        if step is None:
            raise StepNotFoundError("Could not find the step to remove from the board.")

        remaining = self.ordering.recompact([s for s in steps if s is not step])
        self.step_repo.persist(remaining, removed=[step])

        logger.info("Removed step %s from board %s", step_id, board_id)
        return "The step has been successfully removed."
