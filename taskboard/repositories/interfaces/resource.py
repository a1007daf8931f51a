from abc import ABC, abstractmethod
from typing import Any, Optional
from taskboard.permissions.types import ResourceRef

class IResourceRepository(ABC):
    @abstractmethod
    def find_owner_and_id(self, resource_id: Any) -> Optional[ResourceRef]:
        """
        권한 검사 대상 리소스(보드/프로젝트)의 ID와 소유자 ID를 조회합니다.

        Returns:
            ResourceRef. 리소스가 없으면 None.
        """
        pass
