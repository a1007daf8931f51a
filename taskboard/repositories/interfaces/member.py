from abc import ABC, abstractmethod
from typing import Any, Optional

class IMemberRepository(ABC):
    @abstractmethod
    def find_by_user_and_resource(self, user_id: Any, resource_id: Any) -> Optional[Any]:
        """
        사용자의 해당 리소스 멤버 레코드를 역할(roles)과 함께 조회합니다.
        권한 계산에 필요하므로 roles는 반드시 미리 로드되어 있어야 합니다.
        """
        pass

    @abstractmethod
    def find_by_id(self, member_id: Any, resource_id: Any) -> Optional[Any]:
        """리소스에 속한 특정 멤버를 ID로 조회합니다."""
        pass

    @abstractmethod
    def count_roles(self, resource_id: Any) -> int:
        """리소스에 정의된 역할의 개수를 반환합니다."""
        pass

    @abstractmethod
    def persist(self, member: Any) -> Any:
        """멤버의 역할 할당 변경을 저장합니다."""
        pass
