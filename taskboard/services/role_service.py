from typing import Any, Dict, List, Optional

from taskboard.ordering import OrderedCollectionManager
from taskboard.permissions.flags import PermissionDomain
from taskboard.permissions.policy import get_policy
from taskboard.repositories.interfaces import IMemberRepository, IRoleRepository
from taskboard.services.exceptions import (
    MemberNotFoundError, RoleAlreadyAssignedError, RoleNotAssignedError, RoleNotFoundError
)
from taskboard.utils.logger import get_logger

logger = get_logger(__name__)


class RoleService:
    """
    보드/프로젝트 역할의 생성, 수정, 삭제, 할당을 관리합니다.

    역할의 position은 부모 안에서 항상 1..N으로 유지되며, 권한 마스크는 저장 전에
    도메인 정책으로 검증됩니다. 보드와 프로젝트는 같은 규칙을 따르므로 하위 클래스는
    도메인만 지정합니다.
    """
    domain: PermissionDomain = None

    def __init__(self, role_repo: IRoleRepository, member_repo: IMemberRepository):
        """
        Args:
            role_repo: 역할 데이터에 접근하기 위한 리포지토리.
            member_repo: 멤버 데이터에 접근하기 위한 리포지토리 (역할 할당/회수용).
        """
        if self.domain is None:
            raise TypeError(
                f"{type(self).__name__} has no permission domain; use BoardRoleService or ProjectRoleService."
            )
        self.role_repo = role_repo
        self.member_repo = member_repo
        self.policy = get_policy(self.domain)
        self.parent = self.domain.value
        self.ordering = OrderedCollectionManager(label="role", parent=self.parent)

    @staticmethod
    def _to_dict(role) -> Dict[str, Any]:
        return {
            "id": role.id,
            "name": role.name,
            "permissions_granted": role.permissions_granted,
            "permissions_denied": role.permissions_denied,
            "position": role.position,
        }

    def _get_role(self, roles: List, role_id: Any, action: str):
        role = self.ordering.find(roles, role_id)
        if role is None:
            raise RoleNotFoundError(f"Could not find role to {action}.")
        return role

    @staticmethod
    def _validate_position(position: Optional[int]):
        if position is not None and position < 1:
            raise ValueError("The role position must be greater than or equal to 1.")

    def list_roles(self, parent_id: Any) -> List[Dict[str, Any]]:
        """부모의 모든 역할을 position 순으로 조회합니다."""
        return [self._to_dict(r) for r in self.role_repo.list_by_parent(parent_id)]

    def create(self, parent_id: Any, name: str, permissions_granted: int, permissions_denied: int,
               position: Optional[int] = None) -> Dict[str, Any]:
        """
        새 역할을 만듭니다.

        기존 역할들을 먼저 재정렬(recompact)하여 빈틈을 없앤 뒤 count + 1 위치에 추가합니다.
        position을 지정하면 그 위치에 끼워 넣고 나머지는 한 칸씩 밀립니다.

        Raises:
            InvalidPermissionMaskError: granted 또는 denied 마스크가 도메인에 유효하지 않을 때.
            ValueError: position이 1보다 작을 때.
        """
        granted = self.policy.validate(permissions_granted, "granted")
        denied = self.policy.validate(permissions_denied, "denied")
        self._validate_position(position)

        roles = self.ordering.recompact(self.role_repo.list_by_parent(parent_id))
        role = self.role_repo.new(
            parent_id, name=name, permissions_granted=granted, permissions_denied=denied
        )
        roles = self.ordering.append(roles, role)

        if position is not None:
            role.position = position
            roles = self.ordering.recompact(roles, preferred=role)

        self.role_repo.persist(roles)
        logger.info("Created %s role '%s' at position %s", self.parent, name, role.position)
        return self._to_dict(role)

    def update(self, parent_id: Any, role_id: Any, name: Optional[str] = None,
               permissions_granted: Optional[int] = None, permissions_denied: Optional[int] = None,
               position: Optional[int] = None) -> Dict[str, Any]:
        """
        역할의 이름, 권한, 위치를 수정합니다. 지정하지 않은 값은 그대로 둡니다.

        위치를 바꾸면 해당 역할이 그 위치를 차지하고, 나머지 역할은 재정렬됩니다.

        Raises:
            RoleNotFoundError: 해당 역할을 찾을 수 없을 때.
            InvalidPermissionMaskError: 새 마스크가 유효하지 않을 때.
            ValueError: position이 1보다 작을 때.
        """
        roles = self.role_repo.list_by_parent(parent_id)
        role = self._get_role(roles, role_id, "update")
        self._validate_position(position)

        # 모든 입력을 검증한 뒤에 모델을 수정합니다.
        granted = self.policy.validate(permissions_granted, "granted") if permissions_granted is not None else None
        denied = self.policy.validate(permissions_denied, "denied") if permissions_denied is not None else None

        if granted is not None:
            role.permissions_granted = granted
        if denied is not None:
            role.permissions_denied = denied
        if name is not None:
            role.name = name
        if position is not None:
            role.position = position

        roles = self.ordering.recompact(roles, preferred=role if position is not None else None)
        self.role_repo.persist(roles)
        return self._to_dict(role)

    def remove(self, parent_id: Any, role_id: Any) -> str:
        """
        역할을 삭제하고 남은 역할들의 위치를 다시 매깁니다.

        Raises:
            RoleNotFoundError: 해당 역할을 찾을 수 없을 때.
        """
        roles = self.role_repo.list_by_parent(parent_id)
        role = self._get_role(roles, role_id, "delete")

        remaining = self.ordering.recompact([r for r in roles if r is not role])
        self.role_repo.persist(remaining, removed=[role])
        logger.info("Removed %s role %s", self.parent, role_id)
        return f"The role for {self.parent} has been removed."

    def _get_role_and_member(self, parent_id: Any, member_id: Any, role_id: Any):
        role = self.role_repo.find_by_id(role_id, parent_id)
        if not role:
            raise RoleNotFoundError(f"No information was found about the {self.parent} role to be assigned.")

        member = self.member_repo.find_by_id(member_id, parent_id)
        if not member:
            raise MemberNotFoundError(f"No information about the {self.parent} member was found.")
        return role, member

    def _member_dict(self, member) -> Dict[str, Any]:
        return {"id": member.id, "roles": [r.id for r in member.roles]}

    def assign(self, parent_id: Any, member_id: Any, role_id: Any) -> Dict[str, Any]:
        """
        멤버에게 역할을 할당합니다. 역할의 위치는 바뀌지 않습니다.

        Raises:
            RoleNotFoundError: 역할을 찾을 수 없을 때.
            MemberNotFoundError: 멤버를 찾을 수 없을 때.
            RoleAlreadyAssignedError: 멤버가 이미 해당 역할을 가지고 있을 때.
        """
        role, member = self._get_role_and_member(parent_id, member_id, role_id)
        if any(r.id == role.id for r in member.roles):
            raise RoleAlreadyAssignedError("The member you want to assign the role to already has it.")

        member.roles.append(role)
        self.member_repo.persist(member)
        return self._member_dict(member)

    def unassign(self, parent_id: Any, member_id: Any, role_id: Any) -> Dict[str, Any]:
        """
        멤버의 역할을 회수합니다.

        Raises:
            RoleNotFoundError: 역할을 찾을 수 없을 때.
            MemberNotFoundError: 멤버를 찾을 수 없을 때.
            RoleNotAssignedError: 멤버가 해당 역할을 가지고 있지 않을 때.
        """
        role, member = self._get_role_and_member(parent_id, member_id, role_id)
        assigned = next((r for r in member.roles if r.id == role.id), None)
        if assigned is None:
            raise RoleNotAssignedError("The member does not have the role you are trying to remove.")

        member.roles.remove(assigned)
        self.member_repo.persist(member)
        return self._member_dict(member)


class BoardRoleService(RoleService):
    domain = PermissionDomain.BOARD


class ProjectRoleService(RoleService):
    domain = PermissionDomain.PROJECT
