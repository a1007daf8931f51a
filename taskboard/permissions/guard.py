"""
Authorization guard

요청 시점의 권한 검사 절차입니다.

1. 작업 테이블에서 요구 권한과 검사 제외 여부를 찾습니다.
2. 검사 제외 작업이면 바로 허용합니다.
3. 요청 인자에서 대상 리소스 ID를 찾습니다. (중첩 인자까지 탐색)
4. 리소스(소유자)를 조회합니다. 없으면 ResourceNotFoundError.
5. 소유자가 아니면 멤버와 역할 개수를 조회하여 RoleAuthorizer로 판단합니다.
"""

from typing import Any, Dict, Mapping, Optional

from taskboard.repositories.interfaces import IMemberRepository, IResourceRepository
from taskboard.services.exceptions import (
    BoardNotFoundError, ProjectNotFoundError, ResourceNotFoundError, UnknownOperationError
)
from taskboard.utils.deep_find import deep_find_key
from taskboard.utils.logger import get_logger

from .authorizer import RoleAuthorizer
from .flags import PermissionDomain
from .operations import OPERATIONS
from .types import AuthorizationDecision, DecisionReason, OperationMetadata

logger = get_logger(__name__)

_NOT_FOUND_ERRORS = {
    PermissionDomain.BOARD: BoardNotFoundError,
    PermissionDomain.PROJECT: ProjectNotFoundError,
}


class AuthorizationGuard:
    def __init__(
        self,
        resource_repos: Mapping[PermissionDomain, IResourceRepository],
        member_repos: Mapping[PermissionDomain, IMemberRepository],
        operations: Optional[Dict[str, OperationMetadata]] = None,
        authorizer: Optional[RoleAuthorizer] = None,
    ):
        """
        Args:
            resource_repos: 도메인별 리소스(소유자) 조회 리포지토리.
            member_repos: 도메인별 멤버 조회 리포지토리.
            operations: 작업 테이블. 생략하면 기본 OPERATIONS를 사용합니다.
            authorizer: 판단기. 생략하면 RoleAuthorizer를 새로 만듭니다.
        """
        self.resource_repos = dict(resource_repos)
        self.member_repos = dict(member_repos)
        self.operations = OPERATIONS if operations is None else operations
        self.authorizer = authorizer or RoleAuthorizer()

    def _metadata(self, operation: str) -> OperationMetadata:
        try:
            return self.operations[operation]
        except KeyError:
            raise UnknownOperationError(f"Operation '{operation}' is not registered.") from None

    def check(self, operation: str, actor_id: Any, arguments: Any) -> AuthorizationDecision:
        """
        작업 실행 가능 여부를 판단합니다.

        Args:
            operation: 작업 이름. (예: 'boardStepMove')
            actor_id: 요청한 사용자의 ID.
            arguments: 작업의 요청 인자 (중첩 딕셔너리/객체 가능).

        Returns:
            AuthorizationDecision.

        Raises:
            UnknownOperationError: 작업 테이블에 없는 작업일 때.
            ResourceNotFoundError: 대상 리소스를 찾을 수 없을 때.
        """
        metadata = self._metadata(operation)
        if metadata.excluded_from_guard:
            return AuthorizationDecision.allow(DecisionReason.EXEMPT)

        domain = metadata.domain
        resource_repo = self.resource_repos.get(domain)
        member_repo = self.member_repos.get(domain)
        if resource_repo is None or member_repo is None:
            raise UnknownOperationError(
                f"No repositories are configured for {domain.value} operations ('{operation}')."
            )

        not_found = _NOT_FOUND_ERRORS.get(domain, ResourceNotFoundError)
        resource_id = deep_find_key(arguments, metadata.resource_argument)
        if resource_id is None:
            raise not_found(f"The {domain.value} does not exist.")

        resource = resource_repo.find_owner_and_id(resource_id)
        if resource is None:
            raise not_found(f"The {domain.value} does not exist.")

        required = metadata.required_set()
        if actor_id == resource.owner_id:
            # 소유자는 멤버/역할 조회 없이 바로 허용됩니다.
            return self.authorizer.authorize(actor_id, resource, None, 0, required)

        member = member_repo.find_by_user_and_resource(actor_id, resource.id)
        role_count = member_repo.count_roles(resource.id) if member is not None else 0
        decision = self.authorizer.authorize(actor_id, resource, member, role_count, required)

        if not decision.allowed:
            logger.warning(
                "Permission denied: user %s attempted %s on %s %s (%s)",
                actor_id, operation, domain.value, resource.id, decision.reason.value,
            )
        return decision

    def enforce(self, operation: str, actor_id: Any, arguments: Any) -> AuthorizationDecision:
        """check와 같지만 거부되면 사유에 맞는 AuthorizationError를 발생시킵니다."""
        return self.check(operation, actor_id, arguments).raise_for_denial()
