"""
Role-based authorizer

"행위자 X가 리소스 R에 대해 권한 P를 가지는가"를 판단합니다.

판단 순서:
1. 소유자 우회(Ownership bypass): 리소스 소유자는 역할/멤버 상태와 무관하게 항상 허용
2. 멤버 조회: 멤버가 아니면 거부 (NOT_A_MEMBER)
3. 역할 개수: 리소스에 역할이 하나도 없으면 소유자만 작업 가능 (NO_ROLES_CONFIGURED)
4. 멤버의 모든 역할에 대해 (granted & ~denied)를 OR 하여 실제 권한 계산
5. 요구 권한의 비트를 모두 가지고 있으면 허용, 아니면 거부 (INSUFFICIENT_PERMISSIONS)

데이터 조회는 호출자(AuthorizationGuard)의 책임이며, 여기서는 전달받은 상태만으로 판단합니다.
"""

from typing import Any, Optional

from taskboard.utils.logger import get_logger

from .permission_set import PermissionSet
from .policy import get_policy
from .types import AuthorizationDecision, DecisionReason, ResourceRef

logger = get_logger(__name__)


class RoleAuthorizer:

    def authorize(
        self,
        actor_id: Any,
        resource: ResourceRef,
        member: Optional[Any],
        role_count: int,
        required: PermissionSet,
    ) -> AuthorizationDecision:
        """
        Args:
            actor_id: 요청한 사용자의 ID.
            resource: 대상 리소스의 ID와 소유자 ID.
            member: 행위자의 멤버 레코드 (roles 속성 필요). 멤버가 아니면 None.
            role_count: 리소스에 정의된 역할의 개수.
            required: 작업에 요구되는 권한 집합.

        Returns:
            AuthorizationDecision (허용/거부와 사유).
        """
        domain = required.domain.value

        if actor_id == resource.owner_id:
            logger.debug("Owner bypass: user %s on %s %s", actor_id, domain, resource.id)
            return AuthorizationDecision.allow(DecisionReason.OWNER)

        if member is None:
            return AuthorizationDecision.deny(
                DecisionReason.NOT_A_MEMBER,
                f"You are not a member or owner of the {domain} to perform this action.",
            )

        if role_count == 0:
            return AuthorizationDecision.deny(
                DecisionReason.NO_ROLES_CONFIGURED,
                f"Only the {domain} owner can perform actions because there are no member roles available.",
            )

        effective = get_policy(required.domain).member_effective(member.roles)
        if effective.has(required):
            return AuthorizationDecision.allow(DecisionReason.GRANTED)

        missing = effective.missing(required)
        return AuthorizationDecision.deny(
            DecisionReason.INSUFFICIENT_PERMISSIONS,
            f"You do not have the {domain} permissions required for this action: "
            f"{', '.join(missing.names())}.",
            missing=missing,
        )
