"""
Authorization types

권한 검사에 오가는 값 타입들입니다. 모두 불변(frozen)이며 I/O를 하지 않습니다.
"""

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Any, Optional, Tuple

from taskboard.services.exceptions import (
    AuthorizationError, NotAMemberError, NoRolesConfiguredError, InsufficientPermissionsError
)

from .flags import PermissionDomain
from .permission_set import PermissionSet


@dataclass(frozen=True)
class ResourceRef:
    """권한 검사 대상 리소스(보드/프로젝트)의 ID와 소유자 ID."""
    id: Any
    owner_id: Any


class DecisionReason(str, Enum):
    # 허용
    OWNER = "owner"
    EXEMPT = "exempt"
    GRANTED = "granted"
    # 거부
    NOT_A_MEMBER = "not_a_member"
    NO_ROLES_CONFIGURED = "no_roles_configured"
    INSUFFICIENT_PERMISSIONS = "insufficient_permissions"


_DENIAL_ERRORS = {
    DecisionReason.NOT_A_MEMBER: NotAMemberError,
    DecisionReason.NO_ROLES_CONFIGURED: NoRolesConfiguredError,
}


@dataclass(frozen=True)
class AuthorizationDecision:
    """
    권한 검사 결과입니다.

    거부 사유는 하나로 뭉치지 않고 reason으로 구분되며, 권한 부족일 때는
    missing에 부족한 플래그가 담깁니다.
    """
    allowed: bool
    reason: DecisionReason
    message: str = ""
    missing: Optional[PermissionSet] = None

    @classmethod
    def allow(cls, reason: DecisionReason, message: str = "") -> "AuthorizationDecision":
        return cls(True, reason, message)

    @classmethod
    def deny(cls, reason: DecisionReason, message: str,
             missing: Optional[PermissionSet] = None) -> "AuthorizationDecision":
        return cls(False, reason, message, missing)

    def __bool__(self) -> bool:
        return self.allowed

    def raise_for_denial(self) -> "AuthorizationDecision":
        """
        거부된 결정이면 사유에 맞는 예외를 발생시키고, 허용이면 자신을 그대로 반환합니다.

        Raises:
            NotAMemberError, NoRolesConfiguredError, InsufficientPermissionsError
        """
        if self.allowed:
            return self
        if self.reason == DecisionReason.INSUFFICIENT_PERMISSIONS:
            raise InsufficientPermissionsError(self.message, missing=self.missing)
        raise _DENIAL_ERRORS.get(self.reason, AuthorizationError)(self.message)


@dataclass(frozen=True)
class OperationMetadata:
    """
    작업(operation) 하나의 정적 권한 정보.

    Attributes:
        domain: 요구 권한이 속한 도메인. 대상 리소스 종류도 이것으로 결정됩니다.
        required: 요구되는 플래그들. 모두 가지고 있어야 허용됩니다.
        excluded_from_guard: True면 권한 검사 없이 허용합니다. (예: 보드 생성)
        resource_argument: 요청 인자에서 대상 리소스 ID를 찾을 키. 비워두면 '<domain>_id'.
    """
    domain: PermissionDomain
    required: Tuple[IntFlag, ...] = ()
    excluded_from_guard: bool = False
    resource_argument: str = field(default="")

    def __post_init__(self):
        object.__setattr__(self, "domain", PermissionDomain(self.domain))
        if not self.resource_argument:
            object.__setattr__(self, "resource_argument", f"{self.domain.value}_id")

    def required_set(self) -> PermissionSet:
        """required를 OR 한 요구 권한 집합."""
        if not self.required:
            return PermissionSet.empty(self.domain)
        required = PermissionSet.of(*self.required)
        if required.domain != self.domain:
            raise ValueError(
                f"Operation requires {required.domain.value} flags but is declared for {self.domain.value}."
            )
        return required
