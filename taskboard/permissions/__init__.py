"""
Bit-based permission model

도메인별 권한 플래그, 불변 권한 집합, 검증 정책, 역할 기반 판단기를 제공합니다.
요청 시점 검사기(AuthorizationGuard)는 taskboard.permissions.guard에 있습니다.
"""

from .flags import BoardPermission, PermissionDomain, ProjectPermission, TaskPermission, all_flags
from .permission_set import PermissionSet
from .policy import PermissionPolicy, combine, effective, get_policy, has, is_valid_mask
from .types import AuthorizationDecision, DecisionReason, OperationMetadata, ResourceRef
from .authorizer import RoleAuthorizer

__all__ = [
    "BoardPermission",
    "PermissionDomain",
    "ProjectPermission",
    "TaskPermission",
    "all_flags",
    "PermissionSet",
    "PermissionPolicy",
    "combine",
    "effective",
    "get_policy",
    "has",
    "is_valid_mask",
    "AuthorizationDecision",
    "DecisionReason",
    "OperationMetadata",
    "ResourceRef",
    "RoleAuthorizer",
]
