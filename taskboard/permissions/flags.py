"""
Permission flag registries

도메인(보드, 프로젝트, 태스크)마다 닫힌(closed) 비트 플래그 집합을 정의합니다.
도메인끼리는 서로 겹치지 않으며, 한 도메인의 플래그를 다른 도메인에서 사용할 수 없습니다.
비트 값은 이미 저장된 역할 마스크와 호환되도록 절대 바꾸지 않습니다.
"""

from enum import Enum, IntFlag
from typing import Dict, Type


class PermissionDomain(str, Enum):
    BOARD = "board"
    PROJECT = "project"
    TASK = "task"


class BoardPermission(IntFlag):
    """보드 관리 권한. 각 권한은 고유한 비트 하나입니다."""
    BOARD_UPDATE = 2 << 1
    ROLE_CREATE = 2 << 2
    ROLE_DELETE = 2 << 3
    ROLE_UPDATE = 2 << 4
    ROLE_ASSIGN = 2 << 5
    ROLE_UNASSIGN = 2 << 6
    MEMBER_ADD = 2 << 7
    MEMBER_REMOVE = 2 << 8
    STEP_CREATE = 2 << 9
    STEP_REMOVE = 2 << 10
    STEP_UPDATE = 2 << 11
    TASK_CREATE = 2 << 12
    TASK_REMOVE = 2 << 13
    TASK_UPDATE = 2 << 14
    TASK_ASSIGN = 2 << 15
    TASK_UNASSIGN = 2 << 16
    TASK_MOVE = 2 << 17
    TASK_COMMENT_CREATE = 2 << 18
    TASK_COMMENT_REMOVE = 2 << 19
    TASK_COMMENT_UPDATE = 2 << 20
    TASK_COMMENT_PIN = 2 << 21
    TASK_COMMENT_UNPIN = 2 << 22
    TASK_VIEW = 2 << 23


class ProjectPermission(IntFlag):
    """프로젝트 관리 권한."""
    ROLE_CREATE = 1 << 1
    ROLE_DELETE = 1 << 2
    ROLE_UPDATE = 1 << 3
    ROLE_ASSIGN = 1 << 4
    ROLE_UNASSIGN = 1 << 5
    PROJECT_UPDATE = 1 << 6
    MEMBER_ADD = 1 << 7
    MEMBER_REMOVE = 1 << 8
    GOAL_UPDATE = 1 << 9
    GOAL_CREATE = 1 << 10
    GOAL_REMOVE = 1 << 11


class TaskPermission(IntFlag):
    """개별 태스크 권한."""
    CREATE = 2 << 0
    DELETE = 2 << 1
    READ = 2 << 2
    WRITE = 2 << 3


FLAGS_BY_DOMAIN: Dict[PermissionDomain, Type[IntFlag]] = {
    PermissionDomain.BOARD: BoardPermission,
    PermissionDomain.PROJECT: ProjectPermission,
    PermissionDomain.TASK: TaskPermission,
}


def domain_of(flag: IntFlag) -> PermissionDomain:
    """플래그가 속한 도메인을 반환합니다."""
    for domain, flags in FLAGS_BY_DOMAIN.items():
        if isinstance(flag, flags):
            return domain
    raise ValueError(f"{flag!r} does not belong to any permission domain.")


def all_flags(domain: PermissionDomain) -> int:
    """도메인이 선언한 모든 플래그를 OR 한 마스크 (ALL_FLAGS)."""
    mask = 0
    for flag in FLAGS_BY_DOMAIN[PermissionDomain(domain)]:
        mask |= int(flag)
    return mask
