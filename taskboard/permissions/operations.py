"""
Operation table

작업 이름 → 요구 권한/검사 제외 여부의 정적 매핑입니다. 권한 검사기(AuthorizationGuard)가
요청 시점에 이 표를 참조합니다.
"""

from typing import Dict

from .flags import BoardPermission as B, PermissionDomain, ProjectPermission as P
from .types import OperationMetadata

BOARD = PermissionDomain.BOARD
PROJECT = PermissionDomain.PROJECT


OPERATIONS: Dict[str, OperationMetadata] = {
    # --- Project ---
    # 프로젝트를 만드는 사용자는 아직 멤버가 아니며, 만들고 나면 소유자가 됩니다.
    "projectCreate": OperationMetadata(PROJECT, excluded_from_guard=True),
    "projectUpdate": OperationMetadata(PROJECT, (P.PROJECT_UPDATE,)),
    "projectMemberAdd": OperationMetadata(PROJECT, (P.MEMBER_ADD,)),
    "projectMemberRemove": OperationMetadata(PROJECT, (P.MEMBER_REMOVE,)),
    "projectRoleCreate": OperationMetadata(PROJECT, (P.ROLE_CREATE,)),
    "projectRoleUpdate": OperationMetadata(PROJECT, (P.ROLE_UPDATE,)),
    "projectRoleRemove": OperationMetadata(PROJECT, (P.ROLE_DELETE,)),
    "projectRoleAssign": OperationMetadata(PROJECT, (P.ROLE_ASSIGN,)),
    "projectRoleUnassign": OperationMetadata(PROJECT, (P.ROLE_UNASSIGN,)),
    "projectGoalCreate": OperationMetadata(PROJECT, (P.GOAL_CREATE,)),
    "projectGoalUpdate": OperationMetadata(PROJECT, (P.GOAL_UPDATE,)),
    "projectGoalDelete": OperationMetadata(PROJECT, (P.GOAL_REMOVE,)),

    # --- Board ---
    "boardCreate": OperationMetadata(BOARD, excluded_from_guard=True),
    "boardUpdate": OperationMetadata(BOARD, (B.BOARD_UPDATE,)),
    "boardMemberAdd": OperationMetadata(BOARD, (B.MEMBER_ADD,)),
    "boardMemberRemove": OperationMetadata(BOARD, (B.MEMBER_REMOVE,)),
    "boardRoleCreate": OperationMetadata(BOARD, (B.ROLE_CREATE,)),
    "boardRoleUpdate": OperationMetadata(BOARD, (B.ROLE_UPDATE,)),
    "boardRoleRemove": OperationMetadata(BOARD, (B.ROLE_DELETE,)),
    "boardRoleAssign": OperationMetadata(BOARD, (B.ROLE_ASSIGN,)),
    "boardRoleUnassign": OperationMetadata(BOARD, (B.ROLE_UNASSIGN,)),
    "boardStepCreate": OperationMetadata(BOARD, (B.STEP_CREATE,)),
    "boardStepUpdate": OperationMetadata(BOARD, (B.STEP_UPDATE,)),
    "boardStepMove": OperationMetadata(BOARD, (B.STEP_UPDATE,)),
    "boardStepMarkAsFinished": OperationMetadata(BOARD, (B.STEP_UPDATE,)),
    "boardStepRemove": OperationMetadata(BOARD, (B.STEP_REMOVE,)),
    "boardTask": OperationMetadata(BOARD, (B.TASK_VIEW,)),
    "boardTaskCreate": OperationMetadata(BOARD, (B.TASK_CREATE,)),
    "boardTaskUpdate": OperationMetadata(BOARD, (B.TASK_UPDATE,)),
    "boardTaskMove": OperationMetadata(BOARD, (B.TASK_UPDATE,)),
    "boardTaskDelete": OperationMetadata(BOARD, (B.TASK_REMOVE,)),
    "boardTaskAssignUser": OperationMetadata(BOARD, (B.TASK_ASSIGN,)),
    "boardTaskUnAssignUser": OperationMetadata(BOARD, (B.TASK_UNASSIGN,)),
    "boardTaskCommentCreate": OperationMetadata(BOARD, (B.TASK_CREATE, B.TASK_VIEW, B.TASK_COMMENT_CREATE)),
    "boardTaskCommentReply": OperationMetadata(BOARD, (B.TASK_VIEW, B.TASK_COMMENT_CREATE)),
    "boardTaskCommentUpdate": OperationMetadata(BOARD, (B.TASK_VIEW, B.TASK_COMMENT_UPDATE)),
    "boardTaskCommentRemove": OperationMetadata(BOARD, (B.TASK_VIEW, B.TASK_COMMENT_REMOVE)),
}
