from .user import User
from .project import Project
from .board import Board
from .role import BoardRole, ProjectRole
from .member import BoardMember, ProjectMember, board_member_roles, project_member_roles
from .step import BoardStep

__all__ = [
    "User",
    "Project",
    "Board",
    "BoardRole",
    "ProjectRole",
    "BoardMember",
    "ProjectMember",
    "board_member_roles",
    "project_member_roles",
    "BoardStep",
]
