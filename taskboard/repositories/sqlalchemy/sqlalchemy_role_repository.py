from taskboard.database import models
from taskboard.repositories.interfaces import IRoleRepository
from .sqlalchemy_positioned_item_repository import SqlalchemyPositionedItemRepository

class SqlalchemyBoardRoleRepository(SqlalchemyPositionedItemRepository, IRoleRepository):
    model = models.BoardRole
    parent_column = "board_id"


class SqlalchemyProjectRoleRepository(SqlalchemyPositionedItemRepository, IRoleRepository):
    model = models.ProjectRole
    parent_column = "project_id"
