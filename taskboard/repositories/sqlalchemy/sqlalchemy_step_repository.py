from taskboard.database import models
from taskboard.repositories.interfaces import IStepRepository
from .sqlalchemy_positioned_item_repository import SqlalchemyPositionedItemRepository

class SqlalchemyStepRepository(SqlalchemyPositionedItemRepository, IStepRepository):
    model = models.BoardStep
    parent_column = "board_id"
