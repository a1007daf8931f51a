from typing import Optional
from sqlalchemy.orm import Session
from taskboard.database import models
from taskboard.permissions.types import ResourceRef
from taskboard.repositories.interfaces import IResourceRepository

class SqlalchemyBoardRepository(IResourceRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def find_owner_and_id(self, resource_id: int) -> Optional[ResourceRef]:
        # 보드의 소유자는 상위 프로젝트의 소유자입니다.
        row = (
            self.db.query(models.Board.id, models.Project.owner_id)
            .join(models.Project, models.Board.project_id == models.Project.id)
            .filter(models.Board.id == resource_id)
            .first()
        )
        return ResourceRef(id=row[0], owner_id=row[1]) if row else None


class SqlalchemyProjectRepository(IResourceRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def find_owner_and_id(self, resource_id: int) -> Optional[ResourceRef]:
        row = (
            self.db.query(models.Project.id, models.Project.owner_id)
            .filter(models.Project.id == resource_id)
            .first()
        )
        return ResourceRef(id=row[0], owner_id=row[1]) if row else None
