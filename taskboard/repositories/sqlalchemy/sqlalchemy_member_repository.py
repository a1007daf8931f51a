from typing import Optional
from sqlalchemy.orm import Session, selectinload
from taskboard.database import models
from taskboard.repositories.interfaces import IMemberRepository

class _SqlalchemyMemberRepository(IMemberRepository):
    """보드/프로젝트 멤버 저장소의 공통 구현. 하위 클래스가 모델과 부모 컬럼을 지정합니다."""
    member_model = None
    role_model = None
    parent_column = ""

    def __init__(self, db_session: Session):
        self.db = db_session

    def _parent_filter(self, model, resource_id: int):
        return getattr(model, self.parent_column) == resource_id

    def find_by_user_and_resource(self, user_id: int, resource_id: int):
        return (
            self.db.query(self.member_model)
            .options(selectinload(self.member_model.roles))
            .filter(self.member_model.user_id == user_id, self._parent_filter(self.member_model, resource_id))
            .first()
        )

    def find_by_id(self, member_id: int, resource_id: int):
        return (
            self.db.query(self.member_model)
            .options(selectinload(self.member_model.roles))
            .filter(self.member_model.id == member_id, self._parent_filter(self.member_model, resource_id))
            .first()
        )

    def count_roles(self, resource_id: int) -> int:
        return self.db.query(self.role_model).filter(self._parent_filter(self.role_model, resource_id)).count()

    def persist(self, member):
        self.db.add(member)
        self.db.commit()
        self.db.refresh(member)
        return member


class SqlalchemyBoardMemberRepository(_SqlalchemyMemberRepository):
    member_model = models.BoardMember
    role_model = models.BoardRole
    parent_column = "board_id"


class SqlalchemyProjectMemberRepository(_SqlalchemyMemberRepository):
    member_model = models.ProjectMember
    role_model = models.ProjectRole
    parent_column = "project_id"
