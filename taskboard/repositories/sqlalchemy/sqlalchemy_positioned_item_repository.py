from typing import List, Optional, Sequence
from sqlalchemy.orm import Session
from taskboard.repositories.interfaces import IPositionedItemRepository

class SqlalchemyPositionedItemRepository(IPositionedItemRepository):
    """position 컬럼을 가진 모델의 공통 저장소 구현."""
    model = None
    parent_column = ""

    def __init__(self, db_session: Session):
        self.db = db_session

    def _parent_filter(self, parent_id: int):
        return getattr(self.model, self.parent_column) == parent_id

    def new(self, parent_id: int, **fields):
        return self.model(**{self.parent_column: parent_id}, **fields)

    def list_by_parent(self, parent_id: int) -> List:
        return (
            self.db.query(self.model)
            .filter(self._parent_filter(parent_id))
            .order_by(self.model.position.asc(), self.model.updated_at.desc())
            .all()
        )

    def find_by_id(self, item_id: int, parent_id: int) -> Optional:
        return self.db.query(self.model).filter(self.model.id == item_id, self._parent_filter(parent_id)).first()

    def persist(self, items: Sequence, removed: Sequence = ()) -> None:
        try:
            for item in removed:
                self.db.delete(item)
            self.db.add_all(items)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
