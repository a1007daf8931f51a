from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..database import Base

class BoardStep(Base):
    """
    보드의 칼럼(단계)입니다. (예: 'To Do', 'In Progress', 'Done')
    position은 보드 안에서 1..N으로 빈틈없이 매겨지며, finish_step이 True인 스텝
    (완료 스텝)은 보드마다 최대 하나이고 항상 마지막 위치(N)에 있습니다.
    """
    __tablename__ = "board_steps"
    id = Column(Integer, primary_key=True, index=True)
    board_id = Column(Integer, ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(300))
    max = Column(Integer)
    position = Column(Integer, nullable=False)
    finish_step = Column(Boolean, nullable=False, default=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    board = relationship("Board", back_populates="steps")
