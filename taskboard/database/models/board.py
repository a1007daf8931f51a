from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base

class Board(Base):
    """
    프로젝트에 속한 칸반 보드입니다. 스텝(Step), 역할(Role), 멤버(Member)를 가집니다.
    보드의 소유자는 별도로 저장하지 않고, 상위 프로젝트의 소유자를 그대로 따릅니다.
    """
    __tablename__ = "boards"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String(300))
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)

    project = relationship("Project", back_populates="boards")
    steps = relationship("BoardStep", back_populates="board", cascade="all, delete-orphan",
                         order_by="BoardStep.position")
    roles = relationship("BoardRole", back_populates="board", cascade="all, delete-orphan",
                         order_by="BoardRole.position")
    members = relationship("BoardMember", back_populates="board", cascade="all, delete-orphan")
