from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base

class Project(Base):
    """
    보드(Board)들을 묶는 최상위 작업 공간입니다.
    모든 프로젝트는 정확히 한 명의 소유자(owner)를 가지며, 소유자는 역할과 무관하게
    프로젝트와 그 하위 보드에 대한 모든 권한을 가집니다.
    """
    __tablename__ = "projects"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String(300))
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    owner = relationship("User")
    boards = relationship("Board", back_populates="project", cascade="all, delete-orphan")
    roles = relationship("ProjectRole", back_populates="project", cascade="all, delete-orphan",
                         order_by="ProjectRole.position")
    members = relationship("ProjectMember", back_populates="project", cascade="all, delete-orphan")
