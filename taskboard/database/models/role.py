from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..database import Base

class RoleColumnsMixin:
    """보드 역할과 프로젝트 역할이 공유하는 컬럼입니다."""
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    # 비트 기반 권한 마스크. 실제 권한은 granted & ~denied 입니다. (거부가 항상 우선)
    permissions_granted = Column(Integer, nullable=False, default=0)
    permissions_denied = Column(Integer, nullable=False, default=0)
    # 같은 부모(보드/프로젝트) 안에서 1..N으로 빈틈없이 매겨지는 순서
    position = Column(Integer, nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class BoardRole(RoleColumnsMixin, Base):
    """
    보드 하나에 속한 역할입니다. 다른 보드와 공유되지 않습니다.
    """
    __tablename__ = "board_roles"
    board_id = Column(Integer, ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)

    board = relationship("Board", back_populates="roles")
    members = relationship("BoardMember", secondary="board_member_roles", back_populates="roles")


class ProjectRole(RoleColumnsMixin, Base):
    """
    프로젝트 하나에 속한 역할입니다. 다른 프로젝트와 공유되지 않습니다.
    """
    __tablename__ = "project_roles"
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)

    project = relationship("Project", back_populates="roles")
    members = relationship("ProjectMember", secondary="project_member_roles", back_populates="roles")
