from sqlalchemy import Column, Integer, ForeignKey, Table, UniqueConstraint
from sqlalchemy.orm import relationship
from ..database import Base

# 멤버-역할 다대다(many-to-many) 연관 테이블
board_member_roles = Table(
    "board_member_roles",
    Base.metadata,
    Column("member_id", Integer, ForeignKey("board_members.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("board_roles.id", ondelete="CASCADE"), primary_key=True),
)

project_member_roles = Table(
    "project_member_roles",
    Base.metadata,
    Column("member_id", Integer, ForeignKey("project_members.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("project_roles.id", ondelete="CASCADE"), primary_key=True),
)


class BoardMember(Base):
    """
    보드에 초대된 사용자입니다. 사용자 한 명은 보드마다 최대 하나의 멤버 레코드를 가집니다.
    할당된 역할들의 실제 권한을 OR 한 값이 이 멤버의 권한이 됩니다.
    """
    __tablename__ = "board_members"
    __table_args__ = (UniqueConstraint("board_id", "user_id"),)
    id = Column(Integer, primary_key=True, index=True)
    board_id = Column(Integer, ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    board = relationship("Board", back_populates="members")
    user = relationship("User")
    roles = relationship("BoardRole", secondary=board_member_roles, back_populates="members")


class ProjectMember(Base):
    """
    프로젝트에 초대된 사용자입니다. 사용자 한 명은 프로젝트마다 최대 하나의 멤버 레코드를 가집니다.
    """
    __tablename__ = "project_members"
    __table_args__ = (UniqueConstraint("project_id", "user_id"),)
    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    project = relationship("Project", back_populates="members")
    user = relationship("User")
    roles = relationship("ProjectRole", secondary=project_member_roles, back_populates="members")
