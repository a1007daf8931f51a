from sqlalchemy import Column, Integer, String
from ..database import Base

class User(Base):
    """
    시스템 사용자를 나타냅니다.
    사용자는 프로젝트를 소유하거나, 보드/프로젝트의 멤버(Member)로 초대될 수 있습니다.
    """
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False, index=True)
