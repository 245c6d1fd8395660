# tutordesk/models/user.py
from sqlalchemy import Column, DateTime, Integer, String, func

from tutordesk.db.base import Base


class User(Base):
    """
    A tutor account. Every student, meeting and teaching period is owned by
    exactly one user.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)

    created_at = Column(DateTime, nullable=False, server_default=func.now())

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email}>"
