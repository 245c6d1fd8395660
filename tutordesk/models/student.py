# tutordesk/models/student.py
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from tutordesk.db.base import Base


class Student(Base):
    """
    Profile of a student taught by a tutor, including billing rate and
    parent/guardian contact details.
    """

    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    first_name = Column(String(120), nullable=False)
    last_name = Column(String(120), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(255), nullable=True)

    # Comma-separated, e.g. "Math, Physics"
    subjects = Column(Text, nullable=False, default="")

    year = Column(Integer, nullable=True)
    hourly_rate_cents = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=True)

    parent_name = Column(String(255), nullable=True)
    parent_email = Column(String(255), nullable=True)
    parent_phone = Column(String(255), nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)
    is_archived = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    meetings = relationship(
        "Meeting",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return (
            f"<Student id={self.id} user_id={self.user_id} "
            f"name={self.first_name} {self.last_name}>"
        )
