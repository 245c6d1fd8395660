# tutordesk/models/meeting.py
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


class Meeting(Base):
    """
    A single scheduled lesson between a tutor and one student.

    Start and end are naive local wall-clock datetimes.
    """

    __tablename__ = "meetings"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_id = Column(
        Integer,
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)

    is_completed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, server_default=func.now())

    student = relationship("Student", back_populates="meetings")

    def __repr__(self) -> str:
        return (
            f"<Meeting id={self.id} student_id={self.student_id} "
            f"start={self.start_time} title={self.title!r}>"
        )
