# tutordesk/models/user_settings.py
from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, func

from tutordesk.db.base import Base


class UserSettings(Base):
    """
    Per-user preferences: the subject list offered when editing students and
    the colour assigned to each subject.
    """

    __tablename__ = "user_settings"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    subjects = Column(JSON, nullable=False, default=list)
    subject_colors = Column(JSON, nullable=False, default=dict)

    updated_at = Column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<UserSettings user_id={self.user_id}>"
