# tutordesk/models/term.py
from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String

from tutordesk.db.base import Base


class Term(Base):
    """
    A teaching term in a tutor's academic calendar.
    """

    __tablename__ = "terms"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name = Column(String(120), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    year = Column(Integer, nullable=False)

    is_active = Column(Boolean, nullable=False, default=True)
    color = Column(String(32), nullable=False, default="#3B82F6")

    def __repr__(self) -> str:
        return (
            f"<Term id={self.id} name={self.name!r} "
            f"{self.start_date}..{self.end_date} active={self.is_active}>"
        )
