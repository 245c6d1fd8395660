# tutordesk/models/holiday.py
from sqlalchemy import Column, Date, ForeignKey, Integer, String

from tutordesk.db.base import Base


class Holiday(Base):
    """
    A holiday (non-teaching) range in a tutor's academic calendar.
    """

    __tablename__ = "holidays"

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

    color = Column(String(32), nullable=False, default="#F59E0B")

    def __repr__(self) -> str:
        return f"<Holiday id={self.id} name={self.name!r} {self.start_date}..{self.end_date}>"
