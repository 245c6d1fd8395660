# tutordesk/db/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models in the TutorDesk service.

    Model modules are imported by `tutordesk.db.session` so that
    `Base.metadata` knows every table before schema creation.
    """
    pass
