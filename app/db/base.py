# app/db/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models of the timetable collaborators.

    Models register themselves on import; `app.models` imports all of them.
    """
    pass
