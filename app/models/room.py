# app/models/room.py
from sqlalchemy import Column, Integer, String, Text

from app.db.base import Base


class Room(Base):
    """
    Room directory entry. Owned by the room management collaborator; this
    service only reads it.
    """

    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(128), nullable=False)
    capacity = Column(Integer, nullable=False, default=0)
    room_type = Column(String(64), nullable=False, default="Lecture")
    description = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Room id={self.id} name={self.name!r} capacity={self.capacity}>"
