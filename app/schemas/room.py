# app/schemas/room.py
from pydantic import BaseModel, ConfigDict, Field


class Room(BaseModel):
    """
    Public representation of a room from the room directory.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int = Field(..., description="Identifier of the room.", examples=[3])
    name: str = Field(..., description="Display name of the room.", examples=["A-101"])
    capacity: int = Field(..., ge=0, description="Number of seats.", examples=[40])
    room_type: str = Field(..., description="Room category, e.g. Lecture or Lab.", examples=["Lecture"])
    description: str | None = Field(None, description="Optional free-text description.")
