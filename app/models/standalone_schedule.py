# app/models/standalone_schedule.py
from sqlalchemy import Column, Date, ForeignKey, Integer, String, Time

from app.db.base import Base


class StandaloneSchedule(Base):
    """
    One-off meeting on an exact date, not linked to any recurring rule.
    """

    __tablename__ = "standalone_schedules"

    id = Column(Integer, primary_key=True, index=True)

    course_id = Column(Integer, nullable=False, index=True)
    room_id = Column(
        Integer,
        ForeignKey("rooms.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    professor_id = Column(String(64), nullable=False, index=True)

    occurrence_date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<StandaloneSchedule id={self.id} course_id={self.course_id} "
            f"date={self.occurrence_date} {self.start_time}-{self.end_time}>"
        )
