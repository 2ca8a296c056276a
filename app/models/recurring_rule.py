# app/models/recurring_rule.py
from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Integer, String, Time
from sqlalchemy.orm import relationship

from app.db.base import Base


class RecurringRule(Base):
    """
    Weekly-repeating course meeting, active between start_date and end_date
    (both inclusive). `day_of_week` is stored as ISO weekday, Monday=1.
    """

    __tablename__ = "recurring_rules"

    id = Column(Integer, primary_key=True, index=True)

    course_id = Column(Integer, nullable=False, index=True)
    room_id = Column(
        Integer,
        ForeignKey("rooms.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    professor_id = Column(String(64), nullable=False, index=True)

    day_of_week = Column(Integer, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)

    exceptions = relationship(
        "ScheduleException",
        back_populates="rule",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 1 AND 7", name="ck_recurring_rules_day_of_week"),
        CheckConstraint("start_time < end_time", name="ck_recurring_rules_time_order"),
        CheckConstraint("start_date <= end_date", name="ck_recurring_rules_date_order"),
    )

    def __repr__(self) -> str:
        return (
            f"<RecurringRule id={self.id} course_id={self.course_id} "
            f"day={self.day_of_week} {self.start_time}-{self.end_time}>"
        )
