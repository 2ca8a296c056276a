# app/models/schedule_exception.py
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class ScheduleException(Base):
    """
    Cancels or reschedules a single date of a recurring rule.
    """

    __tablename__ = "schedule_exceptions"

    id = Column(Integer, primary_key=True, index=True)

    rule_id = Column(
        Integer,
        ForeignKey("recurring_rules.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    exception_date = Column(Date, nullable=False, index=True)

    kind = Column(String(32), nullable=False, default="CANCELLED")

    new_date = Column(Date, nullable=True, index=True)
    new_start_time = Column(Time, nullable=True)
    new_end_time = Column(Time, nullable=True)
    new_room_id = Column(Integer, ForeignKey("rooms.id", ondelete="SET NULL"), nullable=True)

    reason = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    rule = relationship("RecurringRule", back_populates="exceptions")

    __table_args__ = (
        UniqueConstraint(
            "rule_id",
            "exception_date",
            name="uq_schedule_exceptions_rule_date",
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<ScheduleException id={self.id} rule_id={self.rule_id} "
            f"date={self.exception_date} kind={self.kind}>"
        )
