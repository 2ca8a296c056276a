# app/models/enrollment.py
from sqlalchemy import Column, Integer, String, UniqueConstraint

from app.db.base import Base


class Enrollment(Base):
    """
    Student-to-course enrollment, used to derive a student's own timetable.
    """

    __tablename__ = "enrollments"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(String(64), nullable=False, index=True)
    course_id = Column(Integer, nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("student_id", "course_id", name="uq_enrollments_student_course"),
    )
