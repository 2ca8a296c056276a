from app.models.enrollment import Enrollment
from app.models.recurring_rule import RecurringRule
from app.models.room import Room
from app.models.schedule_exception import ScheduleException
from app.models.standalone_schedule import StandaloneSchedule

__all__ = [
    "Enrollment",
    "RecurringRule",
    "Room",
    "ScheduleException",
    "StandaloneSchedule",
]
