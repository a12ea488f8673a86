from .models import DivisionConfig, EventConfig, Participant
from .namelist import Namelist
from .rundown_service import (
    add_minutes,
    get_entry_index,
    get_sortable_entry_code,
    schedule_participants,
)
from .rundown_validator import RundownViolation, validate_rundown
from .types import RundownConfig, ScheduleOptions, ScheduleResult

__all__ = [
    "DivisionConfig",
    "EventConfig",
    "Namelist",
    "Participant",
    "RundownConfig",
    "RundownViolation",
    "ScheduleOptions",
    "ScheduleResult",
    "add_minutes",
    "get_entry_index",
    "get_sortable_entry_code",
    "schedule_participants",
    "validate_rundown",
]
