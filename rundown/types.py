"""
Type definitions for the rundown scheduler.

This module contains the value types passed into and returned from the
scheduler, shared by the store, the validator and the CLI.
"""

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class RundownConfig:
    """Scheduling parameters for one event (or the GLOBAL fallback)."""

    start_time: str = "09:00"  # HH:MM
    heat_duration: int = 2  # minutes
    station_count: int = 12
    rows_per_page: int = 30  # display only, the scheduler ignores it


@dataclass(frozen=True)
class ScheduleOptions:
    """Parameters of one scheduling invocation.

    Setting ``target_event_code`` reschedules a single event; the store then
    passes ``start_heat_number`` and ``initial_start_time`` so the event is
    appended after heats that other events already occupy.
    """

    target_event_code: str | None = None
    initial_start_time: str | None = None
    start_heat_number: int | None = None


@dataclass(frozen=True)
class ScheduleResult:
    """One assignment produced by the scheduler."""

    participant_id: str
    heat: int
    station: int
    schedule_time: str


RundownConfigResolver = Callable[[str], RundownConfig]
