"""
Pydantic DTOs for roster CSV import and competition config validation.

All file input goes through these validated DTOs before it reaches the
store, so the scheduler itself never has to deal with malformed rows.
"""

from datetime import datetime
from typing import Self

from pydantic import BaseModel, Field, field_validator, model_validator

from .models import DEFAULT_DIVISIONS, DEFAULT_EVENTS, DivisionConfig, EventConfig, Participant
from .types import RundownConfig


def _validate_hhmm(v: str) -> str:
    try:
        datetime.strptime(v.strip(), "%H:%M")
    except ValueError:
        raise ValueError(f"Invalid time format: {v}. Expected HH:MM")
    return v.strip()


class ParticipantRow(BaseModel):
    """
    One row of the roster CSV.

    Columns: id, name, team, division, event, group, heat, station, time.
    The last three carry an existing schedule and must be all set or all
    empty.
    """

    id: str = Field(min_length=1, description="Unique participant id")
    name: str = Field(min_length=1, description="Competitor name(s)")
    division: str = Field(default="", description="Division name")
    event_code: str = Field(min_length=1, description="Event code (e.g. 'SRSS')")
    team: str | None = Field(default=None, description="Team or club")
    group_id: str | None = Field(default=None, description="Shared by members of one entry")
    heat: int | None = Field(default=None, ge=1)
    station: int | None = Field(default=None, ge=1)
    schedule_time: str | None = Field(default=None, description="Heat start (HH:MM)")

    @field_validator("team", "group_id", "heat", "station", "schedule_time", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        """Treat empty CSV cells as missing values."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("schedule_time")
    @classmethod
    def validate_time_format(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _validate_hhmm(v)

    @model_validator(mode="after")
    def validate_assignment(self) -> Self:
        """Heat, station and time are either all set or all empty."""
        assigned = [self.heat is not None, self.station is not None, self.schedule_time is not None]
        if any(assigned) and not all(assigned):
            raise ValueError(
                f"Participant {self.id} is partially scheduled: heat, station and time "
                "must be given together"
            )
        return self

    def to_participant(self) -> Participant:
        return Participant(
            id=self.id,
            name=self.name,
            division=self.division,
            event_code=self.event_code,
            team=self.team,
            group_id=self.group_id,
            heat=self.heat,
            station=self.station,
            schedule_time=self.schedule_time,
        )

    @classmethod
    def from_csv_dict(cls, row: dict[str, str], fallback_id: str) -> "ParticipantRow":
        """Create from CSV row dictionary with validation."""
        return cls(
            id=(row.get("id") or "").strip() or fallback_id,
            name=(row.get("name") or "").strip(),
            division=(row.get("division") or "").strip(),
            event_code=(row.get("event") or "").strip(),
            team=row.get("team"),
            group_id=row.get("group"),
            heat=row.get("heat"),
            station=row.get("station"),
            schedule_time=row.get("time"),
        )


class RundownConfigModel(BaseModel):
    """Rundown parameters of one event, or of the GLOBAL fallback."""

    start_time: str = Field(default="09:00", description="First heat start (HH:MM)")
    heat_duration: int = Field(default=2, ge=1, description="Minutes per heat")
    station_count: int = Field(default=12, ge=1, description="Stations per heat")
    rows_per_page: int = Field(default=30, ge=1, description="Printed rows per page")

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, v: str) -> str:
        return _validate_hhmm(v)

    def to_config(self) -> RundownConfig:
        return RundownConfig(
            start_time=self.start_time,
            heat_duration=self.heat_duration,
            station_count=self.station_count,
            rows_per_page=self.rows_per_page,
        )


class EventModel(BaseModel):
    code: str = Field(min_length=1)
    name: str = ""
    allowed_divisions: list[str] = Field(default_factory=list)

    def to_config(self) -> EventConfig:
        return EventConfig(
            code=self.code.strip(),
            name=self.name or self.code.strip(),
            allowed_divisions=list(self.allowed_divisions),
        )


class DivisionModel(BaseModel):
    name: str = Field(min_length=1)

    def to_config(self) -> DivisionConfig:
        return DivisionConfig(name=self.name)


class CompetitionConfigFile(BaseModel):
    """
    JSON competition configuration.

    Example::

        {
          "title": "Spring Open",
          "events": [{"code": "SRSS", "name": "Single Rope Speed Sprint"}],
          "divisions": [{"name": "Open"}],
          "entry_codes": {"SRSS|Open": "A"},
          "rundown_configs": {"GLOBAL": {"start_time": "09:00", "station_count": 8}}
        }
    """

    title: str = "COMPETITION CHAMPIONSHIPS"
    events: list[EventModel] | None = None
    divisions: list[DivisionModel] | None = None
    entry_codes: dict[str, str] = Field(default_factory=dict)
    rundown_configs: dict[str, RundownConfigModel] = Field(default_factory=dict)

    @field_validator("entry_codes")
    @classmethod
    def validate_entry_code_keys(cls, v: dict[str, str]) -> dict[str, str]:
        for key in v:
            if key.count("|") != 1:
                raise ValueError(f"Entry code key must look like 'EVENT|Division': {key!r}")
        return v

    def event_configs(self) -> list[EventConfig]:
        if self.events is None:
            return [
                EventConfig(e.code, e.name, list(e.allowed_divisions)) for e in DEFAULT_EVENTS
            ]
        return [e.to_config() for e in self.events]

    def division_configs(self) -> list[DivisionConfig]:
        if self.divisions is None:
            return [DivisionConfig(d.name) for d in DEFAULT_DIVISIONS]
        return [d.to_config() for d in self.divisions]

    def rundown_config_map(self) -> dict[str, RundownConfig]:
        return {key.strip(): model.to_config() for key, model in self.rundown_configs.items()}
