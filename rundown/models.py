from dataclasses import dataclass, field

# Key of the fallback rundown configuration used when an event has no override
GLOBAL_CONFIG_KEY = "GLOBAL"

# Sortable entry code for participants whose event/division has no prefix
NO_ENTRY_CODE = "-"

# Team label used for participants without a team
INDEPENDENT_TEAM = "INDEPENDENT"


@dataclass
class Participant:
    """One competitor, or one member of a multi-person entry.

    Members of a relay team or pair share a ``group_id`` and always occupy a
    single station together. ``heat``, ``station`` and ``schedule_time`` are
    either all set or all unset.
    """

    id: str
    name: str
    division: str
    event_code: str
    team: str | None = None
    group_id: str | None = None
    heat: int | None = None
    station: int | None = None
    schedule_time: str | None = None  # HH:MM

    @property
    def is_scheduled(self) -> bool:
        return self.heat is not None

    def assign(self, heat: int, station: int, schedule_time: str) -> None:
        self.heat = heat
        self.station = station
        self.schedule_time = schedule_time

    def clear_schedule(self) -> None:
        self.heat = None
        self.station = None
        self.schedule_time = None


@dataclass
class EventConfig:
    """A competition event. The order of the event list is the rundown order."""

    code: str
    name: str
    allowed_divisions: list[str] = field(default_factory=list)

    def allows_division(self, division_name: str) -> bool:
        """Check if a division may enter this event (empty list allows all)."""
        if not self.allowed_divisions:
            return True
        return division_name in self.allowed_divisions


@dataclass
class DivisionConfig:
    name: str


def entry_code_key(event_code: str, division_name: str) -> str:
    """Build the ``"<event>|<division>"`` key of the entry-code prefix map."""
    return f"{event_code}|{division_name}"


DEFAULT_EVENTS: list[EventConfig] = [
    EventConfig("SRSS", "Single Rope Speed Sprint"),
    EventConfig("SRSE", "Single Rope Speed Endurance"),
    EventConfig("SRDU", "Single Rope Double Unders"),
    EventConfig("SRTU", "Single Rope Triple Unders", ["15+ Female", "15+ Male", "Open"]),
    EventConfig("SRSR", "Single Rope Speed Relay"),
    EventConfig("DDSS", "Double Dutch Speed Sprint"),
    EventConfig("DDSR", "Double Dutch Speed Relay"),
]

DEFAULT_DIVISIONS: list[DivisionConfig] = [
    DivisionConfig("7-11 Female"),
    DivisionConfig("7-11 Male"),
    DivisionConfig("12-14 Female"),
    DivisionConfig("12-14 Male"),
    DivisionConfig("15+ Female"),
    DivisionConfig("15+ Male"),
    DivisionConfig("Open"),
]
