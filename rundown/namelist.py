"""
In-memory competition store.

The Namelist owns the mutable competition state (events, divisions, roster,
entry-code prefixes and rundown configuration) and applies the output of the
pure scheduler to the roster. It does not persist anything.
"""

import copy
import logging
import re
from dataclasses import dataclass, field, fields

from .config import RundownDefaults
from .models import (
    DEFAULT_DIVISIONS,
    DEFAULT_EVENTS,
    GLOBAL_CONFIG_KEY,
    INDEPENDENT_TEAM,
    NO_ENTRY_CODE,
    DivisionConfig,
    EventConfig,
    Participant,
    entry_code_key,
)
from .rundown_service import (
    add_minutes,
    format_entry_code,
    get_entry_index,
    schedule_participants,
)
from .types import RundownConfig, ScheduleOptions, ScheduleResult

logger = logging.getLogger(__name__)

_PARTICIPANT_FIELDS = {f.name for f in fields(Participant)}


@dataclass
class DivisionSummary:
    """Participants of one division within one event."""

    division: str
    entry_code: str  # prefix, "" when not configured
    count: int  # unique entries, a group counts once
    participants: list[Participant]


@dataclass
class EventSummary:
    event: EventConfig
    divisions: list[DivisionSummary]


@dataclass
class TeamSummary:
    name: str
    participants: list[Participant]
    count: int  # unique competitor names


@dataclass
class Namelist:
    """Competition state plus the operations that edit and schedule it."""

    events: list[EventConfig] = field(default_factory=lambda: copy.deepcopy(DEFAULT_EVENTS))
    divisions: list[DivisionConfig] = field(default_factory=lambda: copy.deepcopy(DEFAULT_DIVISIONS))
    participants: list[Participant] = field(default_factory=list)
    entry_codes: dict[str, str] = field(default_factory=dict)
    event_start_times: dict[str, str] = field(default_factory=dict)
    rundown_configs: dict[str, RundownConfig] = field(default_factory=dict)
    default_config: RundownConfig = field(
        default_factory=lambda: RundownDefaults.from_env().to_rundown_config()
    )

    def __post_init__(self) -> None:
        self.rundown_configs.setdefault(GLOBAL_CONFIG_KEY, self.default_config)

    # --- Roster ---

    def find_participant(self, participant_id: str) -> Participant | None:
        return next((p for p in self.participants if p.id == participant_id), None)

    def add_participant(self, participant: Participant) -> None:
        self.participants.append(participant)

    def upsert_participants(self, batch: list[Participant]) -> None:
        """Replace participants with matching ids and append the batch in its own order."""
        incoming_ids = {p.id for p in batch}
        self.participants = [p for p in self.participants if p.id not in incoming_ids]
        self.participants.extend(batch)

    def clear_participants(self) -> None:
        self.participants = []

    def update_participant(self, participant_id: str, **updates: object) -> None:
        """Set fields of one participant. Unknown ids are ignored."""
        unknown = set(updates) - _PARTICIPANT_FIELDS
        if unknown:
            raise TypeError(f"Unknown participant fields: {', '.join(sorted(unknown))}")

        participant = self.find_participant(participant_id)
        if participant is None:
            return
        for name, value in updates.items():
            setattr(participant, name, value)

    def delete_team(self, team_name: str) -> None:
        self.participants = [
            p for p in self.participants if (p.team or INDEPENDENT_TEAM) != team_name
        ]

    def get_participants_by_event(self, event_code: str, division_name: str) -> list[Participant]:
        return [
            p for p in self.participants
            if p.event_code == event_code and p.division == division_name
        ]

    # --- Entry codes and event start times ---

    def set_entry_code(self, event_code: str, division_name: str, code: str) -> None:
        self.entry_codes[entry_code_key(event_code, division_name)] = code

    def get_entry_code(self, event_code: str, division_name: str) -> str:
        return self.entry_codes.get(entry_code_key(event_code, division_name), "")

    def set_event_start_time(self, event_code: str, time_str: str) -> None:
        self.event_start_times[event_code] = time_str

    def get_event_start_time(self, event_code: str) -> str | None:
        return self.event_start_times.get(event_code)

    # --- Views ---

    def hierarchy(self) -> list[EventSummary]:
        """Group the roster as event -> allowed division -> participants."""
        summaries: list[EventSummary] = []

        for event in self.events:
            division_summaries: list[DivisionSummary] = []
            for division in self.divisions:
                if not event.allows_division(division.name):
                    continue

                parts = self.get_participants_by_event(event.code, division.name)

                seen_groups: set[str] = set()
                unique_entries = 0
                for p in parts:
                    if p.group_id:
                        if p.group_id not in seen_groups:
                            seen_groups.add(p.group_id)
                            unique_entries += 1
                    else:
                        unique_entries += 1

                division_summaries.append(
                    DivisionSummary(
                        division=division.name,
                        entry_code=self.get_entry_code(event.code, division.name),
                        count=unique_entries,
                        participants=parts,
                    )
                )

            summaries.append(EventSummary(event=event, divisions=division_summaries))

        return summaries

    def teams(self) -> list[TeamSummary]:
        """Group the roster by team in first-seen order, roster order kept within a team."""
        groups: dict[str, list[Participant]] = {}
        for p in self.participants:
            groups.setdefault(p.team or INDEPENDENT_TEAM, []).append(p)

        summaries: list[TeamSummary] = []
        for team_name, parts in groups.items():
            # Multi-name entries list one competitor per line
            unique_names: set[str] = set()
            for p in parts:
                for name in re.split(r"[\r\n,]+", p.name):
                    clean_name = name.strip()
                    if len(clean_name) > 1:
                        unique_names.add(clean_name)

            summaries.append(
                TeamSummary(name=team_name, participants=parts, count=len(unique_names))
            )

        return summaries

    def get_participant_entry_code(
        self, participant: Participant, hierarchy: list[EventSummary] | None = None
    ) -> str:
        """Display entry code such as "A007", or "-" when none applies.

        Pass a prebuilt ``hierarchy`` when looking up many participants.
        """
        if hierarchy is None:
            hierarchy = self.hierarchy()

        event_summary = next(
            (h for h in hierarchy if h.event.code == participant.event_code), None
        )
        if event_summary is None:
            return NO_ENTRY_CODE

        division_summary = next(
            (d for d in event_summary.divisions if d.division == participant.division), None
        )
        if division_summary is None or not division_summary.entry_code:
            return NO_ENTRY_CODE

        index = get_entry_index(participant, division_summary.participants)
        return format_entry_code(division_summary.entry_code, index)

    # --- Divisions ---

    def sanitize_data(self) -> None:
        """Drop references to divisions that no longer exist."""
        valid_names = {d.name for d in self.divisions}

        for event in self.events:
            if event.allowed_divisions:
                event.allowed_divisions = [
                    name for name in event.allowed_divisions if name in valid_names
                ]

        for p in self.participants:
            if p.division and p.division not in valid_names:
                logger.warning("Clearing unknown division %r of participant %s", p.division, p.id)
                p.division = ""

        for key in list(self.entry_codes):
            key_parts = key.split("|")
            if len(key_parts) == 2 and key_parts[1] and key_parts[1] not in valid_names:
                del self.entry_codes[key]

    def delete_division(self, division_name: str) -> None:
        self.divisions = [d for d in self.divisions if d.name != division_name]
        self.sanitize_data()

    def rename_division(self, old_name: str, new_name: str) -> None:
        if not new_name or old_name == new_name:
            return

        for division in self.divisions:
            if division.name == old_name:
                division.name = new_name
                break

        for event in self.events:
            event.allowed_divisions = [
                new_name if name == old_name else name for name in event.allowed_divisions
            ]

        # Participants first so they stay valid during sanitization
        for p in self.participants:
            if p.division == old_name:
                p.division = new_name

        for key in list(self.entry_codes):
            key_parts = key.split("|")
            if len(key_parts) == 2 and key_parts[0] and key_parts[1] == old_name:
                self.entry_codes[entry_code_key(key_parts[0], new_name)] = self.entry_codes.pop(key)

        self.sanitize_data()

    # --- Rundown ---

    def get_rundown_config(self, event_code: str | None = None) -> RundownConfig:
        """Resolve the rundown config of an event, falling back to GLOBAL."""
        if event_code:
            key = event_code.strip()
            if key in self.rundown_configs:
                return self.rundown_configs[key]
        return self.rundown_configs.get(GLOBAL_CONFIG_KEY) or self.default_config

    def update_rundown_config(self, config: RundownConfig, event_code: str | None = None) -> None:
        key = event_code.strip() if event_code else GLOBAL_CONFIG_KEY
        self.rundown_configs[key] = config

    def clear_rundown(self, event_code: str | None = None) -> None:
        """Unassign every participant, or only those of one event."""
        cleared = 0
        for p in self.participants:
            if event_code and p.event_code != event_code:
                continue
            if p.is_scheduled:
                cleared += 1
            p.clear_schedule()
        logger.debug("Cleared %d assignments (%s)", cleared, event_code or "all events")

    def generate_rundown(self, target_event_code: str | None = None) -> list[ScheduleResult]:
        """
        Schedule the whole roster, or append one event after the others.

        With a target event, scheduling continues after the last heat that
        other events occupy, starting one heat duration after that heat.

        Returns:
            The applied schedule results
        """
        start_heat = 1
        start_time: str | None = None

        if target_event_code:
            others = [
                p for p in self.participants
                if p.event_code != target_event_code and p.heat is not None
            ]
            if others:
                start_heat = max(p.heat or 0 for p in others) + 1

                last = sorted(others, key=lambda p: p.heat or 0)[-1]
                if last.schedule_time:
                    last_config = self.get_rundown_config(last.event_code)
                    start_time = add_minutes(last.schedule_time, last_config.heat_duration)

        results = schedule_participants(
            self.participants,
            self.events,
            self.entry_codes,
            self.get_rundown_config,
            ScheduleOptions(
                target_event_code=target_event_code,
                initial_start_time=start_time,
                start_heat_number=start_heat,
            ),
        )

        # Results are complete before the old schedule is cleared
        self.clear_rundown(target_event_code)
        self.apply_schedule(results)

        logger.info(
            "Generated rundown for %s: %d assignments",
            target_event_code or "all events", len(results),
        )
        return results

    def apply_schedule(self, results: list[ScheduleResult]) -> None:
        """Write schedule results to participants. Unknown ids are ignored."""
        by_id: dict[str, Participant] = {}
        for p in self.participants:
            by_id.setdefault(p.id, p)

        for result in results:
            participant = by_id.get(result.participant_id)
            if participant is None:
                logger.warning("Schedule result for unknown participant %s", result.participant_id)
                continue
            participant.assign(result.heat, result.station, result.schedule_time)

    def _entry_members(self, participant: Participant) -> list[Participant]:
        if not participant.group_id:
            return [participant]
        return [
            p for p in self.participants
            if p.group_id == participant.group_id and p.event_code == participant.event_code
        ]

    def swap_participants(self, id1: str, id2: str) -> None:
        """Exchange the heat, station and time of two entries.

        Group members move together with the participant that was swapped.
        """
        p1 = self.find_participant(id1)
        p2 = self.find_participant(id2)
        if p1 is None or p2 is None:
            return

        slot1 = (p1.heat, p1.station, p1.schedule_time)
        slot2 = (p2.heat, p2.station, p2.schedule_time)

        members1 = self._entry_members(p1)
        members2 = self._entry_members(p2)

        for p in members1:
            p.heat, p.station, p.schedule_time = slot2
        for p in members2:
            p.heat, p.station, p.schedule_time = slot1
