"""
Functional, stateless implementation of the rundown scheduler.

The scheduler orders a roster by event and entry code, packs entries into
heats bounded by each event's station count and computes the start time of
every heat. It takes data and returns assignments; applying them to the
participants is left to the caller (see ``Namelist.generate_rundown``).
"""

import logging
from functools import cmp_to_key

from .models import (
    GLOBAL_CONFIG_KEY,
    NO_ENTRY_CODE,
    EventConfig,
    Participant,
    entry_code_key,
)
from .types import RundownConfigResolver, ScheduleOptions, ScheduleResult

logger = logging.getLogger(__name__)

DEFAULT_START_TIME = "09:00"
MINUTES_PER_DAY = 24 * 60


def _parse_time_part(part: str | None) -> int:
    """Parse the hour or minute part of a HH:MM string, defaulting to 0."""
    try:
        return int(float(part))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return 0


def add_minutes(time_str: str | None, minutes: int) -> str:
    """Add minutes to a HH:MM time string and return the new HH:MM time.

    Hours wrap past midnight without any day marker, so
    ``add_minutes("23:50", 15)`` is ``"00:05"``.
    """
    parts = (time_str or "").split(":")
    hour = _parse_time_part(parts[0])
    minute = _parse_time_part(parts[1]) if len(parts) > 1 else 0

    total = (hour * 60 + minute + minutes) % MINUTES_PER_DAY
    return f"{total // 60:02d}:{total % 60:02d}"


def get_entry_index(participant: Participant, cohort: list[Participant]) -> int:
    """Get the 1-based entry index of a participant within its cohort.

    The cohort is every participant of one event/division in submission
    order. Members of the same group count as one entry and share an index.
    Returns -1 if the participant is not in the cohort.
    """
    if not participant.group_id:
        for position, item in enumerate(cohort, start=1):
            if item.id == participant.id:
                return position
        return -1

    entry_counter = 0
    seen_groups: set[str] = set()

    for item in cohort:
        if item.group_id:
            if item.group_id not in seen_groups:
                seen_groups.add(item.group_id)
                entry_counter += 1
        else:
            entry_counter += 1

        if item.id == participant.id:
            return entry_counter

    return -1


def get_sortable_entry_code(
    participant: Participant,
    all_participants: list[Participant],
    entry_code_prefixes: dict[str, str],
) -> str:
    """Build the "A001" style entry code used to order entries within an event.

    The index is taken from the full roster so that it does not depend on
    which subset is currently being scheduled.
    """
    prefix = entry_code_prefixes.get(
        entry_code_key(participant.event_code, participant.division)
    )
    if not prefix:
        return NO_ENTRY_CODE

    cohort = [
        p
        for p in all_participants
        if p.event_code == participant.event_code and p.division == participant.division
    ]
    return format_entry_code(prefix, get_entry_index(participant, cohort))


def format_entry_code(prefix: str, index: int) -> str:
    """Join a prefix and a zero-padded index; an index of -1 pads as-is ("0-1")."""
    return f"{prefix}{str(index).rjust(3, '0')}"


def _norm(code: str | None) -> str:
    return (code or "").strip()


def _compare_participants(
    a: Participant,
    b: Participant,
    event_codes: list[str],
    sort_keys: dict[str, str],
) -> int:
    """Order by position in the event list, then by sortable entry code."""
    code_a = _norm(a.event_code)
    code_b = _norm(b.event_code)

    idx_a = event_codes.index(code_a) if code_a in event_codes else -1
    idx_b = event_codes.index(code_b) if code_b in event_codes else -1

    if idx_a != -1 and idx_b != -1:
        if idx_a != idx_b:
            return idx_a - idx_b
    elif idx_a != -1:
        return -1
    elif idx_b != -1:
        return 1
    elif code_a != code_b:
        return -1 if code_a < code_b else 1

    entry_a = sort_keys.get(a.id) or NO_ENTRY_CODE
    entry_b = sort_keys.get(b.id) or NO_ENTRY_CODE

    if entry_a != entry_b:
        if entry_a == NO_ENTRY_CODE:
            return 1
        if entry_b == NO_ENTRY_CODE:
            return -1
        return -1 if entry_a < entry_b else 1

    return 0


def _group_entries(sorted_participants: list[Participant]) -> list[list[Participant]]:
    """Collapse participants sharing a group id into one entry each.

    Entries keep the order in which their first member was encountered.
    """
    entries: list[list[Participant]] = []
    seen_groups: set[str] = set()

    for participant in sorted_participants:
        if participant.group_id:
            if participant.group_id in seen_groups:
                continue
            seen_groups.add(participant.group_id)
            entries.append(
                [p for p in sorted_participants if p.group_id == participant.group_id]
            )
        else:
            entries.append([participant])

    return entries


def schedule_participants(
    participants: list[Participant],
    events: list[EventConfig],
    entry_code_prefixes: dict[str, str],
    get_rundown_config: RundownConfigResolver,
    options: ScheduleOptions | None = None,
) -> list[ScheduleResult]:
    """
    Assign heats, stations and start times to participants.

    Args:
        participants: The full roster. Only read, never modified.
        events: Event list in rundown order
        entry_code_prefixes: Map of "<event>|<division>" to entry code prefix
        get_rundown_config: Resolves the rundown config of an event code
        options: Target event, start heat and start time of this invocation

    Returns:
        One ScheduleResult per scheduled participant, in assignment order.
        Empty if there is nothing to schedule.
    """
    options = options or ScheduleOptions()

    # 1. Selection
    if options.target_event_code:
        selected = [p for p in participants if p.event_code == options.target_event_code]
    else:
        selected = list(participants)

    if not selected:
        return []

    # 2. Global ordering. Entry codes are computed once per participant.
    sort_keys = {
        p.id: get_sortable_entry_code(p, participants, entry_code_prefixes)
        for p in selected
    }
    event_codes = [_norm(e.code) for e in events]
    sorted_participants = sorted(
        selected,
        key=cmp_to_key(lambda a, b: _compare_participants(a, b, event_codes, sort_keys)),
    )

    # 3. One entry per station
    entries = _group_entries(sorted_participants)

    # 4. Heats and stations
    current_heat = options.start_heat_number or 1
    current_station = 1
    last_event_code = ""

    first_event_code = entries[0][0].event_code
    initial_config = get_rundown_config(
        options.target_event_code or first_event_code or GLOBAL_CONFIG_KEY
    )
    current_heat_start_time = (
        options.initial_start_time or initial_config.start_time or DEFAULT_START_TIME
    )

    results: list[ScheduleResult] = []

    for entry in entries:
        entry_event = _norm(entry[0].event_code)
        entry_config = get_rundown_config(entry_event)

        # A heat belongs to one event: switching events closes a started heat
        if last_event_code and entry_event != last_event_code and current_station > 1:
            current_heat += 1
            current_station = 1
            previous_config = get_rundown_config(last_event_code)
            current_heat_start_time = add_minutes(
                current_heat_start_time, previous_config.heat_duration
            )
        last_event_code = entry_event

        # Station capacity
        if current_station > entry_config.station_count:
            current_heat += 1
            current_station = 1
            current_heat_start_time = add_minutes(
                current_heat_start_time, entry_config.heat_duration
            )

        for participant in entry:
            results.append(
                ScheduleResult(
                    participant_id=participant.id,
                    heat=current_heat,
                    station=current_station,
                    schedule_time=current_heat_start_time,
                )
            )

        current_station += 1

    logger.debug(
        "Scheduled %d participants in %d entries, heats up to %d",
        len(results), len(entries), current_heat,
    )

    return results
