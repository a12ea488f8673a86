"""
Invariant checks for an applied rundown.

Validates the heat/station/time assignments held by the roster without
recomputing them. Used after generating a rundown and after manual edits
such as swaps.
"""

import logging
from collections import defaultdict

from .models import Participant
from .types import RundownConfigResolver

logger = logging.getLogger(__name__)


class RundownViolation(Exception):
    """Raised when a rundown breaks a scheduling invariant."""

    pass


def validate_rundown(
    participants: list[Participant],
    get_rundown_config: RundownConfigResolver,
) -> None:
    """
    Validate the assignments of all participants.

    Args:
        participants: The roster, scheduled or not
        get_rundown_config: Resolves the rundown config of an event code

    Raises:
        RundownViolation: If any invariant is violated
    """
    scheduled: list[Participant] = []
    for p in participants:
        assigned = [p.heat is not None, p.station is not None, p.schedule_time is not None]
        if any(assigned) and not all(assigned):
            raise RundownViolation(f"Participant {p.id} is only partially scheduled")
        if all(assigned):
            scheduled.append(p)

    _validate_groups(scheduled)
    _validate_station_bounds(scheduled, get_rundown_config)
    _validate_heats(scheduled)

    logger.debug("Rundown of %d scheduled participants is valid", len(scheduled))


def _validate_groups(scheduled: list[Participant]) -> None:
    """Members of a group occupy one slot."""
    slots_by_group: dict[str, set[tuple]] = defaultdict(set)
    for p in scheduled:
        if p.group_id:
            slots_by_group[p.group_id].add((p.heat, p.station, p.schedule_time))

    for group_id, slots in slots_by_group.items():
        if len(slots) > 1:
            raise RundownViolation(
                f"Group {group_id} is split over {len(slots)} heat/station slots"
            )


def _validate_station_bounds(
    scheduled: list[Participant],
    get_rundown_config: RundownConfigResolver,
) -> None:
    for p in scheduled:
        station_count = get_rundown_config(p.event_code.strip()).station_count
        if not 1 <= (p.station or 0) <= station_count:
            raise RundownViolation(
                f"Participant {p.id} is on station {p.station} but event "
                f"{p.event_code} has {station_count} stations"
            )


def _validate_heats(scheduled: list[Participant]) -> None:
    """A heat runs one event from one start time, one entry per station."""
    by_heat: dict[int, list[Participant]] = defaultdict(list)
    for p in scheduled:
        by_heat[p.heat or 0].append(p)

    for heat, parts in sorted(by_heat.items()):
        event_codes = {p.event_code.strip() for p in parts}
        if len(event_codes) > 1:
            raise RundownViolation(
                f"Heat {heat} mixes events: {', '.join(sorted(event_codes))}"
            )

        times = {p.schedule_time for p in parts}
        if len(times) > 1:
            raise RundownViolation(
                f"Heat {heat} has several start times: {', '.join(sorted(t or '' for t in times))}"
            )

        occupants: dict[int, str] = {}
        for p in parts:
            entry = p.group_id or p.id
            station = p.station or 0
            if occupants.setdefault(station, entry) != entry:
                raise RundownViolation(
                    f"Heat {heat} station {station} is shared by "
                    f"{occupants[station]} and {entry}"
                )
