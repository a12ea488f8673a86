"""
Rundown formatting for on-screen display.

Lists every heat with its start time and event, one line per station.
"""

import re
from collections import defaultdict

from .models import INDEPENDENT_TEAM, Participant
from .namelist import Namelist


def _display_name(participant: Participant) -> str:
    # Multi-name entries keep one name per line
    return re.sub(r"\s*[\r\n]+\s*", ", ", participant.name.strip())


def format_rundown(namelist: Namelist, title: str | None = None) -> str:
    """Format the scheduled heats of a namelist for readable printing."""
    lines: list[str] = []
    if title:
        lines.append(title)
        lines.append("=" * len(title))

    scheduled = [p for p in namelist.participants if p.is_scheduled]
    unscheduled = len(namelist.participants) - len(scheduled)

    if not scheduled:
        lines.append("No participants scheduled")
        return "\n".join(lines)

    event_names = {e.code: e.name for e in namelist.events}
    hierarchy = namelist.hierarchy()

    heats: dict[int, list[Participant]] = defaultdict(list)
    for p in scheduled:
        heats[p.heat or 0].append(p)

    for heat in sorted(heats):
        parts = heats[heat]
        first = parts[0]
        event_name = event_names.get(first.event_code.strip(), "")
        lines.append(
            f"Heat {heat:3d}  {first.schedule_time}  {first.event_code} {event_name}".rstrip()
        )

        stations: dict[int, list[Participant]] = defaultdict(list)
        for p in parts:
            stations[p.station or 0].append(p)

        for station in sorted(stations):
            members = stations[station]
            entry_code = namelist.get_participant_entry_code(members[0], hierarchy)
            names = " / ".join(_display_name(m) for m in members)
            team = members[0].team or INDEPENDENT_TEAM
            lines.append(f"  Station {station:2d}  {entry_code:<6} {names} ({team})")

    lines.append("-" * 80)
    lines.append(f"Heats: {len(heats)}  Scheduled: {len(scheduled)}  Not scheduled: {unscheduled}")

    return "\n".join(lines)
