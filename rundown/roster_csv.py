"""Parser for roster CSV files listing one participant per row."""

import csv
import logging
from pathlib import Path

from pydantic import ValidationError

from .dtos import ParticipantRow
from .models import Participant

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"name", "division", "event"}


def parse_roster_csv(csv_file_path: str | Path) -> list[Participant]:
    """
    Parse a roster CSV and return its participants in file order.

    File order is submission order, which the entry codes are derived from.

    Args:
        csv_file_path: Path to the CSV file

    Returns:
        List of participants

    Raises:
        ValueError: If the CSV is missing columns or contains an invalid row
        FileNotFoundError: If the CSV file doesn't exist
    """
    participants: list[Participant] = []

    try:
        with open(csv_file_path, "r", encoding="utf-8-sig", newline="") as file:
            reader = csv.DictReader(file)

            missing = REQUIRED_COLUMNS - set(reader.fieldnames or [])
            if missing:
                raise ValueError(
                    f"Roster CSV is missing columns: {', '.join(sorted(missing))}"
                )

            # Header is line 1
            for line_number, row in enumerate(reader, start=2):
                name = (row.get("name") or "").strip()
                event_code = (row.get("event") or "").strip()

                # Skip rows without a competitor or an event
                if not name or not event_code:
                    logger.warning("Skipping line %d: missing name or event", line_number)
                    continue

                try:
                    participant_row = ParticipantRow.from_csv_dict(
                        row, fallback_id=f"row-{line_number}"
                    )
                except ValidationError as e:
                    raise ValueError(f"Invalid roster row on line {line_number}: {e}") from e

                participants.append(participant_row.to_participant())

    except FileNotFoundError:
        raise FileNotFoundError(f"CSV file not found: {csv_file_path}")
    except UnicodeDecodeError:
        raise ValueError(
            f"Could not decode CSV file. Please ensure it's UTF-8 encoded: {csv_file_path}"
        )

    logger.info("Parsed %d participants from %s", len(participants), csv_file_path)
    return participants
