"""Loading of competition configuration files into a Namelist."""

import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .dtos import CompetitionConfigFile
from .models import DivisionConfig, EventConfig, Participant
from .namelist import Namelist
from .types import RundownConfig

logger = logging.getLogger(__name__)


@dataclass
class CompetitionConfig:
    """Everything about a competition except its roster."""

    title: str
    events: list[EventConfig]
    divisions: list[DivisionConfig]
    entry_codes: dict[str, str] = field(default_factory=dict)
    rundown_configs: dict[str, RundownConfig] = field(default_factory=dict)

    def build_namelist(self, participants: list[Participant]) -> Namelist:
        """Create a store for this competition holding the given roster.

        References to unknown divisions are dropped, as when a saved
        competition is loaded.
        """
        namelist = Namelist(
            events=copy.deepcopy(self.events),
            divisions=copy.deepcopy(self.divisions),
            participants=list(participants),
            entry_codes=dict(self.entry_codes),
            rundown_configs=dict(self.rundown_configs),
        )
        namelist.sanitize_data()
        return namelist


def load_competition_config(config_path: str | Path | None = None) -> CompetitionConfig:
    """
    Load a competition config JSON file, or the defaults when no path is given.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid competition config JSON
    """
    if config_path is None:
        config_file = CompetitionConfigFile()
    else:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        # pydantic's ValidationError is a ValueError
        config_file = CompetitionConfigFile.model_validate_json(path.read_text(encoding="utf-8"))
        logger.info("Loaded competition config from %s", path)

    return CompetitionConfig(
        title=config_file.title,
        events=config_file.event_configs(),
        divisions=config_file.division_configs(),
        entry_codes=dict(config_file.entry_codes),
        rundown_configs=config_file.rundown_config_map(),
    )
