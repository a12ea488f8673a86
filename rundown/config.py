"""Configuration for the rundown scheduler."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .types import RundownConfig

# Load .env file if present
load_dotenv()


@dataclass
class RundownDefaults:
    """Built-in GLOBAL rundown configuration, overridable from the environment."""

    start_time: str = "09:00"
    heat_duration: int = 2
    station_count: int = 12
    rows_per_page: int = 30

    @classmethod
    def from_env(cls) -> "RundownDefaults":
        """Load defaults from environment variables."""
        return cls(
            start_time=os.getenv("RUNDOWN_START_TIME", "09:00"),
            heat_duration=int(os.getenv("RUNDOWN_HEAT_DURATION", "2")),
            station_count=int(os.getenv("RUNDOWN_STATION_COUNT", "12")),
            rows_per_page=int(os.getenv("RUNDOWN_ROWS_PER_PAGE", "30")),
        )

    def to_rundown_config(self) -> RundownConfig:
        return RundownConfig(
            start_time=self.start_time,
            heat_duration=self.heat_duration,
            station_count=self.station_count,
            rows_per_page=self.rows_per_page,
        )
