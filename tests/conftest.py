"""Pytest configuration and fixtures."""
import pytest

from rundown.models import DivisionConfig, EventConfig, Participant
from rundown.types import RundownConfig


@pytest.fixture(autouse=True)
def clean_rundown_env(monkeypatch):
    """Keep RUNDOWN_* variables of the host out of the built-in defaults."""
    for name in (
        "RUNDOWN_START_TIME",
        "RUNDOWN_HEAT_DURATION",
        "RUNDOWN_STATION_COUNT",
        "RUNDOWN_ROWS_PER_PAGE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_participant():
    """Factory for participants with sensible defaults."""
    def _make(
        pid: str,
        event: str = "SRSS",
        division: str = "Open",
        group: str | None = None,
        name: str | None = None,
        team: str | None = None,
    ) -> Participant:
        return Participant(
            id=pid,
            name=name or f"Competitor {pid}",
            division=division,
            event_code=event,
            team=team,
            group_id=group,
        )
    return _make


@pytest.fixture
def events():
    return [
        EventConfig("SRSS", "Single Rope Speed Sprint"),
        EventConfig("SRSE", "Single Rope Speed Endurance"),
        EventConfig("DDSR", "Double Dutch Speed Relay"),
    ]


@pytest.fixture
def divisions():
    return [DivisionConfig("Open"), DivisionConfig("7-11 Female")]


@pytest.fixture
def config_resolver():
    """Build a resolver from a map of event code to config with a GLOBAL fallback."""
    def _resolver(configs: dict[str, RundownConfig]):
        return lambda code: configs.get(code, configs["GLOBAL"])
    return _resolver
