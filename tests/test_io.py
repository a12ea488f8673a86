"""Tests for roster CSV import and competition config loading."""
import json

import pytest

from rundown.competition import load_competition_config
from rundown.models import DEFAULT_EVENTS, Participant
from rundown.roster_csv import parse_roster_csv

HEADER = "id,name,team,division,event,group,heat,station,time\n"


@pytest.fixture
def write_roster(tmp_path):
    def _write(body: str, header: str = HEADER, encoding: str = "utf-8"):
        path = tmp_path / "roster.csv"
        path.write_text(header + body, encoding=encoding)
        return path
    return _write


class TestParseRosterCsv:
    def test_parses_rows_in_file_order(self, write_roster):
        path = write_roster(
            "1,Ann,Skip Club,Open,SRSS,,,,\n"
            "2,Bea,,Open,DDSR,T1,3,2,09:04\n"
        )

        participants = parse_roster_csv(path)

        assert participants == [
            Participant(id="1", name="Ann", division="Open", event_code="SRSS", team="Skip Club"),
            Participant(
                id="2", name="Bea", division="Open", event_code="DDSR",
                group_id="T1", heat=3, station=2, schedule_time="09:04",
            ),
        ]

    def test_blank_id_and_skipped_rows(self, write_roster):
        path = write_roster(
            ",Ann,,Open,SRSS,,,,\n"
            "2,,,Open,SRSS,,,,\n"
            "3,Cara,,Open,,,,,\n"
        )

        participants = parse_roster_csv(path)

        assert [p.id for p in participants] == ["row-2"]

    def test_byte_order_mark(self, write_roster):
        path = write_roster("1,Ann,,Open,SRSS,,,,\n", encoding="utf-8-sig")
        assert parse_roster_csv(path)[0].id == "1"

    def test_minimal_columns(self, write_roster):
        path = write_roster("Ann,Open,SRSS\n", header="name,division,event\n")
        participants = parse_roster_csv(path)
        assert participants[0].id == "row-2"
        assert participants[0].heat is None

    def test_partial_schedule_rejected(self, write_roster):
        path = write_roster("1,Ann,,Open,SRSS,,1,,\n")
        with pytest.raises(ValueError, match="line 2"):
            parse_roster_csv(path)

    def test_invalid_time_rejected(self, write_roster):
        path = write_roster("1,Ann,,Open,SRSS,,1,1,9h\n")
        with pytest.raises(ValueError):
            parse_roster_csv(path)

    def test_missing_columns(self, write_roster):
        path = write_roster("Ann,SRSS\n", header="name,event\n")
        with pytest.raises(ValueError, match="division"):
            parse_roster_csv(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_roster_csv(tmp_path / "missing.csv")


class TestLoadCompetitionConfig:
    def test_defaults_without_file(self):
        config = load_competition_config()
        assert [e.code for e in config.events] == [e.code for e in DEFAULT_EVENTS]
        assert config.entry_codes == {}
        assert config.rundown_configs == {}

    def test_loads_json(self, tmp_path):
        path = tmp_path / "competition.json"
        path.write_text(json.dumps({
            "title": "Spring Open",
            "events": [{"code": " SRSS ", "name": "Speed"}, {"code": "DDSR"}],
            "divisions": [{"name": "Open"}],
            "entry_codes": {"SRSS|Open": "A"},
            "rundown_configs": {
                "GLOBAL": {"start_time": "08:30", "station_count": 4},
                "DDSR": {"heat_duration": 5},
            },
        }))

        config = load_competition_config(path)

        assert config.title == "Spring Open"
        assert [(e.code, e.name) for e in config.events] == [("SRSS", "Speed"), ("DDSR", "DDSR")]
        assert config.rundown_configs["GLOBAL"].start_time == "08:30"
        assert config.rundown_configs["GLOBAL"].station_count == 4
        assert config.rundown_configs["DDSR"].heat_duration == 5
        assert config.rundown_configs["DDSR"].station_count == 12

    @pytest.mark.parametrize(
        "content",
        [
            {"rundown_configs": {"GLOBAL": {"station_count": 0}}},
            {"rundown_configs": {"GLOBAL": {"start_time": "nine"}}},
            {"entry_codes": {"SRSS-Open": "A"}},
        ],
    )
    def test_invalid_config(self, tmp_path, content):
        path = tmp_path / "competition.json"
        path.write_text(json.dumps(content))
        with pytest.raises(ValueError):
            load_competition_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_competition_config(tmp_path / "missing.json")

    def test_build_namelist(self, tmp_path, make_participant):
        path = tmp_path / "competition.json"
        path.write_text(json.dumps({
            "divisions": [{"name": "Open"}],
            "rundown_configs": {"GLOBAL": {"station_count": 3}},
        }))
        config = load_competition_config(path)

        namelist = config.build_namelist([
            make_participant("o1"),
            make_participant("x1", division="Retired"),
        ])

        assert namelist.get_rundown_config("SRSS").station_count == 3
        assert namelist.find_participant("x1").division == ""
        assert namelist.find_participant("o1").division == "Open"
