import json
import logging
from datetime import datetime

import ical_feed
import ical_watcher
from ical_watcher import agenda, utils
from ical_watcher.config import config, load_config

NOW = datetime(2024, 1, 3, 12, 0)

FIRST = "\n".join([
    "BEGIN:VEVENT", "UID:a", "DTSTART:20240102T090000", "SUMMARY:Standup", "END:VEVENT",
    "BEGIN:VEVENT", "UID:z", "DTSTART:20240120T090000", "SUMMARY:Not this week", "END:VEVENT",
])

SECOND = "\n".join([
    "BEGIN:VEVENT", "UID:a", "DTSTART:20240102T090000", "SUMMARY:Daily standup", "END:VEVENT",
    "BEGIN:VEVENT", "UID:b", "DTSTART:20240104T140000", "SUMMARY:Review", "END:VEVENT",
])


def test_load_config_merges_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "log_level: DEBUG\n"
        "intervals:\n"
        "  agenda: 60\n"
        "calendars:\n"
        "  - name: team\n"
        "    url: https://calendar.example.com/team.ics\n"
    )
    cfg = load_config(str(path))

    assert cfg is config
    assert cfg['log_level'] == "DEBUG"
    assert cfg['intervals'] == {'agenda': 60, 'error': 120}
    assert cfg['cache'] == "data/agenda_{id}.json"
    assert cfg['calendars'][0]['name'] == "team"


def test_intervals_per_calendar(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("intervals:\n  agenda: 60\n")
    load_config(str(path))

    assert utils.get_interval({'intervals': {'agenda': 5}}, 'agenda', 300) == 5
    assert utils.get_interval({}, 'agenda', 300) == 60
    assert utils.get_interval({}, 'error', 1) == 120
    assert utils.get_interval({}, 'unknown', 7) == 7


def test_sanitize():
    assert utils.sanitize("Team Agenda #2") == "team_agenda__2"


def test_create_parser_does_not_fetch():
    parser = ical_watcher.create_parser({'name': "team", 'url': "https://calendar.example.com/team.ics", 'retries': 5})
    assert isinstance(parser, ical_feed.Parser)
    assert parser.config.retries == 5
    assert parser.config.timeout == ical_feed.DEFAULT_TIMEOUT
    assert not parser.ready


def test_check_agenda_diffs_between_runs(tmp_path, caplog):
    caplog.set_level(logging.INFO)
    source = tmp_path / "team.ics"
    cache_file = tmp_path / "data" / "agenda_team.json"
    cfg = {'name': "team"}
    parser = ical_feed.Parser(str(source), start=False)

    source.write_text(FIRST)
    assert agenda.check_agenda(cfg, parser, str(cache_file), NOW) == []

    cached = json.loads(cache_file.read_text())
    assert list(cached) == ["a|2024-01-02T09:00:00"]
    assert cached["a|2024-01-02T09:00:00"]["SUMMARY"] == "Standup"
    assert cached["a|2024-01-02T09:00:00"]["DTSTART"] == "2024-01-02T09:00:00"

    source.write_text(SECOND)
    diffs = agenda.check_agenda(cfg, parser, str(cache_file), NOW)

    assert ('change', 'a|2024-01-02T09:00:00.SUMMARY', ('Standup', 'Daily standup')) in diffs
    added = [changes for op, path, changes in diffs if op == 'add' and path == '']
    assert [key for key, _ in added[0]] == ["b|2024-01-04T14:00:00"]
    assert "added `Review` 04/01/2024 14:00" in caplog.text
    assert "'Standup' -> 'Daily standup'" in caplog.text
    assert set(json.loads(cache_file.read_text())) == {"a|2024-01-02T09:00:00", "b|2024-01-04T14:00:00"}


def test_event_key_without_uid():
    assert agenda.event_key({'DTSTART': "2024-01-02T09:00:00", 'SUMMARY': "x"}) == "2024-01-02T09:00:00|x"


def test_describe_change_with_list_path():
    new = {'a@example.com': {'SUMMARY': "Standup", 'start_date': "02/01/2024", 'start_time': "09:00"}}
    lines = agenda.describe_change('add', ['a@example.com'], [('LOCATION', "Room 4")], new, {})
    assert lines == ["add LOCATION on `Standup` 02/01/2024 09:00"]


def test_occurrences_sharing_a_uid_are_kept_apart(tmp_path):
    source = tmp_path / "daily.ics"
    source.write_text("\n".join([
        "BEGIN:VEVENT", "UID:daily", "DTSTART:20240102T090000", "SUMMARY:Standup", "END:VEVENT",
        "BEGIN:VEVENT", "UID:daily", "RECURRENCE-ID:20240104T090000", "DTSTART:20240104T100000",
        "SUMMARY:Standup (moved)", "END:VEVENT",
    ]))
    parser = ical_feed.Parser(str(source), start=False)
    cache_file = tmp_path / "agenda_daily.json"

    agenda.check_agenda({'name': "daily"}, parser, str(cache_file), NOW)

    cached = json.loads(cache_file.read_text())
    assert len(parser.get_this_week_events(NOW)) == 2
    assert sorted(cached) == ["daily|2024-01-02T09:00:00", "daily|20240104T090000"]
    assert cached["daily|20240104T090000"]["SUMMARY"] == "Standup (moved)"
