"""Tests for flat-file completion and player history storage."""

import logging
from datetime import datetime, timedelta

import pytest

from engine.history import (
    find_player,
    format_duration,
    load_history,
    parse_duration,
    record_level_completion,
    record_player_completion,
    save_level_stats,
    save_player_history,
)
from engine.level import attempt_move, create_level, stop_clock
from engine.loader import parse_level
from models.level import Direction
from models.records import CompletionRecord, History, PlayerRecord

WHEN = datetime(2026, 3, 14, 15, 9, 26)


def _make_history() -> History:
    """Helper to create a history with one player and one completion."""
    return History(
        players=[PlayerRecord(name="Alice", levels_completed=2, last_played=WHEN)],
        completions=[
            CompletionRecord(
                player_name="Alice",
                level_number=1,
                steps=14,
                elapsed=timedelta(minutes=1, seconds=15, milliseconds=500),
                completed_at=WHEN,
            )
        ],
    )


class TestDuration:
    """Tests for format_duration() / parse_duration()."""

    def test_format(self):
        assert format_duration(timedelta(seconds=75.5)) == "0:01:15.500000"

    def test_parse_with_fraction(self):
        assert parse_duration("0:01:15.500000") == timedelta(seconds=75.5)

    def test_parse_whole_seconds(self):
        assert parse_duration("1:02:03") == timedelta(hours=1, minutes=2, seconds=3)

    def test_parse_days(self):
        assert parse_duration("2 days, 0:00:01") == timedelta(days=2, seconds=1)

    @pytest.mark.parametrize("text", ["", "abc", "1:2", "00:61"])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            parse_duration(text)


class TestLoadHistory:
    """Tests for load_history()."""

    def test_missing_files(self, tmp_path):
        history = load_history(tmp_path / "players.txt", tmp_path / "stats.txt")
        assert history.players == []
        assert history.completions == []

    def test_save_and_load(self, tmp_path):
        players_path = tmp_path / "players.txt"
        stats_path = tmp_path / "stats.txt"
        history = _make_history()
        save_player_history(history, players_path)
        save_level_stats(history, stats_path)

        assert players_path.read_text() == "Alice|2|2026-03-14T15:09:26\n"
        assert stats_path.read_text() == "Alice|1|14|0:01:15.500000|2026-03-14T15:09:26\n"

        loaded = load_history(players_path, stats_path)
        assert loaded == history

    def test_no_temp_file_left(self, tmp_path):
        save_player_history(_make_history(), tmp_path / "players.txt")
        assert [p.name for p in tmp_path.iterdir()] == ["players.txt"]

    def test_malformed_lines_skipped(self, tmp_path, caplog):
        players_path = tmp_path / "players.txt"
        stats_path = tmp_path / "stats.txt"
        players_path.write_text(
            "Alice|2|2026-03-14T15:09:26\n"
            "Bob|two|2026-03-14T15:09:26\n"
            "Carol|1\n"
            "Dan|3|yesterday\n"
        )
        stats_path.write_text(
            "Alice|1|14|0:01:15|2026-03-14T15:09:26\n"
            "Alice|x|14|0:01:15|2026-03-14T15:09:26\n"
            "Alice|2|14|soon|2026-03-14T15:09:26\n"
            "Alice|3|14\n"
        )
        with caplog.at_level(logging.WARNING, logger="engine.history"):
            history = load_history(players_path, stats_path)

        assert [p.name for p in history.players] == ["Alice"]
        assert [c.level_number for c in history.completions] == [1]
        assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 6

    def test_blank_lines_ignored(self, tmp_path):
        players_path = tmp_path / "players.txt"
        players_path.write_text("\nAlice|2|2026-03-14T15:09:26\n\n")
        history = load_history(players_path, tmp_path / "stats.txt")
        assert len(history.players) == 1


class TestSaving:
    """Tests for save_player_history() / save_level_stats()."""

    def test_delimiter_in_name_replaced(self, tmp_path):
        history = History(
            players=[PlayerRecord(name="a|b", levels_completed=1, last_played=WHEN)]
        )
        path = tmp_path / "players.txt"
        save_player_history(history, path)
        assert path.read_text().startswith("a/b|1|")

    def test_overwrites_previous_contents(self, tmp_path):
        path = tmp_path / "stats.txt"
        path.write_text("old junk\n")
        save_level_stats(History(), path)
        assert path.read_text() == ""


class TestRecordLevelCompletion:
    """Tests for record_level_completion()."""

    def test_uses_level_counters(self, clock):
        level = create_level(parse_level(["4023"]), clock)
        attempt_move(level, Direction.RIGHT)
        attempt_move(level, Direction.RIGHT)
        clock.advance(12.5)
        stop_clock(level, clock)

        history = History()
        record = record_level_completion(history, "Alice", 3, level, now=WHEN)

        assert history.completions == [record]
        assert record.player_name == "Alice"
        assert record.level_number == 3
        assert record.steps == 2
        assert record.elapsed == timedelta(seconds=12.5)
        assert record.completed_at == WHEN


class TestRecordPlayerCompletion:
    """Tests for record_player_completion() / find_player()."""

    def test_new_player(self):
        history = History()
        player = record_player_completion(history, "Bob", 1, now=WHEN)
        assert history.players == [player]
        assert player.levels_completed == 1

    def test_existing_player_case_insensitive(self):
        history = _make_history()
        later = WHEN + timedelta(days=1)
        player = record_player_completion(history, "ALICE", 5, now=later)
        assert len(history.players) == 1
        assert player.name == "Alice"
        assert player.levels_completed == 5
        assert player.last_played == later

    def test_keeps_best_count(self):
        history = _make_history()
        record_player_completion(history, "alice", 1, now=WHEN)
        assert history.players[0].levels_completed == 2

    def test_find_player(self):
        history = _make_history()
        assert find_player(history, "aLiCe") is history.players[0]
        assert find_player(history, "Zed") is None
