"""Tests for session orchestration across the level sequence."""

from datetime import datetime, timedelta

import pytest

from config import ANONYMOUS_NAME
from engine.history import load_history
from engine.session import abandon_current_level, start_session, submit_move
from models.cells import Cell
from models.level import Direction, MoveResult
from models.records import History
from models.session import SessionStatus

WHEN = datetime(2026, 5, 1, 12, 0, 0)


@pytest.fixture
def paths(tmp_path):
    """Record file paths inside a temporary directory."""
    return tmp_path / "player_history.txt", tmp_path / "stats_level.txt"


def _level_files(levels_dir):
    return sorted(levels_dir.glob("level*.txt"))


class TestStartSession:
    """Tests for start_session()."""

    def test_loads_first_level(self, levels_dir, paths, clock):
        session = start_session("Ann", _level_files(levels_dir), History(), paths[0], clock)
        assert session.status == SessionStatus.PLAYING
        assert session.player_name == "Ann"
        assert session.level_number == 1
        assert session.level.hero == (1, 1)
        assert session.level.step_count == 0
        assert session.level.started_at == clock.now

    def test_blank_name_is_anonymous(self, levels_dir, paths):
        session = start_session("   ", _level_files(levels_dir), History(), paths[0])
        assert session.player_name == ANONYMOUS_NAME

    def test_name_cleaned_on_entry(self, levels_dir, paths):
        history = History()
        session = start_session("a|b", _level_files(levels_dir), history, paths[0])
        assert session.player_name == "a/b"

        abandon_current_level(session, history, paths[0])
        abandon_current_level(session, history, paths[0])
        reloaded = load_history(*paths)
        again = start_session("a|b", _level_files(levels_dir), reloaded, paths[0])
        abandon_current_level(again, reloaded, paths[0])
        abandon_current_level(again, reloaded, paths[0])

        assert [p.name for p in reloaded.players] == ["a/b"]

    def test_no_levels(self, paths):
        with pytest.raises(ValueError, match="No levels"):
            start_session("Ann", [], History(), paths[0])

    def test_bad_level_skipped(self, levels_dir, paths):
        (levels_dir / "level00.txt").write_text("00\n0\n")
        session = start_session("Ann", _level_files(levels_dir), History(), paths[0])
        assert session.level_number == 2
        assert "level00.txt" in session.last_error
        assert session.level is not None

    def test_missing_level_skipped(self, levels_dir, paths):
        files = [levels_dir / "level_gone.txt"] + _level_files(levels_dir)
        session = start_session("Ann", files, History(), paths[0])
        assert session.level_number == 2
        assert session.last_error.startswith("Level 1:")

    def test_all_levels_bad_finishes(self, tmp_path, paths):
        bad = tmp_path / "level01.txt"
        bad.write_text("9\n")
        history = History()
        session = start_session("Ann", [bad], history, paths[0])
        assert session.status == SessionStatus.FINISHED
        assert session.level is None
        assert history.players[0].levels_completed == 0
        assert paths[0].exists()


class TestSubmitMove:
    """Tests for submit_move()."""

    def test_rejected_move(self, levels_dir, paths, clock):
        history = History()
        session = start_session("Ann", _level_files(levels_dir), history, paths[0], clock)
        report = submit_move(session, Direction.UP, history, *paths, clock=clock)
        assert report.result == MoveResult.REJECTED
        assert not report.solved
        assert report.step_count == 0
        assert session.level_number == 1

    def test_rejected_move_can_win(self, tmp_path, paths, clock):
        level = tmp_path / "level01.txt"
        level.write_text("161\n")
        history = History()
        session = start_session("Ann", [level], history, paths[0], clock)

        report = submit_move(session, Direction.LEFT, history, *paths, clock=clock)

        assert report.result == MoveResult.REJECTED
        assert report.solved
        assert report.step_count == 0
        assert report.session_status == SessionStatus.FINISHED
        assert session.levels_completed == 1
        assert [c.steps for c in history.completions] == [0]

    def test_solving_records_and_advances(self, levels_dir, paths, clock):
        history = History()
        session = start_session("Ann", _level_files(levels_dir), history, paths[0], clock)
        clock.advance(4)

        report = submit_move(session, Direction.DOWN, history, *paths, clock=clock, now=WHEN)

        assert report.result == MoveResult.ACCEPTED
        assert report.solved
        assert report.level_number == 1
        assert report.step_count == 1
        assert report.elapsed_seconds == 4.0
        assert report.session_status == SessionStatus.PLAYING

        assert session.levels_completed == 1
        assert session.level_number == 2
        assert session.level.step_count == 0

        record = history.completions[0]
        assert (record.player_name, record.level_number, record.steps) == ("Ann", 1, 1)
        assert record.elapsed == timedelta(seconds=4)
        assert load_history(*paths).completions == history.completions

    def test_last_level_finishes_session(self, levels_dir, paths, clock):
        history = History()
        session = start_session("Ann", _level_files(levels_dir), history, paths[0], clock)
        submit_move(session, Direction.DOWN, history, *paths, clock=clock)
        report = submit_move(session, Direction.RIGHT, history, *paths, clock=clock)

        assert report.solved
        assert report.session_status == SessionStatus.FINISHED
        assert session.status == SessionStatus.FINISHED
        assert session.level is None
        assert session.levels_completed == 2

        stored = load_history(*paths)
        assert [(p.name, p.levels_completed) for p in stored.players] == [("Ann", 2)]
        assert [c.level_number for c in stored.completions] == [1, 2]

    def test_move_after_finish_raises(self, levels_dir, paths):
        history = History()
        session = start_session("Ann", _level_files(levels_dir), history, paths[0])
        abandon_current_level(session, history, paths[0])
        abandon_current_level(session, history, paths[0])
        with pytest.raises(ValueError, match="No level in play"):
            submit_move(session, Direction.UP, history, *paths)


class TestAbandonCurrentLevel:
    """Tests for abandon_current_level()."""

    def test_moves_on_without_completion(self, levels_dir, paths, clock):
        history = History()
        session = start_session("Ann", _level_files(levels_dir), history, paths[0], clock)
        first_level = session.level
        clock.advance(9)

        abandon_current_level(session, history, paths[0], clock)

        assert first_level.stopped_at == clock.now
        assert session.level_number == 2
        assert session.levels_completed == 0
        assert history.completions == []
        assert session.level.grid.cell(0, 0) is Cell.HERO

    def test_abandoning_last_level_finishes(self, levels_dir, paths):
        history = History()
        session = start_session("Bo", _level_files(levels_dir), history, paths[0])
        submit_move(session, Direction.DOWN, history, *paths)
        abandon_current_level(session, history, paths[0])

        assert session.status == SessionStatus.FINISHED
        assert history.players[0].name == "Bo"
        assert history.players[0].levels_completed == 1
