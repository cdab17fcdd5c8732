"""Shared fixtures: a controllable clock and level file helpers."""

import pytest


class FakeClock:
    """Monotonic clock stand-in that only moves when told to."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


# One push down puts the box on the only goal.
PUSH_DOWN_LEVEL = ["1111", "1401", "1201", "1301", "1111"]
# One push right puts the box on the only goal.
PUSH_RIGHT_LEVEL = ["423"]


@pytest.fixture
def levels_dir(tmp_path):
    """A directory with two one-move levels."""
    directory = tmp_path / "levels"
    directory.mkdir()
    (directory / "level01.txt").write_text("\n".join(PUSH_DOWN_LEVEL) + "\n")
    (directory / "level02.txt").write_text("\n".join(PUSH_RIGHT_LEVEL) + "\n")
    return directory
