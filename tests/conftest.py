import pytest

from tetris import Game
from tetris_highscore import HighScoreStore


class FakeClock:
    """Monotonic clock the tests advance by hand (seconds)."""
    def __init__(self):
        self.ms = 100000

    def __call__(self):
        return self.ms / 1000

    def advance(self, ms):
        self.ms += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(tmp_path):
    return HighScoreStore(str(tmp_path / "highscore.txt"))


@pytest.fixture
def game(store, clock):
    g = Game(store, seed=1234, clock=clock)
    g.initialize()
    yield g
    g.shutdown()
