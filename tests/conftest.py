import random

import pytest

from fakeout.machine import RoomSession
from fakeout.models import AI
from fakeout.room_manager import RoomRegistry


class Table:
    """A room with a few seated players and shortcuts to drive it through a round."""

    def __init__(self, session: RoomSession, *nicknames):
        self.session = session
        self.room = session.room
        self.ids = {}
        for name in nicknames:
            pid, _ = session.join(name)
            self.ids[name] = pid

    def __getitem__(self, name):
        return self.ids[name]

    @property
    def host(self):
        return self.room.host_id

    def entry_of(self, owner_id):
        return next(e for e in self.room.answer_deck if e.owner_id == owner_id)

    @property
    def ai_entry(self):
        return self.entry_of(AI)

    def to_reveal(self):
        self.session.start_game(self.host)
        for name, pid in self.ids.items():
            self.session.submit_answer(pid, f"answer from {name}")

    def to_voting(self):
        self.to_reveal()
        for _ in self.room.answer_deck:
            self.session.reveal_next(self.host)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def session(rng):
    return RoomSession("ABCD", rng=rng)


@pytest.fixture
def table(session):
    return Table(session, "Ann", "Bo")


@pytest.fixture
def registry(rng):
    return RoomRegistry(rng=rng)


@pytest.fixture
def seat(session):
    def _seat(*nicknames):
        return Table(session, *nicknames)
    return _seat
