# fakeout/errors.py
from __future__ import annotations
from typing import Optional

class GameError(Exception):
    """A rejected command. Reported to the sender only; room state is untouched."""
    default_message = "Request rejected."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self) -> dict:
        return {"type": "error", "message": self.message}

class RoomLocked(GameError):
    default_message = "Game already started. Room is locked."

    def to_payload(self) -> dict:
        return {"type": "join_rejected", "reason": self.message}

class NotHost(GameError):
    default_message = "Only the host can do that."

class GameNotStarted(GameError):
    default_message = "Game not started yet."

class VotingNotActive(GameError):
    default_message = "Voting is not active."

class SelfVoteForbidden(GameError):
    default_message = "You cannot vote for your own answer."

class MalformedCommand(GameError):
    # never reported to the client
    default_message = "Malformed command."
