# fakeout/models.py
from __future__ import annotations
from enum import Enum
from typing import Dict, List, Optional
from dataclasses import dataclass, field

AI = "AI"

class Phase(str, Enum):
    LOBBY = "lobby"
    ANSWERING = "answering"
    REVEAL = "reveal"
    VOTING = "voting"
    RESULTS = "results"

@dataclass
class Participant:
    id: str
    nickname: str

@dataclass
class Submission:
    nickname: str
    text: str

@dataclass(frozen=True)
class AnswerEntry:
    id: str
    owner_id: str
    nickname: str
    text: str

    @property
    def is_ai(self) -> bool:
        return self.owner_id == AI

@dataclass
class Room:
    code: str
    phase: Phase = Phase.LOBBY
    locked: bool = False
    host_id: Optional[str] = None
    # join order is preserved; host migration depends on it
    participants: Dict[str, Participant] = field(default_factory=dict)
    submissions: Dict[str, Submission] = field(default_factory=dict)
    answer_deck: List[AnswerEntry] = field(default_factory=list)
    reveal_count: int = 0
    votes: Dict[str, str] = field(default_factory=dict)
    tallies: Dict[str, int] = field(default_factory=dict)
    results_reveal_count: int = 0
    scores: Dict[str, int] = field(default_factory=dict)

    @property
    def player_count(self) -> int:
        return len(self.participants)

    def ensure_score(self, owner_id: str):
        self.scores.setdefault(owner_id, 0)

    def find_entry(self, answer_id: str) -> Optional[AnswerEntry]:
        for entry in self.answer_deck:
            if entry.id == answer_id:
                return entry
        return None

    def reset_round(self):
        self.submissions.clear()
        self.answer_deck = []
        self.reveal_count = 0
        self.votes.clear()
        self.tallies.clear()
        self.results_reveal_count = 0
