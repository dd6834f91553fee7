# fakeout/scoring.py
from __future__ import annotations
from collections import Counter
from typing import Dict

from .models import Room

def compute_tallies(votes: Dict[str, str]) -> Dict[str, int]:
    return dict(Counter(votes.values()))

def apply_scoring(room: Room) -> Dict[str, int]:
    """Apply one voting round to the persistent ledger and return the deltas.

    A voter gains 1 for picking the AI entry and loses 1 otherwise.
    Whoever owns the picked entry (AI included) gains 1.
    """
    deltas: Dict[str, int] = {}
    for voter_id, answer_id in room.votes.items():
        picked = room.find_entry(answer_id)
        if picked is None:
            continue
        room.ensure_score(voter_id)
        room.ensure_score(picked.owner_id)
        voter_delta = 1 if picked.is_ai else -1
        room.scores[voter_id] += voter_delta
        room.scores[picked.owner_id] += 1
        deltas[voter_id] = deltas.get(voter_id, 0) + voter_delta
        deltas[picked.owner_id] = deltas.get(picked.owner_id, 0) + 1
    return deltas

def score(room: Room) -> Dict[str, int]:
    room.tallies = compute_tallies(room.votes)
    return apply_scoring(room)
