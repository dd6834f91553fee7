# fakeout/views.py
from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple

from .models import AI, AnswerEntry, Phase, Room

def leaderboard(room: Room) -> List[Dict[str, Any]]:
    rows = [{"id": p.id, "name": p.nickname, "score": room.scores.get(p.id, 0)}
            for p in room.participants.values()]
    rows.append({"id": AI, "name": AI, "score": room.scores.get(AI, 0)})
    return sorted(rows, key=lambda r: r["score"], reverse=True)

def _result_row(room: Room, entry: AnswerEntry) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "text": entry.text,
        "voteCount": room.tallies.get(entry.id, 0),
        "author": entry.nickname,
        "isAI": entry.is_ai,
    }

def shared_view(room: Room) -> Dict[str, Any]:
    """Projection identical for every member of the room.

    Deck content is gated by phase. During reveal only the first
    reveal_count texts are shown, without ids or authors. Voting and
    results expose the whole deck as anonymous options. Authorship and
    vote counts appear only in results, paced by results_reveal_count.
    """
    deck = room.answer_deck
    users = [p.nickname for p in room.participants.values()]
    if room.locked:
        # the decoy sits at the table once the game is on
        users.append(AI)
    phase = room.phase

    revealed = [{"text": e.text} for e in deck[:room.reveal_count]] if phase == Phase.REVEAL else []
    options = [{"id": e.id, "text": e.text} for e in deck] if phase in (Phase.VOTING, Phase.RESULTS) else []
    results = [_result_row(room, e) for e in deck[:room.results_reveal_count]] if phase == Phase.RESULTS else []

    ai_reveal: Optional[Dict[str, Any]] = None
    for row in results:
        if row["isAI"]:
            ai_reveal = {"text": row["text"], "votes": row["voteCount"]}

    return {
        "type": "room_update",
        "room": room.code,
        "users": users,
        "locked": room.locked,
        "hostId": room.host_id,
        "phase": phase.value,
        "submittedCount": len(room.submissions),
        "totalPlayers": room.player_count,
        "revealCount": room.reveal_count,
        "totalAnswers": len(deck),
        "revealedAnswers": revealed,
        "totalVotes": len(room.votes),
        "voteOptions": options,
        "resultsRevealCount": room.results_reveal_count,
        "results": results,
        "aiReveal": ai_reveal,
        "scores": leaderboard(room),
    }

def render(room: Room, participant_id: str, shared: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    shared = shared if shared is not None else shared_view(room)
    return {
        **shared,
        "youSubmitted": participant_id in room.submissions,
        "youVoted": participant_id in room.votes,
        "yourVote": room.votes.get(participant_id),
    }

def snapshots(room: Room) -> List[Tuple[str, Dict[str, Any]]]:
    shared = shared_view(room)
    return [(pid, render(room, pid, shared)) for pid in room.participants]
