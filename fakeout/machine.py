# fakeout/machine.py
from __future__ import annotations
import logging, random
from typing import Any, Dict, List, Optional, Set, Tuple
from dataclasses import dataclass

from . import config
from .errors import GameNotStarted, NotHost, RoomLocked, SelfVoteForbidden, VotingNotActive
from .host import assign_host
from .ids import new_id
from .models import AI, AnswerEntry, Participant, Phase, Room, Submission
from .scoring import score
from .views import snapshots

logger = logging.getLogger(__name__)

@dataclass
class Envelope:
    to: str
    payload: Dict[str, Any]

class RoomSession:
    """State machine for a single room.

    Every operation checks its preconditions before touching the room and
    raises a GameError if one fails, so a rejected command changes nothing.
    Operations return the messages to deliver; the transport is not touched here.
    """

    def __init__(self, code: str, rng: Optional[random.Random] = None,
                 ai_answer: str = config.AI_ANSWER,
                 nickname_max: int = config.NICKNAME_MAX,
                 answer_max: int = config.ANSWER_MAX):
        self.room = Room(code=code)
        self.rng = rng or random.Random()
        self.ai_answer = ai_answer
        self.nickname_max = nickname_max
        self.answer_max = answer_max

    @property
    def code(self) -> str:
        return self.room.code

    @property
    def is_empty(self) -> bool:
        return not self.room.participants

    # ---------- helpers ----------
    def _broadcast(self) -> List[Envelope]:
        return [Envelope(pid, payload) for pid, payload in snapshots(self.room)]

    def _notify_all(self, payload: Dict[str, Any]) -> List[Envelope]:
        return [Envelope(pid, dict(payload)) for pid in self.room.participants]

    def _require_host(self, participant_id: str, message: str):
        if participant_id != self.room.host_id:
            raise NotHost(message)

    def _fresh_id(self, taken) -> str:
        token = new_id(self.rng)
        while token in taken:
            token = new_id(self.rng)
        return token

    def _voting_complete(self) -> bool:
        room = self.room
        return room.player_count > 0 and len(room.votes) >= room.player_count

    def _close_answering(self):
        room = self.room
        used: Set[str] = set()
        deck: List[AnswerEntry] = []
        for owner_id, sub in room.submissions.items():
            entry = AnswerEntry(id=self._fresh_id(used), owner_id=owner_id, nickname=sub.nickname, text=sub.text)
            used.add(entry.id)
            deck.append(entry)
        deck.append(AnswerEntry(id=self._fresh_id(used), owner_id=AI, nickname=AI, text=self.ai_answer))
        self.rng.shuffle(deck)
        room.answer_deck = deck
        room.reveal_count = 0
        room.phase = Phase.REVEAL
        logger.info("ANSWERING DONE -> REVEAL: %s (%d answers)", room.code, len(deck))

    def _close_voting(self):
        room = self.room
        deltas = score(room)
        room.results_reveal_count = 0
        room.phase = Phase.RESULTS
        logger.info("VOTING DONE -> RESULTS: %s deltas=%s", room.code, deltas)

    # ---------- operations ----------
    def join(self, nickname: str) -> Tuple[str, List[Envelope]]:
        room = self.room
        if room.locked:
            raise RoomLocked()
        nickname = (nickname or "").strip()[:self.nickname_max].strip() or config.DEFAULT_NICKNAME
        pid = self._fresh_id(room.participants.keys() | {AI})
        room.participants[pid] = Participant(id=pid, nickname=nickname)
        if room.host_id is None:
            room.host_id = pid
        room.ensure_score(pid)
        room.ensure_score(AI)
        logger.info("JOIN: %s %s id=%s host=%s", room.code, nickname, pid, room.host_id)
        return pid, [Envelope(pid, {"type": "you_are", "participantId": pid})] + self._broadcast()

    def start_game(self, participant_id: str) -> List[Envelope]:
        room = self.room
        self._require_host(participant_id, "Only the host can start the game.")
        if room.phase != Phase.LOBBY:
            return []
        room.locked = True
        room.phase = Phase.ANSWERING
        room.reset_round()
        logger.info("START_GAME: %s", room.code)
        return self._broadcast()

    def submit_answer(self, participant_id: str, text: str) -> List[Envelope]:
        room = self.room
        if not room.locked or room.phase != Phase.ANSWERING:
            raise GameNotStarted("Game not started yet.")
        text = (text or "").strip()[:self.answer_max].strip()
        if not text:
            return []
        ack = Envelope(participant_id, {"type": "submitted_ok"})
        if participant_id in room.submissions:
            return [ack]

        nickname = room.participants[participant_id].nickname
        room.submissions[participant_id] = Submission(nickname=nickname, text=text)
        out = [ack]
        if room.player_count > 0 and len(room.submissions) >= room.player_count:
            self._close_answering()
            out += self._notify_all({"type": "round_over"})
        return out + self._broadcast()

    def reveal_next(self, participant_id: str) -> List[Envelope]:
        room = self.room
        if room.phase != Phase.REVEAL:
            return []
        self._require_host(participant_id, "Only the host can reveal the next answer.")
        if room.reveal_count >= len(room.answer_deck):
            return []
        room.reveal_count += 1
        if room.reveal_count >= len(room.answer_deck):
            room.phase = Phase.VOTING
            room.votes.clear()
            room.tallies.clear()
            logger.info("REVEAL DONE -> VOTING: %s", room.code)
        return self._broadcast()

    def submit_vote(self, participant_id: str, answer_id: str) -> List[Envelope]:
        room = self.room
        if room.phase != Phase.VOTING:
            raise VotingNotActive("Voting is not active.")
        ack = Envelope(participant_id, {"type": "vote_ok"})
        if participant_id in room.votes:
            return [ack]
        picked = room.find_entry((answer_id or "").strip())
        if picked is None:
            return []
        if picked.owner_id == participant_id:
            raise SelfVoteForbidden("You cannot vote for your own answer.")

        room.votes[participant_id] = picked.id
        if self._voting_complete():
            self._close_voting()
        return [ack] + self._broadcast()

    def reveal_next_result(self, participant_id: str) -> List[Envelope]:
        room = self.room
        if room.phase != Phase.RESULTS:
            return []
        self._require_host(participant_id, "Only the host can reveal the next result.")
        if room.results_reveal_count >= len(room.answer_deck):
            return []
        room.results_reveal_count += 1
        return self._broadcast()

    def new_round(self, participant_id: str) -> List[Envelope]:
        room = self.room
        self._require_host(participant_id, "Only the host can start a new round.")
        if not room.locked:
            raise GameNotStarted("Game not started yet.")
        room.phase = Phase.ANSWERING
        room.reset_round()
        logger.info("NEW_ROUND: %s", room.code)
        return self._broadcast()

    def reset_game(self, participant_id: str) -> List[Envelope]:
        room = self.room
        self._require_host(participant_id, "Only the host can reset the game.")
        room.locked = False
        room.phase = Phase.LOBBY
        room.reset_round()
        room.scores.clear()
        for pid in room.participants:
            room.ensure_score(pid)
        room.ensure_score(AI)
        logger.info("RESET_GAME: %s", room.code)
        return self._broadcast()

    def disconnect(self, participant_id: str) -> List[Envelope]:
        room = self.room
        gone = room.participants.pop(participant_id, None)
        if gone is None:
            return []
        # pending contributions only; a scored vote stays put
        if room.phase == Phase.ANSWERING:
            room.submissions.pop(participant_id, None)
        elif room.phase == Phase.VOTING:
            room.votes.pop(participant_id, None)
        assign_host(room)
        logger.info("LEAVE: %s %s id=%s host=%s", room.code, gone.nickname, participant_id, room.host_id)
        if self.is_empty:
            return []
        if room.phase == Phase.VOTING and self._voting_complete():
            self._close_voting()
        return self._broadcast()
