# fakeout/hub.py
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass

from .commands import (Command, Join, NewRound, NextAnswer, NextResult, ResetGame,
                       StartGame, SubmitAnswer, SubmitVote, parse_command)
from .errors import GameError, MalformedCommand, RoomLocked
from .ids import new_id
from .machine import Envelope, RoomSession
from .room_manager import RoomRegistry

logger = logging.getLogger(__name__)

@dataclass
class Seat:
    room_code: str
    participant_id: str

def route(session: RoomSession, participant_id: str, command: Command) -> List[Envelope]:
    if isinstance(command, StartGame):
        return session.start_game(participant_id)
    if isinstance(command, SubmitAnswer):
        return session.submit_answer(participant_id, command.answer)
    if isinstance(command, NextAnswer):
        return session.reveal_next(participant_id)
    if isinstance(command, SubmitVote):
        return session.submit_vote(participant_id, command.answer_id)
    if isinstance(command, NextResult):
        return session.reveal_next_result(participant_id)
    if isinstance(command, NewRound):
        return session.new_round(participant_id)
    if isinstance(command, ResetGame):
        return session.reset_game(participant_id)
    raise TypeError(f"unroutable command: {command!r}")

class Hub:
    """Connection table and command router between the socket layer and the rooms.

    Sockets only need async send_json() and close(). No game state is kept on
    the socket itself; a seat maps a connection id to (room code, participant id).
    """

    def __init__(self, registry: Optional[RoomRegistry] = None):
        self.registry = registry or RoomRegistry()
        self.sockets: Dict[str, Any] = {}
        self.seats: Dict[str, Seat] = {}
        self.members: Dict[Tuple[str, str], str] = {}

    def open(self, ws) -> str:
        conn_id = new_id(n=12)
        while conn_id in self.sockets:
            conn_id = new_id(n=12)
        self.sockets[conn_id] = ws
        return conn_id

    async def send(self, conn_id: str, payload: dict):
        ws = self.sockets.get(conn_id)
        if ws is None:
            return
        try:
            await ws.send_json(payload)
        except Exception as e:
            logger.debug("send to %s failed: %s", conn_id, e)

    async def deliver(self, room_code: str, envelopes: List[Envelope]):
        for env in envelopes:
            conn_id = self.members.get((room_code, env.to))
            if conn_id is not None:
                await self.send(conn_id, env.payload)

    async def receive(self, conn_id: str, raw) -> bool:
        """Handle one inbound frame. Returns False once the connection should end."""
        try:
            command = parse_command(raw)
        except MalformedCommand as e:
            logger.debug("dropped frame from %s: %s", conn_id, e)
            return True

        if isinstance(command, Join):
            return await self._join(conn_id, command)

        seat = self.seats.get(conn_id)
        if seat is None:
            return True
        session = self.registry.get(seat.room_code)
        if session is None:
            return True
        try:
            out = route(session, seat.participant_id, command)
        except GameError as e:
            out = [Envelope(seat.participant_id, e.to_payload())]
        await self.deliver(seat.room_code, out)
        return True

    async def _join(self, conn_id: str, command: Join) -> bool:
        if conn_id in self.seats:
            return True
        try:
            session, pid, out = self.registry.join(command.room, command.nickname)
        except RoomLocked as e:
            logger.info("JOIN REJECTED: %s (%s)", command.room, e.message)
            await self.send(conn_id, e.to_payload())
            await self._close_socket(conn_id)
            return False
        self.seats[conn_id] = Seat(session.code, pid)
        self.members[(session.code, pid)] = conn_id
        await self.deliver(session.code, out)
        return True

    async def _close_socket(self, conn_id: str):
        ws = self.sockets.get(conn_id)
        if ws is None:
            return
        try:
            await ws.close()
        except Exception as e:
            logger.debug("close of %s failed: %s", conn_id, e)

    async def close(self, conn_id: str):
        """Connection gone from either side; leave the room if seated."""
        self.sockets.pop(conn_id, None)
        seat = self.seats.pop(conn_id, None)
        if seat is None:
            return
        self.members.pop((seat.room_code, seat.participant_id), None)
        out = self.registry.leave(seat.room_code, seat.participant_id)
        await self.deliver(seat.room_code, out)
