# fakeout/room_manager.py
from __future__ import annotations
import logging, random
from typing import Dict, List, Optional, Any, Tuple

from . import config
from .machine import Envelope, RoomSession

logger = logging.getLogger(__name__)

class RoomRegistry:
    """Owns every live room. One registry per server instance."""

    def __init__(self, rng: Optional[random.Random] = None,
                 default_room: str = config.DEFAULT_ROOM,
                 room_code_max: int = config.ROOM_CODE_MAX,
                 **session_options):
        self.rooms: Dict[str, RoomSession] = {}
        self.rng = rng
        self.default_room = default_room
        self.room_code_max = room_code_max
        self.session_options = session_options

    def normalize_code(self, code: Optional[str]) -> str:
        code = (code or "").strip().upper()[:self.room_code_max].strip()
        return code or self.default_room

    def get(self, code: str) -> Optional[RoomSession]:
        return self.rooms.get(code)

    def get_or_create(self, code: str) -> RoomSession:
        session = self.rooms.get(code)
        if session is None:
            session = RoomSession(code, rng=self.rng, **self.session_options)
            self.rooms[code] = session
            logger.info("ROOM CREATED: %s", code)
        return session

    def join(self, code: Optional[str], nickname: Optional[str]) -> Tuple[RoomSession, str, List[Envelope]]:
        session = self.get_or_create(self.normalize_code(code))
        pid, out = session.join(nickname)
        return session, pid, out

    def leave(self, code: str, participant_id: str) -> List[Envelope]:
        session = self.rooms.get(code)
        if session is None:
            return []
        out = session.disconnect(participant_id)
        if session.is_empty:
            del self.rooms[code]
            logger.info("ROOM DESTROYED: %s", code)
            return []
        return out

    def list_rooms(self) -> List[Dict[str, Any]]:
        return [{"code": s.code, "players": s.room.player_count, "phase": s.room.phase.value, "locked": s.room.locked}
                for s in self.rooms.values()]
