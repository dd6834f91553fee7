# fakeout/host.py
from __future__ import annotations
from typing import Optional

from .models import Room

def assign_host(room: Room) -> Optional[str]:
    """Keep the current host if still connected, else promote the longest-connected member."""
    if room.host_id is not None and room.host_id in room.participants:
        return room.host_id
    room.host_id = next(iter(room.participants), None)
    return room.host_id
