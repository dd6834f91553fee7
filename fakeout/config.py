# fakeout/config.py
import os

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "3000"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

DEFAULT_ROOM = os.environ.get("FAKEOUT_DEFAULT_ROOM", "LOBBY")
DEFAULT_NICKNAME = os.environ.get("FAKEOUT_DEFAULT_NICKNAME", "Anonymous")
NICKNAME_MAX = int(os.environ.get("FAKEOUT_NICKNAME_MAX", "18"))
ROOM_CODE_MAX = int(os.environ.get("FAKEOUT_ROOM_CODE_MAX", "12"))
ANSWER_MAX = int(os.environ.get("FAKEOUT_ANSWER_MAX", "200"))

# Text of the decoy entry dealt into every round
AI_ANSWER = os.environ.get("FAKEOUT_AI_ANSWER", "LOREM IPSUM (fake AI answer)")
