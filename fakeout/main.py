# fakeout/main.py
from __future__ import annotations
import io, csv, os, logging
from typing import Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse, JSONResponse, Response
from jinja2 import Environment, FileSystemLoader, select_autoescape

from . import config
from .hub import Hub
from .room_manager import RoomRegistry
from .views import leaderboard

logger = logging.getLogger(__name__)

BASE = os.path.dirname(__file__)
templates_dir = os.path.join(BASE, "templates")
env = Environment(loader=FileSystemLoader(templates_dir), autoescape=select_autoescape())

def create_app(registry: Optional[RoomRegistry] = None) -> FastAPI:
    app = FastAPI(title="fakeout")
    hub = Hub(registry or RoomRegistry())
    app.state.hub = hub

    # Pages
    @app.get("/")
    def home():
        return HTMLResponse(env.get_template("home.html").render(rooms=hub.registry.list_rooms()))

    # API
    @app.get("/api/rooms")
    def list_rooms():
        return hub.registry.list_rooms()

    @app.get("/api/export/{room_code}")
    def export_scores(room_code: str):
        session = hub.registry.get(room_code.upper())
        if not session: return JSONResponse({"error": "Room not found"}, status_code=404)
        output = io.StringIO(); writer = csv.writer(output)
        writer.writerow(["Player", "Score"])
        for row in leaderboard(session.room):
            writer.writerow([row["name"], row["score"]])
        return Response(output.getvalue().encode("utf-8"), media_type="text/csv",
                        headers={"Content-Disposition": f"attachment; filename={session.code}_scores.csv"})

    # WebSocket hub
    @app.websocket("/ws")
    async def ws(ws: WebSocket):
        await ws.accept()
        conn_id = hub.open(ws)
        try:
            while True:
                message = await ws.receive()
                if message["type"] == "websocket.disconnect":
                    break
                raw = message.get("text")
                if raw is None:
                    raw = message.get("bytes") or b""
                if not await hub.receive(conn_id, raw):
                    break
        except WebSocketDisconnect:
            pass
        finally:
            await hub.close(conn_id)

    return app

app = create_app()

def run():
    import uvicorn
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("WebSocket server running on port %s", config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())
