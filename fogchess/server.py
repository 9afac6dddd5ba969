from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
import argparse
import asyncio
import json
import random
from typing import Dict, Set, Any

import uvicorn
from dotenv import load_dotenv
from loguru import logger

from fogchess.config import ServerConfig, configure_logging
from fogchess.errors import MalformedRequest
from fogchess.game_state import FogChessGame
from fogchess.protocol import JoinMessage, MoveMessage, ResetMessage, parse_message
from fogchess.seats import SEAT_IDS
from fogchess.views import seat_view, view_or_none

app = FastAPI()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def server_config() -> ServerConfig:
    """Settings for this process, read from the environment on first use."""
    config = getattr(app.state, "config", None)
    if config is None:
        load_dotenv()
        config = ServerConfig.from_env()
        app.state.config = config
    return config


# ---- Game room storage ----
Room = Dict[str, Any]
rooms: Dict[str, Room] = {}


def new_room() -> Room:
    config = server_config()
    rng = random.Random(config.seed) if config.seed is not None else None
    return {
        "game": FogChessGame(rng=rng, placement_attempts=config.placement_attempts),
        "clients": set(),   # all sockets in this game, spectators included
        "seats": {},        # websocket -> seat id
    }


def get_room(game_id: str) -> Room:
    room = rooms.get(game_id)
    if room is None:
        room = new_room()
        rooms[game_id] = room
        logger.info("Opened game room {}", game_id)
    return room


def client_view(room: Room, websocket: WebSocket) -> dict:
    seat_id = room["seats"].get(websocket)
    payload = seat_view(room["game"], seat_id)
    payload["assignedPlayerId"] = seat_id
    return payload


async def send_view(room: Room, websocket: WebSocket) -> None:
    await websocket.send_text(json.dumps(client_view(room, websocket)))


async def broadcast(room: Room) -> None:
    """Send every socket in the room its own view of the game."""
    clients: Set[WebSocket] = room["clients"]
    if not clients:
        return

    await asyncio.gather(
        *[send_view(room, ws) for ws in list(clients)],
        return_exceptions=True,
    )


def handle_join(room: Room, websocket: WebSocket, message: JoinMessage) -> bool:
    if websocket in room["seats"]:
        # One seat per socket
        return False
    if not room["game"].join(message.player_id):
        return False
    room["seats"][websocket] = message.player_id
    return True


def handle_move(room: Room, websocket: WebSocket, message: MoveMessage) -> bool:
    seat_id = room["seats"].get(websocket)
    if seat_id is None:
        # Spectators watch, they never move
        return False
    return room["game"].move(seat_id, message.row, message.col)


def handle_reset(room: Room) -> bool:
    room["game"].reset()
    room["seats"].clear()
    return True


# ---- HTTP routes ----
@app.get("/")
async def index() -> dict:
    return {
        "name": "fogchess",
        "seats": list(SEAT_IDS),
        "websocket": "/ws/game/{game_id}",
        "state": "/api/games/{game_id}/state",
        "view": "/api/games/{game_id}/seats/{seat_id}/view",
    }


@app.get("/api/games/{game_id}/state")
async def game_state(game_id: str) -> dict:
    return get_room(game_id)["game"].state_payload()


@app.get("/api/games/{game_id}/seats/{seat_id}/view")
async def game_seat_view(game_id: str, seat_id: str) -> dict:
    view = view_or_none(get_room(game_id)["game"], seat_id)
    if view is None:
        raise HTTPException(status_code=404, detail=f"Unknown seat '{seat_id}'")
    return view


# ---- WebSocket endpoint ----
@app.websocket("/ws/game/{game_id}")
async def ws_game(websocket: WebSocket, game_id: str) -> None:
    await websocket.accept()

    room = get_room(game_id)
    clients: Set[WebSocket] = room["clients"]
    clients.add(websocket)
    logger.info("Client connected to {}", game_id)

    # Send initial state
    await send_view(room, websocket)

    try:
        while True:
            data = await websocket.receive_text()
            try:
                message = parse_message(data)
            except MalformedRequest as exc:
                logger.debug("Dropping malformed message in {}: {}", game_id, exc)
                await send_view(room, websocket)
                continue

            if isinstance(message, JoinMessage):
                changed = handle_join(room, websocket, message)
            elif isinstance(message, MoveMessage):
                changed = handle_move(room, websocket, message)
            elif isinstance(message, ResetMessage):
                changed = handle_reset(room)
            else:
                changed = False

            if changed:
                await broadcast(room)
            else:
                # Nothing happened: refresh the sender's view only
                await send_view(room, websocket)

    except WebSocketDisconnect:
        pass
    finally:
        # Unbind the socket however the loop ended
        clients.discard(websocket)
        seat_id = room["seats"].pop(websocket, None)
        logger.info("Client left {} (seat {})", game_id, seat_id)
        if seat_id is not None and room["game"].disconnect(seat_id):
            await broadcast(room)


def main() -> None:
    config = server_config()

    parser = argparse.ArgumentParser(description="Fog-of-war four-seat chess server")
    parser.add_argument("--host", default=config.host)
    parser.add_argument("--port", type=int, default=config.port)
    parser.add_argument("--log-level", default=config.log_level)
    parser.add_argument("--seed", type=int, default=config.seed)
    args = parser.parse_args()

    config.host, config.port, config.seed = args.host, args.port, args.seed
    config.log_level = args.log_level.upper()
    app.state.config = config
    configure_logging(config.log_level)

    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
