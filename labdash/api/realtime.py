"""WebSocket feed of change signals for one table.

    GET /api/realtime?table=<name>[&token=<session token>]

The server answers ``{"type": "subscribed", "table": ...}`` and then one
``{"type": "change", "table": ..., "op": ...}`` per committed change.
Per-user tables need a token and only report the caller's rows. An
unknown table or a missing token closes the socket with 1008.
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Query, WebSocket, status

from ..core.config import settings
from ..core.token_factory import decode_token
from ..realtime.hub import ChangeSignal, change_hub

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])

# table -> scoped to the owning user
WATCHABLE_TABLES = {
    "projects": False,
    "public_files": False,
    "public_folders": False,
    "user_favorites": True,
    "events": True,
    "user_files": True,
    "folders": True,
}


@router.websocket("/api/realtime")
async def realtime_feed(
    websocket: WebSocket,
    table: str = Query(...),
    token: Optional[str] = Query(None),
):
    if table not in WATCHABLE_TABLES:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    owner_id = None
    if WATCHABLE_TABLES[table]:
        payload = decode_token(token or "", settings.jwt_secret_key, settings.jwt_algorithm)
        if payload is None:
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return
        owner_id = payload.sub

    await websocket.accept()
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    # Listeners run on whichever thread committed; hand the signal to our loop.
    def on_change(signal: ChangeSignal) -> None:
        loop.call_soon_threadsafe(queue.put_nowait, signal)

    predicate = None
    if owner_id is not None:
        def predicate(signal: ChangeSignal) -> bool:
            return signal.user_id == owner_id

    unsubscribe = change_hub.subscribe(table, on_change, predicate)
    logger.info("Realtime client subscribed", extra={"table": table})

    async def forward() -> None:
        while True:
            signal = await queue.get()
            await websocket.send_json({"type": "change", "table": signal.table, "op": signal.op})

    sender = None
    try:
        await websocket.send_json({"type": "subscribed", "table": table})
        sender = asyncio.create_task(forward())
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        if sender is not None:
            sender.cancel()
        unsubscribe()
        logger.info("Realtime client left", extra={"table": table})
