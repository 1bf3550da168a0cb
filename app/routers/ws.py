from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from structlog import get_logger

logger = get_logger()
router = APIRouter(tags=["ws"])


@router.websocket("/ws")
async def relay(websocket: WebSocket):
    broadcaster = websocket.app.state.broadcaster
    await broadcaster.connect(websocket)
    try:
        while True:
            message = await websocket.receive_text()
            await broadcaster.broadcast(message, sender=websocket)
    except WebSocketDisconnect as e:
        logger.info("WebSocket closed by client", code=e.code)
    finally:
        broadcaster.disconnect(websocket)
