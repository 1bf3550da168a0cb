from typing import List

from starlette.websockets import WebSocket
from structlog import get_logger

logger = get_logger()


class Broadcaster:
    """
    Relays every message to all other connected clients.

    No ordering, delivery or persistence guarantees: a client that is not
    connected when a message is sent never sees it, and a client whose send
    fails is dropped.
    """

    def __init__(self):
        self.connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.connections.append(websocket)
        logger.info("WebSocket connected", clients=len(self.connections))

    def disconnect(self, websocket: WebSocket):
        if websocket in self.connections:
            self.connections.remove(websocket)
            logger.info("WebSocket disconnected", clients=len(self.connections))

    async def broadcast(self, message: str, sender: WebSocket) -> int:
        delivered = 0
        for connection in list(self.connections):
            if connection is sender:
                continue
            try:
                await connection.send_text(message)
                delivered += 1
            except Exception as e:
                logger.warning("WebSocket send failed, dropping client", error=str(e))
                self.disconnect(connection)
        return delivered
