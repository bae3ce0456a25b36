"""WebSocket real-time notifications using Socket.IO."""

import socketio
import logging
from typing import Any, Dict

from leadgen.config import settings

logger = logging.getLogger(__name__)

# Create Socket.IO async server
sio = socketio.AsyncServer(
    async_mode='asgi',
    cors_allowed_origins=settings.CORS_ORIGINS,
)

# Socket.IO ASGI app
socket_app = socketio.ASGIApp(
    sio,
    socketio_path='/socket.io'
)


def get_socket_app():
    """Get the Socket.IO ASGI app for mounting."""
    return socket_app


# Socket.IO Event Handlers

@sio.event
async def connect(sid, environ):
    """Handle client connection."""
    logger.info(f"Client connected: {sid}")


@sio.event
async def disconnect(sid):
    """Handle client disconnection."""
    logger.info(f"Client disconnected: {sid}")


# Notification Helper Functions

async def notify_new_lead(lead: Dict[str, Any]):
    """Broadcast a newly stored lead to every dashboard."""
    await sio.emit('new-lead', lead)
    logger.info(f"Broadcast new lead {lead.get('id')}")
