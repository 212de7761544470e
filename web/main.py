"""FastAPI + Socket.IO application for the chatroom"""

from contextlib import asynccontextmanager
from typing import Optional

import socketio
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chatroom import __version__
from chatroom.utils.config import Settings
from chatroom.utils.logger import get_logger

from .api import router as api_router
from .auth_middleware import AccessGateMiddleware
from .pages import router as pages_router
from .realtime import ChatNamespace
from .services import ChatServices

logger = get_logger(__name__)


class ChatServer:
    """Wires the services, the HTTP app and the Socket.IO server together"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.services = ChatServices.from_settings(self.settings)

        self.app = FastAPI(
            title="Chatroom",
            description="Authenticated real-time chat",
            version=__version__,
            lifespan=self._lifespan,
        )
        self.app.state.services = self.services
        self.app.add_middleware(AccessGateMiddleware, gate=self.services.gate)
        self.app.include_router(api_router)
        self.app.include_router(pages_router)
        self.app.add_exception_handler(StarletteHTTPException, _not_found_handler)

        self.sio = socketio.AsyncServer(async_mode="asgi")
        self.sio.register_namespace(ChatNamespace(self.services.hub, self.services.gate))
        self.services.hub.bind(self.sio)

        self.asgi = socketio.ASGIApp(self.sio, other_asgi_app=self.app)

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        logger.info(
            "Server is listening",
            host=self.settings.server.host,
            port=self.settings.server.port,
        )
        yield
        logger.info(
            "Server stopped",
            participants=self.services.hub.participant_count,
            sessions=len(self.services.registry),
        )


async def _not_found_handler(request: Request, exc: StarletteHTTPException):
    # Authenticated callers get a bare 404 for anything unrouted, whatever the method
    if exc.status_code in (404, 405):
        return PlainTextResponse("404", status_code=404)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


def create_app(settings: Optional[Settings] = None) -> socketio.ASGIApp:
    """ASGI entry point for uvicorn"""
    return ChatServer(settings).asgi
