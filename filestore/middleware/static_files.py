from __future__ import annotations

from pathlib import Path

from starlette.exceptions import HTTPException
from starlette.responses import PlainTextResponse
from starlette.staticfiles import StaticFiles
from starlette.types import ASGIApp, Receive, Scope, Send


class StoredObjectFiles(StaticFiles):
    """Serve stored objects at their relative path ahead of the API routes.

    GET/HEAD requests that name an existing file get its bytes; anything
    else (directories, misses, other methods) falls through to ``app``.
    This keeps an object's URL pointing at the object even when its path
    collides with a route such as ``/files/...`` or ``/health``.
    """

    def __init__(self, app: ASGIApp, directory: str | Path) -> None:
        super().__init__(directory=directory)
        self.fallback = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] not in ("GET", "HEAD"):
            await self.fallback(scope, receive, send)
            return

        try:
            response = await self.get_response(self.get_path(scope), scope)
        except HTTPException as exc:
            if exc.status_code == 404:
                await self.fallback(scope, receive, send)
                return
            response = PlainTextResponse(exc.detail, status_code=exc.status_code)

        if response.status_code == 404:
            await self.fallback(scope, receive, send)
            return
        await response(scope, receive, send)
