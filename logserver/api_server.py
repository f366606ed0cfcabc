"""HTTP API over the stored log messages."""

from __future__ import annotations

import asyncio

from aiohttp import web

from .fetch_server import split_address
from .store import MessageStore, open_store

VERSION = "0.1.0"


def create_app(store: MessageStore) -> web.Application:
    """Build the web application serving messages from ``store``."""

    def listing(messages) -> web.Response:
        return web.json_response([message.to_dict() for message in messages])

    async def get_all(request: web.Request) -> web.Response:
        return listing(await store.all())

    async def count(request: web.Request) -> web.Response:
        return web.json_response(await store.count())

    async def search(request: web.Request) -> web.Response:
        if request.content_type != "text/plain":
            raise web.HTTPUnsupportedMediaType(text=f"expected text/plain, got {request.content_type}")
        return listing(await store.search(await request.text()))

    async def docs(request: web.Request) -> web.Response:
        paths = {"/messages": {"get": {}}, "/count": {"get": {}}, "/search": {"post": {}}}
        return web.json_response({
            "openapi": "3.0.0",
            "info": {"title": "Messages", "version": VERSION},
            "servers": [{"url": ""}],
            "paths": paths,
        })

    app = web.Application()
    app.router.add_get("/messages", get_all)
    app.router.add_get("/count", count)
    app.router.add_post("/search", search)
    app.router.add_get("/docs", docs)
    return app


class ApiServer:
    """Serves the message API on a TCP address."""

    def __init__(self, host: str, port: int, store: MessageStore) -> None:
        self.host = host
        self.port = port
        self.store = store

    @classmethod
    async def create(cls, address: str, database_url: str) -> ApiServer:
        """Check the listen address and open the message database."""
        host, port = split_address(address)
        return cls(host, port, await open_store(database_url))

    async def serve(self) -> None:
        """Serve HTTP requests until cancelled."""
        runner = web.AppRunner(create_app(self.store))
        try:
            await runner.setup()
            await web.TCPSite(runner, self.host, self.port).start()
            await asyncio.Event().wait()
        finally:
            await runner.cleanup()
            await self.store.close()