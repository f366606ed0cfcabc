"""Subscriber that parses queued log lines and stores them."""

from __future__ import annotations

import logging
import sqlite3

from .message import Message
from .nats import NatsClient, NatsMessage, Subscription, connect
from .store import MessageStore, open_store

log = logging.getLogger(__name__)


class ProcessingServer:
    """Stores parsed NATS messages."""

    def __init__(self, client: NatsClient, subscription: Subscription, store: MessageStore) -> None:
        self._client = client
        self._subscription = subscription
        self.store = store

    @classmethod
    async def create(cls, queue_address: str, subject: str, database_url: str) -> ProcessingServer:
        client = await connect(queue_address)
        try:
            return cls(client, await client.subscribe(subject), await open_store(database_url))
        except BaseException:
            await client.close()
            raise

    async def handle(self, message: NatsMessage) -> Message | None:
        """Parse and store one message; unparsable lines are dropped."""
        parsed = Message.from_payload(message.payload)
        if parsed is not None:
            try:
                await self.store.insert(parsed)
            except sqlite3.Error as exc:
                log.error("Database error: %s", exc)
        return parsed

    async def serve(self) -> None:
        try:
            async for message in self._subscription:
                await self.handle(message)
        finally:
            await self._client.close()
            await self.store.close()