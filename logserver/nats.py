"""A minimal asyncio publish/subscribe client for NATS."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from dataclasses import dataclass
from itertools import count
from urllib.parse import urlsplit

log = logging.getLogger(__name__)

DEFAULT_PORT = 4222
_CONNECT = b'CONNECT {"verbose":false,"pedantic":false,"lang":"python"}\r\nPING\r\n'


class NatsError(Exception):
    """Connection, protocol or server error."""


@dataclass(frozen=True)
class NatsMessage:
    subject: str
    payload: bytes
    reply: str | None = None


def parse_address(address: str) -> tuple[str, int]:
    """Split ``host``, ``host:port`` or ``nats://host:port`` into host and port."""
    text = address.strip()
    parts = urlsplit(text if "://" in text else "nats://" + text)
    try:
        port = parts.port
    except ValueError as exc:
        raise NatsError(f"invalid port in NATS address: {address!r}") from exc
    if parts.scheme != "nats" or not parts.hostname:
        raise NatsError(f"invalid NATS address: {address!r}")
    return parts.hostname, port or DEFAULT_PORT


def _checked(subject: str) -> bytes:
    if not subject or any(ch.isspace() for ch in subject):
        raise NatsError(f"invalid subject: {subject!r}")
    return subject.encode()


class Subscription:
    """Messages arriving on one subject, in order."""

    def __init__(self, sid: int, subject: str) -> None:
        self.sid = sid
        self.subject = subject
        self._queue: asyncio.Queue[NatsMessage | None] = asyncio.Queue()

    async def next(self) -> NatsMessage | None:
        """Wait for the next message; None once the connection has ended."""
        message = await self._queue.get()
        if message is None:
            self._queue.put_nowait(None)
        return message

    def __aiter__(self) -> Subscription:
        return self

    async def __anext__(self) -> NatsMessage:
        if (message := await self.next()) is None:
            raise StopAsyncIteration
        return message


class NatsClient:
    """A connected client; build one with :func:`connect`."""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter, server_info: dict) -> None:
        self.server_info = server_info
        self._reader, self._writer = reader, writer
        self._sids = count(1)
        self._subscriptions: dict[int, Subscription] = {}
        self._closed = False
        self._task = asyncio.create_task(self._read_loop())

    async def publish(self, subject: str, payload: bytes) -> None:
        data = bytes(payload)
        await self._send(b"PUB %s %d\r\n%s\r\n" % (_checked(subject), len(data), data))

    async def subscribe(self, subject: str) -> Subscription:
        name = _checked(subject)
        subscription = Subscription(next(self._sids), subject)
        self._subscriptions[subscription.sid] = subscription
        await self._send(b"SUB %s %d\r\n" % (name, subscription.sid))
        return subscription

    async def close(self) -> None:
        """Close the connection and end every subscription."""
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._writer.close()
        with contextlib.suppress(OSError):
            await self._writer.wait_closed()

    async def _send(self, data: bytes) -> None:
        if self._closed:
            raise NatsError("connection closed")
        try:
            self._writer.write(data)
            await self._writer.drain()
        except OSError as exc:
            raise NatsError(f"write failed: {exc}") from exc

    async def _read_loop(self) -> None:
        try:
            while line := await self._reader.readline():
                op, _, rest = line.rstrip(b"\r\n").partition(b" ")
                op = op.upper()
                if op == b"MSG":
                    subject, sid, *reply, size = rest.decode().split()
                    data = await self._reader.readexactly(int(size) + 2)
                    if subscription := self._subscriptions.get(int(sid)):
                        subscription._queue.put_nowait(NatsMessage(subject, data[:-2], reply[0] if reply else None))
                elif op == b"PING":
                    self._writer.write(b"PONG\r\n")
                elif op == b"-ERR":
                    log.error("NATS server error: %s", rest.decode(errors="replace"))
        except (OSError, ValueError, asyncio.IncompleteReadError) as exc:
            log.error("NATS connection lost: %s", exc)
        finally:
            self._closed = True
            for subscription in self._subscriptions.values():
                subscription._queue.put_nowait(None)


async def connect(address: str) -> NatsClient:
    """Connect to a NATS server and complete the handshake."""
    host, port = parse_address(address)
    try:
        reader, writer = await asyncio.open_connection(host, port)
    except OSError as exc:
        raise NatsError(f"cannot connect to {host}:{port}: {exc}") from exc
    try:
        op, _, body = (await reader.readline()).strip().partition(b" ")
        if op.upper() != b"INFO":
            raise NatsError("server did not send INFO")
        info = json.loads(body)
        writer.write(_CONNECT)
        await writer.drain()
        reply = (await reader.readline()).strip()
        if reply.upper() != b"PONG":
            text = reply.decode(errors="replace").removeprefix("-ERR").strip(" '")
            raise NatsError(text or "connection closed during handshake")
    except NatsError:
        writer.close()
        raise
    except (OSError, ValueError) as exc:
        writer.close()
        raise NatsError(f"handshake failed: {exc}") from exc
    return NatsClient(reader, writer, info)