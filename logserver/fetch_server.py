"""UDP log collector that forwards every datagram to a NATS subject."""

from __future__ import annotations

import asyncio
import logging

from .nats import NatsClient, NatsError, connect

log = logging.getLogger(__name__)


def split_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` into host and port."""
    host, _, port = address.rpartition(":")
    if not host or not (port.isascii() and port.isdigit()) or int(port) > 65535:
        raise ValueError(f"invalid address: {address!r}")
    return host.strip("[]"), int(port)


class _Datagrams(asyncio.DatagramProtocol):
    def __init__(self) -> None:
        self.queue: asyncio.Queue[bytes] = asyncio.Queue()

    def datagram_received(self, data: bytes, addr) -> None:
        self.queue.put_nowait(data)


class FetchServer:
    """Publishes the raw bytes of received datagrams to NATS."""

    def __init__(self, transport, datagrams: asyncio.Queue[bytes], publisher: NatsClient,
                 subject: str, buffer_size: int) -> None:
        self._transport = transport
        self._datagrams = datagrams
        self._publisher = publisher
        self.subject = subject
        self.buffer_size = buffer_size
        self.address = transport.get_extra_info("sockname")[:2]

    @classmethod
    async def create(cls, server_address: str, queue_address: str, subject: str,
                     buffer_size: int | None = None) -> FetchServer:
        transport, protocol = await asyncio.get_running_loop().create_datagram_endpoint(
            _Datagrams, local_addr=split_address(server_address)
        )
        try:
            publisher = await connect(queue_address)
        except BaseException:
            transport.close()
            raise
        return cls(transport, protocol.queue, publisher, subject, buffer_size or 4096)

    async def serve(self) -> None:
        """Forward datagrams until cancelled, logging publish failures."""
        try:
            while True:
                data = await self._datagrams.get()
                try:
                    await self._publisher.publish(self.subject, data[: self.buffer_size])
                except NatsError as exc:
                    log.error("%s", exc)
        finally:
            self._transport.close()
            await self._publisher.close()