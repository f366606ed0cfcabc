"""Command line entry point: runs the collector, processor and API together.

Send a test line with ``echo "this is a test" | nc -u -q 1 localhost 5014``.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sqlite3
import sys
from collections.abc import Sequence
from dataclasses import asdict, dataclass

from .api_server import VERSION, ApiServer
from .fetch_server import FetchServer
from .nats import NatsError
from .processing_server import ProcessingServer

log = logging.getLogger(__name__)

DATABASE_URL = "sqlite://message.db"


@dataclass(frozen=True)
class Options:
    """Command line settings."""

    address: str = "0.0.0.0"
    fetch_port: int = 5014
    port: int = 8000
    nats_address: str = "demo.nats.io"
    subject: str = "test_subject348573485789345789"


def _port(text: str) -> int:
    if not (text.isascii() and text.isdigit()) or int(text) > 65535:
        raise argparse.ArgumentTypeError(f"invalid port: {text!r}")
    return int(text)


def parse_args(argv: Sequence[str] | None = None) -> Options:
    """Parse command line arguments into :class:`Options`."""
    defaults = Options()
    parser = argparse.ArgumentParser(prog="logserver", description="Collect, queue and serve syslog messages.")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-a", "--address", default=defaults.address, help="Default address of the server")
    parser.add_argument("-f", "--fetch-port", type=_port, default=defaults.fetch_port, help="Log collection port")
    parser.add_argument("-p", "--port", type=_port, default=defaults.port, help="Main port of API server")
    parser.add_argument("-n", "--nats-address", default=defaults.nats_address,
                        help="NATS connection string; the default public demo server is not safe for your data.")
    parser.add_argument("-s", "--subject", default=defaults.subject, help="Subject for the NATS subscriber.")
    namespace = parser.parse_args(argv)
    return Options(**{name: getattr(namespace, name) for name in asdict(defaults)})


async def run(options: Options) -> None:
    """Start the three servers and wait until all of them have stopped."""
    servers = [
        await FetchServer.create(f"{options.address}:{options.fetch_port}", options.nats_address,
                                 options.subject, None),
        await ProcessingServer.create(options.nats_address, options.subject, DATABASE_URL),
        await ApiServer.create(f"{options.address}:{options.port}", DATABASE_URL),
    ]
    results = await asyncio.gather(*(server.serve() for server in servers), return_exceptions=True)
    for server, result in zip(servers, results):
        if isinstance(result, Exception):
            log.error("%s stopped: %s", type(server).__name__, result)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the log server; return the process exit status."""
    options = parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    try:
        asyncio.run(run(options))
    except KeyboardInterrupt:
        return 130
    except (NatsError, OSError, ValueError, sqlite3.Error) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())