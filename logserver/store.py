"""SQLite storage for parsed log messages."""

from __future__ import annotations

import aiosqlite

from .message import Message

_FIELDS = ("date", "host", "program", "message")
_SELECT = "SELECT date, host, program, message FROM messages"


def database_path(database_url: str) -> str:
    """Turn ``sqlite://file.db`` (or ``sqlite:file.db``) into a file path."""
    scheme, sep, rest = database_url.partition(":")
    path = rest.removeprefix("//").split("?", 1)[0]
    if not sep or scheme.lower() != "sqlite" or not path:
        raise ValueError(f"not a sqlite database URL: {database_url!r}")
    return path


class MessageStore:
    """The message table of an open database."""

    def __init__(self, connection: aiosqlite.Connection) -> None:
        self._connection = connection

    async def insert(self, message: Message) -> None:
        await self._connection.execute(
            "INSERT INTO messages (date, host, program, message) VALUES (?, ?, ?, ?)",
            (message.date, message.host, message.program, message.message),
        )
        await self._connection.commit()

    async def all(self) -> list[Message]:
        return await self._select(f"{_SELECT} ORDER BY id")

    async def count(self) -> int:
        (row,) = await self._connection.execute_fetchall("SELECT COUNT(*) FROM messages")
        return int(row[0])

    async def search(self, query: str) -> list[Message]:
        """Messages containing ``query`` in any field."""
        where = " OR ".join(f"{field} LIKE ?" for field in _FIELDS)
        return await self._select(f"{_SELECT} WHERE {where} ORDER BY id", (f"%{query}%",) * len(_FIELDS))

    async def close(self) -> None:
        await self._connection.close()

    async def _select(self, sql: str, params: tuple = ()) -> list[Message]:
        return [Message(*row) for row in await self._connection.execute_fetchall(sql, params)]


async def open_store(database_url: str) -> MessageStore:
    """Open, creating if needed, the message database behind a sqlite URL."""
    connection = await aiosqlite.connect(database_path(database_url))
    columns = ", ".join(f"{field} TEXT NOT NULL" for field in _FIELDS)
    await connection.execute(f"CREATE TABLE IF NOT EXISTS messages (id INTEGER PRIMARY KEY AUTOINCREMENT, {columns})")
    await connection.commit()
    return MessageStore(connection)