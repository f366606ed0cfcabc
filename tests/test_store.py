import pytest
import pytest_asyncio

from logserver.message import Message
from logserver.store import database_path, open_store

FIRST = Message("Jul 16 19:11:07", "host.local", "example_package.desktop[7101]:", "Example log message: OK")
SECOND = Message("Jul 17 20:36:17", "fedora", "sshd[42]:", "Accepted publickey")


@pytest_asyncio.fixture
async def store():
    opened = await open_store("sqlite::memory:")
    yield opened
    await opened.close()


@pytest.mark.parametrize(
    ("url", "path"),
    [
        ("sqlite://message.db", "message.db"),
        ("sqlite:message.db", "message.db"),
        ("sqlite://message.db?mode=rwc", "message.db"),
        ("sqlite::memory:", ":memory:"),
    ],
)
def test_database_path(url, path):
    assert database_path(url) == path


@pytest.mark.parametrize("url", ["message.db", "postgres://db", "sqlite://", "sqlite:"])
def test_database_path_rejects_other_urls(url):
    with pytest.raises(ValueError):
        database_path(url)


@pytest.mark.asyncio
async def test_new_store_is_empty(store):
    assert await store.count() == 0
    assert await store.all() == []


@pytest.mark.asyncio
async def test_insert_and_read_back_in_order(store):
    await store.insert(FIRST)
    await store.insert(SECOND)

    assert await store.count() == 2
    assert await store.all() == [FIRST, SECOND]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("publickey", [SECOND]),
        ("host.local", [FIRST]),
        ("sshd", [SECOND]),
        ("Jul", [FIRST, SECOND]),
        ("", [FIRST, SECOND]),
        ("nothing like this", []),
    ],
)
async def test_search_matches_substring_in_any_field(store, query, expected):
    await store.insert(FIRST)
    await store.insert(SECOND)

    assert await store.search(query) == expected


@pytest.mark.asyncio
async def test_messages_persist_across_reopen(tmp_path):
    url = f"sqlite://{tmp_path / 'message.db'}"

    async with await open_store(url) as first:
        await first.insert(FIRST)

    async with await open_store(url) as second:
        assert await second.all() == [FIRST]
        assert await second.count() == 1


@pytest.mark.asyncio
async def test_open_store_rejects_bad_url():
    with pytest.raises(ValueError):
        await open_store("mysql://db")