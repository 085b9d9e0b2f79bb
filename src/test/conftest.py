# pylint: disable=redefined-outer-name
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, List

import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table, create_engine
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

ACCOUNTS = [
    {"id": 1, "name": "oliver", "age": 28},
    {"id": 2, "name": "rachel", "age": 28},
    {"id": 3, "name": "sophie", "age": 1},
    {"id": 4, "name": "buddy", "age": 20},
    {"id": 5, "name": "foo", "age": 99},
    {"id": 6, "name": "bar", "age": 5},
    {"id": 7, "name": "baz", "age": 35},
]


@pytest.fixture(scope="session")
def event_loop():
    """ Event loop for use testing async functions """
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture
def run(event_loop) -> Callable[[Awaitable], Any]:
    """Run a coroutine to completion"""
    return event_loop.run_until_complete


@pytest.fixture
def items() -> List[Dict[str, int]]:
    """ 10 items ordered ascending by id """
    return [{"id": ix} for ix in range(1, 11)]


@pytest.fixture
def accounts() -> List[Dict[str, Any]]:
    return [dict(account) for account in ACCOUNTS]


@pytest.fixture
def account_table() -> Table:
    metadata = MetaData()
    return Table(
        "account",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("name", String, nullable=False),
        Column("age", Integer, nullable=False),
    )


@pytest.fixture
def engine(account_table: Table):
    """ SQLAlchemy engine for an in memory sqlite database seeded with accounts """
    _engine = create_engine("sqlite://")
    account_table.metadata.create_all(_engine)
    with _engine.begin() as conn:
        conn.execute(account_table.insert(), ACCOUNTS)
    yield _engine
    _engine.dispose()


@pytest.fixture
def connection(engine):
    with engine.connect() as conn:
        yield conn


@pytest.fixture
def async_engine(run, account_table: Table):
    """ asyncio SQLAlchemy engine for an in memory sqlite database seeded with accounts """
    _engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)

    async def seed():
        async with _engine.begin() as conn:
            await conn.run_sync(account_table.metadata.create_all)
            await conn.execute(account_table.insert(), ACCOUNTS)

    run(seed())
    yield _engine
    run(_engine.dispose())
