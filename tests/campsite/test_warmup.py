"""Regression tests for the startup database ping."""

from __future__ import annotations

import logging
from typing import Any
from unittest.mock import AsyncMock

import pytest

import campsite_api.warmup as warmup


class _DummyTransaction:
    """Async context manager handing out a mocked connection."""

    def __init__(self) -> None:
        self.connection: AsyncMock = AsyncMock()

    async def __aenter__(self) -> AsyncMock:
        return self.connection

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: Any,
    ) -> bool:
        return False


@pytest.mark.asyncio
async def test_warmup_database_executes_ping(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    """The ping runs once against the resolved engine without warnings."""

    caplog.set_level(logging.INFO)

    dummy_txn = _DummyTransaction()
    sentinel_engine = object()
    captured_engines: list[object] = []

    def _capture_engine(engine: object) -> _DummyTransaction:
        captured_engines.append(engine)
        return dummy_txn

    monkeypatch.setattr(warmup, "begin_engine_transaction", _capture_engine)

    result = await warmup.warmup_database(
        resolve_db_type=lambda: "postgresql",
        resolve_engine=lambda: sentinel_engine,
    )

    assert result is True
    assert captured_engines == [sentinel_engine]
    assert dummy_txn.connection.execute.await_count == 1
    executed_statement = dummy_txn.connection.execute.await_args.args[0]
    assert str(executed_statement).strip().upper() == "SELECT 1"
    assert "Database connection warmed up" in caplog.text
    assert not [
        record for record in caplog.records if record.levelno >= logging.WARNING
    ]


@pytest.mark.asyncio
async def test_warmup_database_logs_failure_and_continues(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A failed ping is reported as a warning instead of aborting startup."""

    caplog.set_level(logging.INFO)

    dummy_txn = _DummyTransaction()
    dummy_txn.connection.execute.side_effect = ConnectionRefusedError("db down")
    monkeypatch.setattr(warmup, "begin_engine_transaction", lambda _: dummy_txn)

    result = await warmup.warmup_database(
        resolve_db_type=lambda: "sqlite",
        resolve_engine=lambda: object(),
    )

    assert result is False
    assert any(
        record.levelno == logging.WARNING and "db down" in record.getMessage()
        for record in caplog.records
    )


@pytest.mark.asyncio
async def test_warmup_database_against_in_memory_sqlite() -> None:
    pytest.importorskip("aiosqlite")
    from campsite_api.db.connection import create_engine

    engine = create_engine("sqlite+aiosqlite:///:memory:")
    try:
        assert await warmup.warmup_database(
            resolve_db_type=lambda: "sqlite", resolve_engine=lambda: engine
        )
    finally:
        await engine.dispose()
