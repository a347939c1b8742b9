"""Tests for the application bootstrap lifecycle."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock, patch

import pytest

from itemledger.app import ItemLedgerApp, _ComponentError, serve_until_stopped
from itemledger.ledger import InMemoryLedgerStore


def test_invalid_config_is_a_component_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ITEMLEDGER_LOG_LEVEL", "loud")
    app = ItemLedgerApp()
    with pytest.raises(_ComponentError) as exc_info:
        asyncio.run(app.start())
    assert exc_info.value.component == "config"


def test_stop_without_start_is_safe() -> None:
    asyncio.run(ItemLedgerApp().stop())


def test_start_and_stop_with_provided_store(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ITEMLEDGER_LOG_LEVEL", "error")
    store = InMemoryLedgerStore()
    server = MagicMock()

    async def _serve() -> None:
        while not server.should_exit:
            await asyncio.sleep(0.01)

    server.should_exit = False
    server.serve = _serve

    async def _run() -> None:
        app = ItemLedgerApp(store=store)
        with patch("uvicorn.Server", return_value=server):
            await app.start()
        assert app.running
        await app.stop()
        assert not app.running

    asyncio.run(_run())


def _fake_server(exit_on_its_own: bool = False) -> MagicMock:
    server = MagicMock()
    server.should_exit = False

    async def _serve() -> None:
        if exit_on_its_own:
            return
        while not server.should_exit:
            await asyncio.sleep(0.01)

    server.serve = _serve
    return server


def test_serve_until_stopped_returns_on_shutdown_request(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ITEMLEDGER_LOG_LEVEL", "error")
    server = _fake_server()
    app = ItemLedgerApp(store=InMemoryLedgerStore())

    async def _run() -> None:
        stop_requested = asyncio.Event()
        asyncio.get_running_loop().call_later(0.05, stop_requested.set)
        with patch("uvicorn.Server", return_value=server):
            await serve_until_stopped(app, stop_requested)

    asyncio.run(_run())
    assert server.should_exit is True
    assert not app.running
    assert app.background_tasks == ()


def test_serve_until_stopped_returns_when_server_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ITEMLEDGER_LOG_LEVEL", "error")
    app = ItemLedgerApp(store=InMemoryLedgerStore())

    async def _run() -> None:
        with patch("uvicorn.Server", return_value=_fake_server(exit_on_its_own=True)):
            await asyncio.wait_for(serve_until_stopped(app, asyncio.Event()), timeout=5)

    asyncio.run(_run())
    assert not app.running


def test_serve_until_stopped_propagates_startup_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ITEMLEDGER_TLS_ENABLED", "true")
    app = ItemLedgerApp()
    with pytest.raises(_ComponentError) as exc_info:
        asyncio.run(serve_until_stopped(app, asyncio.Event()))
    assert exc_info.value.component == "config"
    assert not app.running
