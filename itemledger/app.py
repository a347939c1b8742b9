"""Application bootstrap for itemledger.

Wires all components in dependency order and manages the asyncio lifecycle.
Startup order: config → logging → ledger store → contract → REST

Shutdown is graceful: components are stopped in reverse startup order and
a failure while stopping one component does not prevent the rest from
shutting down.
"""

from __future__ import annotations

import asyncio
import signal
from typing import TYPE_CHECKING

from itemledger.config import load_config
from itemledger.models.config import ItemLedgerConfig
from itemledger.observability.logging import get_logger, setup_logging

if TYPE_CHECKING:
    import structlog

    from itemledger.contract import Dispatcher
    from itemledger.ledger import LedgerStore

_SHUTDOWN_GRACE_SECONDS = 15


class _ComponentError(Exception):
    """Raised when a mandatory component fails to start."""

    def __init__(self, component: str, cause: Exception) -> None:
        super().__init__(f"Component '{component}' failed to start: {cause}")
        self.component = component
        self.cause = cause


class ItemLedgerApp:
    """Application root. Owns every component and coordinates their lifecycle.

    ``stop()`` is safe to call on an app that was never started or has
    already stopped.
    """

    def __init__(self, store: LedgerStore | None = None) -> None:
        self.config: ItemLedgerConfig | None = None

        self._store: LedgerStore | None = store
        self._dispatcher: Dispatcher | None = None
        self._rest_server: object | None = None

        self._background_tasks: list[asyncio.Task[None]] = []

        self._running = False
        self._log: structlog.stdlib.BoundLogger | None = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def background_tasks(self) -> tuple[asyncio.Task[None], ...]:
        return tuple(self._background_tasks)

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Start all components in dependency order.

        Raises _ComponentError if a mandatory component cannot start.
        """
        try:
            self.config = load_config()
        except ValueError as exc:
            raise _ComponentError("config", exc) from exc

        setup_logging(self.config.log.level, self.config.log.format, ccid=self.config.ccid)
        self._log = get_logger("app")
        self._log.info("itemledger starting", version=_itemledger_version(), ccid=self.config.ccid)

        self._start_store()
        self._start_contract()
        await self._start_rest()

        self._running = True
        self._log.info("itemledger started", host=self.config.api.host, port=self.config.api.port)

    def _start_store(self) -> None:
        assert self._log is not None
        if self._store is not None:
            self._log.info("ledger store provided", store=type(self._store).__name__)
            return
        try:
            from itemledger.ledger import InMemoryLedgerStore

            self._store = InMemoryLedgerStore()
            self._log.info("ledger store started", store="memory")
        except Exception as exc:
            raise _ComponentError("ledger", exc) from exc

    def _start_contract(self) -> None:
        assert self._log is not None
        assert self._store is not None
        try:
            from itemledger.contract import build_dispatcher

            self._dispatcher = build_dispatcher(self._store)
            self._dispatcher.init()
        except Exception as exc:
            raise _ComponentError("contract", exc) from exc

    async def _start_rest(self) -> None:
        """Start the uvicorn REST server."""
        assert self._log is not None
        assert self.config is not None
        assert self._dispatcher is not None
        self._log.debug("starting rest api")
        try:
            import uvicorn

            from itemledger.api import create_app

            fastapi_app = create_app(dispatcher=self._dispatcher, config=self.config)
            tls = self.config.tls
            uv_config = uvicorn.Config(
                app=fastapi_app,
                host=self.config.api.host,
                port=self.config.api.port,
                log_config=None,  # structlog handles all logging
                access_log=False,
                ssl_certfile=tls.cert_file if tls.enabled else None,
                ssl_keyfile=tls.key_file if tls.enabled else None,
            )
            server = uvicorn.Server(uv_config)
            task = asyncio.create_task(server.serve(), name="rest-server")
            self._background_tasks.append(task)
            self._rest_server = server
            self._log.info("rest api started", port=self.config.api.port, tls=tls.enabled)
        except Exception as exc:
            raise _ComponentError("rest", exc) from exc

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    async def stop(self) -> None:
        """Gracefully stop all components in reverse startup order."""
        if not self._running and self._log is None:
            return

        log = self._log or get_logger("app")
        log.info("itemledger shutting down")

        self._running = False

        if self._rest_server is not None:
            self._rest_server.should_exit = True  # type: ignore[attr-defined]

        if self._background_tasks:
            done, pending = await asyncio.wait(self._background_tasks, timeout=_SHUTDOWN_GRACE_SECONDS)
            for task in pending:
                log.warning("component stop timed out", task=task.get_name(), timeout=_SHUTDOWN_GRACE_SECONDS)
                task.cancel()
            for task in done:
                if not task.cancelled() and task.exception() is not None:
                    log.error("component stop raised an error", task=task.get_name(), error=str(task.exception()))
        self._background_tasks.clear()

        self._rest_server = None
        self._dispatcher = None
        log.info("itemledger stopped")


def _itemledger_version() -> str:
    from itemledger import __version__

    return __version__


# ---------------------------------------------------------------------------
# Async entrypoint
# ---------------------------------------------------------------------------


async def serve_until_stopped(app: ItemLedgerApp, stop_requested: asyncio.Event) -> None:
    """Run *app* until *stop_requested* is set or a server task exits on its own.

    The app is always stopped before returning.
    """
    try:
        await app.start()
    except _ComponentError:
        await app.stop()
        raise
    waiter = asyncio.create_task(stop_requested.wait(), name="shutdown-signal")
    try:
        done, _ = await asyncio.wait({waiter, *app.background_tasks}, return_when=asyncio.FIRST_COMPLETED)
        if waiter not in done:
            get_logger("app").warning("server task exited without a shutdown request")
    finally:
        waiter.cancel()
        await app.stop()


async def main() -> None:
    """Create the app, register OS signals, serve until SIGTERM/SIGINT."""
    app = ItemLedgerApp()
    loop = asyncio.get_running_loop()
    stop_requested = asyncio.Event()

    signals = (signal.SIGTERM, signal.SIGINT)
    for sig in signals:
        loop.add_signal_handler(sig, stop_requested.set)

    try:
        await serve_until_stopped(app, stop_requested)
    except _ComponentError as exc:
        get_logger("app").critical(
            "fatal startup error",
            component=exc.component,
            error=str(exc.cause),
        )
        raise SystemExit(1) from exc
    finally:
        for sig in signals:
            loop.remove_signal_handler(sig)
