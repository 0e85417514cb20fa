"""Persistence gateway: connection attempt, schema sync and readiness.

``DatabaseGateway`` owns the lifecycle of the database connection for
one alias.  It is constructed once by ``CoreConfig.ready()`` and handed
to whoever needs it (WSGI bootstrap, health check, readiness gate,
``sync_db`` command).  The Django ``ConnectionHandler`` is injected so
tests can substitute a double.

Readiness follows a small state machine::

    DISCONNECTED -> CONNECTING -> READY | FAILED
    READY | FAILED -> CONNECTING   (reconnect)

A failed connection attempt is logged and recorded as ``FAILED``; it
never raises.  There is no retry or backoff.
"""

from __future__ import annotations

import threading
import time
from typing import Iterable

import structlog
from django.core.management import call_command
from django.db import DEFAULT_DB_ALIAS, connections
from django.db.utils import ConnectionHandler

from modules.core.constants import (
    CONNECTION_ERROR_MESSAGE,
    VALID_TRANSITIONS,
    ReadinessState,
)
from modules.core.exceptions import InvalidReadinessTransition

logger = structlog.get_logger(__name__)


class DatabaseGateway:
    """Connection, schema and readiness manager for a database alias."""

    def __init__(
        self,
        connection_handler: ConnectionHandler = connections,
        alias: str = DEFAULT_DB_ALIAS,
        reset_apps: Iterable[str] = ("products",),
    ) -> None:
        self._connections = connection_handler
        self.alias = alias
        self.reset_apps = tuple(reset_apps)
        self._state: str = ReadinessState.DISCONNECTED
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Readiness
    # ------------------------------------------------------------------

    @property
    def state(self) -> str:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state == ReadinessState.READY

    def _transition(self, new_state: str) -> None:
        with self._lock:
            if new_state not in VALID_TRANSITIONS[self._state]:
                raise InvalidReadinessTransition(
                    f"Cannot move from {self._state} to {new_state}."
                )
            logger.debug(
                "database.readiness_changed",
                alias=self.alias,
                from_state=str(self._state),
                to_state=str(new_state),
            )
            self._state = new_state

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------

    def connect(self) -> bool:
        """Open the connection and sync the schema.

        Returns ``True`` when the database is ready.  On failure, logs
        ``CONNECTION_ERROR_MESSAGE``, marks the gateway ``FAILED`` and
        returns ``False``.
        """
        self._transition(ReadinessState.CONNECTING)
        log = logger.bind(alias=self.alias)

        try:
            self._connections[self.alias].ensure_connection()
            self.sync()
        except Exception as exc:
            log.error(
                "database.connection_failed",
                detail=CONNECTION_ERROR_MESSAGE,
                error=str(exc),
            )
            self._transition(ReadinessState.FAILED)
            return False

        self._transition(ReadinessState.READY)
        log.info("database.ready")
        return True

    def start(self) -> threading.Thread:
        """Fire-and-forget ``connect()`` on a daemon thread."""
        thread = threading.Thread(
            target=self._connect_in_background,
            name="database-connect",
            daemon=True,
        )
        thread.start()
        return thread

    def _connect_in_background(self) -> None:
        try:
            self.connect()
        finally:
            # Connections are per-thread; release this thread's handle.
            self._connections.close_all()

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    def sync(self, clear: bool = False) -> None:
        """Create any missing tables.

        With ``clear=True`` the tables of ``reset_apps`` are dropped
        (migrated to ``zero``) and recreated.
        """
        if clear:
            for app_label in self.reset_apps:
                call_command(
                    "migrate",
                    app_label,
                    "zero",
                    database=self.alias,
                    interactive=False,
                    verbosity=0,
                )
            logger.warning("database.tables_dropped", apps=list(self.reset_apps))

        call_command("migrate", database=self.alias, interactive=False, verbosity=0)
        logger.info("database.synced", alias=self.alias, clear=clear)

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    def ping(self) -> float:
        """Run ``SELECT 1`` and return the round trip in milliseconds."""
        start = time.monotonic()
        conn = self._connections[self.alias]
        conn.ensure_connection()
        with conn.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        return round((time.monotonic() - start) * 1000, 2)
