"""Process-wide registry of shell sessions started by the application."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from openclaw.startup.context import StartupContext

logger = logging.getLogger(__name__)


class ShellManager:
    """Tracks running shell sessions by name."""

    _instance: ShellManager | None = None

    def __init__(self, context: StartupContext) -> None:
        self.context = context
        self._sessions: dict[str, int] = {}
        self._lock = threading.Lock()

    @classmethod
    def init(cls, context: StartupContext) -> ShellManager:
        """Create the process-wide instance, or return the existing one."""
        if cls._instance is None:
            cls._instance = cls(context)
            logger.debug("Shell manager initialized")
        return cls._instance

    @classmethod
    def get_instance(cls) -> ShellManager | None:
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None

    def add_session(self, name: str, pid: int) -> None:
        with self._lock:
            self._sessions[name] = pid

    def remove_session(self, name: str) -> int | None:
        with self._lock:
            return self._sessions.pop(name, None)

    @property
    def sessions(self) -> dict[str, int]:
        with self._lock:
            return dict(self._sessions)
