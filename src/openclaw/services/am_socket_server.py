"""Local am socket server.

Serves ``am`` command requests from shell clients over a UNIX socket under
the application directory. The server is best-effort: any failure to bring
it up is logged here and the launch continues without it.

Wire format: the client writes its arguments separated by NUL bytes and
shuts down its write side; the server answers
``<exit code>\\0<stdout>\\0<stderr>`` and closes the connection.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
import logging
from pathlib import Path
import socketserver
import stat
import threading
from typing import TYPE_CHECKING

from openclaw.services.properties import get_properties

if TYPE_CHECKING:
    from openclaw.startup.context import StartupContext

logger = logging.getLogger(__name__)

MAX_REQUEST_BYTES = 64 * 1024

CommandResult = tuple[int, str, str]
CommandRunner = Callable[[Sequence[str]], CommandResult]


def unsupported_command_runner(args: Sequence[str]) -> CommandResult:
    """Default runner: this host cannot execute am commands."""
    return 1, "", "am command execution is not supported on this host\n"


def decode_request(data: bytes) -> list[str]:
    return [arg for arg in data.decode("utf-8", errors="replace").split("\0") if arg]


def encode_response(result: CommandResult) -> bytes:
    code, stdout, stderr = result
    return f"{code}\0{stdout}\0{stderr}".encode()


class _AmRequestHandler(socketserver.StreamRequestHandler):
    server: _AmUnixServer

    def handle(self) -> None:
        data = self.rfile.read(MAX_REQUEST_BYTES)
        args = decode_request(data)
        try:
            result = self.server.command_runner(args)
        except Exception as e:  # noqa: BLE001 - one bad request must not kill the server
            logger.exception("am command %s failed", args)
            result = (1, "", f"{e}\n")
        self.wfile.write(encode_response(result))


class _AmUnixServer(socketserver.ThreadingUnixStreamServer):
    daemon_threads = True

    def __init__(self, socket_path: str, command_runner: CommandRunner) -> None:
        self.command_runner = command_runner
        super().__init__(socket_path, _AmRequestHandler)


class AmSocketServer:
    """Owns the socket server and its serving thread."""

    def __init__(
        self, socket_path: Path, command_runner: CommandRunner | None = None
    ) -> None:
        self.socket_path = socket_path
        self.command_runner = command_runner or unsupported_command_runner
        self._server: _AmUnixServer | None = None
        self._thread: threading.Thread | None = None

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """Bind the socket and serve in a daemon thread. Never raises."""
        if self.is_running():
            return True

        try:
            self.socket_path.parent.mkdir(parents=True, exist_ok=True)
            if self.socket_path.exists() and stat.S_ISSOCK(self.socket_path.stat().st_mode):
                # Left over from a previous process
                self.socket_path.unlink()
            self._server = _AmUnixServer(str(self.socket_path), self.command_runner)
        except OSError as e:
            logger.error(
                "[SVC_001] Failed to start am socket server at %s: %s", self.socket_path, e
            )
            self._server = None
            return False

        self._thread = threading.Thread(
            target=self._server.serve_forever,
            name="am-socket-server",
            daemon=True,
        )
        self._thread.start()
        logger.info("Am socket server listening on %s", self.socket_path)
        return True

    def shutdown(self) -> None:
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join(timeout=5)
        self._server = None
        self._thread = None
        try:
            self.socket_path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not remove socket file %s", self.socket_path)


_server: AmSocketServer | None = None


def setup_am_socket_server(context: StartupContext) -> bool:
    """Start the process-wide am socket server if it is enabled.

    Returns whether the server is running afterwards.
    """
    global _server  # noqa: PLW0603 - process-wide service

    if not context.config.run_am_socket_server:
        logger.info("Am socket server disabled by configuration")
        return False

    properties = get_properties()
    if properties is not None and not properties.run_am_socket_server:
        logger.info("Am socket server disabled by properties")
        return False

    if _server is not None and _server.is_running():
        return True

    _server = AmSocketServer(context.paths.am_socket_path)
    return _server.start()


def is_am_socket_server_running() -> bool:
    return _server is not None and _server.is_running()


def shutdown_am_socket_server() -> None:
    global _server  # noqa: PLW0603 - process-wide service

    if _server is not None:
        _server.shutdown()
        _server = None
