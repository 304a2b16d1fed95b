"""Tests for the local am socket server."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
import socket

import pytest

from openclaw.services import am_socket_server
from openclaw.services.am_socket_server import (
    AmSocketServer,
    decode_request,
    encode_response,
    is_am_socket_server_running,
    setup_am_socket_server,
)
from openclaw.services.properties import init_properties
from openclaw.startup.context import StartupContext


def send_request(path: Path, *args: str) -> bytes:
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as client:
        client.settimeout(5)
        client.connect(str(path))
        client.sendall("\0".join(args).encode())
        client.shutdown(socket.SHUT_WR)
        chunks = []
        while chunk := client.recv(4096):
            chunks.append(chunk)
    return b"".join(chunks)


class TestWireFormat:
    """Test request and response encoding."""

    def test_decode_request(self) -> None:
        """Test arguments are split on NUL and empties dropped."""
        assert decode_request(b"start\0-n\0com.termux/.App\0") == [
            "start",
            "-n",
            "com.termux/.App",
        ]
        assert decode_request(b"") == []

    def test_encode_response(self) -> None:
        """Test the response carries code, stdout and stderr."""
        assert encode_response((0, "out", "err")) == b"0\0out\0err"


class TestAmSocketServer:
    """Test serving requests over a real socket."""

    def test_serves_requests(self, short_tmp: Path) -> None:
        """Test a request reaches the command runner."""
        received: list[Sequence[str]] = []

        def runner(args: Sequence[str]) -> tuple[int, str, str]:
            received.append(list(args))
            return 0, "Starting activity\n", ""

        server = AmSocketServer(short_tmp / "am" / "am.sock", runner)
        assert server.start() is True
        try:
            response = send_request(server.socket_path, "start", "-n", "x/.Main")
        finally:
            server.shutdown()

        assert received == [["start", "-n", "x/.Main"]]
        assert response == b"0\0Starting activity\n\0"
        assert not server.socket_path.exists()

    def test_default_runner_reports_unsupported(self, short_tmp: Path) -> None:
        """Test the default runner answers with an error."""
        server = AmSocketServer(short_tmp / "am.sock")
        server.start()
        try:
            code, _, stderr = send_request(server.socket_path, "broadcast").split(b"\0")
        finally:
            server.shutdown()

        assert code == b"1"
        assert b"not supported" in stderr

    def test_runner_exception_answered(self, short_tmp: Path) -> None:
        """Test a failing runner does not take the server down."""

        def runner(args: Sequence[str]) -> tuple[int, str, str]:
            raise ValueError("bad intent")

        server = AmSocketServer(short_tmp / "am.sock", runner)
        server.start()
        try:
            first = send_request(server.socket_path, "start")
            assert server.is_running()
            second = send_request(server.socket_path, "start")
        finally:
            server.shutdown()

        assert first == second == b"1\0\0bad intent\n"

    def test_stale_socket_replaced(self, short_tmp: Path) -> None:
        """Test a socket left by an earlier process is removed."""
        path = short_tmp / "am.sock"
        stale = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        stale.bind(str(path))
        stale.close()

        server = AmSocketServer(path)
        try:
            assert server.start() is True
        finally:
            server.shutdown()

    def test_start_failure_is_absorbed(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a bind failure is logged and reported as False."""
        blocker = tmp_path / "blocker"
        blocker.write_text("file")

        server = AmSocketServer(blocker / "am.sock")

        assert server.start() is False
        assert server.is_running() is False
        assert "[SVC_001]" in caplog.text


class TestSetupAmSocketServer:
    """Test the process-wide service setup."""

    def test_disabled_by_config(self, context: StartupContext) -> None:
        """Test the server stays down when disabled in configuration."""
        context.config.run_am_socket_server = False

        assert setup_am_socket_server(context) is False
        assert is_am_socket_server_running() is False

    def test_disabled_by_properties(self, context: StartupContext) -> None:
        """Test the properties file can disable the server."""
        context.paths.data_home_dir.mkdir(parents=True)
        (context.paths.data_home_dir / "termux.properties").write_text(
            "run-termux-am-socket-server=false\n"
        )
        init_properties(context.paths)

        assert setup_am_socket_server(context) is False

    def test_starts_once(
        self, short_tmp: Path, resources_dir: Path, make_context: Callable[..., StartupContext]
    ) -> None:
        """Test repeated setup keeps the running server."""
        context = make_context(short_tmp / "f", resources_dir)

        assert setup_am_socket_server(context) is True
        server = am_socket_server._server  # noqa: SLF001
        assert setup_am_socket_server(context) is True

        assert am_socket_server._server is server  # noqa: SLF001
        assert context.paths.am_socket_path.exists()
