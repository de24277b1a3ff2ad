"""HTTP daemon accepting validation requests on a bounded worker pool."""

from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any

from check_tool.command_options.run_settings import (
    DEFAULT_DAEMON_HOST,
    DEFAULT_DAEMON_PORT,
    default_worker_count,
)
from check_tool.document_input.input_factory import Input
from check_tool.scenario_loading.scenario_models import ScenarioConfiguration
from check_tool.validation_engine.check_engine import CheckEngine

logger = logging.getLogger(__name__)

DOCUMENT_NAME_HEADER = "X-Document-Name"
DEFAULT_DOCUMENT_NAME = "request.xml"
HEALTH_PATH = "/server/health"

_GUI_PAGE = """<!DOCTYPE html>
<html>
<head><title>check-tool daemon</title></head>
<body>
<h1>check-tool daemon</h1>
<p>Scenario definition: {scenarios}</p>
<p>POST an XML document to <code>/</code> to receive its validation report.
Responses use status 200 for acceptable and 406 for rejected documents.</p>
<p>Health information is available at <a href="{health}">{health}</a>.</p>
</body>
</html>
"""


class DaemonError(Exception):
    """Raised when the daemon cannot be started."""


class _PooledHTTPServer(HTTPServer):
    """HTTP server handing each accepted request to a fixed-size thread pool."""

    def __init__(self, server_address: tuple[str, int], handler: Any, *, worker_count: int):
        self._executor = ThreadPoolExecutor(
            max_workers=worker_count, thread_name_prefix="check-tool-worker"
        )
        super().__init__(server_address, handler)

    def process_request(self, request: Any, client_address: Any) -> None:
        self._executor.submit(self._process_request_in_worker, request, client_address)

    def _process_request_in_worker(self, request: Any, client_address: Any) -> None:
        try:
            self.finish_request(request, client_address)
        except Exception:  # pylint: disable=broad-exception-caught
            self.handle_error(request, client_address)
        finally:
            self.shutdown_request(request)

    def server_close(self) -> None:
        super().server_close()
        self._executor.shutdown(wait=True)


def _make_handler(*, engine: CheckEngine, configuration: ScenarioConfiguration, gui_enabled: bool):
    class _Handler(BaseHTTPRequestHandler):
        def _write(self, code: int, content_type: str, data: bytes) -> None:
            self.send_response(code)
            self.send_header("Content-Type", content_type)
            self.send_header("Content-Length", str(len(data)))
            self.end_headers()
            self.wfile.write(data)

        def _write_json(self, code: int, payload: dict[str, object]) -> None:
            self._write(code, "application/json", json.dumps(payload).encode("utf-8"))

        def do_GET(self):  # noqa: N802
            path = self.path.rstrip("/")
            if path == HEALTH_PATH:
                self._write_json(
                    200,
                    {
                        "status": "UP",
                        "scenarios": configuration.name,
                        "scenario_count": len(configuration.scenarios),
                    },
                )
                return
            if path == "" and gui_enabled:
                page = _GUI_PAGE.format(scenarios=configuration.source, health=HEALTH_PATH)
                self._write(200, "text/html; charset=utf-8", page.encode("utf-8"))
                return
            self._write_json(404, {"status": "not_found"})

        def do_POST(self):  # noqa: N802
            if self.path.rstrip("/") != "":
                self._write_json(404, {"status": "not_found"})
                return
            try:
                content_length = int(self.headers.get("Content-Length", "0"))
            except ValueError:
                content_length = 0
            body = self.rfile.read(content_length) if content_length > 0 else b""
            if not body:
                self._write_json(400, {"status": "empty_request"})
                return
            name = self.headers.get(DOCUMENT_NAME_HEADER) or DEFAULT_DOCUMENT_NAME
            report = engine.validate(Input.from_bytes(name, body))
            logger.info(
                "Validated %s: %s", name, "acceptable" if report.acceptable else "rejected"
            )
            self._write(
                200 if report.acceptable else 406,
                "application/xml",
                engine.context.serialize(report.document),
            )

        def log_message(self, format, *args):  # noqa: A002
            logger.debug("%s - %s", self.address_string(), format % args)

    return _Handler


class ValidationDaemon:
    """Validation server configured with host, port, worker count, and GUI toggle."""

    def __init__(
        self,
        host: str = DEFAULT_DAEMON_HOST,
        port: int = DEFAULT_DAEMON_PORT,
        worker_count: int | None = None,
        *,
        gui_enabled: bool = True,
    ) -> None:
        self.host = host
        self.port = port
        self.worker_count = worker_count or default_worker_count()
        self.gui_enabled = gui_enabled

    def create_server(self, configuration: ScenarioConfiguration) -> HTTPServer:
        """Bind the server socket without serving requests yet."""
        handler = _make_handler(
            engine=CheckEngine(configuration),
            configuration=configuration,
            gui_enabled=self.gui_enabled,
        )
        try:
            return _PooledHTTPServer(
                (self.host, int(self.port)), handler, worker_count=self.worker_count
            )
        except (OSError, OverflowError) as exc:
            raise DaemonError(f"Cannot bind daemon to {self.host}:{self.port}: {exc}") from exc

    def start_server(self, configuration: ScenarioConfiguration) -> None:
        """Serve validation requests until the process is interrupted."""
        server = self.create_server(configuration)
        bind_host, bind_port = server.server_address[:2]
        logger.info(
            "Daemon listening on http://%s:%s with %d worker thread(s), gui %s",
            bind_host,
            bind_port,
            self.worker_count,
            "enabled" if self.gui_enabled else "disabled",
        )
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("Daemon interrupted, shutting down")
        finally:
            server.server_close()
