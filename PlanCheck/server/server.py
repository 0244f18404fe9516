"""HTTP server for the PlanCheck API.

Exposes the dependency analyses as JSON endpoints.
Uses only stdlib — no external dependencies.
"""

from __future__ import annotations

import argparse
import json
import logging
import traceback
from datetime import datetime, timezone
from functools import partial
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlparse

from PlanCheck.analyzer import (
    DependencyAnalyzer,
    TaskValidationError,
    coerce_tasks,
)
from PlanCheck.config import ServerConfig, setup_logging

logger = logging.getLogger("plancheck.server")


class RequestError(Exception):
    """A client error that maps directly to an HTTP status."""

    def __init__(self, status: int, message: str):
        self.status = status
        super().__init__(message)


class APIHandler(BaseHTTPRequestHandler):
    """Handles JSON API requests for task validation."""

    def __init__(self, *args, analyzer: DependencyAnalyzer, config: ServerConfig, **kwargs):
        self.analyzer = analyzer
        self.config = config
        self._headers_sent = False
        super().__init__(*args, **kwargs)

    # ── Routing ───────────────────────────────────────────────────

    @staticmethod
    def _extract_api_path(full_path: str) -> str | None:
        """Extract '/api/...' from a path that may have a proxy prefix.

        Handles both '/api/validate' and '/proxy/5000/api/validate'.
        Returns the '/api/...' portion, or None if not an API path.
        """
        idx = full_path.find("/api/")
        if idx == -1:
            if full_path.rstrip("/").endswith("/api"):
                return "/api"
            return None
        return full_path[idx:].rstrip("/")

    def do_GET(self):
        parsed = urlparse(self.path)
        path = parsed.path.rstrip("/")
        api_path = self._extract_api_path(parsed.path)
        if path in ("", "/health") or api_path == "/api/health":
            self._json_response({
                "status": "ok",
                "message": "Task dependency API is running",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            })
        else:
            self._json_response({"error": {"message": "Not found"}}, status=404)

    def do_POST(self):
        parsed = urlparse(self.path)
        api_path = self._extract_api_path(parsed.path)
        routes = {
            "/api/validate": self._api_validate,
            "/api/cycles": self._api_cycles,
            "/api/critical-path": self._api_critical_path,
            "/api/levels": self._api_levels,
        }
        try:
            body = self._read_body()
            handler = routes.get(api_path or "")
            if handler is None:
                self._json_response({"error": {"message": "Not found"}}, status=404)
                return
            handler(self._tasks_from(body))
        except RequestError as e:
            logger.warning("API %s: %s", api_path, e)
            self._json_response({"error": {"message": str(e)}}, status=e.status)
        except Exception as e:
            self._safe_json_error(e)

    def do_OPTIONS(self):
        self.send_response(204)
        self._send_cors_headers()
        self.end_headers()

    # ── API Handlers ──────────────────────────────────────────────

    def _api_validate(self, tasks):
        logger.info("API /validate: %d tasks", len(tasks))
        report = self.analyzer.validate(tasks)
        self._json_response(report.to_dict())

    def _api_cycles(self, tasks):
        logger.info("API /cycles: %d tasks", len(tasks))
        self._json_response(self.analyzer.detect_cycles(tasks).to_dict())

    def _api_critical_path(self, tasks):
        logger.info("API /critical-path: %d tasks", len(tasks))
        self._json_response(self.analyzer.critical_path(tasks).to_dict())

    def _api_levels(self, tasks):
        logger.info("API /levels: %d tasks", len(tasks))
        self._json_response({"levels": self.analyzer.parallel_levels(tasks)})

    # ── Helpers ───────────────────────────────────────────────────

    def _read_body(self) -> dict:
        try:
            length = int(self.headers.get("Content-Length", 0) or 0)
        except ValueError:
            raise RequestError(400, "Invalid Content-Length header")
        if length < 0:
            raise RequestError(400, "Invalid Content-Length header")
        if length > self.config.max_body_bytes:
            self._discard_body(length)
            raise RequestError(413, "Request body too large")
        if length == 0:
            return {}
        raw = self.rfile.read(length)
        try:
            body = json.loads(raw)
        except (json.JSONDecodeError, ValueError):
            raise RequestError(400, "Request body must be valid JSON")
        if not isinstance(body, dict):
            raise RequestError(400, "Request body must be a JSON object")
        return body

    def _discard_body(self, length: int, chunk_size: int = 65536):
        """Read and drop an oversized body so the client sees the response."""
        self.close_connection = True
        remaining = length
        while remaining > 0:
            chunk = self.rfile.read(min(chunk_size, remaining))
            if not chunk:
                break
            remaining -= len(chunk)

    @staticmethod
    def _tasks_from(body: dict) -> list:
        records = body.get("tasks")
        if not isinstance(records, list):
            raise RequestError(400, "Tasks is required and must be an array")
        try:
            return coerce_tasks(records)
        except TaskValidationError as e:
            raise RequestError(400, str(e))

    def _send_cors_headers(self):
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "GET, POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.send_header("Cache-Control", "no-store")

    def _json_response(self, data: dict, status: int = 200):
        if self._headers_sent:
            return
        body = json.dumps(data).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self._send_cors_headers()
        self.end_headers()
        self._headers_sent = True
        self.wfile.write(body)

    def _safe_json_error(self, exc: Exception):
        """Send a JSON 500 response for an unexpected failure."""
        msg = "".join(traceback.format_exception_only(type(exc), exc)).strip()
        logger.error("API error: %s", msg, exc_info=exc)
        self._json_response(
            {"error": {"message": "Internal server error during task validation", "details": msg}},
            status=500,
        )

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


def make_server(
    config: ServerConfig | None = None,
    analyzer: DependencyAnalyzer | None = None,
) -> ThreadingHTTPServer:
    """Create (but do not start) the API server."""
    config = config or ServerConfig()
    handler = partial(
        APIHandler,
        analyzer=analyzer or DependencyAnalyzer(),
        config=config,
    )
    return ThreadingHTTPServer((config.host, config.port), handler)


def run_server(config: ServerConfig | None = None) -> None:
    """Start the API server and block until interrupted."""
    config = config or ServerConfig()
    setup_logging(config.verbose)

    server = make_server(config)
    port = server.server_address[1]
    logger.info("PlanCheck API running at http://localhost:%d", port)
    print(f"PlanCheck API running at http://localhost:{port}")
    print(f"  Logging: {'verbose (use --no-log to disable)' if config.verbose else 'quiet'}")
    print(f"  Press Ctrl+C to stop")
    print()

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down API server.")
    finally:
        server.server_close()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="plancheck-server",
        description="PlanCheck task dependency API server",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Interface to bind (default: PLANCHECK_HOST or 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: PLANCHECK_PORT, PORT or 5000)",
    )
    parser.add_argument(
        "--no-log",
        action="store_true",
        default=False,
        help="Disable verbose terminal logging (enabled by default)",
    )
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace, environ=None) -> ServerConfig:
    """Merge command-line flags over environment configuration."""
    config = ServerConfig.from_env(environ)
    if args.host:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    if args.no_log:
        config.verbose = False
    return config


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    run_server(config_from_args(args))
