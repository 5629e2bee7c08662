"""HTTP endpoint for the ChessAgine agent.

Accepts POST with a JSON body {"query": "..."} and answers
{"message": "<agent text>"}. A missing body is a 500 with
{"message": "body is required!"}.
Launch: chessagine serve [--port 8089]
"""

from __future__ import annotations

import http.server
import json
from typing import Protocol

from loguru import logger


class Agent(Protocol):
    def generate(self, query: str) -> str: ...


class AgentHTTPServer(http.server.ThreadingHTTPServer):
    """Threaded HTTP server carrying the agent its handlers call."""

    def __init__(self, address: tuple[str, int], agent: Agent) -> None:
        super().__init__(address, AgentHandler)
        self.agent = agent


class AgentHandler(http.server.BaseHTTPRequestHandler):
    """Forwards queries to the agent."""

    server: AgentHTTPServer

    def do_POST(self) -> None:
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            self._send_json(400, {"message": "invalid Content-Length"})
            return
        body = self.rfile.read(length) if length > 0 else b""
        if not body:
            self._send_json(500, {"message": "body is required!"})
            return

        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            payload = None
        query = payload.get("query") if isinstance(payload, dict) else None
        if not isinstance(query, str) or not query.strip():
            self._send_json(400, {"message": "query is required!"})
            return

        try:
            text = self.server.agent.generate(query)
        except Exception as exc:
            logger.exception("Agent failed to answer query")
            self._send_json(500, {"message": f"agent failed: {exc}"})
            return

        self._send_json(200, {"message": text})

    def do_OPTIONS(self) -> None:
        self.send_response(204)
        self._cors_headers()
        self.send_header("Content-Length", "0")
        self.end_headers()

    def _send_json(self, status: int, body: dict) -> None:
        payload = json.dumps(body, ensure_ascii=False).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(payload)))
        self._cors_headers()
        self.end_headers()
        self.wfile.write(payload)

    def _cors_headers(self) -> None:
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.send_header("Access-Control-Allow-Methods", "POST")

    def log_message(self, format: str, *args: object) -> None:
        logger.info(f"{self.address_string()} {format % args}")


def serve(agent: Agent, host: str = "127.0.0.1", port: int = 8089) -> None:
    """Serve the agent until interrupted."""
    server = AgentHTTPServer((host, port), agent)
    logger.info(f"ChessAgine agent: http://{host}:{port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down.")
    finally:
        server.server_close()
