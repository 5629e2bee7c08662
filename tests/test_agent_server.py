"""Pytest tests for the agent HTTP endpoint.

Starts a real AgentHTTPServer on an ephemeral port in a background
thread with a stub agent and talks to it with requests.
"""

from __future__ import annotations

import http.client
import json
import threading
from unittest.mock import MagicMock

import pytest
import requests

from chessagine.agent_server import AgentHTTPServer


@pytest.fixture()
def agent():
    stub = MagicMock()
    stub.generate.return_value = "White is better."
    return stub


@pytest.fixture()
def base_url(agent):
    server = AgentHTTPServer(("127.0.0.1", 0), agent)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}/"
    server.shutdown()
    server.server_close()
    thread.join(timeout=5)


class TestAgentEndpoint:

    def test_answers_query(self, base_url, agent):
        resp = requests.post(base_url, json={"query": "Analyze 8/8/8"}, timeout=5)
        assert resp.status_code == 200
        assert resp.json() == {"message": "White is better."}
        assert resp.headers["Access-Control-Allow-Origin"] == "*"
        agent.generate.assert_called_once_with("Analyze 8/8/8")

    def test_empty_body(self, base_url, agent):
        resp = requests.post(base_url, data=b"", timeout=5)
        assert resp.status_code == 500
        assert resp.json() == {"message": "body is required!"}
        agent.generate.assert_not_called()

    @pytest.mark.parametrize(
        "body",
        [b"{not json", b'{"question": "hi"}', b'{"query": ""}', b'{"query": 5}', b"[1, 2]"],
    )
    def test_missing_query(self, base_url, agent, body):
        resp = requests.post(
            base_url, data=body, headers={"Content-Type": "application/json"}, timeout=5
        )
        assert resp.status_code == 400
        assert resp.json() == {"message": "query is required!"}
        agent.generate.assert_not_called()

    def test_agent_failure(self, base_url, agent):
        agent.generate.side_effect = RuntimeError("quota exceeded")
        resp = requests.post(base_url, json={"query": "hi"}, timeout=5)
        assert resp.status_code == 500
        assert resp.json() == {"message": "agent failed: quota exceeded"}

    def test_preflight(self, base_url):
        resp = requests.options(base_url, timeout=5)
        assert resp.status_code == 204
        assert resp.headers["Access-Control-Allow-Methods"] == "POST"
        assert resp.headers["Access-Control-Allow-Headers"] == "Content-Type"

    def test_non_numeric_content_length(self, base_url, agent):
        host, port = base_url[len("http://"):].rstrip("/").split(":")
        conn = http.client.HTTPConnection(host, int(port), timeout=5)
        try:
            conn.putrequest("POST", "/")
            conn.putheader("Content-Length", "lots")
            conn.endheaders()
            resp = conn.getresponse()
            assert resp.status == 400
            assert json.loads(resp.read()) == {"message": "invalid Content-Length"}
        finally:
            conn.close()
        agent.generate.assert_not_called()
