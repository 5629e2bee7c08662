"""Pytest tests for the google-genai backed agent.

The genai client is a MagicMock; no API key or network needed.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from google.genai import types

from chessagine.agent import INSTRUCTIONS, ChessAgent, build_agent
from chessagine.settings import Settings
from chessagine.tools import ChessTools


def _client(text):
    client = MagicMock()
    client.models.generate_content.return_value = MagicMock(text=text)
    return client


class TestChessAgent:

    def test_generate_returns_model_text(self, chess_tools):
        client = _client("Play e4.")
        agent = ChessAgent(client, chess_tools, "gemini-test")
        assert agent.generate("Analyze this position") == "Play e4."

    def test_request_carries_instructions_and_tools(self, chess_tools):
        client = _client("ok")
        with patch("chessagine.agent.types.GenerateContentConfig") as config_cls:
            ChessAgent(client, chess_tools, "gemini-test").generate("What now?")

        config_kwargs = config_cls.call_args.kwargs
        assert config_kwargs["system_instruction"] == INSTRUCTIONS
        assert [fn.__name__ for fn in config_kwargs["tools"]] == [
            fn.__name__ for fn in chess_tools.as_list()
        ]
        client.models.generate_content.assert_called_once_with(
            model="gemini-test",
            contents="What now?",
            config=config_cls.return_value,
        )

    def test_real_config_accepts_tool_callables(self, chess_tools):
        client = _client("ok")
        ChessAgent(client, chess_tools, "gemini-test").generate("What now?")
        config = client.models.generate_content.call_args.kwargs["config"]
        assert isinstance(config, types.GenerateContentConfig)
        assert len(config.tools) == 4

    def test_missing_text_becomes_empty_string(self, chess_tools):
        agent = ChessAgent(_client(None), chess_tools, "gemini-test")
        assert agent.generate("hello") == ""

    def test_instructions_mention_validation(self):
        assert "ChessAgine" in INSTRUCTIONS
        assert "validate the FEN" in INSTRUCTIONS


class TestBuildAgent:

    def test_wires_settings(self):
        settings = Settings(oracle_url="http://oracle.test", oracle_timeout=2.5, model="gemini-x")
        with patch("chessagine.agent.genai.Client") as client_cls:
            agent = build_agent(settings)
        client_cls.assert_called_once_with()
        assert agent._client is client_cls.return_value
        assert agent._model == "gemini-x"
        assert isinstance(agent._tools, ChessTools)
        assert agent._tools._oracle._base_url == "http://oracle.test"
        assert agent._tools._oracle._timeout == 2.5
