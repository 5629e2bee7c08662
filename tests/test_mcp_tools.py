"""Per-tool MCP integration tests verifying response shapes.

Builds the FastMCP server around ChessTools with the mock_oracle
fixture from conftest.py, calls each registered tool and checks the
response against response_schemas. No network.

Run:
    pytest tests/test_mcp_tools.py -v
"""

from __future__ import annotations

import asyncio
import importlib.util
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Add project root so imports resolve
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT))

# Import server module from hyphenated directory via importlib
_server_path = _PROJECT_ROOT / "mcp-server" / "server.py"
_spec = importlib.util.spec_from_file_location("mcp_server_tools_test", _server_path)
_server = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(_server)

build_server = _server.build_server

# Import response schemas for validation
sys.path.insert(0, str(_PROJECT_ROOT / "mcp-server"))
from response_schemas import (  # noqa: E402
    ANALYSIS_SCHEMA,
    ERROR_SCHEMA,
    VALIDATION_SCHEMA,
    validate_board_state_response,
    validate_response,
)

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
ITALIAN_FEN = "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3"

_TOOL_NAMES = [
    "get_chessboard_state",
    "get_future_chessboard_state",
    "get_stockfish_analysis",
    "validate_fen",
]


@pytest.fixture()
def server(chess_tools):
    mcp, registered = build_server(chess_tools)
    return mcp, registered


@pytest.fixture()
def registered(server):
    return server[1]


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class TestRegistration:

    def test_registered_names(self, registered):
        assert sorted(registered) == sorted(_TOOL_NAMES)

    def test_listed_by_fastmcp(self, server):
        mcp, _ = server
        listed = asyncio.run(mcp.list_tools())
        assert sorted(tool.name for tool in listed) == sorted(_TOOL_NAMES)

    def test_tool_descriptions_present(self, server):
        mcp, _ = server
        for tool in asyncio.run(mcp.list_tools()):
            assert tool.description, tool.name

    def test_server_name(self, server):
        mcp, _ = server
        assert mcp.name == "chessagine"


# ---------------------------------------------------------------------------
# get_chessboard_state
# ---------------------------------------------------------------------------


class TestGetChessboardState:

    @pytest.mark.parametrize("fen", [START_FEN, ITALIAN_FEN])
    def test_valid_shape(self, registered, fen):
        response = registered["get_chessboard_state"](fen)
        assert response["boardstate"]["validfen"] is True
        errors = validate_board_state_response(response)
        assert not errors, f"Schema validation errors: {errors}"

    def test_invalid_shape(self, registered):
        response = registered["get_chessboard_state"]("nonsense")
        assert response == {"boardstate": {"fen": "nonsense", "validfen": False}}
        assert not validate_board_state_response(response)


# ---------------------------------------------------------------------------
# get_future_chessboard_state
# ---------------------------------------------------------------------------


class TestGetFutureChessboardState:

    def test_valid_shape(self, registered):
        response = registered["get_future_chessboard_state"](ITALIAN_FEN, "Nf6")
        assert response["boardstate"]["sidetomove"] == "white"
        assert not validate_board_state_response(response)

    def test_illegal_move_shape(self, registered):
        response = registered["get_future_chessboard_state"](START_FEN, "Qh5")
        assert not validate_response(response, ERROR_SCHEMA)
        assert "Legal moves" in response["error"]


# ---------------------------------------------------------------------------
# get_stockfish_analysis
# ---------------------------------------------------------------------------


class TestGetStockfishAnalysis:

    def test_analysis_shape(self, registered, mock_oracle):
        response = registered["get_stockfish_analysis"](START_FEN)
        assert not validate_response(response, ANALYSIS_SCHEMA)
        assert response["bestMove"] == "e4"
        mock_oracle.evaluate.assert_called_once_with(START_FEN, 12)

    def test_error_shape(self, registered):
        response = registered["get_stockfish_analysis"](START_FEN, 4)
        assert not validate_response(response, ERROR_SCHEMA)


# ---------------------------------------------------------------------------
# validate_fen
# ---------------------------------------------------------------------------


class TestValidateFen:

    def test_valid_shape(self, registered):
        response = registered["validate_fen"](START_FEN)
        assert response == {"isValid": True}
        assert not validate_response(response, VALIDATION_SCHEMA)

    def test_invalid_shape(self, registered):
        response = registered["validate_fen"]("nonsense")
        assert response["isValid"] is False
        assert isinstance(response["message"], str)


# ---------------------------------------------------------------------------
# Schema checks
# ---------------------------------------------------------------------------


class TestSchemaChecks:

    def test_mismatch_is_logged_not_raised(self):
        tools = MagicMock()
        tools.validate_fen.return_value = {"isValid": "yes"}
        _, registered = build_server(tools)
        with patch.object(sys.modules["chess_tools"], "logger") as mock_logger:
            response = registered["validate_fen"](START_FEN)
        assert response == {"isValid": "yes"}
        mock_logger.warning.assert_called_once()

    def test_invalid_state_with_extra_keys(self):
        errors = validate_board_state_response(
            {"boardstate": {"fen": "x", "validfen": False, "legalMoves": []}}
        )
        assert errors == ["Invalid board state has extra keys: ['legalMoves']"]

    def test_nested_part_errors_are_prefixed(self, registered):
        response = registered["get_chessboard_state"](START_FEN)
        response["boardstate"]["whitespacescore"]["totalScore"] = "7"
        errors = validate_board_state_response(response)
        assert errors == ["whitespacescore: Key 'totalScore': expected int, got str"]

    def test_missing_boardstate(self):
        assert validate_board_state_response({}) == ["Missing key: boardstate"]

    def test_disabled_without_env(self, monkeypatch):
        monkeypatch.delenv("CHESSAGINE_VALIDATE", raising=False)
        assert validate_response({}, ANALYSIS_SCHEMA) == []
        assert validate_board_state_response({}) == []
