"""Chess analysis MCP tools for the ChessAgine agent.

Registers 4 tools on the provided FastMCP instance:
  - get_chessboard_state
  - get_future_chessboard_state
  - get_stockfish_analysis
  - validate_fen

Called from server.py via register_chess_tools().
"""

from __future__ import annotations

from loguru import logger

from chessagine.tools import ChessTools

from response_schemas import (
    ANALYSIS_SCHEMA,
    ERROR_SCHEMA,
    VALIDATION_SCHEMA,
    validate_board_state_response,
    validate_response,
)


def _check(tool: str, errors: list[str]) -> None:
    if errors:
        logger.warning(f"{tool} response failed schema validation: {errors}")


def register_chess_tools(mcp, tools: ChessTools) -> dict:
    """Register all chess tools on the FastMCP instance.

    Args:
        mcp: FastMCP server instance.
        tools: ChessTools bound to a rules provider and an oracle client.

    Returns:
        Dict of tool name -> registered function.
    """

    @mcp.tool(name="get_chessboard_state")
    def get_chessboard_state(fen: str) -> dict:
        """Get the given FEN's chess board state: legal moves, castling
        rights, material count, space control and pawn weaknesses.

        Args:
            fen: FEN string representing the board position.

        Returns:
            Dict with 'boardstate'; invalid FENs give {fen, validfen: false}.
        """
        response = tools.get_chessboard_state(fen)
        _check("get_chessboard_state", validate_board_state_response(response))
        return response

    @mcp.tool(name="get_future_chessboard_state")
    def get_future_chessboard_state(fen: str, move: str) -> dict:
        """Get the future chess board state for a FEN and one legal move.

        Args:
            fen: FEN string representing the current board position.
            move: The future move, in SAN or UCI.

        Returns:
            Dict with 'boardstate', or 'error' for an illegal move.
        """
        response = tools.get_future_chessboard_state(fen, move)
        if "error" in response:
            _check("get_future_chessboard_state", validate_response(response, ERROR_SCHEMA))
        else:
            _check("get_future_chessboard_state", validate_board_state_response(response))
        return response

    @mcp.tool(name="get_stockfish_analysis")
    def get_stockfish_analysis(fen: str, depth: int = 12) -> dict:
        """Analyze a chess position using Stockfish: best move, reasoning,
        top variation, number eval and speech eval.

        Args:
            fen: FEN string representing the board position.
            depth: Search depth for the Stockfish engine (minimum 12).

        Returns:
            Dict with bestMove, reasoning, topLine, numberEval, speechEval,
            or 'error'.
        """
        response = tools.get_stockfish_analysis(fen, depth)
        schema = ERROR_SCHEMA if "error" in response else ANALYSIS_SCHEMA
        _check("get_stockfish_analysis", validate_response(response, schema))
        return response

    @mcp.tool(name="validate_fen")
    def validate_fen(fen: str) -> dict:
        """Validate a FEN string to check if it represents a valid chess position.

        Args:
            fen: FEN string representing the board position.

        Returns:
            Dict with isValid and, when invalid, a message.
        """
        response = tools.validate_fen(fen)
        _check("validate_fen", validate_response(response, VALIDATION_SCHEMA))
        return response

    return {
        "get_chessboard_state": get_chessboard_state,
        "get_future_chessboard_state": get_future_chessboard_state,
        "get_stockfish_analysis": get_stockfish_analysis,
        "validate_fen": validate_fen,
    }
