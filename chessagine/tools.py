"""Agent-facing chess tools.

ChessTools bundles the four operations handed to the language model,
both through the MCP server and through the in-process agent. Each
method takes and returns plain JSON-compatible values. Invalid input is
reported as data ({"error": ...} or an invalid board state), never
raised, so the agent can re-prompt.
"""

from loguru import logger

from chessagine.board_state import assemble_board_state, project_move
from chessagine.narrator import generate_chess_analysis
from chessagine.oracle import MIN_DEPTH, OracleClient, OracleError
from chessagine.rules import IllegalMoveError, RulesProvider


class ChessTools:
    """The four tools exposed to the agent, bound to their collaborators."""

    def __init__(self, rules: RulesProvider, oracle: OracleClient) -> None:
        self._rules = rules
        self._oracle = oracle

    def get_chessboard_state(self, fen: str) -> dict:
        """Get the board state for a FEN: legal moves, castling rights,
        material count, space control and pawn-structure weaknesses.

        Args:
            fen: FEN string representing the board position.

        Returns:
            Dict with a 'boardstate' key. An invalid FEN yields
            {'fen': fen, 'validfen': False}.
        """
        state = assemble_board_state(self._rules, fen)
        return {"boardstate": state.to_dict()}

    def get_future_chessboard_state(self, fen: str, move: str) -> dict:
        """Get the board state after playing one move from a FEN.

        Args:
            fen: FEN string representing the current board position.
            move: The move to play, in SAN (e.g. 'Nf3') or UCI (e.g. 'g1f3').

        Returns:
            Dict with a 'boardstate' key, or an 'error' key if the move
            is illegal in the position.
        """
        try:
            state = project_move(self._rules, fen, move)
        except IllegalMoveError as exc:
            logger.info(f"Rejected projection move {move!r} for {fen}")
            return {"error": str(exc)}
        return {"boardstate": state.to_dict()}

    def get_stockfish_analysis(self, fen: str, depth: int = MIN_DEPTH) -> dict:
        """Analyze a position with Stockfish: best move, reasoning,
        top variation in SAN, numeric evaluation and a spoken evaluation.

        Args:
            fen: FEN string representing the board position.
            depth: Search depth for the Stockfish engine, at least 12.

        Returns:
            Dict with bestMove, reasoning, topLine, numberEval and
            speechEval, or an 'error' key.
        """
        if depth < MIN_DEPTH:
            return {"error": f"depth must be at least {MIN_DEPTH}, got {depth}"}

        validation = self._rules.validate(fen)
        if not validation.is_valid:
            return {"error": validation.message}

        try:
            response = self._oracle.evaluate(fen, depth)
        except OracleError as exc:
            logger.error(f"Stockfish analysis failed for {fen}: {exc}")
            return {"error": str(exc)}

        try:
            result = generate_chess_analysis(self._rules, response, fen)
        except IllegalMoveError as exc:
            logger.error(f"Oracle line does not fit {fen}: {exc}")
            return {"error": f"Oracle returned an unplayable line: {exc.move}"}
        return result.to_dict()

    def validate_fen(self, fen: str) -> dict:
        """Validate a FEN string to check if it represents a legal chess position.

        Args:
            fen: FEN string representing the board position.

        Returns:
            Dict with isValid and, when invalid, a message.
        """
        return self._rules.validate(fen).to_dict()

    def as_list(self) -> list:
        """The tool callables, in registration order."""
        return [
            self.get_chessboard_state,
            self.get_future_chessboard_state,
            self.get_stockfish_analysis,
            self.validate_fen,
        ]


def build_tools(oracle_url: str, oracle_timeout: float) -> ChessTools:
    """Wire ChessTools with a python-chess rules provider and an HTTP oracle."""
    return ChessTools(RulesProvider(), OracleClient(oracle_url, oracle_timeout))
