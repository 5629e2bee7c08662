"""Chess rules provider backed by python-chess.

Everything the scorers know about chess (parsing, legality, attacks,
castling, terminal status) comes through RulesProvider. Boards handed
out by the provider are never mutated afterwards; apply_move returns
a fresh board.

Pawn-square order is part of the contract: pawn_squares() lists
squares in board scan order, rank 8 down to rank 1 and file a to h
within a rank. The pawn-structure heuristics are order sensitive.
"""

from __future__ import annotations

import chess

from chessagine.models import CastleRights, FenValidation

_SIDES = {"white": chess.WHITE, "black": chess.BLACK}


class IllegalMoveError(ValueError):
    """A move that cannot be played in the given position."""

    def __init__(self, move: str, fen: str, legal_moves: list[str]) -> None:
        self.move = move
        self.fen = fen
        self.legal_moves = legal_moves
        super().__init__(f"Illegal move: {move}. Legal moves: {legal_moves}")


def side_color(side: str | chess.Color) -> chess.Color:
    """Normalize 'white'/'black' or a chess.Color to a chess.Color.

    Raises:
        ValueError: If the side name is unknown.
    """
    if isinstance(side, bool):
        return side
    try:
        return _SIDES[side.lower()]
    except (KeyError, AttributeError):
        raise ValueError(f"Unknown side: {side!r}") from None


def side_name(color: chess.Color) -> str:
    """Return 'white' or 'black' for a chess.Color."""
    return "white" if color == chess.WHITE else "black"


class RulesProvider:
    """Adapter exposing the rules queries the evaluation core needs."""

    def _load(self, fen: str) -> chess.Board:
        """Build a board, dropping castling rights the position cannot have.

        Raises:
            ValueError: If the FEN is malformed.
        """
        board = chess.Board(fen)
        board.castling_rights = board.clean_castling_rights()
        return board

    def parse(self, fen: str) -> chess.Board | None:
        """Parse a FEN into a board, or None if it is not a legal position.

        Castling flags without a matching king and rook on their home
        squares are dropped instead of rejecting the FEN.

        Args:
            fen: FEN string.

        Returns:
            A new chess.Board, or None for malformed or illegal FENs.
        """
        try:
            board = self._load(fen)
        except ValueError:
            return None
        if not board.is_valid():
            return None
        return board

    def validate(self, fen: str) -> FenValidation:
        """Validate a FEN and explain why it was rejected.

        Args:
            fen: FEN string.

        Returns:
            FenValidation with a message when invalid.
        """
        try:
            board = self._load(fen)
        except ValueError as exc:
            return FenValidation(is_valid=False, message=f"Invalid FEN: {exc}")
        if not board.is_valid():
            return FenValidation(is_valid=False, message=f"Invalid FEN position: {fen}")
        return FenValidation(is_valid=True)

    def legal_moves(self, board: chess.Board) -> list[str]:
        """List legal moves in SAN, in python-chess generation order."""
        return [board.san(m) for m in board.legal_moves]

    def apply_move(self, board: chess.Board, move: str) -> chess.Board:
        """Play a move given in SAN or UCI on a copy of the board.

        Args:
            board: Position before the move. Left untouched.
            move: Move in SAN (e.g. 'Nf3') or UCI (e.g. 'g1f3').

        Returns:
            New board after the move.

        Raises:
            IllegalMoveError: If the move cannot be parsed or is not legal.
        """
        chess_move = self._parse_move(board, move)
        after = board.copy(stack=False)
        after.push(chess_move)
        return after

    def _parse_move(self, board: chess.Board, move: str) -> chess.Move:
        try:
            chess_move = board.parse_san(move)
        except ValueError:
            try:
                chess_move = board.parse_uci(move)
            except ValueError:
                raise IllegalMoveError(
                    move, board.fen(), self.legal_moves(board)
                ) from None

        # parse_san/parse_uci both accept null moves
        if chess_move not in board.legal_moves:
            raise IllegalMoveError(move, board.fen(), self.legal_moves(board))
        return chess_move

    def attackers(self, board: chess.Board, square: str, side: str | chess.Color) -> int:
        """Count the pieces of a side attacking a square.

        Counts pieces, not a boolean; occupancy of the square itself
        does not matter and neither does the side to move.
        """
        return len(board.attackers(side_color(side), chess.parse_square(square)))

    def pawn_squares(self, board: chess.Board, side: str | chess.Color) -> list[str]:
        """List a side's pawn squares, rank 8 to 1, file a to h."""
        squares = board.pieces(chess.PAWN, side_color(side))
        ordered = sorted(
            squares,
            key=lambda sq: (-chess.square_rank(sq), chess.square_file(sq)),
        )
        return [chess.square_name(sq) for sq in ordered]

    def piece_count(self, board: chess.Board, side: str | chess.Color) -> int:
        """Number of a side's pieces on the board, king included."""
        return chess.popcount(board.occupied_co[side_color(side)])

    def castling_rights(self, board: chess.Board, side: str | chess.Color) -> CastleRights:
        color = side_color(side)
        return CastleRights(
            queenside=board.has_queenside_castling_rights(color),
            kingside=board.has_kingside_castling_rights(color),
        )

    def is_checkmate(self, board: chess.Board) -> bool:
        return board.is_checkmate()

    def is_stalemate(self, board: chess.Board) -> bool:
        return board.is_stalemate()

    def is_game_over(self, board: chess.Board) -> bool:
        """True for mate, stalemate, dead positions and a reached fifty-move draw.

        A draw that only becomes claimable after the next move does not
        count; the position still has a move to play.
        """
        return board.is_game_over() or board.is_fifty_moves()

    def turn(self, board: chess.Board) -> str:
        return side_name(board.turn)

    def move_number(self, board: chess.Board) -> int:
        return board.fullmove_number

    def to_algebraic(self, board: chess.Board, uci: str) -> str:
        """Translate a UCI move to SAN in the given position.

        Raises:
            IllegalMoveError: If the move is not legal here.
        """
        try:
            chess_move = board.parse_uci(uci)
        except ValueError:
            raise IllegalMoveError(uci, board.fen(), self.legal_moves(board)) from None
        if chess_move not in board.legal_moves:
            raise IllegalMoveError(uci, board.fen(), self.legal_moves(board))
        return board.san(chess_move)
