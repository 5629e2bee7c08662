"""Board state assembly for ChessAgine.

Turns a FEN into a BoardState snapshot: castling rights, legal moves,
material, space control, pawn structure and terminal flags. All
functions are pure; the rules provider is passed in explicitly.
"""

from __future__ import annotations

import chess

from chessagine.models import (
    BoardState,
    InvalidBoardState,
    SpaceControl,
    ValidBoardState,
)
from chessagine.pawns import pawn_profile
from chessagine.rules import RulesProvider

CENTER_SQUARES = ("c4", "c5", "d4", "d5", "e4", "e5", "f4", "f5")
FLANK_SQUARES = ("a4", "a5", "b4", "b5", "g4", "g5", "h4", "h5")


def material_count(rules: RulesProvider, board: chess.Board, side: str) -> int:
    """Count a side's pieces on the board, king included."""
    return rules.piece_count(board, side)


def _attack_sum(
    rules: RulesProvider, board: chess.Board, side: str, squares: tuple[str, ...]
) -> int:
    return sum(rules.attackers(board, square, side) for square in squares)


def space_control(rules: RulesProvider, board: chess.Board, side: str) -> SpaceControl:
    """Sum a side's attacker counts over the center and flank squares.

    A square attacked by two pieces contributes two.
    """
    return SpaceControl(
        center_score=_attack_sum(rules, board, side, CENTER_SQUARES),
        flank_score=_attack_sum(rules, board, side, FLANK_SQUARES),
    )


def _assemble(rules: RulesProvider, fen: str, board: chess.Board) -> ValidBoardState:
    return ValidBoardState(
        fen=fen,
        white_castle_rights=rules.castling_rights(board, "white"),
        black_castle_rights=rules.castling_rights(board, "black"),
        legal_moves=tuple(rules.legal_moves(board)),
        white_material_count=material_count(rules, board, "white"),
        black_material_count=material_count(rules, board, "black"),
        white_space=space_control(rules, board, "white"),
        black_space=space_control(rules, board, "black"),
        white_pawns=pawn_profile(rules.pawn_squares(board, "white")),
        black_pawns=pawn_profile(rules.pawn_squares(board, "black")),
        is_checkmate=rules.is_checkmate(board),
        is_stalemate=rules.is_stalemate(board),
        is_game_over=rules.is_game_over(board),
        move_number=rules.move_number(board),
        side_to_move=rules.turn(board),
    )


def assemble_board_state(rules: RulesProvider, fen: str) -> BoardState:
    """Build the BoardState for a FEN.

    Never raises for a bad FEN: a FEN the rules provider rejects yields
    InvalidBoardState carrying only the FEN.

    Args:
        rules: Rules provider used for parsing and all board queries.
        fen: FEN string of the position.

    Returns:
        ValidBoardState or InvalidBoardState.
    """
    board = rules.parse(fen)
    if board is None:
        return InvalidBoardState(fen=fen)
    return _assemble(rules, fen, board)


def project_move(rules: RulesProvider, fen: str, move: str) -> BoardState:
    """Build the BoardState one ply ahead.

    Args:
        rules: Rules provider.
        fen: FEN of the position before the move.
        move: Move in SAN or UCI.

    Returns:
        BoardState of the resulting position, or InvalidBoardState for
        the input FEN if that FEN is rejected.

    Raises:
        IllegalMoveError: If the move is not legal in the position.
    """
    board = rules.parse(fen)
    if board is None:
        return InvalidBoardState(fen=fen)
    after = rules.apply_move(board, move)
    return assemble_board_state(rules, after.fen())
