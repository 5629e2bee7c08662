"""Shared data models for ChessAgine.

BoardState is a tagged union: ValidBoardState for a parsed position,
InvalidBoardState for a FEN the rules provider rejected. Consumers
dispatch on the variant type, never on the presence of fields.

Every record exposes to_dict() with the key names the agent tools
return on the wire.
"""

from __future__ import annotations

from dataclasses import dataclass

# numberEval sentinel for "no evaluation available"
UNKNOWN_EVAL = -100000


def _float_or_none(value) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class CastleRights:
    """Castling availability for one side."""

    queenside: bool
    kingside: bool

    def to_dict(self) -> dict:
        return {"queenside": self.queenside, "kingside": self.kingside}


@dataclass(frozen=True)
class SpaceControl:
    """Attacker counts over the center and flank square sets."""

    center_score: int
    flank_score: int

    @property
    def total_score(self) -> int:
        return self.center_score + self.flank_score

    def to_dict(self) -> dict:
        return {
            "centerScore": self.center_score,
            "flankScore": self.flank_score,
            "totalScore": self.total_score,
        }


@dataclass(frozen=True)
class PawnProfile:
    """Pawn-structure weakness counts for one side."""

    doubled_count: int = 0
    isolated_count: int = 0
    backward_count: int = 0
    weakness_score: int = 0

    def to_dict(self) -> dict:
        return {
            "doubledCount": self.doubled_count,
            "isolatedCount": self.isolated_count,
            "backwardCount": self.backward_count,
            "weaknessScore": self.weakness_score,
        }


@dataclass(frozen=True)
class InvalidBoardState:
    """A FEN the rules provider could not turn into a legal position."""

    fen: str

    @property
    def validfen(self) -> bool:
        return False

    def to_dict(self) -> dict:
        return {"fen": self.fen, "validfen": False}


@dataclass(frozen=True)
class ValidBoardState:
    """Full positional snapshot of a legal position."""

    fen: str
    white_castle_rights: CastleRights
    black_castle_rights: CastleRights
    legal_moves: tuple[str, ...]
    white_material_count: int
    black_material_count: int
    white_space: SpaceControl
    black_space: SpaceControl
    white_pawns: PawnProfile
    black_pawns: PawnProfile
    is_checkmate: bool
    is_stalemate: bool
    is_game_over: bool
    move_number: int
    side_to_move: str

    @property
    def validfen(self) -> bool:
        return True

    def to_dict(self) -> dict:
        return {
            "fen": self.fen,
            "validfen": True,
            "whitecastlerights": self.white_castle_rights.to_dict(),
            "blackcastlerights": self.black_castle_rights.to_dict(),
            "legalMoves": list(self.legal_moves),
            "whitematerialcount": self.white_material_count,
            "blackmaterialcount": self.black_material_count,
            "whitespacescore": self.white_space.to_dict(),
            "blackspacescore": self.black_space.to_dict(),
            "whitepositionalscore": self.white_pawns.to_dict(),
            "blackpositionalscore": self.black_pawns.to_dict(),
            "isCheckmate": self.is_checkmate,
            "isStalemate": self.is_stalemate,
            "isGameOver": self.is_game_over,
            "moveNumber": self.move_number,
            "sidetomove": self.side_to_move,
        }


BoardState = ValidBoardState | InvalidBoardState


@dataclass(frozen=True)
class FenValidation:
    """Outcome of validating a FEN string."""

    is_valid: bool
    message: str | None = None

    def to_dict(self) -> dict:
        result: dict = {"isValid": self.is_valid}
        if self.message is not None:
            result["message"] = self.message
        return result


@dataclass(frozen=True)
class OracleResponse:
    """Raw answer from the remote evaluation oracle.

    bestmove is the oracle's "bestmove <uci> [ponder <uci>]" line and
    continuation a space-separated UCI principal variation.
    """

    success: bool
    evaluation: float | None = None
    mate: str | None = None
    bestmove: str = ""
    continuation: str = ""

    @classmethod
    def from_payload(cls, payload: dict) -> OracleResponse:
        """Build a response from decoded oracle JSON, tolerating gaps.

        An evaluation that is not a number is treated as missing.
        """
        mate = payload.get("mate")
        return cls(
            success=bool(payload.get("success", False)),
            evaluation=_float_or_none(payload.get("evaluation")),
            mate=str(mate) if mate is not None else None,
            bestmove=str(payload.get("bestmove") or ""),
            continuation=str(payload.get("continuation") or ""),
        )


@dataclass(frozen=True)
class EvaluationResult:
    """Oracle analysis translated to algebraic notation and prose."""

    best_move: str
    reasoning: str
    top_line: str
    number_eval: float
    speech_eval: str
    mate: str | None = None

    def to_dict(self) -> dict:
        result = {
            "bestMove": self.best_move,
            "reasoning": self.reasoning,
            "topLine": self.top_line,
            "numberEval": self.number_eval,
            "speechEval": self.speech_eval,
        }
        if self.mate is not None:
            result["mate"] = self.mate
        return result
