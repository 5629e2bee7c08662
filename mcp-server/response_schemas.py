"""Response schemas for ChessAgine MCP tool responses.

Dict-based shape checks for the four tools. validate_response() only
does work when CHESSAGINE_VALIDATE=1, so production calls pay nothing;
the server logs any mismatch and the tests assert on it.
"""

from __future__ import annotations

import os

# ---------------------------------------------------------------------------
# Validation schemas (dict-based)
# ---------------------------------------------------------------------------

CASTLE_RIGHTS_SCHEMA = {
    "queenside": bool,
    "kingside": bool,
}

SPACE_CONTROL_SCHEMA = {
    "centerScore": int,
    "flankScore": int,
    "totalScore": int,
}

PAWN_PROFILE_SCHEMA = {
    "doubledCount": int,
    "isolatedCount": int,
    "backwardCount": int,
    "weaknessScore": int,
}

BOARD_STATE_SCHEMA = {
    "fen": str,
    "validfen": bool,
    "whitecastlerights": dict,
    "blackcastlerights": dict,
    "legalMoves": list,
    "whitematerialcount": int,
    "blackmaterialcount": int,
    "whitespacescore": dict,
    "blackspacescore": dict,
    "whitepositionalscore": dict,
    "blackpositionalscore": dict,
    "isCheckmate": bool,
    "isStalemate": bool,
    "isGameOver": bool,
    "moveNumber": int,
    "sidetomove": str,
}

INVALID_BOARD_STATE_SCHEMA = {
    "fen": str,
    "validfen": bool,
}

# Nested records checked inside a valid board state
_BOARD_STATE_PARTS = {
    "whitecastlerights": CASTLE_RIGHTS_SCHEMA,
    "blackcastlerights": CASTLE_RIGHTS_SCHEMA,
    "whitespacescore": SPACE_CONTROL_SCHEMA,
    "blackspacescore": SPACE_CONTROL_SCHEMA,
    "whitepositionalscore": PAWN_PROFILE_SCHEMA,
    "blackpositionalscore": PAWN_PROFILE_SCHEMA,
}

ANALYSIS_SCHEMA = {
    "bestMove": str,
    "reasoning": str,
    "topLine": str,
    "numberEval": (int, float),
    "speechEval": str,
}

VALIDATION_SCHEMA = {
    "isValid": bool,
}

ERROR_SCHEMA = {
    "error": str,
}


def _enabled() -> bool:
    return os.environ.get("CHESSAGINE_VALIDATE") == "1"


def validate_response(response: dict, schema: dict) -> list[str]:
    """Validate a response dict against a schema.

    Only runs when CHESSAGINE_VALIDATE=1 env var is set.

    Args:
        response: Response dict to validate.
        schema: Dict mapping key names to expected types (or tuple of types).

    Returns:
        List of validation error strings (empty = valid).
    """
    if not _enabled():
        return []

    errors = []

    if not isinstance(response, dict):
        errors.append(f"Response is not a dict: {type(response).__name__}")
        return errors

    for key, expected_types in schema.items():
        if key not in response:
            errors.append(f"Missing key: {key}")
            continue

        value = response[key]
        if isinstance(expected_types, tuple):
            if not isinstance(value, expected_types):
                type_names = ", ".join(t.__name__ for t in expected_types)
                errors.append(
                    f"Key '{key}': expected ({type_names}), "
                    f"got {type(value).__name__}"
                )
        else:
            if not isinstance(value, expected_types):
                errors.append(
                    f"Key '{key}': expected {expected_types.__name__}, "
                    f"got {type(value).__name__}"
                )

    return errors


def validate_board_state_response(response: dict) -> list[str]:
    """Validate a {'boardstate': ...} tool response, dispatching on validfen.

    An invalid board state must carry exactly fen and validfen.
    """
    if not _enabled():
        return []

    state = response.get("boardstate") if isinstance(response, dict) else None
    if not isinstance(state, dict):
        return ["Missing key: boardstate"]

    if state.get("validfen") is False:
        errors = validate_response(state, INVALID_BOARD_STATE_SCHEMA)
        extra = sorted(set(state) - set(INVALID_BOARD_STATE_SCHEMA))
        if extra:
            errors.append(f"Invalid board state has extra keys: {extra}")
        return errors

    errors = validate_response(state, BOARD_STATE_SCHEMA)
    for key, schema in _BOARD_STATE_PARTS.items():
        if isinstance(state.get(key), dict):
            errors.extend(f"{key}: {e}" for e in validate_response(state[key], schema))
    return errors
