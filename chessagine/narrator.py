"""Natural-language narration of oracle evaluations.

Converts a numeric evaluation (in pawns, White's point of view) into a
one-sentence assessment and translates the oracle's UCI best move and
principal variation into SAN.
"""

from __future__ import annotations

from chessagine.models import UNKNOWN_EVAL, EvaluationResult, OracleResponse
from chessagine.rules import RulesProvider

_REASONING = (
    "Based on Stockfish analysis, this move optimizes piece activity and position."
)

# (low, high, phrase) with exclusive bounds on |evaluation|
_EVAL_BANDS = [
    (0, 1, " equal and there is no real advantage both sides are playing equal"),
    (1, 2, " is better than otherside, still there is a chance the game can be equal if"),
    (
        2,
        3,
        " is better with a value of a minor piece than otherside and favorite to play"
        " if played with perfect play",
    ),
    (
        3,
        5,
        " is better with a value of major piece like rook than otherside,"
        " and should win the game",
    ),
    (5, 10, " is way better with a value of up being a queen, otherside should lose soon"),
]

# bestmove token sent when the side to move has no move
_NO_MOVE = "(none)"

_WINNING_PHRASE = (
    " is already winning by material value, but there could be a tactical theme"
    " ahead to even get better"
)

UNKNOWN_ANALYSIS = EvaluationResult(
    best_move="Unknown",
    reasoning="Insufficient data to determine best move.",
    top_line="unknown",
    number_eval=0,
    speech_eval="unknown",
    mate="unknown",
)


def speech_eval(evaluation: float, mate: str | None = None) -> str:
    """Describe an evaluation in one sentence.

    Args:
        evaluation: Evaluation in pawns, or UNKNOWN_EVAL.
        mate: Mate announcement from the oracle, if any. Overrides the
            magnitude bands.

    Returns:
        Assessment sentence, or "Unknown" for the sentinel.
    """
    if evaluation == UNKNOWN_EVAL:
        return "Unknown"

    speech = "Black is" if evaluation < 0 else "White is"

    if mate is not None:
        return f"{speech} is winning the game in style with the move: {mate}"

    magnitude = abs(evaluation)
    for low, high, phrase in _EVAL_BANDS:
        if low < magnitude < high:
            return speech + phrase
    # 10 and above, plus the exact band edges
    return speech + _WINNING_PHRASE


def translate_line(rules: RulesProvider, fen: str, uci_moves: list[str]) -> list[str]:
    """Replay UCI moves from a FEN and return them in SAN.

    Raises:
        ValueError: If the FEN is rejected.
        IllegalMoveError: If a move is not legal where it is played.
    """
    board = rules.parse(fen)
    if board is None:
        raise ValueError(f"Invalid FEN position: {fen}")

    san_moves: list[str] = []
    for uci in uci_moves:
        san_moves.append(rules.to_algebraic(board, uci))
        board = rules.apply_move(board, uci)
    return san_moves


def generate_chess_analysis(
    rules: RulesProvider,
    response: OracleResponse,
    fen: str,
) -> EvaluationResult:
    """Translate an oracle response into an EvaluationResult.

    An empty bestmove, or "bestmove (none)" for a finished game, degrades
    to UNKNOWN_ANALYSIS instead of raising.

    Args:
        rules: Rules provider used for notation translation.
        response: Oracle response for the position.
        fen: FEN the oracle analysed.

    Returns:
        EvaluationResult with SAN best move and top line.
    """
    tokens = response.bestmove.split()
    if not tokens:
        return UNKNOWN_ANALYSIS
    best_uci = tokens[1] if len(tokens) > 1 else tokens[0]
    if best_uci == _NO_MOVE:
        return UNKNOWN_ANALYSIS
    best_move = translate_line(rules, fen, [best_uci])[0]

    variation = [m for m in response.continuation.split(" ") if m]
    top_line = " ".join(translate_line(rules, fen, variation))

    number_eval = response.evaluation if response.evaluation is not None else UNKNOWN_EVAL

    return EvaluationResult(
        best_move=best_move or "Unknown",
        reasoning=_REASONING,
        top_line=top_line,
        number_eval=number_eval,
        speech_eval=speech_eval(number_eval, response.mate),
    )
