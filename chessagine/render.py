"""Rich renderables for board states and analyses.

Used by the CLI to print a BoardState dict as a board diagram next to
a per-side metrics table, and an analysis dict as a summary panel.
"""

from __future__ import annotations

import chess
from rich.columns import Columns
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

# Unicode piece symbols
_PIECE_SYMBOLS = {
    "K": "♔", "Q": "♕", "R": "♖", "B": "♗",
    "N": "♘", "P": "♙",
    "k": "♚", "q": "♛", "r": "♜", "b": "♝",
    "n": "♞", "p": "♟",
}

_LIGHT_SQ = "grey85"
_DARK_SQ = "grey50"


def _render_board_panel(fen: str, title: str) -> Panel:
    """Render the position as a board diagram, White at the bottom."""
    board = chess.Board(fen)

    table = Table(show_header=False, show_edge=False, pad_edge=False,
                  box=None, padding=(0, 1))
    table.add_column(width=2, justify="right")
    for _ in range(8):
        table.add_column(width=3, justify="center")

    for rank in range(7, -1, -1):
        row: list[Text] = [Text(str(rank + 1), style="bold")]
        for file in range(8):
            piece = board.piece_at(chess.square(file, rank))
            bg = _LIGHT_SQ if (rank + file) % 2 == 1 else _DARK_SQ
            if piece is not None:
                symbol = _PIECE_SYMBOLS.get(piece.symbol(), "?")
                row.append(Text(f" {symbol} ", style=f"on {bg}"))
            else:
                row.append(Text("   ", style=f"on {bg}"))
        table.add_row(*row)

    file_labels = [Text("  ")]
    for f in range(8):
        file_labels.append(Text(f" {chr(ord('a') + f)} ", style="bold"))
    table.add_row(*file_labels)

    return Panel(table, title=title, border_style="blue")


def _castle_text(rights: dict) -> str:
    sides = [name for name, key in (("O-O", "kingside"), ("O-O-O", "queenside")) if rights[key]]
    return " ".join(sides) or "-"


def _render_metrics(state: dict) -> Table:
    """Per-side metrics table for a valid board state."""
    table = Table(title="Position metrics", show_lines=False)
    table.add_column("Metric", style="bold")
    table.add_column("White", justify="right")
    table.add_column("Black", justify="right")

    table.add_row("Material", str(state["whitematerialcount"]), str(state["blackmaterialcount"]))
    table.add_row(
        "Castling",
        _castle_text(state["whitecastlerights"]),
        _castle_text(state["blackcastlerights"]),
    )
    for label, key in (("Center space", "centerScore"), ("Flank space", "flankScore"),
                       ("Total space", "totalScore")):
        table.add_row(label, str(state["whitespacescore"][key]), str(state["blackspacescore"][key]))
    for label, key in (("Doubled pawns", "doubledCount"), ("Isolated pawns", "isolatedCount"),
                       ("Backward pawns", "backwardCount"), ("Pawn weakness", "weaknessScore")):
        table.add_row(
            label,
            str(state["whitepositionalscore"][key]),
            str(state["blackpositionalscore"][key]),
        )
    return table


def render_board_state(state: dict):
    """Render a BoardState dict.

    Args:
        state: Output of BoardState.to_dict().

    Returns:
        A rich renderable.
    """
    if not state.get("validfen"):
        return Panel(
            Text(f"Invalid FEN: {state.get('fen')}", style="red"),
            title="ChessAgine",
            border_style="red",
        )

    if state["isCheckmate"]:
        status = "Checkmate"
    elif state["isStalemate"]:
        status = "Stalemate"
    elif state["isGameOver"]:
        status = "Game over"
    else:
        status = f"Move {state['moveNumber']}, {state['sidetomove']} to move"

    moves = state["legalMoves"]
    legal = Text(f"Legal moves ({len(moves)}): ", style="bold")
    legal.append(" ".join(moves) or "none", style="")

    return Group(
        Columns([_render_board_panel(state["fen"], status), _render_metrics(state)]),
        legal,
    )


def render_analysis(analysis: dict) -> Panel:
    """Render a Stockfish analysis dict (or an error dict)."""
    if "error" in analysis:
        return Panel(Text(analysis["error"], style="red"), title="Analysis", border_style="red")

    parts = [
        f"[bold]Best move:[/bold] {analysis['bestMove']}",
        f"[bold]Eval:[/bold] {analysis['numberEval']}",
        f"[bold]Top line:[/bold] {analysis['topLine']}",
        "",
        analysis["speechEval"],
        "",
        f"[italic]{analysis['reasoning']}[/italic]",
    ]
    return Panel("\n".join(parts), title="Analysis", border_style="green")
