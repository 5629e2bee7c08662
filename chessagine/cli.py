"""Command-line interface for ChessAgine.

Subcommands:
    state FEN           board state with positional metrics
    project FEN MOVE    board state after one move
    validate FEN        FEN validation
    analyze FEN         Stockfish oracle analysis
    ask QUERY           ask the agent
    serve               run the agent HTTP endpoint
"""

from __future__ import annotations

import argparse
import json
import sys

from rich.console import Console
from rich.text import Text

from chessagine.agent import build_agent
from chessagine.agent_server import serve
from chessagine.logging_config import setup_logging
from chessagine.render import render_analysis, render_board_state
from chessagine.settings import load_settings
from chessagine.tools import build_tools


def _print(console: Console, payload: dict, as_json: bool, renderable=None) -> None:
    if as_json or renderable is None:
        console.print_json(json.dumps(payload))
    else:
        console.print(renderable)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessagine",
        description="Positional chess metrics and Stockfish analysis for LLM agents",
    )
    parser.add_argument("--json", action="store_true", help="Print raw JSON output")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    state_parser = subparsers.add_parser("state", help="Board state for a FEN")
    state_parser.add_argument("fen", type=str, help="FEN string")

    project_parser = subparsers.add_parser("project", help="Board state after a move")
    project_parser.add_argument("fen", type=str, help="FEN string")
    project_parser.add_argument("move", type=str, help="Move in SAN or UCI")

    validate_parser = subparsers.add_parser("validate", help="Validate a FEN")
    validate_parser.add_argument("fen", type=str, help="FEN string")

    analyze_parser = subparsers.add_parser("analyze", help="Stockfish analysis of a FEN")
    analyze_parser.add_argument("fen", type=str, help="FEN string")
    analyze_parser.add_argument("--depth", type=int, default=12, help="Search depth (min 12)")

    ask_parser = subparsers.add_parser("ask", help="Ask the agent a question")
    ask_parser.add_argument("query", type=str, help="Question, e.g. 'Analyze this <FEN>'")

    serve_parser = subparsers.add_parser("serve", help="Run the agent HTTP endpoint")
    serve_parser.add_argument("--host", type=str, default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Port")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    settings = load_settings()
    setup_logging(settings.log_level, settings.log_file)
    console = Console()

    if args.command in ("ask", "serve"):
        agent = build_agent(settings)
        if args.command == "ask":
            console.print(agent.generate(args.query))
            return 0

        serve(agent, args.host or settings.host, args.port or settings.port)
        return 0

    tools = build_tools(settings.oracle_url, settings.oracle_timeout)

    if args.command == "state":
        payload = tools.get_chessboard_state(args.fen)
        _print(console, payload, args.json, render_board_state(payload["boardstate"]))
        return 0 if payload["boardstate"]["validfen"] else 2

    if args.command == "project":
        payload = tools.get_future_chessboard_state(args.fen, args.move)
        if "error" in payload:
            console.print(Text(payload["error"], style="red"))
            return 2
        _print(console, payload, args.json, render_board_state(payload["boardstate"]))
        return 0 if payload["boardstate"]["validfen"] else 2

    if args.command == "validate":
        payload = tools.validate_fen(args.fen)
        _print(console, payload, True)
        return 0 if payload["isValid"] else 2

    if args.command == "analyze":
        payload = tools.get_stockfish_analysis(args.fen, args.depth)
        _print(console, payload, args.json, render_analysis(payload))
        return 2 if "error" in payload else 0

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
