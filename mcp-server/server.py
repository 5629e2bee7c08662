"""MCP server for ChessAgine.

Exposes the positional evaluation tools and Stockfish oracle analysis
to an LLM agent via FastMCP. Collaborators (rules provider, oracle
client) are built once in main() and passed in; nothing is a module
level singleton.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root and mcp-server dir to path for imports
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_MCP_SERVER_DIR = Path(__file__).resolve().parent
sys.path.insert(0, str(_PROJECT_ROOT))
sys.path.insert(0, str(_MCP_SERVER_DIR))

from loguru import logger  # noqa: E402
from mcp.server.fastmcp import FastMCP  # noqa: E402

from chessagine.logging_config import setup_logging  # noqa: E402
from chessagine.settings import load_settings  # noqa: E402
from chessagine.tools import ChessTools, build_tools  # noqa: E402

from chess_tools import register_chess_tools  # noqa: E402


def build_server(tools: ChessTools, name: str = "chessagine") -> tuple[FastMCP, dict]:
    """Create a FastMCP server with the chess tools registered.

    Args:
        tools: ChessTools bound to their collaborators.
        name: MCP server name.

    Returns:
        Tuple of (server, dict of tool name -> registered function).
    """
    mcp = FastMCP(name)
    registered = register_chess_tools(mcp, tools)
    return mcp, registered


def main() -> None:
    """Run the MCP server over stdio."""
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_file)
    mcp, registered = build_server(build_tools(settings.oracle_url, settings.oracle_timeout))
    logger.info(f"Starting MCP server with tools: {', '.join(registered)}")
    mcp.run()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
