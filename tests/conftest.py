"""Shared test fixtures for ChessAgine.

Fixtures:
    rules              - python-chess backed RulesProvider.
    mock_oracle        - MagicMock standing in for OracleClient; no network.
    chess_tools        - ChessTools wired to rules + mock_oracle.
    enable_validation  - Sets CHESSAGINE_VALIDATE=1 for schema validation.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT))

from chessagine.models import OracleResponse  # noqa: E402
from chessagine.oracle import OracleClient  # noqa: E402
from chessagine.rules import RulesProvider  # noqa: E402
from chessagine.tools import ChessTools  # noqa: E402


# ---------------------------------------------------------------------------
# Rules and tools fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def rules() -> RulesProvider:
    return RulesProvider()


@pytest.fixture()
def mock_oracle():
    """OracleClient mock answering e4 with a short line from the start position."""
    oracle = MagicMock(spec=OracleClient)
    oracle.evaluate.return_value = OracleResponse(
        success=True,
        evaluation=0.3,
        mate=None,
        bestmove="bestmove e2e4 ponder e7e5",
        continuation="e2e4 e7e5 g1f3",
    )
    return oracle


@pytest.fixture()
def chess_tools(rules, mock_oracle) -> ChessTools:
    return ChessTools(rules, mock_oracle)


# ---------------------------------------------------------------------------
# Schema validation fixture
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def enable_validation():
    """Set CHESSAGINE_VALIDATE=1 for the test.

    Restores the original env var value after the test.
    """
    original = os.environ.get("CHESSAGINE_VALIDATE")
    os.environ["CHESSAGINE_VALIDATE"] = "1"
    yield
    if original is None:
        os.environ.pop("CHESSAGINE_VALIDATE", None)
    else:
        os.environ["CHESSAGINE_VALIDATE"] = original
