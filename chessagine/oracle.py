"""Client for the remote Stockfish evaluation oracle.

Talks to a stockfish.online style HTTP API:

    GET <url>?fen=<fen>&depth=<depth>
    -> {"success", "evaluation", "mate", "bestmove", "continuation"}

One request per call, no retry. Failures surface as OracleError.
"""

from __future__ import annotations

import requests
from loguru import logger

from chessagine.models import OracleResponse
from chessagine.settings import DEFAULT_ORACLE_URL

MIN_DEPTH = 12


class OracleError(RuntimeError):
    """The oracle could not be reached or answered with garbage."""


class OracleClient:
    """HTTP client for position evaluation."""

    def __init__(
        self,
        base_url: str = DEFAULT_ORACLE_URL,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Oracle endpoint.
            timeout: Per-request timeout in seconds.
            session: Optional requests session (shared pools, tests).
        """
        self._base_url = base_url
        self._timeout = timeout
        self._session = session or requests.Session()

    def evaluate(self, fen: str, depth: int) -> OracleResponse:
        """Ask the oracle for the best move and evaluation of a position.

        Args:
            fen: FEN string of the position.
            depth: Search depth, at least MIN_DEPTH.

        Returns:
            Parsed OracleResponse.

        Raises:
            ValueError: If depth is below MIN_DEPTH.
            OracleError: On transport errors, non-2xx status or a body
                that is not a JSON object.
        """
        if depth < MIN_DEPTH:
            raise ValueError(f"depth must be at least {MIN_DEPTH}, got {depth}")

        logger.debug(f"Oracle request depth={depth} fen={fen}")
        try:
            resp = self._session.get(
                self._base_url,
                params={"fen": fen, "depth": depth},
                timeout=self._timeout,
            )
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as exc:
            logger.warning(f"Oracle request failed: {exc}")
            raise OracleError(f"Oracle request failed: {exc}") from exc
        except ValueError as exc:
            raise OracleError(f"Oracle returned invalid JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise OracleError(f"Oracle returned {type(payload).__name__}, expected object")

        response = OracleResponse.from_payload(payload)
        logger.debug(
            f"Oracle answered success={response.success} "
            f"bestmove={response.bestmove!r} eval={response.evaluation}"
        )
        return response

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()
