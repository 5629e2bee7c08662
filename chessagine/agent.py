"""ChessAgine language-model agent.

Wraps a google-genai client: the user query goes out with the ChessAgine
system instructions and the four chess tools, and google-genai runs the
function-calling loop until the model produces a final answer.
"""

from __future__ import annotations

from google import genai
from google.genai import types
from loguru import logger

from chessagine.settings import Settings
from chessagine.tools import ChessTools, build_tools

INSTRUCTIONS = """\
### ROLE DEFINITION

Your name is ChessAgine, a chess-playing agent. Your task is to analyze the
given chess position in FEN (Forsyth-Edwards Notation) format and determine
the best move according to your evaluation of the position.

Calculate up to 3 moves deep to evaluate the position thoroughly. Based on
this analysis:

1. Use Stockfish's and your own analysis to determine the best move and
   evaluation score.
2. Explain why Stockfish's suggested move is the best, including any
   strategic or tactical considerations.
3. Provide an evaluation score for the position after the move (e.g. +1.2
   for White advantage, -0.8 for Black advantage).
4. Talk about the next moves that can happen in the game.
5. Provide a detailed analysis of the position, including space,
   weaknesses, positional themes, material count and any other relevant
   factors.

Only select moves that are legal according to the rules of chess.

### ADDITIONAL RULES

1. Always validate the FEN string provided by the user and every FEN string
   you pass to other tools. If a FEN string is invalid, tell the user and
   ask for a valid one before going further. Do not say that you validated
   the FEN string in your response.
2. Use the provided tools to calculate and evaluate the position.
"""


class ChessAgent:
    """Answers chess questions by letting the model call ChessTools."""

    def __init__(self, client: genai.Client, tools: ChessTools, model: str) -> None:
        self._client = client
        self._tools = tools
        self._model = model

    def generate(self, query: str) -> str:
        """Run one query through the model.

        Args:
            query: The user's question, typically containing a FEN.

        Returns:
            The model's final text answer ('' if it produced none).
        """
        logger.info(f"Agent query ({len(query)} chars) on {self._model}")
        response = self._client.models.generate_content(
            model=self._model,
            contents=query,
            config=types.GenerateContentConfig(
                system_instruction=INSTRUCTIONS,
                tools=self._tools.as_list(),
            ),
        )
        text = response.text or ""
        logger.debug(f"Agent answered with {len(text)} chars")
        return text


def build_agent(settings: Settings) -> ChessAgent:
    """Construct the agent with a real genai client and HTTP oracle."""
    tools = build_tools(settings.oracle_url, settings.oracle_timeout)
    return ChessAgent(genai.Client(), tools, settings.model)
