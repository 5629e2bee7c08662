"""Pawn-structure heuristics for one side.

Every function takes the side's pawn squares in rules-provider order
(rank 8 to 1, file a to h) as algebraic names like "e4". The counts are
coarse heuristics and are order sensitive:

- doubled: only every other square of the list is bucketed by file;
- isolated: neighbour files are looked up anywhere in the joined
  square string, rank digits included;
- backward: ranks are compared as raw numbers for both colors.
"""

from __future__ import annotations

import math
from collections import defaultdict

from chessagine.models import PawnProfile

_FILES = "abcdefgh"


def doubled_pawn_count(pawn_squares: list[str]) -> int:
    """Count files holding more than one of the sampled pawns.

    Samples the squares at list indices 0, 2, 4, ... before bucketing
    them by file letter.
    """
    counts: dict[str, int] = defaultdict(int)
    for square in pawn_squares[::2]:
        counts[square[0]] += 1
    return sum(1 for count in counts.values() if count > 1)


def _neighbour_letters(char: str) -> list[str]:
    """Letters checked for a character of the joined pawn string.

    The a-file only looks right and the h-file only looks left. Any
    other character looks at the letters on both sides of its position
    in "abcdefgh"; a rank digit sits at position -1, so its only
    neighbour is "a".
    """
    if char == "a":
        return ["b"]
    if char == "h":
        return ["g"]
    index = _FILES.find(char)
    neighbours = []
    if 0 <= index + 1 < len(_FILES):
        neighbours.append(_FILES[index + 1])
    if 0 <= index - 1 < len(_FILES):
        neighbours.append(_FILES[index - 1])
    return neighbours


def isolated_pawn_count(pawn_squares: list[str]) -> int:
    """Count characters of the joined square string with no neighbour file.

    A character counts when none of its neighbour letters occurs
    anywhere in the string.
    """
    chain = "".join(pawn_squares)
    isolated = 0
    for char in chain:
        if not any(letter in chain for letter in _neighbour_letters(char)):
            isolated += 1
    return isolated


def backward_pawn_count(pawn_squares: list[str]) -> int:
    """Count pawns ranked strictly below the most advanced pawn on both adjacent files.

    A missing adjacent file counts as rank 0, so a/h-file pawns and pawns
    with an empty neighbour file are never backward.
    """
    ranks_by_file: dict[str, list[int]] = defaultdict(list)
    for square in pawn_squares:
        ranks_by_file[square[0]].append(int(square[1]))

    backward = 0
    for file, ranks in ranks_by_file.items():
        index = _FILES.index(file)
        left = ranks_by_file.get(_FILES[index - 1], []) if index > 0 else []
        right = ranks_by_file.get(_FILES[index + 1], []) if index < 7 else []
        highest_left = max(left, default=0)
        highest_right = max(right, default=0)
        backward += sum(1 for rank in ranks if rank < highest_left and rank < highest_right)
    return backward


def weakness_score(doubled: int, isolated: int, backward: int, total_pawns: int) -> int:
    """Weakness as a percentage of the pawn count; 0 without pawns.

    A pawn can fall in several categories, so the score may exceed 100.
    """
    if total_pawns <= 0:
        return 0
    # halves round up
    return math.floor(100 * (doubled + isolated + backward) / total_pawns + 0.5)


def pawn_profile(pawn_squares: list[str]) -> PawnProfile:
    """Compute the full pawn profile for one side's pawn squares."""
    doubled = doubled_pawn_count(pawn_squares)
    isolated = isolated_pawn_count(pawn_squares)
    backward = backward_pawn_count(pawn_squares)
    return PawnProfile(
        doubled_count=doubled,
        isolated_count=isolated,
        backward_count=backward,
        weakness_score=weakness_score(doubled, isolated, backward, len(pawn_squares)),
    )
