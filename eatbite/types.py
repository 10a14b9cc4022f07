"""
Labels for clarity.
"""

from typing import List, Literal, NamedTuple, Tuple

Digit = int  # 0 -> 9
Code = Tuple[Digit, ...]  # always 3 distinct digits once parsed
GameStatus = Literal["awaiting_secret", "in_progress", "opponent_won", "bot_won"]

CODE_LENGTH = 3


class Score(NamedTuple):
    eat: int   # right digit, right place
    bite: int  # right digit, wrong place


class Observation(NamedTuple):
    guess: Code
    score: Score


Memory = List[Observation]
