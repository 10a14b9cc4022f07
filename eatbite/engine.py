"""
Pure game logic (no HTTP, no storage).
We compute two feedback numbers for each guess:
- eat: how many digits are exactly correct (right number, right place)
- bite: how many of the remaining guess digits appear somewhere else in the secret

Codes are 3 digits, 0-9, no repeats, so there are 10 * 9 * 8 = 720 of them.
"""

import random
from typing import List, Optional

from .errors import CodeValidationError, DuplicateDigits, InvalidLength
from .types import CODE_LENGTH, Code, Score

_system_random = random.SystemRandom()


def parse_code(text: str) -> Code:
    """
    Turn free text into a Code.
    Only digit characters are kept, so "5 2 7" and "5-2-7" both give (5, 2, 7).
    Raises InvalidLength / DuplicateDigits (both ValueError).
    """
    digits = []
    for ch in text:
        if ch in "0123456789":
            digits.append(int(ch))

    return validate_code(digits)


def validate_code(digits) -> Code:
    """Same checks as parse_code, for input that is already a list of ints."""
    if len(digits) != CODE_LENGTH:
        raise InvalidLength(len(digits))
    for d in digits:
        if not isinstance(d, int) or isinstance(d, bool) or d < 0 or d > 9:
            raise CodeValidationError("Each digit must be between 0 and 9 inclusive.")
    if len(set(digits)) != CODE_LENGTH:
        raise DuplicateDigits()
    return tuple(digits)


def all_codes() -> List[Code]:
    """Every valid code, in lexicographic order."""
    codes = []
    for a in range(10):
        for b in range(10):
            if b == a:
                continue
            for c in range(10):
                if c == a or c == b:
                    continue
                codes.append((a, b, c))
    return codes


def generate_random_code(rng: Optional[random.Random] = None) -> Code:
    """Shuffle 0..9 and keep the first three: every one of the 720 codes is equally likely."""
    rng = rng or _system_random
    digits = list(range(10))
    rng.shuffle(digits)
    return tuple(digits[:CODE_LENGTH])


def score(secret: Code, guess: Code) -> Score:
    """
    Example:
      secret = [5, 2, 7]
      guess  = [5, 7, 2]
      eat  = 1  (the 5 is in place)
      bite = 2  (7 and 2 are in the secret, but elsewhere)
    A digit that matches in place only counts as eat, never as bite too.
    """
    if len(secret) != CODE_LENGTH or len(guess) != CODE_LENGTH:
        raise ValueError("Secret and guess must both have 3 digits.")

    eat = 0
    bite = 0
    i = 0
    while i < CODE_LENGTH:
        if secret[i] == guess[i]:
            eat += 1
        elif guess[i] in secret:
            bite += 1
        i += 1

    return Score(eat, bite)


def is_win(result: Score) -> bool:
    return result.eat == CODE_LENGTH


def format_code(code: Code) -> str:
    return "".join(str(d) for d in code)


def format_score(result: Score) -> str:
    return f"{result.eat} Eat, {result.bite} Bite"
