"""
The bot's side of the game.

The bot remembers every guess it made against the player's secret together
with the score the player got back. A code can only be the player's secret if
scoring it against each old guess gives exactly the score that was recorded,
so each observation is a hard filter on the 720 possible codes.

The candidate list is rebuilt from the whole memory every turn. With 720 codes
and a handful of observations that is cheap, and it keeps the bot a pure
function of what it has seen.
"""

import logging
import random
from typing import Iterable, List, Optional

from .engine import all_codes, score
from .errors import NoConsistentCandidate
from .types import Code, Memory, Observation, Score

logger = logging.getLogger(__name__)

_UNIVERSE: List[Code] = all_codes()


def filter_candidates(memory: Iterable[Observation]) -> List[Code]:
    """
    Keep only codes that would produce exactly the recorded score for every
    (guess, score) in `memory`. Order follows all_codes().
    """
    observations = list(memory)
    out: List[Code] = []

    for candidate in _UNIVERSE:
        consistent = True
        for guess, result in observations:
            if score(candidate, guess) != result:
                consistent = False
                break
        if consistent:
            out.append(candidate)

    return out


class GameBot:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.memory: Memory = []
        # seeded Random in tests, SystemRandom otherwise
        self.rng = rng or random.SystemRandom()

    def remember(self, guess: Code, result: Score) -> None:
        self.memory.append(Observation(tuple(guess), Score(*result)))

    def candidate_set(self) -> List[Code]:
        return filter_candidates(self.memory)

    def next_guess(self) -> Code:
        """
        Pick any consistent code uniformly at random.
        Raises NoConsistentCandidate if the memory contradicts itself
        (only possible if the scores the bot got were wrong).
        """
        candidates = self.candidate_set()
        if not candidates:
            logger.warning("bot memory is contradictory after %d observations", len(self.memory))
            raise NoConsistentCandidate(len(self.memory))

        return candidates[self.rng.randrange(len(candidates))]

    def reset(self) -> None:
        self.memory = []
