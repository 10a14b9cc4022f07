"""
In-memory game session
Holds both secrets, the bot and the round history for the one game this
process is running.

Every public method takes the session lock for its whole body, so a round
always sees the same player secret, bot secret and bot memory from start to
finish, even when several requests arrive at once.
"""

import logging
import random
from dataclasses import dataclass, field
from threading import RLock
from time import time
from typing import Callable, List, Optional, Union

from .bot import GameBot
from .engine import (
    format_code,
    format_score,
    generate_random_code,
    is_win,
    parse_code,
    score,
    validate_code,
)
from .errors import GameFinished, SecretLocked, SecretNotSet
from .types import Code, GameStatus, Score

logger = logging.getLogger(__name__)

CodeInput = Union[str, Code, List[int]]


def _to_code(value: CodeInput) -> Code:
    if isinstance(value, str):
        return parse_code(value)
    return validate_code(list(value))


@dataclass
class RoundResult:
    turn: int
    player_guess: Code
    player_score: Score
    bot_guess: Optional[Code]   # None when the player won first
    bot_score: Optional[Score]
    status: GameStatus
    timestamp: float = field(default_factory=time)

    @property
    def message(self) -> str:
        msg = f"You: {format_code(self.player_guess)} -> {format_score(self.player_score)}"
        if self.bot_guess is not None:
            msg += f" | Bot: {format_code(self.bot_guess)} -> {format_score(self.bot_score)}"
        return msg


@dataclass
class SessionSnapshot:
    status: GameStatus
    turn: int
    secret_set: bool
    candidates_left: int
    history: List[RoundResult]
    bot_secret: Optional[Code] = None  # only revealed once the game is over


class GameSession:
    def __init__(
        self,
        bot_secret: Optional[CodeInput] = None,
        opponent_secret: Optional[CodeInput] = None,
        rng: Optional[random.Random] = None,
        code_factory: Optional[Callable[[], Code]] = None,
    ) -> None:
        self._lock = RLock()
        self._rng = rng
        self._code_factory = code_factory
        # Default player secret survives restarts; one set through init does not
        self._default_opponent_secret = _to_code(opponent_secret) if opponent_secret is not None else None
        self._start(_to_code(bot_secret) if bot_secret is not None else self._new_bot_secret())

    # --- helpers ---

    def _new_bot_secret(self) -> Code:
        # Called without the lock held
        if self._code_factory is not None:
            return validate_code(list(self._code_factory()))
        return generate_random_code(self._rng)

    # caller holds the lock
    def _start(self, bot_secret: Code) -> None:
        self.bot_secret: Code = bot_secret
        self.opponent_secret: Optional[Code] = self._default_opponent_secret
        self.bot = GameBot(self._rng)
        self.turn = 1
        self.history: List[RoundResult] = []
        self.status: GameStatus = "in_progress" if self.opponent_secret is not None else "awaiting_secret"

    def _is_finished(self) -> bool:
        return self.status in ("opponent_won", "bot_won")

    # --- public API ---

    def submit_opponent_secret(self, secret: CodeInput) -> Code:
        code = _to_code(secret)  # validate before touching any state
        with self._lock:
            if self._is_finished():
                raise GameFinished(self.status)
            if self.history:
                raise SecretLocked()
            self.opponent_secret = code
            self.status = "in_progress"
            return code

    def play_round(self, guess: CodeInput) -> RoundResult:
        """
        One full round:
        1) score the player's guess against the bot's secret; 3 Eat ends the game
           right there and the bot does not guess
        2) the bot guesses from its candidates and gets scored against the player's secret
        3) the bot remembers that score, the turn counter moves on

        If the bot has no consistent candidate, NoConsistentCandidate is raised
        and nothing about the session changes.
        """
        player_guess = _to_code(guess)
        with self._lock:
            if self._is_finished():
                raise GameFinished(self.status)
            if self.opponent_secret is None:
                raise SecretNotSet()

            player_score = score(self.bot_secret, player_guess)

            if is_win(player_score):
                self.status = "opponent_won"
                result = RoundResult(
                    turn=self.turn,
                    player_guess=player_guess,
                    player_score=player_score,
                    bot_guess=None,
                    bot_score=None,
                    status=self.status,
                )
                self.history.append(result)
                logger.info("player cracked the bot's code on turn %d", self.turn)
                return result

            # May raise; nothing has been mutated yet
            bot_guess = self.bot.next_guess()
            bot_score = score(self.opponent_secret, bot_guess)

            self.bot.remember(bot_guess, bot_score)
            if is_win(bot_score):
                self.status = "bot_won"
                logger.info("bot cracked the player's code on turn %d", self.turn)

            result = RoundResult(
                turn=self.turn,
                player_guess=player_guess,
                player_score=player_score,
                bot_guess=bot_guess,
                bot_score=bot_score,
                status=self.status,
            )
            self.history.append(result)
            self.turn += 1
            return result

    def reset(self, bot_secret: Optional[CodeInput] = None) -> None:
        """Fresh game: new bot secret, empty bot memory, turn back to 1."""
        # New secret is built before locking: code_factory may go to the network
        code = _to_code(bot_secret) if bot_secret is not None else self._new_bot_secret()
        with self._lock:
            self._start(code)
            logger.info("session reset (status=%s)", self.status)

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return SessionSnapshot(
                status=self.status,
                turn=self.turn,
                secret_set=self.opponent_secret is not None,
                candidates_left=len(self.bot.candidate_set()),
                history=list(self.history),
                bot_secret=self.bot_secret if self._is_finished() else None,
            )
