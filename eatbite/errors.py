"""
Everything the game can refuse to do.

- CodeValidationError: bad user input (re-prompt / 400)
- GameError: the request is well formed but the session can't honour it (409)
- AlreadyShutdown: shutdown asked for twice
"""


class CodeValidationError(ValueError):
    """Input is not a 3-digit code with distinct digits."""


class InvalidLength(CodeValidationError):
    def __init__(self, found: int):
        super().__init__(f"Code must have exactly 3 digits (got {found}).")
        self.found = found


class DuplicateDigits(CodeValidationError):
    def __init__(self):
        super().__init__("Code digits must all be different.")


class GameError(Exception):
    pass


class SecretNotSet(GameError):
    def __init__(self):
        super().__init__("Set your secret code before guessing.")


class SecretLocked(GameError):
    def __init__(self):
        super().__init__("Secret can only be set before the first round.")


class GameFinished(GameError):
    def __init__(self, status: str):
        super().__init__(f"Game {status}. No more guesses allowed.")
        self.status = status


class NoConsistentCandidate(GameError):
    """The bot's memory contradicts itself: no code fits every score it was given."""

    def __init__(self, observations: int):
        super().__init__(
            f"No code is consistent with the {observations} score(s) the bot was given."
        )
        self.observations = observations


class AlreadyShutdown(Exception):
    def __init__(self):
        super().__init__("Shutdown was already requested.")
