"""
Explicit validation & Pydantic models
- Models are used to validate and serialize/deserialize data
  exchanged between the client and server.
- Codes travel as short strings ("527") because that is what the web client sends.
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

Status = Literal["awaiting_secret", "in_progress", "opponent_won", "bot_won"]

# 1. Player registers their secret
class InitRequest(BaseModel):
    player_secret: str = Field(
        ..., description="3 different digits, e.g. '527'. Non-digit characters are ignored."
    )

    model_config = {
        "json_schema_extra": {
            "examples": [{"player_secret": "527"}]
        }
    }

# 2. Player's guess at the bot's secret
class GuessRequest(BaseModel):
    # Length and duplicate checks happen in the session so every entry point
    # rejects bad codes the same way (400, not 422)
    guess: str = Field(..., description="3 different digits, e.g. '123'")

    model_config = {
        "json_schema_extra": {
            "examples": [{"guess": "123"}]
        }
    }

# 3. An (eat, bite) pair
class ScoreOut(BaseModel):
    eat: int = Field(..., description="Right digit, right place")
    bite: int = Field(..., description="Right digit, wrong place")

# 4. Result of one round
class GuessResponse(BaseModel):
    player_result: str = Field(..., description="Score of the player's guess, e.g. '1 Eat, 2 Bite'")
    bot_guess: str = Field(..., description="The bot's guess, or '---' if the player already won")
    bot_result: str = Field(..., description="Score of the bot's guess, or the outcome of the game")
    player_score: ScoreOut
    bot_score: Optional[ScoreOut] = Field(None, description="Missing when the bot did not get to guess")
    status: Status = Field(..., description="Game status after this round")
    turn: int = Field(..., description="Which round this was")

# 5. One line of history
class RoundOut(BaseModel):
    turn: int
    player_guess: str
    player_score: ScoreOut
    bot_guess: Optional[str] = None
    bot_score: Optional[ScoreOut] = None
    message: str = Field(..., description="Human readable summary of the round")
    timestamp: float = Field(..., description="When the round was played")

# 6. Read-only view of the session
class SessionStateOut(BaseModel):
    status: Status
    turn: int = Field(..., description="Next round number")
    secret_set: bool = Field(..., description="Whether the player's secret is registered")
    candidates_left: int = Field(..., description="Codes the bot still considers possible")
    history: List[RoundOut]
    bot_secret: Optional[str] = Field(None, description="Only revealed once the game is over")

# 7. Plain acknowledgement
class MessageOut(BaseModel):
    message: str
