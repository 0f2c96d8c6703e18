"""Custom errors shared by all layers"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.xxlchess.agents import PlayerAgent


class GameError(Exception):
    """Base class for everything the game raises on purpose."""


# --- FATAL: the game cannot be constructed ---
class GameSetupError(GameError):
    pass


class InvalidLayoutError(GameSetupError):
    pass


class InvalidConfigError(GameSetupError):
    pass


# --- PROGRAMMER ERRORS: operation requested in a state that does not allow it ---
class GameStateError(GameError):
    pass


class InvalidRequestError(GameError):
    pass


# --- RULE VIOLATIONS: recoverable, the attempt is rejected and state is left untouched ---
class RuleViolationError(GameError):
    """
    A player tried something the rules do not allow.
    ---

    NOTE: Always raised BEFORE any mutation happens, so the caller can just let the same player try again.
    """

    default_message = "Rule violation."

    def __init__(self, violator: PlayerAgent, message: str | None = None) -> None:
        self.violator = violator
        super().__init__(message or self.default_message)


class InvalidMoveError(RuleViolationError):
    default_message = "Invalid piece movement."


class KingInDangerError(RuleViolationError):
    default_message = "The king is in danger and must be protected!"


class KingDignityError(RuleViolationError):
    default_message = "You must not actually kill the opponent's king!"


class TimeoutViolationError(RuleViolationError):
    default_message = "The clock has already run out."
