"""Summary of a finished game"""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.shared_types import EndReason
from src.xxlchess.agents import PlayerAgent

# Reasons for which the human wins. A draw has no winner, every other reason means the computer wins.
HUMAN_WINS = (
    EndReason.COMPUTER_TIMEOUT,
    EndReason.COMPUTER_CHECKMATED,
    EndReason.COMPUTER_RESIGNED,
)


@dataclass(frozen=True)
class GameReport:
    reason: EndReason
    winner: Optional[PlayerAgent]
    loser: Optional[PlayerAgent]

    @classmethod
    def create(cls, reason: EndReason, human: PlayerAgent, bot: PlayerAgent) -> Self:
        if reason == EndReason.DRAW:
            return cls(reason, None, None)
        if reason in HUMAN_WINS:
            return cls(reason, human, bot)
        return cls(reason, bot, human)
