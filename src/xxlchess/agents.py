"""The two sides of the game: the human player and the computer"""

from __future__ import annotations

from math import floor
from typing import Optional

from src.core.exceptions import GameStateError, TimeoutViolationError
from src.core.shared_types import Color
from src.xxlchess.bot import BotStrategy
from src.xxlchess.movement import Movement
from src.xxlchess.pieces import Piece
from src.xxlchess.tile import Tile
from src.xxlchess.timer import FPS, Timer


class PlayerAgent:
    """
    One side of the game: its clock, the pieces it still has and its king.
    ---

    NOTE: the king is set once when the layout is loaded and never reassigned.
    """

    is_human = False

    def __init__(
        self,
        color: Color,
        secs: float,
        increment: float = 0,
        frames_per_second: int = FPS,
    ) -> None:
        self.color = color
        self.timer = Timer(secs, frames_per_second)
        self.increment = increment
        self.pieces: list[Piece] = []
        self.king: Optional[Piece] = None
        self.opponent: Optional[PlayerAgent] = None
        self.last_move: Optional[Movement] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.color})"

    # --- ROSTER ---
    def set_king(self, king: Piece) -> None:
        if self.king is not None:
            raise GameStateError(f"The {self.color} king has already been set.")
        self.king = king

    def add_piece(self, piece: Piece) -> None:
        self.pieces.append(piece)

    def remove_piece(self, piece: Piece) -> None:
        self.pieces.remove(piece)

    # --- CLOCK ---
    def tick(self) -> None:
        """One frame passes on this player's clock."""
        if self.timer.is_ended():
            raise TimeoutViolationError(self)
        self.timer.tick()

    def add_increment(self) -> None:
        self.timer.add_remaining_secs(self.increment)

    def is_out_of_time(self) -> bool:
        return self.timer.is_ended()

    @property
    def remaining_secs(self) -> int:
        """Whole seconds left on the clock, zero once the clock ran out"""
        if self.timer.is_ended():
            return 0
        return floor(self.timer.remaining_secs)


class HumanAgent(PlayerAgent):
    """The human picks a piece first (selection) and then the tile to move it to."""

    is_human = True

    def __init__(
        self,
        color: Color,
        secs: float,
        increment: float = 0,
        frames_per_second: int = FPS,
    ) -> None:
        super().__init__(color, secs, increment, frames_per_second)
        self.selection: Optional[Tile] = None

    def clear_selection(self) -> None:
        self.selection = None


class BotAgent(PlayerAgent):
    """The computer delegates the choice of its move to a pluggable strategy."""

    def __init__(
        self,
        color: Color,
        secs: float,
        strategy: BotStrategy,
        increment: float = 0,
        frames_per_second: int = FPS,
    ) -> None:
        super().__init__(color, secs, increment, frames_per_second)
        self.strategy = strategy

    def make_decision(self, candidates: list[Movement]) -> Optional[Movement]:
        """
        NOTE: candidates must already be filtered to safe moves. The strategy does not check anything.
        None means the computer gives up.
        """
        return self.strategy.choose(candidates)
