"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    ROOK = "rook"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ARCHBISHOP = "archbishop"
    CAMEL = "camel"
    GENERAL = "general"
    AMAZON = "amazon"
    KING = "king"
    CHANCELLOR = "chancellor"
    QUEEN = "queen"


class GameStatus(StrEnum):
    """Derived from the game, never stored. See `Game.status`"""

    ENDED = "ended"
    RENDERING_ANIMATION = "rendering animation"
    RENDERING_WARNING = "rendering warning"
    PLAYER_TURN = "player turn"
    COMPUTER_TURN = "computer turn"


class EndReason(StrEnum):
    COMPUTER_TIMEOUT = "computer timeout"
    COMPUTER_CHECKMATED = "computer checkmated"
    COMPUTER_RESIGNED = "computer resigned"
    DRAW = "draw"
    PLAYER_TIMEOUT = "player timeout"
    PLAYER_RESIGNED = "player resigned"
    PLAYER_CHECKMATED = "player checkmated"


class PlyOutcome(StrEnum):
    """What happened in a committed ply (listed by priority). Used by presentation layers, e.g. to pick a sound."""

    CHECK = "check"
    CAPTURE = "capture"
    CASTLE = "castle"
    PROMOTION = "promotion"
    MOVE = "move"
