"""Defines the pieces of XXLChess: the eleven kinds, their symbols, values and display names"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import InvalidLayoutError
from src.core.shared_types import Color, PieceType
from src.xxlchess.tile import Tile

SYMBOL_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "r": PieceType.ROOK,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "h": PieceType.ARCHBISHOP,
    "c": PieceType.CAMEL,
    "g": PieceType.GENERAL,
    "a": PieceType.AMAZON,
    "k": PieceType.KING,
    "e": PieceType.CHANCELLOR,
    "q": PieceType.QUEEN,
}

PIECE_TO_SYMBOL: dict[PieceType, str] = {
    value: key for key, value in SYMBOL_TO_PIECE.items()
}

PIECE_VALUES: dict[PieceType, float] = {
    PieceType.PAWN: 1.0,
    PieceType.ROOK: 5.25,
    PieceType.KNIGHT: 2.0,
    PieceType.BISHOP: 3.625,
    PieceType.ARCHBISHOP: 7.5,
    PieceType.CAMEL: 2.0,
    PieceType.GENERAL: 5.0,
    PieceType.AMAZON: 12.0,
    PieceType.KING: float("inf"),
    PieceType.CHANCELLOR: 8.5,
    PieceType.QUEEN: 9.5,
}

# Only the general deviates from its enum value
DISPLAY_NAMES: dict[PieceType, str] = {
    piece_type: piece_type.value for piece_type in PieceType
} | {PieceType.GENERAL: "knight-king"}


@dataclass(eq=False)
class Piece:
    """
    A piece on (or captured from) the board.
    ---

    Identity fields (kind, color, value, name) never change. A promotion replaces the piece by a new one.

    ---
    NOTE: `handle` is the index of the piece in the arena of the Board that owns it.
    A cloned board holds different Piece instances with the same handles.
    Pieces compare by identity, so two pieces of the same kind and color are never equal.
    """

    kind: PieceType
    color: Color
    handle: int = -1
    tile: Optional[Tile] = None
    has_moved: bool = False
    targets: set[Tile] = field(default_factory=set)
    value: float = field(init=False)
    name: str = field(init=False)

    def __post_init__(self):
        self.value = PIECE_VALUES[self.kind]
        self.name = DISPLAY_NAMES[self.kind]

    @classmethod
    def from_symbol(cls, character: str) -> Self:
        # upper case: Black pieces, lower case: White pieces
        if character.lower() not in SYMBOL_TO_PIECE:
            raise InvalidLayoutError(f"Unexpected piece character {character!r}.")
        color = Color.BLACK if character.isupper() else Color.WHITE
        return cls(SYMBOL_TO_PIECE[character.lower()], color)

    def to_symbol(self) -> str:
        symbol = PIECE_TO_SYMBOL[self.kind]
        return symbol.upper() if self.color == Color.BLACK else symbol

    @property
    def is_captured(self) -> bool:
        return self.tile is None

    def __repr__(self) -> str:
        return f"Piece({self.color} {self.kind}, #{self.handle}, {self.tile})"
