"""A single ply: one piece moving from one tile to another (possibly capturing)"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Self

from src.core.exceptions import GameStateError
from src.xxlchess.pieces import Piece
from src.xxlchess.tile import Tile

if TYPE_CHECKING:
    from src.xxlchess.board import Board


@dataclass(frozen=True)
class Movement:
    """
    Value object for one ply.
    ---

    NOTE: equality only looks at (piece, source, target). The captured piece is a snapshot of the board at
    construction time, so two movements built at different moments are still the same move.
    """

    piece: Piece
    source: Tile
    target: Tile
    captured: Optional[Piece] = field(default=None, compare=False)
    piece_had_moved: bool = field(default=False, compare=False)

    @classmethod
    def create(cls, board: Board, piece: Piece, target: Tile) -> Self:
        if piece.tile is None:
            raise GameStateError(f"A captured piece cannot move: {piece}")
        return cls(
            piece=piece,
            source=piece.tile,
            target=target,
            captured=board.piece_at(target),
            piece_had_moved=piece.has_moved,
        )

    def perform(self, board: Board) -> Optional[Piece]:
        """
        Apply the move to the given board (the live board, or a clone used for simulation).
        ---

        The moving piece is looked up by its handle, so the same Movement can be replayed on a clone.
        Returns whatever piece occupied the target tile (the capture, if any).

        NOTE: no legality checks here. Those are done before, on a throwaway board.
        """
        piece = board.piece_by_handle(self.piece.handle)
        if piece.tile != self.source:
            raise GameStateError(f"{piece} is not on {self.source} anymore.")
        captured = board.relocate(piece, self.target)
        piece.has_moved = True
        return captured

    def revert(self, board: Board, captured: Optional[Piece]) -> None:
        """Inverse of `perform()`: put the piece back and restore whatever was captured."""
        piece = board.piece_by_handle(self.piece.handle)
        board.relocate(piece, self.source)
        piece.has_moved = self.piece_had_moved
        if captured is not None:
            board.attach(captured, self.target)
