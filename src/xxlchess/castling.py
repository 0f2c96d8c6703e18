"""
Castling rules
---

The king jumps two tiles towards one of the edges of its row, and the unmoved rook closest to that edge
lands on the tile the king jumped over. Both moves belong to the same ply.
"""

from typing import Optional

from src.core.shared_types import PieceType
from src.xxlchess.board import Board
from src.xxlchess.movement import Movement
from src.xxlchess.pieces import Piece
from src.xxlchess.tile import Tile, Vector

CASTLING_OFFSETS: list[Vector] = [(-2, 0), (2, 0)]


def castling_partner(
    board: Board, move: Movement, king_in_check: bool
) -> Optional[Movement]:
    """
    If `move` is a castling move, return the accompanying rook move. Otherwise return None.
    ---

    Requirements:
    * the moving piece is a king that has never moved, and is not in check
    * it moves exactly two tiles along its row, onto an empty tile
    * an unmoved rook of the same color stands further along the row (the one nearest the edge is taken)
    * the tile the rook lands on (next to the king's target, on the near side) is empty
    """
    king = move.piece
    if king.kind != PieceType.KING or king.has_moved or king_in_check:
        return None

    dx = move.target.x - move.source.x
    if abs(dx) != 2 or move.target.y != move.source.y:
        return None
    if board.piece_at(move.target) is not None:
        return None

    direction = 1 if dx > 0 else -1
    rook = _find_unmoved_rook(board, king, direction)
    if rook is None:
        return None

    rook_target = move.target.shifted(-direction, 0)
    if board.piece_at(rook_target) is not None:
        return None
    return Movement.create(board, rook, rook_target)


def castling_candidates(
    board: Board, king: Piece, king_in_check: bool
) -> list[Movement]:
    """The castling moves available to the king (before checking whether they are safe)."""
    if king.has_moved or king_in_check:
        return []

    candidates: list[Movement] = []
    targets = sorted(board.jumping_move(king.tile, CASTLING_OFFSETS), key=Tile.reading_order)
    for target in targets:
        move = Movement.create(board, king, target)
        if castling_partner(board, move, king_in_check) is not None:
            candidates.append(move)
    return candidates


# -- PRIVATE HELPERS ---
def _find_unmoved_rook(board: Board, king: Piece, direction: int) -> Optional[Piece]:
    """Scan from the king to the edge of the board. The unmoved rook closest to the edge wins."""
    partner: Optional[Piece] = None
    tile = king.tile.shifted(direction, 0)
    while tile.is_within_bounds():
        piece = board.piece_at(tile)
        is_partner = (
            piece is not None
            and piece.kind == PieceType.ROOK
            and piece.color == king.color
            and not piece.has_moved
        )
        if is_partner:
            partner = piece
        tile = tile.shifted(direction, 0)
    return partner
