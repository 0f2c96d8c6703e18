"""
Geometry of piece movement

Key idea: Use strategy pattern to define the reachable tiles for each piece kind.
Compound pieces are unions of the basic rules.


Legality (not putting your own king in danger) is checked later by the LegalMoveGenerator
"""

from typing import Callable, Optional, Protocol

from src.core.shared_types import Color, PieceType
from src.xxlchess.pieces import Piece
from src.xxlchess.tile import Tile, Vector


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece_at(self, tile: Tile) -> Optional[Piece]: ...
    def jumping_move(self, source: Tile, offsets: list[Vector]) -> set[Tile]: ...
    def linear_move(self, source: Tile, dx: int, dy: int) -> set[Tile]: ...
    def is_human_color(self, color: Color) -> bool: ...


KNIGHT_OFFSETS: list[Vector] = [
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
]
CAMEL_OFFSETS: list[Vector] = [
    (1, 3),
    (1, -3),
    (-1, 3),
    (-1, -3),
    (3, 1),
    (3, -1),
    (-3, 1),
    (-3, -1),
]
KING_OFFSETS: list[Vector] = [
    (0, 1),
    (0, -1),
    (1, 0),
    (-1, 0),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
]
BISHOP_DIRECTIONS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
ROOK_DIRECTIONS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]

# Pawns starting on one of these rows may advance two tiles on their first move
PAWN_HOME_ROWS = (1, 12)

# NOTE: the midline. Pawns of both sides promote on reaching it
PROMOTION_ROW = 7


def _sliding(board: Board, piece: Piece, directions: list[Vector]) -> set[Tile]:
    targets: set[Tile] = set()
    for dx, dy in directions:
        targets |= board.linear_move(piece.tile, dx, dy)
    return targets


# --- BASIC RULES ---
def rook_targets(board: Board, piece: Piece) -> set[Tile]:
    """Rooks move either horizontally or vertically"""
    return _sliding(board, piece, ROOK_DIRECTIONS)


def bishop_targets(board: Board, piece: Piece) -> set[Tile]:
    """Bishops move diagonally: |dx| = |dy|"""
    return _sliding(board, piece, BISHOP_DIRECTIONS)


def knight_targets(board: Board, piece: Piece) -> set[Tile]:
    """Knights always jump such that |dx| + |dy| = 3 (and neither is zero)"""
    return board.jumping_move(piece.tile, KNIGHT_OFFSETS)


def camel_targets(board: Board, piece: Piece) -> set[Tile]:
    """A stretched knight: |dx| + |dy| = 4 with one of them equal to 1"""
    return board.jumping_move(piece.tile, CAMEL_OFFSETS)


def king_targets(board: Board, piece: Piece) -> set[Tile]:
    """
    The king can move by a single tile at the time.

    Castling is modelled as a special king move (see castling.py).
    """
    return board.jumping_move(piece.tile, KING_OFFSETS)


# --- COMPOUND RULES ---
def queen_targets(board: Board, piece: Piece) -> set[Tile]:
    return rook_targets(board, piece) | bishop_targets(board, piece)


def general_targets(board: Board, piece: Piece) -> set[Tile]:
    """The general (a.k.a. knight-king) moves like a knight or like a king"""
    return knight_targets(board, piece) | king_targets(board, piece)


def archbishop_targets(board: Board, piece: Piece) -> set[Tile]:
    return bishop_targets(board, piece) | knight_targets(board, piece)


def chancellor_targets(board: Board, piece: Piece) -> set[Tile]:
    return knight_targets(board, piece) | rook_targets(board, piece)


def amazon_targets(board: Board, piece: Piece) -> set[Tile]:
    """Strongest piece of the game: knight + bishop + rook"""
    return (
        knight_targets(board, piece)
        | bishop_targets(board, piece)
        | rook_targets(board, piece)
    )


# --- PAWNS ---
def pawn_direction(board: Board, pawn: Piece) -> int:
    """The human plays from the bottom of the board (moves up), the computer from the top (moves down)"""
    return -1 if board.is_human_color(pawn.color) else 1


def pawn_attack_range(board: Board, pawn: Piece) -> set[Tile]:
    """
    Pawns take diagonally
    ----

    NOTE: Only tiles that actually hold an enemy piece are returned.
    This is also the range used to decide whether a pawn threatens a king.
    """
    dy = pawn_direction(board, pawn)
    diagonals: list[Vector] = [(-1, dy), (1, dy)]
    return {
        tile
        for tile in board.jumping_move(pawn.tile, diagonals)
        if board.piece_at(tile) is not None
    }


def pawn_forward_range(board: Board, pawn: Piece) -> set[Tile]:
    """
    A pawn:
    - moves by a single tile forward, if that tile is empty.
    - can move by two on its first move when it starts on a home row, if both tiles are empty.
    """
    dy = pawn_direction(board, pawn)
    targets: set[Tile] = set()
    one_step = pawn.tile.shifted(0, dy)
    if not one_step.is_within_bounds() or board.piece_at(one_step) is not None:
        return targets
    targets.add(one_step)

    two_steps = pawn.tile.shifted(0, 2 * dy)
    may_double_step = not pawn.has_moved and pawn.tile.y in PAWN_HOME_ROWS
    if (
        may_double_step
        and two_steps.is_within_bounds()
        and board.piece_at(two_steps) is None
    ):
        targets.add(two_steps)
    return targets


def pawn_targets(board: Board, piece: Piece) -> set[Tile]:
    return pawn_attack_range(board, piece) | pawn_forward_range(board, piece)


def is_promotion(piece: Piece, target: Tile) -> bool:
    return piece.kind == PieceType.PAWN and target.y == PROMOTION_ROW


# -- STRATEGY PATTERN: MOVEMENT RULES ---
ReachableFn = Callable[[Board, Piece], set[Tile]]
REACHABLE_RULES: dict[PieceType, ReachableFn] = {
    PieceType.PAWN: pawn_targets,
    PieceType.ROOK: rook_targets,
    PieceType.KNIGHT: knight_targets,
    PieceType.BISHOP: bishop_targets,
    PieceType.ARCHBISHOP: archbishop_targets,
    PieceType.CAMEL: camel_targets,
    PieceType.GENERAL: general_targets,
    PieceType.AMAZON: amazon_targets,
    PieceType.KING: king_targets,
    PieceType.CHANCELLOR: chancellor_targets,
    PieceType.QUEEN: queen_targets,
}
