"""The Board owns the pieces and implements the geometric primitives every movement rule is built from"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from src.core.exceptions import GameStateError
from src.core.shared_types import Color, PieceType
from src.xxlchess.moves import REACHABLE_RULES
from src.xxlchess.pieces import Piece
from src.xxlchess.tile import BOARD_WIDTH, Tile, Vector

if TYPE_CHECKING:
    from src.xxlchess.agents import PlayerAgent


class Board:
    """
    14x14 grid of tiles plus an arena of pieces.
    ---

    ---
    * The arena (`_pieces`) is indexed by a piece's handle. Captured pieces stay in the arena with `tile = None`.
    * The grid stores, for every tile, the handle of the piece standing on it (or None).

    Every mutation goes through `attach()` / `detach()`, which update the grid AND the piece's tile together.

    NOTE: reachable targets are cached on the pieces. Any mutation marks the cache as stale and the next read
    recomputes the targets of all pieces in one pass.
    """

    def __init__(self, agents: dict[Color, PlayerAgent]) -> None:
        self.agents = agents
        self._pieces: list[Piece] = []
        self._grid: list[list[Optional[int]]] = [
            [None] * BOARD_WIDTH for _ in range(BOARD_WIDTH)
        ]
        self._targets_stale = True

    # --- LOOKUPS ---
    def tile(self, x: int, y: int) -> Optional[Tile]:
        tile = Tile(x, y)
        return tile if tile.is_within_bounds() else None

    def piece(self, x: int, y: int) -> Optional[Piece]:
        tile = self.tile(x, y)
        return None if tile is None else self.piece_at(tile)

    def piece_at(self, tile: Tile) -> Optional[Piece]:
        if not tile.is_within_bounds():
            return None
        handle = self._grid[tile.x][tile.y]
        return None if handle is None else self._pieces[handle]

    def piece_by_handle(self, handle: int) -> Piece:
        return self._pieces[handle]

    def live_pieces(self) -> list[Piece]:
        """All pieces still on the board, in reading order (top row first)"""
        return sorted(
            (piece for piece in self._pieces if piece.tile is not None),
            key=lambda piece: piece.tile.reading_order(),
        )

    def agent(self, color: Color) -> PlayerAgent:
        return self.agents[color]

    def owner(self, piece: Piece) -> PlayerAgent:
        return self.agents[piece.color]

    def is_human_color(self, color: Color) -> bool:
        return self.agents[color].is_human

    # --- MUTATIONS ---
    def attach(self, piece: Piece, tile: Tile) -> Piece:
        """
        Place a piece on an empty tile.

        A piece that does not belong to any board yet gets registered in the arena (and receives its handle).
        """
        if not tile.is_within_bounds():
            raise GameStateError(f"Cannot place a piece outside of the board: {tile}")
        if self.piece_at(tile) is not None:
            raise GameStateError(f"Cannot place {piece} on occupied tile {tile}")
        if piece.handle == -1:
            piece.handle = len(self._pieces)
            self._pieces.append(piece)
        elif self._pieces[piece.handle] is not piece:
            raise GameStateError(f"{piece} belongs to another board.")

        self._grid[tile.x][tile.y] = piece.handle
        piece.tile = tile
        self._targets_stale = True
        return piece

    def detach(self, tile: Tile) -> Optional[Piece]:
        """Lift the piece from the tile (if any). The piece is then considered captured."""
        piece = self.piece_at(tile)
        if piece is None:
            return None
        self._grid[tile.x][tile.y] = None
        piece.tile = None
        self._targets_stale = True
        return piece

    def relocate(self, piece: Piece, target: Tile) -> Optional[Piece]:
        """Move a piece that is on the board to the target tile. Returns the piece that was standing there."""
        if piece.tile is None:
            raise GameStateError(f"Cannot move a captured piece: {piece}")
        captured = self.detach(target)
        self.detach(piece.tile)
        self.attach(piece, target)
        return captured

    def promote(self, tile: Tile, kind: PieceType) -> tuple[Piece, Piece]:
        """Replace the piece on the tile by a brand new piece of the given kind (and same color)."""
        old_piece = self.detach(tile)
        if old_piece is None:
            raise GameStateError(f"Nothing to promote on {tile}")
        new_piece = Piece(kind, old_piece.color, has_moved=True)
        self.attach(new_piece, tile)
        return old_piece, new_piece

    # --- GEOMETRIC PRIMITIVES ---
    def jumping_move(self, source: Tile, offsets: list[Vector]) -> set[Tile]:
        """Leaps by the given offsets. Anything in bounds that is not blocked by a piece of the same color."""
        color = self._color_on(source)
        targets: set[Tile] = set()
        for dx, dy in offsets:
            target = source.shifted(dx, dy)
            if not target.is_within_bounds():
                continue
            occupant = self.piece_at(target)
            if occupant is not None and occupant.color == color:
                continue
            targets.add(target)
        return targets

    def linear_move(self, source: Tile, dx: int, dy: int) -> set[Tile]:
        """
        Raycasting algorithm
        -----

        ---
        Step along (dx, dy) until we hit another piece or the edge of the board.
        The first occupied tile is included only if it holds an enemy piece (a capture).
        """
        color = self._color_on(source)
        targets: set[Tile] = set()
        target = source.shifted(dx, dy)
        while target.is_within_bounds():
            occupant = self.piece_at(target)
            if occupant is not None:
                if occupant.color != color:
                    targets.add(target)
                break
            targets.add(target)
            target = target.shifted(dx, dy)
        return targets

    # --- REACHABLE TARGETS (cached) ---
    def refresh_targets(self) -> None:
        """Recompute (never patch) the reachable targets of every piece on the board."""
        for piece in self._pieces:
            if piece.tile is None:
                piece.targets = set()
                continue
            piece.targets = REACHABLE_RULES[piece.kind](self, piece)
        self._targets_stale = False

    def reachable(self, piece: Piece) -> set[Tile]:
        if self._targets_stale:
            self.refresh_targets()
        return piece.targets

    # --- SIMULATION ---
    def clone(self) -> Board:
        """
        Throwaway copy used for "what if" evaluation.

        Shares the two agents, nothing else: fresh Piece instances (same handles, kinds, colors, tiles, moved flags)
        and a copy of the grid.
        """
        board = Board(self.agents)
        board._pieces = [
            Piece(piece.kind, piece.color, piece.handle, piece.tile, piece.has_moved)
            for piece in self._pieces
        ]
        board._grid = [column[:] for column in self._grid]
        return board

    def occupancy(self) -> dict[Tile, tuple[int, PieceType, Color]]:
        """Snapshot of the position: who stands where. Handy to compare boards."""
        return {
            piece.tile: (piece.handle, piece.kind, piece.color)
            for piece in self.live_pieces()
        }

    # -- PRIVATE HELPERS ---
    def _color_on(self, source: Tile) -> Optional[Color]:
        piece = self.piece_at(source)
        return None if piece is None else piece.color
