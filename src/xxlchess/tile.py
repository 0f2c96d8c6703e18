"""
A tile (coordinate) on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# XXLChess is played on a 14x14 board. x is the column (0 = left), y is the row (0 = top, the computer's side)
BOARD_WIDTH = 14

Vector = tuple[int, int]


@dataclass(frozen=True)
class Tile:
    x: int
    y: int

    def is_within_bounds(self) -> bool:
        return (0 <= self.x < BOARD_WIDTH) and (0 <= self.y < BOARD_WIDTH)

    def shifted(self, dx: int, dy: int) -> Tile:
        return Tile(self.x + dx, self.y + dy)

    def reading_order(self) -> tuple[int, int]:
        """Sort key: top row first, then left to right (the order in which a layout is read)"""
        return (self.y, self.x)
