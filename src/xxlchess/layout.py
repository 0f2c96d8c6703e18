"""
Loading the starting position from a layout
---

A layout is a text grid of 14 rows of 14 characters.
* a letter denotes a piece (see `SYMBOL_TO_PIECE`): upper case = black, lower case = white
* a space or a '.' denotes an empty tile

NOTE: shorter rows (and missing rows at the bottom) are read as empty tiles, since editors like to strip trailing spaces.
"""

import logging
from pathlib import Path

from src.core.exceptions import InvalidLayoutError
from src.core.shared_types import PieceType
from src.xxlchess.board import Board
from src.xxlchess.pieces import Piece
from src.xxlchess.tile import BOARD_WIDTH, Tile

logger = logging.getLogger(__name__)

EMPTY_SYMBOLS = (" ", ".")

STANDARD_LAYOUT = "\n".join(
    ["RNBHCGAKGCEBNR", "P" * BOARD_WIDTH]
    + ["." * BOARD_WIDTH] * 10
    + ["p" * BOARD_WIDTH, "rnbhcgakgcebnr"]
)


def parse_layout(text: str) -> dict[Tile, Piece]:
    """Read the pieces (in reading order) from a layout. Raises InvalidLayoutError."""
    rows = text.splitlines()
    while rows and not rows[-1].strip():
        rows.pop()

    if len(rows) > BOARD_WIDTH or any(len(row) > BOARD_WIDTH for row in rows):
        raise InvalidLayoutError(
            f"The map must have the size of {BOARD_WIDTH}*{BOARD_WIDTH}."
        )

    pieces: dict[Tile, Piece] = {}
    for y, row in enumerate(rows):
        for x, character in enumerate(row):
            if character in EMPTY_SYMBOLS:
                continue
            pieces[Tile(x, y)] = Piece.from_symbol(character)
    return pieces


def populate_board(board: Board, text: str) -> None:
    """
    Place the pieces of the layout on the board and hand them over to their owners.
    ---

    Each side needs exactly one king.
    """
    for tile, piece in parse_layout(text).items():
        board.attach(piece, tile)
        owner = board.owner(piece)
        owner.add_piece(piece)
        if piece.kind != PieceType.KING:
            continue
        if owner.king is not None:
            raise InvalidLayoutError(f"Found more than one {owner.color} king.")
        owner.set_king(piece)

    for agent in board.agents.values():
        if agent.king is None:
            raise InvalidLayoutError(f"Unable to find the {agent.color} king.")
        logger.debug("Loaded %d %s pieces", len(agent.pieces), agent.color)


def load_layout_file(path: str | Path) -> str:
    try:
        return Path(path).read_text()
    except FileNotFoundError as error:
        raise InvalidLayoutError(f"File '{path}' not found.") from error
