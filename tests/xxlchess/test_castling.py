"""Unit tests for /src/xxlchess/castling.py"""

from typing import Callable

import pytest

from src.xxlchess.castling import castling_candidates, castling_partner
from src.xxlchess.game import Game
from src.xxlchess.movement import Movement
from src.xxlchess.tile import Tile

# Kings and rooks only. Ready to perform any castling move (if allowed).
CASTLING_READY = {(7, 13): "k", (0, 13): "r", (13, 13): "r", (7, 0): "K"}


def king_move(game: Game, x: int, y: int) -> Movement:
    return Movement.create(game.board, game.human.king, Tile(x, y))


@pytest.mark.parametrize(
    "king_target, rook_source, rook_target",
    [
        (Tile(5, 13), Tile(0, 13), Tile(6, 13)),
        (Tile(9, 13), Tile(13, 13), Tile(8, 13)),
    ],
)
def test_castling_partner(
    game_from: Callable[..., Game],
    king_target: Tile,
    rook_source: Tile,
    rook_target: Tile,
) -> None:
    """The rook lands next to the king's target tile, on the side the king came from"""
    game = game_from(CASTLING_READY)
    partner = castling_partner(
        game.board, king_move(game, king_target.x, king_target.y), False
    )
    assert partner is not None
    assert partner.piece is game.board.piece_at(rook_source)
    assert (partner.source, partner.target) == (rook_source, rook_target)


def test_castling_candidates(game_from: Callable[..., Game]) -> None:
    game = game_from(CASTLING_READY)
    candidates = castling_candidates(game.board, game.human.king, False)
    assert [move.target for move in candidates] == [Tile(5, 13), Tile(9, 13)]


def test_no_castling_when_in_check(game_from: Callable[..., Game]) -> None:
    game = game_from(CASTLING_READY)
    assert castling_candidates(game.board, game.human.king, True) == []
    assert castling_partner(game.board, king_move(game, 5, 13), True) is None


def test_no_castling_after_king_moved(game_from: Callable[..., Game]) -> None:
    game = game_from(CASTLING_READY)
    game.human.king.has_moved = True
    assert castling_candidates(game.board, game.human.king, False) == []


def test_no_castling_with_moved_rook(game_from: Callable[..., Game]) -> None:
    game = game_from(CASTLING_READY)
    game.board.piece(0, 13).has_moved = True
    candidates = castling_candidates(game.board, game.human.king, False)
    assert [move.target for move in candidates] == [Tile(9, 13)]


def test_no_castling_with_opponents_rook(game_from: Callable[..., Game]) -> None:
    game = game_from({(7, 13): "k", (0, 13): "R", (7, 0): "K"})
    assert castling_candidates(game.board, game.human.king, False) == []


@pytest.mark.parametrize(
    "blocker",
    [
        (5, 13),  # the king's target tile
        (6, 13),  # the rook's target tile
    ],
)
def test_no_castling_through_occupied_tiles(
    game_from: Callable[..., Game], blocker: tuple[int, int]
) -> None:
    game = game_from(CASTLING_READY | {blocker: "n"})
    assert castling_partner(game.board, king_move(game, 5, 13), False) is None


def test_rook_may_jump_over_pieces_further_out(game_from: Callable[..., Game]) -> None:
    """Only the king's and the rook's target tiles need to be empty"""
    game = game_from(CASTLING_READY | {(1, 13): "n", (2, 13): "b"})
    partner = castling_partner(game.board, king_move(game, 5, 13), False)
    assert partner is not None
    assert partner.source == Tile(0, 13)


def test_rook_closest_to_the_edge_is_the_partner(game_from: Callable[..., Game]) -> None:
    """With two unmoved rooks on the same side, the one at the edge castles"""
    game = game_from(CASTLING_READY | {(3, 13): "r"})
    partner = castling_partner(game.board, king_move(game, 5, 13), False)
    assert partner.source == Tile(0, 13)
    assert partner.target == Tile(6, 13)


def test_inner_rook_castles_once_the_edge_rook_moved(
    game_from: Callable[..., Game],
) -> None:
    game = game_from(CASTLING_READY | {(3, 13): "r"})
    game.board.piece(0, 13).has_moved = True
    partner = castling_partner(game.board, king_move(game, 5, 13), False)
    assert partner.source == Tile(3, 13)


def test_ordinary_king_move_is_no_castling(game_from: Callable[..., Game]) -> None:
    game = game_from(CASTLING_READY)
    assert castling_partner(game.board, king_move(game, 6, 13), False) is None
