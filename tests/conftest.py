"""
Pytest will auto-discover / import this file called 'conftest.py'. ]
This file defines fixtures/helpers required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.core.shared_types import Color
from src.xxlchess.agents import BotAgent, HumanAgent
from src.xxlchess.board import Board
from src.xxlchess.bot import FirstAvailableStrategy
from src.xxlchess.game import Game, GameSettings
from src.xxlchess.layout import STANDARD_LAYOUT
from src.xxlchess.tile import BOARD_WIDTH


def build_layout(pieces: dict[tuple[int, int], str]) -> str:
    """
    Build a layout from {(x, y): symbol}. Every other tile is empty.

    NOTE: upper case = black (the computer unless stated otherwise), lower case = white
    """
    rows = [["."] * BOARD_WIDTH for _ in range(BOARD_WIDTH)]
    for (x, y), symbol in pieces.items():
        rows[y][x] = symbol
    return "\n".join("".join(row) for row in rows)


@pytest.fixture
def layout_builder() -> Callable[[dict[tuple[int, int], str]], str]:
    return build_layout


@pytest.fixture
def game_from() -> Callable[..., Game]:
    """Factory: a game (human = white) with a deterministic computer"""

    def _game_from(pieces: dict[tuple[int, int], str], **settings) -> Game:
        return Game.from_layout(
            build_layout(pieces),
            GameSettings(**settings),
            strategy=FirstAvailableStrategy(),
        )

    return _game_from


@pytest.fixture
def standard_game() -> Game:
    return Game.from_layout(STANDARD_LAYOUT, strategy=FirstAvailableStrategy())


@pytest.fixture
def empty_board() -> Board:
    """Board with a human side (white) and a computer side (black), but without any pieces"""
    human = HumanAgent(Color.WHITE, 60)
    bot = BotAgent(Color.BLACK, 60, FirstAvailableStrategy())
    human.opponent = bot
    bot.opponent = human
    return Board({Color.WHITE: human, Color.BLACK: bot})
