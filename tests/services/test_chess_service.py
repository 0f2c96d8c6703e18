"""Unit tests for src/services/chess_service.py"""

import json
import logging
from pathlib import Path
from typing import Callable

import pytest

from src.api.models import GameConfig, MoveRequest, MoveResponse, SelectPieceRequest
from src.core.exceptions import GameStateError, InvalidConfigError, InvalidLayoutError
from src.core.shared_types import Color, EndReason, GameStatus, PlyOutcome
from src.services.chess_service import END_GAME_MESSAGES, XXLChessService
from src.xxlchess.bot import FirstAvailableStrategy
from src.xxlchess.layout import STANDARD_LAYOUT

LayoutBuilder = Callable[[dict[tuple[int, int], str]], str]


@pytest.fixture
def config_data() -> dict:
    return {
        "layout": "level1.txt",
        "player_colour": "white",
        "time_controls": {
            "player": {"seconds": 180, "increment": 2},
            "cpu": {"seconds": 90},
        },
    }


@pytest.fixture
def config(config_data: dict) -> GameConfig:
    return GameConfig.model_validate(config_data)


@pytest.fixture
def service(config: GameConfig) -> XXLChessService:
    return XXLChessService.from_config(
        config, STANDARD_LAYOUT, strategy=FirstAvailableStrategy()
    )


@pytest.fixture
def config_file(tmp_path: Path, config_data: dict) -> Path:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config_data))
    (tmp_path / "level1.txt").write_text(STANDARD_LAYOUT)
    return path


def select_and_move(
    service: XXLChessService, source: tuple[int, int], target: tuple[int, int]
) -> MoveResponse:
    service.select_piece(SelectPieceRequest(x=source[0], y=source[1]))
    return service.attempt_move(MoveRequest(x=target[0], y=target[1]))


# --- SERVICE - CREATE NEW GAME ----
def test_from_config(service: XXLChessService, config: GameConfig) -> None:
    assert service.config is config
    assert service.game.human.color == Color.WHITE
    assert service.game.human.remaining_secs == 180
    assert service.game.bot.remaining_secs == 90


def test_from_config_file(config_file: Path) -> None:
    """The layout path is relative to the configuration file"""
    service = XXLChessService.from_config_file(config_file, FirstAvailableStrategy())
    assert len(service.game.board.live_pieces()) == 56
    assert service.game.status == GameStatus.PLAYER_TURN


def test_from_config_file_missing_layout(config_file: Path) -> None:
    (config_file.parent / "level1.txt").unlink()
    with pytest.raises(InvalidLayoutError):
        XXLChessService.from_config_file(config_file)


def test_load_missing_config(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigError, match="not found"):
        XXLChessService.load_config(tmp_path / "config.json")


def test_load_config_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{'layout': ")
    with pytest.raises(InvalidConfigError):
        XXLChessService.load_config(path)


def test_load_config_missing_keys(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"layout": "level1.txt"}))
    with pytest.raises(InvalidConfigError):
        XXLChessService.load_config(path)


def test_load_config_invalid_colour(config_file: Path, config_data: dict) -> None:
    config_data["player_colour"] = "purple"
    config_file.write_text(json.dumps(config_data))
    with pytest.raises(InvalidConfigError):
        XXLChessService.load_config(config_file)


# --- SERVICE - HUMAN INPUT ----
def test_accepted_move(service: XXLChessService) -> None:
    response = select_and_move(service, (7, 12), (7, 10))
    assert response.accepted
    assert response.outcome == PlyOutcome.MOVE
    assert response.violation is None


def test_rejected_move(
    service: XXLChessService, caplog: pytest.LogCaptureFixture
) -> None:
    """A rule violation is reported back and logged, not raised"""
    caplog.set_level(logging.INFO)
    response = select_and_move(service, (7, 12), (7, 9))

    assert not response.accepted
    assert response.violation == "InvalidMoveError"
    assert response.message == "Invalid piece movement."
    assert "Move rejected" in caplog.text
    assert service.game.status == GameStatus.PLAYER_TURN


def test_king_dignity_is_reported(
    config: GameConfig, layout_builder: LayoutBuilder
) -> None:
    layout = layout_builder({(7, 13): "k", (0, 0): "K", (0, 12): "r"})
    service = XXLChessService.from_config(config, layout, FirstAvailableStrategy())
    response = select_and_move(service, (0, 12), (0, 0))

    assert not response.accepted
    assert response.violation == "KingDignityError"
    assert response.message == "You must not actually kill the opponent's king!"


def test_target_tiles(service: XXLChessService) -> None:
    assert service.target_tiles() == []
    assert service.select_piece(SelectPieceRequest(x=1, y=13))
    assert service.target_tiles() == [(0, 11), (2, 11)]


def test_resign(service: XXLChessService) -> None:
    service.resign()
    assert service.game.report.reason == EndReason.PLAYER_RESIGNED
    with pytest.raises(GameStateError):
        service.resign()


# --- SERVICE - OUTPUT ----
def test_initial_game_state(service: XXLChessService) -> None:
    state = service.game_state()
    assert state.status == GameStatus.PLAYER_TURN
    assert state.player_color == state.current_player == Color.WHITE
    assert len(state.pieces) == 56
    assert state.player_clock.display == "3:00"
    assert state.cpu_clock.display == "1:30"
    assert state.selection is None
    assert state.checked_king is None
    assert state.last_move is None
    assert state.end_reason is None


def test_game_state_after_move(service: XXLChessService) -> None:
    select_and_move(service, (7, 12), (7, 10))
    state = service.game_state()
    assert state.status == GameStatus.COMPUTER_TURN
    assert state.current_player == Color.BLACK
    assert state.last_move == ((7, 12), (7, 10))
    assert state.player_clock.remaining_secs == 182

    service.tick()
    state = service.game_state()
    assert state.status == GameStatus.PLAYER_TURN
    assert state.last_move == ((1, 0), (0, 2))


def test_game_state_pieces_have_names(service: XXLChessService) -> None:
    names = {piece.name for piece in service.game_state().pieces}
    assert "knight-king" in names
    assert "amazon" in names


def test_game_state_in_check(config: GameConfig, layout_builder: LayoutBuilder) -> None:
    layout = layout_builder({(7, 13): "k", (7, 0): "R", (0, 0): "K"})
    service = XXLChessService.from_config(config, layout, FirstAvailableStrategy())
    assert service.game_state().checked_king == (7, 13)


def test_end_game_text(service: XXLChessService) -> None:
    assert service.end_game_text() is None
    service.resign()
    assert service.end_game_text() == "You resigned!"
    state = service.game_state()
    assert state.status == GameStatus.ENDED
    assert state.end_reason == EndReason.PLAYER_RESIGNED
    assert state.winner == Color.BLACK


def test_every_ending_has_a_message() -> None:
    assert set(END_GAME_MESSAGES) == set(EndReason)
