"""Orchestration between the presentation layer (input / rendering) and the game logic (and the reverse direction)."""

import json
import logging
from pathlib import Path
from typing import Optional, Self

from pydantic import ValidationError

from src.api.models import (
    ClockState,
    GameConfig,
    GameStateResponse,
    MoveRequest,
    MoveResponse,
    PieceState,
    SelectPieceRequest,
)
from src.core.exceptions import InvalidConfigError, RuleViolationError
from src.core.shared_types import EndReason
from src.xxlchess.agents import PlayerAgent
from src.xxlchess.bot import BotStrategy
from src.xxlchess.game import Game
from src.xxlchess.layout import load_layout_file
from src.xxlchess.tile import Tile
from src.xxlchess.timer import format_seconds

logger = logging.getLogger(__name__)

END_GAME_MESSAGES: dict[EndReason, str] = {
    EndReason.COMPUTER_CHECKMATED: "You won by \ncheckmate!",
    EndReason.COMPUTER_TIMEOUT: "You won on \ntime!",
    EndReason.COMPUTER_RESIGNED: "The computer resigned!",
    EndReason.PLAYER_CHECKMATED: "You lost by \ncheckmate!",
    EndReason.PLAYER_TIMEOUT: "You lost on time!",
    EndReason.PLAYER_RESIGNED: "You resigned!",
    EndReason.DRAW: "Stalemate - it's a draw!",
}


class XXLChessService:
    """Orchestration of layers for a game of XXLChess against the computer."""

    def __init__(self, game: Game, config: Optional[GameConfig] = None) -> None:
        self.game = game
        self.config = config

    # -- Creation ---
    @staticmethod
    def load_config(path: str | Path) -> GameConfig:
        """Read and validate the JSON configuration file. Any problem is fatal."""
        try:
            data = json.loads(Path(path).read_text())
            return GameConfig.model_validate(data)
        except FileNotFoundError as error:
            raise InvalidConfigError(f"File '{path}' not found.") from error
        except json.JSONDecodeError as error:
            raise InvalidConfigError(f"File '{path}' is not valid JSON: {error}") from error
        except ValidationError as error:
            raise InvalidConfigError(f"Invalid configuration in '{path}': {error}") from error

    @classmethod
    def from_config_file(
        cls, path: str | Path, strategy: Optional[BotStrategy] = None
    ) -> Self:
        """
        Set up a new game as described by the configuration file.

        NOTE: a relative layout path is resolved against the directory of the configuration file.
        """
        config = cls.load_config(path)
        layout_path = Path(config.layout)
        if not layout_path.is_absolute():
            layout_path = Path(path).parent / layout_path
        return cls.from_config(config, load_layout_file(layout_path), strategy)

    @classmethod
    def from_config(
        cls, config: GameConfig, layout: str, strategy: Optional[BotStrategy] = None
    ) -> Self:
        game = Game.from_layout(layout, config.to_settings(), strategy)
        logger.info("New game: the player plays %s", config.player_colour)
        return cls(game, config)

    # -- Human input ---
    def select_piece(self, request: SelectPieceRequest) -> bool:
        return self.game.select_piece(request.to_tile())

    def attempt_move(self, request: MoveRequest) -> MoveResponse:
        """Move the selected piece. A rule violation is not an error here: it's reported back to the player."""
        try:
            outcome = self.game.attempt_move(request.to_tile())
        except RuleViolationError as violation:
            logger.info("Move rejected (%s): %s", type(violation).__name__, violation)
            return MoveResponse(
                accepted=False,
                violation=type(violation).__name__,
                message=str(violation),
            )
        return MoveResponse(accepted=True, outcome=outcome)

    def target_tiles(self) -> list[tuple[int, int]]:
        return [
            (tile.x, tile.y)
            for tile in sorted(self.game.target_tiles(), key=Tile.reading_order)
        ]

    def resign(self) -> None:
        self.game.resign()

    def tick(self) -> None:
        self.game.tick()

    # -- Output ---
    def game_state(self) -> GameStateResponse:
        """Everything the presentation layer needs to draw a frame."""
        game = self.game
        report = game.report
        last_move = game.current_player.opponent.last_move
        selection = game.human.selection
        return GameStateResponse(
            status=game.status,
            player_color=game.human.color,
            current_player=game.current_player.color,
            player_clock=self._clock_state(game.human),
            cpu_clock=self._clock_state(game.bot),
            pieces=[
                PieceState(
                    x=piece.tile.x,
                    y=piece.tile.y,
                    kind=piece.kind,
                    color=piece.color,
                    name=piece.name,
                )
                for piece in game.board.live_pieces()
            ],
            selection=None if selection is None else (selection.x, selection.y),
            checked_king=(
                None
                if game.in_check is None
                else (game.in_check.king.tile.x, game.in_check.king.tile.y)
            ),
            last_move=(
                None
                if last_move is None
                else (
                    (last_move.source.x, last_move.source.y),
                    (last_move.target.x, last_move.target.y),
                )
            ),
            warning_red_light=game.warning is not None and game.warning.red_light,
            end_reason=None if report is None else report.reason,
            winner=None if report is None or report.winner is None else report.winner.color,
        )

    def end_game_text(self) -> Optional[str]:
        if self.game.report is None:
            return None
        return END_GAME_MESSAGES[self.game.report.reason]

    # -- Internal helpers --
    def _clock_state(self, agent: PlayerAgent) -> ClockState:
        return ClockState(
            color=agent.color,
            remaining_secs=agent.remaining_secs,
            display=format_seconds(agent.remaining_secs),
        )
