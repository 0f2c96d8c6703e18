"""Configuration, Requests and Response models"""

from typing import Any, Optional

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidConfigError, InvalidRequestError
from src.core.shared_types import Color, EndReason, GameStatus, PieceType, PlyOutcome
from src.xxlchess.game import GameSettings
from src.xxlchess.tile import BOARD_WIDTH, Tile

Coordinates = tuple[int, int]


# --- CONFIGURATION FILE ---
class TimeControl(BaseModel):
    seconds: int
    increment: int = 0

    @field_validator("seconds")
    @classmethod
    def validate_seconds(cls, value: int) -> int:
        if value <= 0:
            raise InvalidConfigError(
                f"Starting time must be a positive number of seconds, got {value}."
            )
        return value

    @field_validator("increment")
    @classmethod
    def validate_increment(cls, value: int) -> int:
        if value < 0:
            raise InvalidConfigError(f"Increment cannot be negative, got {value}.")
        return value


class TimeControls(BaseModel):
    player: TimeControl
    cpu: TimeControl


class GameConfig(BaseModel):
    """
    Contents of the JSON configuration file.
    ---

    NOTE: piece_movement_speed / max_movement_time are only used by the animations (presentation layer).
    """

    layout: str
    player_colour: Color
    time_controls: TimeControls
    piece_movement_speed: int = 6
    max_movement_time: int = 1

    @field_validator("layout")
    @classmethod
    def validate_layout(cls, value: str) -> str:
        if not value.strip():
            raise InvalidConfigError("The path to the layout file is missing.")
        return value

    @field_validator("player_colour", mode="before")
    @classmethod
    def validate_player_colour(cls, value: Any) -> str:
        colour = str(value).strip().lower()
        if colour not in [color.value for color in Color]:
            raise InvalidConfigError(
                f"Invalid player_colour {value!r}. Pick one from {','.join(color.value for color in Color)}."
            )
        return colour

    @field_validator(*["piece_movement_speed", "max_movement_time"])
    @classmethod
    def validate_animation_setting(cls, value: int) -> int:
        if value <= 0:
            raise InvalidConfigError(
                f"Animation settings must be positive, got {value}."
            )
        return value

    def to_settings(self) -> GameSettings:
        return GameSettings(
            is_player_white=self.player_colour == Color.WHITE,
            player_seconds=self.time_controls.player.seconds,
            cpu_seconds=self.time_controls.cpu.seconds,
            player_increment=self.time_controls.player.increment,
            cpu_increment=self.time_controls.cpu.increment,
        )


# --- REQUEST MODELS ---
class TileRequest(BaseModel):
    x: int
    y: int

    @field_validator(*["x", "y"])
    @classmethod
    def validate_coordinate(cls, value: int) -> int:
        if not 0 <= value < BOARD_WIDTH:
            raise InvalidRequestError(
                f"Coordinate {value} is outside of the board (0 - {BOARD_WIDTH - 1})."
            )
        return value

    def to_tile(self) -> Tile:
        return Tile(self.x, self.y)


class SelectPieceRequest(TileRequest):
    pass


class MoveRequest(TileRequest):
    """Move the currently selected piece to (x, y)"""


# --- RESPONSE MODELS ---
class MoveResponse(BaseModel):
    accepted: bool
    outcome: Optional[PlyOutcome] = None
    violation: Optional[str] = None
    message: Optional[str] = None


class PieceState(BaseModel):
    x: int
    y: int
    kind: PieceType
    color: Color
    name: str


class ClockState(BaseModel):
    color: Color
    remaining_secs: int
    display: str


class GameStateResponse(BaseModel):
    status: GameStatus
    player_color: Color
    current_player: Color
    player_clock: ClockState
    cpu_clock: ClockState
    pieces: list[PieceState]
    selection: Optional[Coordinates] = None
    checked_king: Optional[Coordinates] = None
    last_move: Optional[tuple[Coordinates, Coordinates]] = None
    warning_red_light: bool = False
    end_reason: Optional[EndReason] = None
    winner: Optional[Color] = None
