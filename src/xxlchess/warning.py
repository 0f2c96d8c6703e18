"""Visual warning shown when the player ignores a check"""

from src.core.exceptions import GameStateError
from src.xxlchess.pieces import Piece
from src.xxlchess.timer import FPS, Timer

# The king's tile flashes three times: six phases, alternating red light on / off
WARNING_PHASES = 6
PHASE_SECS = 0.5


class KingProtectionWarning:
    """While active the game is in the RENDERING_WARNING state and the player cannot act."""

    def __init__(self, king: Piece, frames_per_second: int = FPS) -> None:
        self.king = king
        self.frames_per_second = frames_per_second
        self.phase = -1
        self.red_light = False
        self._timer = Timer(PHASE_SECS, frames_per_second)
        self._next_phase()

    def tick(self) -> None:
        if self.is_ended():
            raise GameStateError("The warning has already ended.")
        if self._timer.is_ended():
            self._next_phase()
        else:
            self._timer.tick()

    def is_ended(self) -> bool:
        return self.phase >= WARNING_PHASES

    def _next_phase(self) -> None:
        self.phase += 1
        self.red_light = not self.red_light
        self._timer = Timer(PHASE_SECS, self.frames_per_second)
