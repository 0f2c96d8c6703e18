"""
The Game class is the entrypoint into the domain layer for the service layer.
It owns the turn order and orchestrates everything required to play a ply:
legality, check/checkmate detection, castling, promotion, clocks and the end of the game.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Self

from src.core.exceptions import (
    GameStateError,
    InvalidMoveError,
    KingDignityError,
    KingInDangerError,
    RuleViolationError,
)
from src.core.shared_types import Color, EndReason, GameStatus, PieceType, PlyOutcome
from src.xxlchess.agents import BotAgent, HumanAgent, PlayerAgent
from src.xxlchess.board import Board
from src.xxlchess.bot import BotStrategy, RandomSelectionStrategy
from src.xxlchess.castling import castling_partner
from src.xxlchess.layout import populate_board
from src.xxlchess.legal_moves import LegalMoveGenerator
from src.xxlchess.moves import is_promotion
from src.xxlchess.movement import Movement
from src.xxlchess.pieces import Piece
from src.xxlchess.report import GameReport
from src.xxlchess.threats import InCheckIncident, ThreatAnalyzer
from src.xxlchess.tile import Tile
from src.xxlchess.timer import FPS, Tickable
from src.xxlchess.warning import KingProtectionWarning

logger = logging.getLogger(__name__)

# Builds the (presentation) animation of a committed movement
AnimationFactory = Callable[[Movement], Tickable]


@dataclass
class GameSettings:
    """Clock settings of both sides. Times are in seconds."""

    is_player_white: bool = True
    player_seconds: float = 180
    cpu_seconds: float = 180
    player_increment: float = 0
    cpu_increment: float = 0
    frames_per_second: int = FPS


class Game:
    """
    Turn state machine
    ---

    ---
    The status is never stored but derived (see `status`):
    ENDED > RENDERING_ANIMATION > RENDERING_WARNING > PLAYER_TURN / COMPUTER_TURN

    The human plays through `select_piece()` and `attempt_move()`, the computer plays when the game `tick()`s.
    White always moves first.
    """

    def __init__(
        self,
        settings: GameSettings,
        strategy: Optional[BotStrategy] = None,
        animation_factory: Optional[AnimationFactory] = None,
    ) -> None:
        self.settings = settings
        human_color = Color.WHITE if settings.is_player_white else Color.BLACK
        self.human = HumanAgent(
            human_color,
            settings.player_seconds,
            settings.player_increment,
            settings.frames_per_second,
        )
        self.bot = BotAgent(
            human_color.opponent,
            settings.cpu_seconds,
            strategy or RandomSelectionStrategy(),
            settings.cpu_increment,
            settings.frames_per_second,
        )
        self.human.opponent = self.bot
        self.bot.opponent = self.human

        self.board = Board({self.human.color: self.human, self.bot.color: self.bot})
        self.analyzer = ThreatAnalyzer(self.board)
        self.generator = LegalMoveGenerator(self.board, self.analyzer)

        self.current_player: PlayerAgent = (
            self.human if self.human.color == Color.WHITE else self.bot
        )
        self.in_check: Optional[InCheckIncident] = None
        self.report: Optional[GameReport] = None
        self.warning: Optional[KingProtectionWarning] = None
        self.animations: list[Tickable] = []
        self.animation_factory = animation_factory
        self.last_outcome: Optional[PlyOutcome] = None

    @classmethod
    def from_layout(
        cls,
        layout: str,
        settings: Optional[GameSettings] = None,
        strategy: Optional[BotStrategy] = None,
        animation_factory: Optional[AnimationFactory] = None,
    ) -> Self:
        """Set up a new game. Raises InvalidLayoutError if the layout cannot be used."""
        game = cls(settings or GameSettings(), strategy, animation_factory)
        populate_board(game.board, layout)
        game.in_check = game.analyzer.detect_in_check(game.current_player)
        game._inspect_position()
        return game

    # --- STATE ---
    @property
    def status(self) -> GameStatus:
        if self.report is not None:
            return GameStatus.ENDED
        if self.animations:
            return GameStatus.RENDERING_ANIMATION
        if self.warning is not None:
            return GameStatus.RENDERING_WARNING
        if self.current_player.is_human:
            return GameStatus.PLAYER_TURN
        return GameStatus.COMPUTER_TURN

    def tick(self) -> None:
        """
        One step of the game loop (one frame)
        ---

        1. out of time? -> the game ends
        2. refresh the check status of the player to move
        3. advance whatever the status asks for: an animation, the warning, the human's clock, or the computer's move
        """
        if self.report is None:
            self._check_clocks()
        self.in_check = self.analyzer.detect_in_check(self.current_player)

        status = self.status
        if status == GameStatus.RENDERING_ANIMATION:
            self._advance_animation()
        elif status == GameStatus.RENDERING_WARNING:
            self._advance_warning()
        elif status == GameStatus.PLAYER_TURN:
            self.human.tick()
        elif status == GameStatus.COMPUTER_TURN:
            self._play_computer_turn()
            if self.report is None:
                self.bot.tick()

    # --- HUMAN INPUT ---
    def select_piece(self, tile: Tile) -> bool:
        """
        The human picks the piece to move. Returns whether the selection was accepted.
        ---

        * only the human's own pieces can be selected, and only on the human's turn
        * when in check, only pieces that can help get the king out of danger can be selected.
          Selecting any other piece raises the king protection warning instead.
        """
        if self.status != GameStatus.PLAYER_TURN:
            return False
        piece = self.board.piece_at(tile)
        if piece is None or piece.color != self.human.color:
            return False

        if self.in_check is not None and not self._safe_movements_of(piece):
            self.warning = KingProtectionWarning(
                self.human.king, self.settings.frames_per_second
            )
            return False

        self.human.selection = tile
        return True

    def attempt_move(self, target: Tile) -> PlyOutcome:
        """
        Move the selected piece to `target`.
        ---

        Raises a RuleViolationError (and leaves the game untouched) if the move is not allowed.
        The selection is cleared in any case.
        """
        try:
            if self.status != GameStatus.PLAYER_TURN:
                raise InvalidMoveError(self.human, "It is not your turn.")
            selection = self.human.selection
            if selection is None:
                raise InvalidMoveError(self.human, "Select a piece first.")
            if target == selection:
                raise InvalidMoveError(self.human)

            piece = self.board.piece_at(selection)
            return self.move_piece(Movement.create(self.board, piece, target))
        finally:
            self.human.clear_selection()

    def resign(self) -> None:
        """The human gives up."""
        if self.report is not None:
            raise GameStateError("The game has already ended.")
        self._end(EndReason.PLAYER_RESIGNED)

    def target_tiles(self) -> set[Tile]:
        """Where the selected piece may go (to highlight them)."""
        selection = self.human.selection
        if selection is None:
            return set()
        piece = self.board.piece_at(selection)
        return {move.target for move in self._safe_movements_of(piece)}

    def danger_tiles(self, piece: Piece) -> set[Tile]:
        """Tiles the piece can reach, but where it would be attacked."""
        opponent = self.board.owner(piece).opponent
        return {
            move.target
            for move in self.generator.piece_movements(piece)
            if self.analyzer.predict_threats(opponent, move, piece)
        }

    # --- COMMITTING A PLY ---
    def move_piece(self, movement: Movement) -> PlyOutcome:
        """
        Commit a ply for the player to move.
        ---

        ---
        Checks (nothing has changed yet if one of them fails):
        1. it is the mover's turn, and the move is legal
        2. the move does not put the mover's own king in danger  -> KingInDangerError
        3. the move does not capture the opponent's king         -> KingDignityError

        Then:
        4. move the piece, capturing whatever stands on the target tile
        5. promote a pawn that reaches the midline
        6. add the increment to the mover's clock
        7. move the rook along when castling
        8. hand the turn to the opponent and check whether the game is over
        """
        mover = self.board.owner(movement.piece)
        if self.report is not None or mover is not self.current_player:
            raise InvalidMoveError(mover, "It is not your turn.")
        if movement not in self.generator.piece_movements(movement.piece):
            raise InvalidMoveError(mover)
        if self.analyzer.predict_in_check(mover, movement) is not None:
            raise KingInDangerError(mover)
        captured = self.board.piece_at(movement.target)
        if captured is not None and captured is mover.opponent.king:
            raise KingDignityError(mover)

        rook_movement = self.castling_movement(movement)

        # --- commit ---
        if captured is not None:
            mover.opponent.remove_piece(captured)
        mover.last_move = movement
        self._animate(movement)
        movement.perform(self.board)
        promoted = self._promote(mover, movement)
        mover.add_increment()
        if rook_movement is not None:
            self._animate(rook_movement)
            rook_movement.perform(self.board)

        self.current_player = mover.opponent
        self.in_check = self.analyzer.detect_in_check(self.current_player)
        self.last_outcome = self._outcome(captured, rook_movement, promoted)
        logger.debug(
            "%s moved %s from %s to %s (%s)",
            mover,
            movement.piece.name,
            movement.source,
            movement.target,
            self.last_outcome,
        )
        self._inspect_position()
        return self.last_outcome

    def castling_movement(self, movement: Movement) -> Optional[Movement]:
        """The rook move that goes along with `movement`, if it is a castling move"""
        mover = self.board.owner(movement.piece)
        in_check = self.analyzer.detect_in_check(mover) is not None
        return castling_partner(self.board, movement, in_check)

    # -- PRIVATE HELPERS ---
    def _safe_movements_of(self, piece: Piece) -> list[Movement]:
        return self.generator.safe_movements(self.generator.piece_movements(piece))

    def _candidate_movements(self, agent: PlayerAgent) -> list[Movement]:
        """Safe moves of the player. When in check, the moves that resolve the check."""
        if self.in_check is not None and self.in_check.king is agent.king:
            return self.generator.solve_incident(self.in_check)
        return self.generator.all_safe_movements(agent)

    def _inspect_position(self) -> None:
        """The player to move has no way out: checkmate when in check, a draw (stalemate) otherwise."""
        if self.report is not None:
            return
        agent = self.current_player
        if self._candidate_movements(agent):
            return
        if self.in_check is None:
            self._end(EndReason.DRAW)
        elif agent.is_human:
            self._end(EndReason.PLAYER_CHECKMATED)
        else:
            self._end(EndReason.COMPUTER_CHECKMATED)

    def _play_computer_turn(self) -> None:
        candidates = self._candidate_movements(self.bot)
        if not candidates:
            self._inspect_position()
            return

        decision = self.bot.make_decision(candidates)
        if decision is None:
            self._end(EndReason.COMPUTER_RESIGNED)
            return
        try:
            self.move_piece(decision)
        except RuleViolationError as error:
            logger.error("The computer tried to break the rules: %s", error)

    def _promote(self, mover: PlayerAgent, movement: Movement) -> bool:
        if not is_promotion(movement.piece, movement.target):
            return False
        pawn, queen = self.board.promote(movement.target, PieceType.QUEEN)
        mover.remove_piece(pawn)
        mover.add_piece(queen)
        return True

    def _outcome(
        self,
        captured: Optional[Piece],
        rook_movement: Optional[Movement],
        promoted: bool,
    ) -> PlyOutcome:
        if self.in_check is not None:
            return PlyOutcome.CHECK
        if captured is not None:
            return PlyOutcome.CAPTURE
        if rook_movement is not None:
            return PlyOutcome.CASTLE
        if promoted:
            return PlyOutcome.PROMOTION
        return PlyOutcome.MOVE

    def _check_clocks(self) -> None:
        if self.human.is_out_of_time():
            self._end(EndReason.PLAYER_TIMEOUT)
        elif self.bot.is_out_of_time():
            self._end(EndReason.COMPUTER_TIMEOUT)

    def _animate(self, movement: Movement) -> None:
        if self.animation_factory is not None:
            self.animations.append(self.animation_factory(movement))

    def _advance_animation(self) -> None:
        """Animations play one after the other (the king first, then the castling rook)"""
        animation = self.animations[0]
        if animation.is_ended():
            self.animations.pop(0)
        else:
            animation.tick()

    def _advance_warning(self) -> None:
        if self.warning.is_ended():
            self.warning = None
        else:
            self.warning.tick()

    def _end(self, reason: EndReason) -> None:
        self.report = GameReport.create(reason, self.human, self.bot)
        logger.info(
            "Game over: %s (winner: %s)", reason, self.report.winner or "nobody"
        )
