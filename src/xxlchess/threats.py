"""
Threat detection: is a king attacked, and would it be attacked after a given move?

Key idea: a hypothetical move is NEVER played on the live board. It is replayed on a throwaway clone instead.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.exceptions import GameStateError
from src.core.shared_types import Color, PieceType
from src.xxlchess.agents import PlayerAgent
from src.xxlchess.board import Board
from src.xxlchess.moves import pawn_attack_range
from src.xxlchess.movement import Movement
from src.xxlchess.pieces import Piece


@dataclass(frozen=True)
class InCheckIncident:
    """Exists only while a king is attacked."""

    king: Piece
    threats: frozenset[Piece]


class ThreatAnalyzer:
    def __init__(self, board: Board) -> None:
        self.board = board

    def detect_threats(
        self, board: Board, subject: Piece, by_color: Optional[Color] = None
    ) -> set[Piece]:
        """
        All pieces on `board` that attack `subject`.
        ---

        By default the attackers are the pieces of the other color.

        NOTE: pawns only threaten along their attack range (diagonally), never along their forward range.
        """
        if subject.tile is None:
            raise GameStateError(f"Cannot look for threats against a captured piece: {subject}")

        attacker_color = by_color or subject.color.opponent
        threats: set[Piece] = set()
        for piece in board.live_pieces():
            if piece.color != attacker_color:
                continue
            if piece.kind == PieceType.PAWN:
                attacked_tiles = pawn_attack_range(board, piece)
            else:
                attacked_tiles = board.reachable(piece)
            if subject.tile in attacked_tiles:
                threats.add(piece)
        return threats

    def predict_threats(
        self, attacker: PlayerAgent, move: Movement, subject: Piece
    ) -> set[Piece]:
        """
        Which of the attacker's pieces would threaten `subject` once `move` has been played?
        ---

        1. clone the live board
        2. replay the move on the clone
        3. recompute all reachable targets on the clone
        4. detect threats against the clone's copy of the subject

        NOTE: the returned pieces belong to the (discarded) clone.
        """
        simulation = self.board.clone()
        move.perform(simulation)
        simulation.refresh_targets()
        simulated_subject = simulation.piece_by_handle(subject.handle)
        return self.detect_threats(simulation, simulated_subject, attacker.color)

    def detect_in_check(self, agent: PlayerAgent) -> Optional[InCheckIncident]:
        threats = self.detect_threats(self.board, agent.king)
        if not threats:
            return None
        return InCheckIncident(agent.king, frozenset(threats))

    def predict_in_check(
        self, agent: PlayerAgent, move: Movement
    ) -> Optional[InCheckIncident]:
        """Would `agent` be in check after `move`?"""
        threats = self.predict_threats(agent.opponent, move, agent.king)
        if not threats:
            return None
        return InCheckIncident(agent.king, frozenset(threats))
