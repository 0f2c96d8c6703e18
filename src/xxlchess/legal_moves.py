"""From reachable tiles to legal and safe movements"""

from src.core.shared_types import PieceType
from src.xxlchess.agents import PlayerAgent
from src.xxlchess.board import Board
from src.xxlchess.castling import castling_candidates
from src.xxlchess.movement import Movement
from src.xxlchess.pieces import Piece
from src.xxlchess.threats import InCheckIncident, ThreatAnalyzer
from src.xxlchess.tile import Tile


class LegalMoveGenerator:
    """
    Candidate moves are generated in two stages:
    ----

    ----
    1. legal: one Movement per reachable tile of every piece (+ castling for an unmoved king)
    2. safe: the legal moves that do not leave the mover's own king attacked

    NOTE: lists are ordered deterministically (roster order, then the target tiles in reading order) so that a
    deterministic bot strategy always picks the same move.
    """

    def __init__(self, board: Board, analyzer: ThreatAnalyzer) -> None:
        self.board = board
        self.analyzer = analyzer

    def piece_movements(self, piece: Piece) -> list[Movement]:
        """Legal movements of a single piece"""
        targets = sorted(self.board.reachable(piece), key=Tile.reading_order)
        movements = [Movement.create(self.board, piece, target) for target in targets]
        if piece.kind == PieceType.KING and not piece.has_moved:
            owner = self.board.owner(piece)
            in_check = piece is owner.king and self.analyzer.detect_in_check(owner) is not None
            movements.extend(castling_candidates(self.board, piece, in_check))
        return movements

    def all_legal_movements(self, agent: PlayerAgent) -> list[Movement]:
        movements: list[Movement] = []
        for piece in agent.pieces:
            movements.extend(self.piece_movements(piece))
        return movements

    def safe_movements(self, candidates: list[Movement]) -> list[Movement]:
        """
        Drop every candidate after which the mover's own king would be attacked.

        NOTE: capturing the opponent's king is never offered either, the game would reject it.
        """
        return [
            move
            for move in candidates
            if not self._captures_king(move)
            and self.analyzer.predict_in_check(self.board.owner(move.piece), move) is None
        ]

    def all_safe_movements(self, agent: PlayerAgent) -> list[Movement]:
        return self.safe_movements(self.all_legal_movements(agent))

    def solve_incident(self, incident: InCheckIncident) -> list[Movement]:
        """The moves that get the checked king out of danger. Empty means checkmate."""
        agent = self.board.owner(incident.king)
        return [
            move
            for move in self.all_legal_movements(agent)
            if not self._captures_king(move)
            and not self.analyzer.predict_threats(agent.opponent, move, incident.king)
        ]

    # -- PRIVATE HELPERS ---
    def _captures_king(self, move: Movement) -> bool:
        target = self.board.piece_at(move.target)
        return target is not None and target is self.board.owner(target).king
