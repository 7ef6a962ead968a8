"""Plain records describing squares, game progress and piece counts."""

from __future__ import annotations

from dataclasses import dataclass, field

from .notation import ParsedMove
from .pieces import Piece

_COUNT_FIELDS = (
    "white_king",
    "black_king",
    "white_queen",
    "black_queen",
    "white_rook",
    "black_rook",
    "white_bishop",
    "black_bishop",
    "white_knight",
    "black_knight",
    "white_pawn",
    "black_pawn",
    "total",
)


@dataclass
class Square:
    """One square of the board and the piece standing on it, if any."""

    coord: str
    piece: Piece | None = None


@dataclass
class GameInfo:
    """Whose turn it is, the last move and the castling and en passant rights."""

    check: bool = False
    checkmate: bool = False
    draw: bool = False

    last_move: ParsedMove = field(default_factory=ParsedMove)
    move_failed: bool = False

    white_castle: bool = True
    white_castled: bool = False
    white_castle_lost: str = ""

    black_castle: bool = True
    black_castled: bool = False
    black_castle_lost: str = ""

    en_passant: bool = False
    en_passant_dest: str = ""

    turn: int = 0
    color: str = "white"


@dataclass
class PieceCounter:
    """How many pieces of each kind are on the board, and each side's material."""

    white_king: int = 0
    black_king: int = 0

    white_queen: int = 0
    black_queen: int = 0

    white_rook: int = 0
    black_rook: int = 0

    white_bishop: int = 0
    black_bishop: int = 0

    white_knight: int = 0
    black_knight: int = 0

    white_pawn: int = 0
    black_pawn: int = 0

    white_material: int = 0
    black_material: int = 0

    total: int = 0

    def reset(self) -> None:
        """Zero every piece count; the material totals are left alone."""
        for name in _COUNT_FIELDS:
            setattr(self, name, 0)