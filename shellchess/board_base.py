"""The board's squares and the low-level operations the rules build on."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from .notation import CASTLES
from .pieces import FILES, Bishop, King, Knight, Pawn, Piece, Queen, Rook
from .state import GameInfo, PieceCounter, Square

_MATERIAL_VALUES = {"P": 1, "N": 3, "B": 3, "R": 5, "Q": 9, "K": 200}
_VALUE_GROUPS = ("P", "BN", "R", "Q", "K")

_BACK_RANKS = (
    (Knight, "white", "g1"),
    (Knight, "white", "b1"),
    (Knight, "black", "g8"),
    (Knight, "black", "b8"),
    (Rook, "white", "a1"),
    (Rook, "white", "h1"),
    (Rook, "black", "a8"),
    (Rook, "black", "h8"),
    (Bishop, "white", "c1"),
    (Bishop, "white", "f1"),
    (Bishop, "black", "c8"),
    (Bishop, "black", "f8"),
    (Queen, "white", "d1"),
    (Queen, "black", "d8"),
    (King, "white", "e1"),
    (King, "black", "e8"),
)


def _initial_squares() -> list[Square]:
    squares: list[Square] = []
    for letter in FILES:
        for rank in range(1, 9):
            coord = f"{letter}{rank}"
            if rank == 2:
                squares.append(Square(coord=coord, piece=Pawn("white", coord)))
            elif rank == 7:
                squares.append(Square(coord=coord, piece=Pawn("black", coord)))
            elif 3 <= rank <= 6:
                squares.append(Square(coord=coord))
    squares.extend(Square(coord=coord, piece=cls(color, coord)) for cls, color, coord in _BACK_RANKS)
    return squares


def _shift_rank(coord: str, step: int) -> str:
    return coord[0] + chr(ord(coord[1]) + step) + coord[2:]


class BoardCore:
    """Squares, game state and reversible trial moves.

    Given another board, the new one shares its pieces and copies its game
    state, so trial moves can be made on it without touching move history.
    """

    def __init__(self, original: BoardCore | None = None) -> None:
        self._saved: list[Piece | None] = []
        self.white_captured: list[str] = []
        self.black_captured: list[str] = []
        self.history: list[str] = []
        self.simple_history: list[str] = []

        if original is None:
            self.allocated = True
            self.info = GameInfo()
            self.counter = PieceCounter(white_material=39, black_material=39)
            self.squares = _initial_squares()
        else:
            source = original.info
            self.allocated = original.allocated
            self.info = GameInfo(
                check=source.check,
                checkmate=source.checkmate,
                draw=source.draw,
                white_castle=source.white_castle,
                white_castled=source.white_castled,
                black_castle=source.black_castle,
                black_castled=source.black_castled,
                en_passant=source.en_passant,
                en_passant_dest=source.en_passant_dest,
                turn=source.turn,
                color=source.color,
            )
            self.counter = PieceCounter()
            self.squares = [Square(coord=s.coord, piece=s.piece) for s in original.squares]

    def index_of(self, coord: str) -> int:
        """Position of the square named by the first two characters of coord, or 0."""
        key = coord[:2]
        return next((i for i, square in enumerate(self.squares) if square.coord == key), 0)

    def type_at(self, coord: str) -> str:
        """Letter of the piece on coord, or a space when the square is empty."""
        for square in self.squares:
            if square.coord == coord and square.piece is not None:
                return square.piece.kind
        return " "

    def color_at(self, coord: str) -> str:
        """Colour of the piece on coord, or an empty string."""
        for square in self.squares:
            if square.coord == coord and square.piece is not None:
                return square.piece.color
        return ""

    def pieces_coords(self) -> list[str]:
        """Squares holding a visible piece."""
        return [s.coord for s in self.squares if s.piece is not None and s.piece.visible]

    def castling_moves(self, srcdest: str) -> list[str]:
        """King move then rook move making up a castle for the side to play."""
        rank = "1" if self.info.color == "white" else "8"
        if srcdest == "O-O":
            return [f"e{rank}g{rank}", f"h{rank}f{rank}"]
        if srcdest == "O-O-O":
            return [f"e{rank}c{rank}", f"a{rank}d{rank}"]
        return []

    def state_value(self) -> int:
        """1 after checkmate, 2 after a draw or a failure, 0 while playing."""
        if self.info.checkmate:
            return 1
        if self.info.draw or not self.allocated:
            return 2
        return 0

    def en_passant_target(self) -> str:
        """Square of the pawn that may be taken en passant."""
        target = self.info.en_passant_dest
        if len(target) < 2:
            return target
        return _shift_rank(target, 1 if self.info.turn % 2 == 0 else -1)

    def _watchers_number(self, coord: str) -> int:
        occupied = self.pieces_coords()
        for square in self.squares:
            piece = square.piece
            if (
                piece is not None
                and piece.color == self.info.color
                and square.coord != coord
                and piece.visible
                and piece.is_on_my_way(coord, occupied, 1, self.info.en_passant_dest)
            ):
                return 1
        return 0

    def watchers(self, coord: str) -> list[Piece]:
        """Pieces of the side to play that bear on coord, including x-rays.

        The result is a stack: its last element is the cheapest piece of the
        nearest layer, to be used first in an exchange.
        """
        layers: list[list[Piece]] = []
        while self._watchers_number(coord) != 0:
            occupied = self.pieces_coords()
            layer: list[Piece] = []
            for square in self.squares:
                piece = square.piece
                if (
                    piece is not None
                    and piece.color == self.info.color
                    and square.coord != coord
                    and piece.visible
                    and piece.is_on_my_way(coord, occupied, 1, self.info.en_passant_dest)
                ):
                    layer.append(piece)
                    piece.toggle_visibility()
            layers.append(self.order_by_value(layer))

        result: list[Piece] = []
        for layer in reversed(layers):
            for piece in reversed(layer):
                result.append(piece)
                piece.toggle_visibility()
        return result

    def order_by_value(self, pieces: Sequence[Piece]) -> list[Piece]:
        """Reorder a stack of pieces so the most valuable ends on top."""
        popped = list(reversed(pieces))
        return [piece for group in _VALUE_GROUPS for piece in popped if piece.kind in group]

    @staticmethod
    def material_value(piece_type: str) -> int:
        """Material worth of a piece letter; 0 for anything else."""
        return _MATERIAL_VALUES.get(piece_type, 0)

    def switch_players(self) -> None:
        """Pass the move to the other side."""
        self.info.turn += 1
        self.info.color = "white" if self.info.turn % 2 == 0 else "black"

    def unswitch_players(self) -> None:
        """Give the move back to the previous side."""
        self.info.turn -= 1
        self.info.color = "white" if self.info.turn % 2 == 0 else "black"

    def _is_special(self, srcdest: str) -> bool:
        if srcdest in CASTLES:
            return True
        return (
            len(srcdest) >= 4
            and srcdest[2:4] == self.info.en_passant_dest
            and (self.type_at(srcdest[0:2]) == "P" or self.type_at(srcdest[2:4]) == "P")
        )

    def try_move(self, srcdest: str) -> None:
        """Make a trial move, to be taken back with undo_move."""
        if self._is_special(srcdest):
            if srcdest.startswith("O"):
                for step in self.castling_moves(srcdest):
                    self.try_move(step)
            else:
                self._try_en_passant(srcdest)
            return

        origin = self.squares[self.index_of(srcdest[:2])]
        target = self.squares[self.index_of(srcdest[2:])]
        piece = origin.piece
        if piece is None:
            raise ValueError(f"no piece on {srcdest[:2]}")

        if piece.kind == "K":
            self._disable_castling(srcdest)

        self._saved.append(target.piece)
        target.piece = piece
        piece.update_pos(target.coord)
        origin.piece = None

    def undo_move(self, srcdest: str) -> None:
        """Take back a trial move made with try_move."""
        if self._is_special(srcdest):
            if srcdest.startswith("O"):
                for step in reversed(self.castling_moves(srcdest)):
                    self.undo_move(step)
            else:
                self._undo_en_passant(srcdest)
            return

        origin = self.squares[self.index_of(srcdest[:2])]
        target = self.squares[self.index_of(srcdest[2:])]
        piece = target.piece
        if piece is None:
            raise ValueError(f"no piece on {srcdest[2:4]}")

        if piece.kind == "K":
            self._enable_castling(srcdest)

        origin.piece = piece
        piece.update_pos(origin.coord)
        target.piece = self._saved.pop()

    def _try_en_passant(self, srcdest: str) -> None:
        src, dest = srcdest[0:2], srcdest[2:4]
        captured = self.squares[self.index_of(dest[0] + src[1])]
        origin = self.squares[self.index_of(src)]
        target = self.squares[self.index_of(dest)]

        self._saved.append(captured.piece)
        captured.piece = None

        target.piece = origin.piece
        if target.piece is not None:
            target.piece.update_pos(target.coord)
        origin.piece = None

        self.info.en_passant = False

    def _undo_en_passant(self, srcdest: str) -> None:
        src, dest = srcdest[0:2], srcdest[2:4]
        captured = self.squares[self.index_of(dest[0] + src[1])]
        origin = self.squares[self.index_of(src)]
        target = self.squares[self.index_of(dest)]

        origin.piece = target.piece
        target.piece = None
        if origin.piece is not None:
            origin.piece.update_pos(origin.coord)

        captured.piece = self._saved.pop()
        self.info.en_passant = True

    def _enable_castling(self, srcdest: str) -> None:
        info = self.info
        if info.color == "white" and info.white_castle_lost:
            info.white_castled = False
            info.white_castle = True
            info.white_castle_lost = ""
        if info.color == "black" and info.black_castle_lost:
            info.black_castled = False
            info.black_castle = True
            info.black_castle_lost = ""

    def _disable_castling(self, srcdest: str) -> None:
        info = self.info
        castled = srcdest[2:] in ("c1", "g1")
        if info.color == "white" and info.white_castle:
            info.white_castled = castled
            info.white_castle = False
            info.white_castle_lost = srcdest
        if info.color == "black" and info.black_castle:
            info.black_castled = castled
            info.black_castle = False
            info.black_castle_lost = srcdest

    def count_pieces(self) -> None:
        """Recount the pieces of each kind on the board."""
        counts = Counter(
            (s.piece.color, s.piece.kind) for s in self.squares if s.piece is not None
        )
        counter = self.counter
        counter.reset()
        # Both kings are tallied in the same field.
        counter.white_king = counts["white", "K"] + counts["black", "K"]
        counter.white_queen = counts["white", "Q"]
        counter.black_queen = counts["black", "Q"]
        counter.white_knight = counts["white", "N"]
        counter.black_knight = counts["black", "N"]
        counter.white_rook = counts["white", "R"]
        counter.black_rook = counts["black", "R"]
        counter.white_bishop = counts["white", "B"]
        counter.black_bishop = counts["black", "B"]
        counter.white_pawn = counts["white", "P"]
        counter.black_pawn = counts["black", "P"]
        counter.total = sum(counts.values())

    def count_materials(self) -> None:
        """Recompute each side's material, kings excluded."""
        white = black = 0
        for square in self.squares:
            piece = square.piece
            if piece is None or piece.kind == "K":
                continue
            if piece.color == "white":
                white += self.material_value(piece.kind)
            elif piece.color == "black":
                black += self.material_value(piece.kind)
        self.counter.white_material = white
        self.counter.black_material = black