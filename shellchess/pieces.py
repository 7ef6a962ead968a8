"""Chess pieces and the squares each of them can reach."""

from __future__ import annotations

import re
from typing import Iterable

FILES = "abcdefgh"
_DIGITS = "12345678"
_PIECE_LETTERS = "KQRBN"
_LEADING_INT = re.compile(r"\s*[+-]?\d+")

_ORTHOGONAL = ((-1, 0), (1, 0), (0, 1), (0, -1))
_DIAGONAL = ((1, 1), (-1, 1), (-1, -1), (1, -1))


def is_chess_digit(c: str) -> bool:
    """Tell whether c is a rank digit from 1 to 8."""
    return len(c) == 1 and c in _DIGITS


def is_chess_piece(c: str) -> bool:
    """Tell whether c names a piece other than a pawn."""
    return len(c) == 1 and c in _PIECE_LETTERS


def is_chess_coord(c: str) -> bool:
    """Tell whether c is a file letter from a to h."""
    return len(c) == 1 and c in FILES


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group()) if match else 0


def _file_index(coord: str) -> int:
    return ord(coord[0]) - ord("a") if coord else -ord("a")


def _square(x: int, y: int) -> str:
    letter = FILES[x] if 0 <= x < len(FILES) else "\0"
    return f"{letter}{y}"


class Piece:
    """A piece standing on a square, with its colour and move count."""

    kind = "?"
    rays: tuple[tuple[int, int], ...] = ()

    def __init__(self, color: str, pos: str) -> None:
        self.color = color
        self.moves = 0
        self.original_coord = pos
        self.coord = pos
        self.x = _file_index(pos)
        self.y = _leading_int(pos[1:])
        self.visible = True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.color!r}, {self.coord!r})"

    def move(self) -> None:
        """Count one more move made by this piece."""
        self.moves += 1

    def update_pos(self, coord: str) -> None:
        """Place the piece on another square."""
        self.coord = coord
        self.x = _file_index(coord)
        self.y = _leading_int(coord[1:])

    def toggle_visibility(self) -> None:
        """Hide a visible piece or show a hidden one."""
        self.visible = not self.visible

    def _trail(self, rays: Iterable[tuple[int, int]], board_coords: Iterable[str]) -> str:
        occupied = set(board_coords)
        reached: list[str] = []
        for dx, dy in rays:
            x, y = self.x, self.y
            for _ in range(8):
                x += dx
                y += dy
                square = _square(x, y)
                if not (is_chess_coord(square[0]) and is_chess_digit(square[1])):
                    break
                reached.append(square)
                if square in occupied:
                    break
        return "".join(reached)

    def is_on_my_way(self, target, board_coords=(), value=0, en_passant=""):
        """Tell whether target lies along this piece's rays, stopping at occupied squares."""
        return target in self._trail(self.rays, board_coords)


class King(Piece):
    """The king: one step in any direction."""

    kind = "K"

    def is_on_my_way(self, target, board_coords=(), value=0, en_passant=""):
        dx = _file_index(target) - self.x
        dy = _leading_int(target[1:]) - self.y
        return (dx, dy) != (0, 0) and max(abs(dx), abs(dy)) == 1


class Queen(Piece):
    """The queen: any distance along files, ranks and diagonals."""

    kind = "Q"
    rays = _ORTHOGONAL + _DIAGONAL

    def is_on_my_way(self, target, board_coords=(), value=0, en_passant=""):
        return target in self._trail(self.rays, board_coords)


class Rook(Piece):
    """The rook: any distance along files and ranks."""

    kind = "R"
    rays = _ORTHOGONAL

    def is_on_my_way(self, target, board_coords=(), value=0, en_passant=""):
        return target in self._trail(self.rays, board_coords)


class Bishop(Piece):
    """The bishop: any distance along diagonals."""

    kind = "B"
    rays = _DIAGONAL

    def is_on_my_way(self, target, board_coords=(), value=0, en_passant=""):
        return target in self._trail(self.rays, board_coords)


class Knight(Piece):
    """The knight: an L-shaped jump."""

    kind = "N"

    def is_on_my_way(self, target, board_coords=(), value=0, en_passant=""):
        if not (is_chess_coord(target[0:1]) and is_chess_digit(target[1:2])):
            return False
        dx = abs(_file_index(target) - self.x)
        dy = abs(_leading_int(target[1:]) - self.y)
        return {dx, dy} == {1, 2}


class Pawn(Piece):
    """The pawn: forward pushes, diagonal captures and en passant.

    With value set to anything but 0 only the attacked squares count.
    """

    kind = "P"

    def is_on_my_way(self, target, board_coords=(), value=0, en_passant=""):
        if self.color == "white":
            step, passant_rank = 1, 5
        elif self.color == "black":
            step, passant_rank = -1, 4
        else:
            return False

        occupied = set(board_coords)
        dest_x = _file_index(target)
        dest_y = _leading_int(target[1:])

        for side in (1, -1):
            diagonal = _square(self.x + side, self.y + step)
            if diagonal in occupied and dest_x == self.x + side and dest_y == self.y + step:
                return True
            if en_passant and target == en_passant and diagonal == target and self.y == passant_rank:
                return True

        if value == 0:
            ahead = _square(self.x, self.y + step)
            if ahead not in occupied:
                if dest_x == self.x and dest_y == self.y + step:
                    return True
                two_ahead = _square(self.x, self.y + 2 * step)
                if (
                    two_ahead not in occupied
                    and dest_x == self.x
                    and dest_y == self.y + 2 * step
                    and self.moves == 0
                ):
                    return True
        return False


_PIECE_CLASSES: dict[str, type[Piece]] = {
    cls.kind: cls for cls in (King, Queen, Rook, Bishop, Knight, Pawn)
}


def make_piece(kind: str, color: str, pos: str) -> Piece:
    """Create the piece named by its letter (K, Q, R, B, N or P)."""
    try:
        cls = _PIECE_CLASSES[kind]
    except KeyError:
        raise ValueError(f"unknown piece type: {kind!r}") from None
    return cls(color, pos)