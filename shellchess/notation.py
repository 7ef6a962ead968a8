"""Validation and parsing of moves written in algebraic notation."""

from __future__ import annotations

from dataclasses import dataclass

from .pieces import FILES, is_chess_coord, is_chess_digit, is_chess_piece, make_piece

CASTLES = ("O-O", "O-O-O")
_ALPHABET = frozenset("KQRBNabcdefgh12345678xO-#+")
_SEPARATORS = "x-"
_SUFFIXES = "#+"


@dataclass
class ParsedMove:
    """A move as typed, with the piece, the candidate sources and the target."""

    move: str = ""
    action: str = ""
    obj: str = ""
    src: str = ""
    dest: str = ""
    error: bool = False


def _separator_index(move: str) -> int | None:
    return next((i for i, c in enumerate(move) if c in _SEPARATORS), None)


def _left_sequence(move: str) -> str:
    index = _separator_index(move)
    return move if index is None else move[:index]


def _right_sequence(move: str) -> str:
    index = _separator_index(move)
    right = "" if index is None else move[index + 1:]
    if right and right[-1] in _SUFFIXES:
        right = right[:-1]
    return right


def _is_valid_complex(move: str) -> bool:
    if move.count("x") != 1 and move.count("-") != 1:
        return False
    if move[0] in _SEPARATORS or move[-1] in _SEPARATORS:
        return False

    left = _left_sequence(move)
    right = _right_sequence(move)
    if len(left) > 3 or not 2 <= len(right) <= 3:
        return False

    if len(left) == 1 and (is_chess_piece(left) or is_chess_coord(left)):
        return True
    if len(left) == 2:
        if is_chess_coord(left[0]) and is_chess_digit(left[1]):
            if right[1] in "18":
                return len(right) == 3 and is_chess_piece(right[2]) and right[2] != "K"
            return True
        if is_chess_piece(left[0]) and is_chess_coord(left[1]):
            return True
    if len(left) == 3:
        if is_chess_piece(left[0]) and is_chess_coord(left[1]) and is_chess_digit(left[2]):
            return True
    return False


def _is_valid_simple(move: str) -> bool:
    sequence = move[:-1] if move[-1] in _SUFFIXES else move
    if len(move) <= 1:
        return False

    digits = sum(is_chess_digit(c) for c in sequence)
    pieces = sum(is_chess_piece(c) for c in sequence)
    letters = sum(is_chess_coord(c) for c in sequence)
    if digits == 0 or digits > 2 or pieces > 2 or letters == 0 or letters > 2:
        return False

    if len(sequence) == 2:
        if is_chess_coord(sequence[0]) and is_chess_digit(sequence[1]):
            return sequence[1] not in "18"
    if len(sequence) == 3:
        if (
            is_chess_coord(sequence[0])
            and sequence[1] in "18"
            and is_chess_piece(sequence[2])
            and sequence[2] != "K"
        ):
            return True
        if (
            is_chess_piece(sequence[0])
            and is_chess_coord(sequence[1])
            and is_chess_digit(sequence[2])
        ):
            return True
    if len(sequence) == 4:
        if (
            is_chess_piece(sequence[0])
            and is_chess_coord(sequence[1])
            and is_chess_coord(sequence[2])
            and is_chess_digit(sequence[3])
        ):
            return True
    return False


def _is_valid_sequence(move: str) -> bool:
    if "O" in move:
        return move in CASTLES

    if "#" in move or "+" in move:
        if move.count("#") > 1 or move.count("+") > 1:
            return False
        if move[-1] not in _SUFFIXES:
            return False

    if "x" in move or "-" in move:
        return _is_valid_complex(move)
    return _is_valid_simple(move)


def _is_valid(move: str) -> bool:
    return (
        all(c in _ALPHABET for c in move)
        and 2 <= len(move) <= 7
        and _is_valid_sequence(move)
    )


def _is_square(coord: str) -> bool:
    return len(coord) >= 2 and is_chess_coord(coord[0]) and is_chess_digit(coord[1])


def _parse_double(parsed: ParsedMove, turn: int) -> None:
    move = parsed.move
    if "x" in move:
        parsed.action = "x"
    if "-" in move:
        parsed.action = "-"

    left = _left_sequence(move)
    right = _right_sequence(move)
    middle = ""

    if len(left) < 3:
        sign = left if len(left) == 1 and is_chess_coord(left) else "i"
        if is_chess_coord(move[0]):
            coords = get_pawn_sequence(right, turn, sign)
        else:
            coords = get_watchers_sequence(move[0], right, "i")

        if coords == ["error"]:
            parsed.error = True
            return

        middle = "".join(
            coord
            for coord in coords
            if _is_square(coord) and (len(left) != 2 or coord[0] == move[1])
        )

    if is_chess_coord(move[0]) and len(left) != 1:
        parsed.obj, parsed.src, parsed.dest = "P", left, right
    else:
        parsed.obj = "P" if is_chess_coord(move[0]) else move[0]
        parsed.src = middle or left[1:]
        parsed.dest = right


def _parse_unique(parsed: ParsedMove, turn: int) -> None:
    move = parsed.move
    offset = 0

    if is_chess_coord(move[0]):
        coords = get_pawn_sequence(move, turn, "i")
        parsed.obj = "P"
    else:
        sign = "i"
        if len(move) == 4:
            sign, offset = move[1], 1
        parsed.obj = move[0]
        coords = get_watchers_sequence(move[0], move[1 + offset:], sign)
        if coords == ["error"]:
            parsed.error = True
            return

    parsed.src += "".join(coord for coord in coords if _is_square(coord))
    parsed.dest += move if is_chess_coord(move[0]) else move[1 + offset:]


def _parse_move(parsed: ParsedMove, turn: int) -> None:
    parsed.src = ""
    parsed.dest = ""
    parsed.action = ">"

    if parsed.move in CASTLES:
        parsed.obj, parsed.src, parsed.dest = "R", "", parsed.move
        return

    if "#" in parsed.move or "+" in parsed.move:
        parsed.move = parsed.move[:-1]

    if "x" in parsed.move or "-" in parsed.move:
        _parse_double(parsed, turn)
    else:
        _parse_unique(parsed, turn)


class AlgebraParser:
    """Checks typed moves and resolves them into a ParsedMove.

    `turn` tells which side moves (even for white); `failed` is set when the
    last text given to `parse` was not a well-formed move.
    """

    def __init__(self) -> None:
        self.turn = 0
        self.failed = False
        self.parsed = ParsedMove()

    def parse(self, move: str) -> ParsedMove:
        """Validate and parse one move; the result is also kept in `parsed`."""
        parsed = ParsedMove(move=move)
        self.failed = not _is_valid(move)
        if not self.failed:
            _parse_move(parsed, self.turn)
        self.parsed = parsed
        return parsed


def get_watchers_sequence(piece_type: str, move: str, sign: str) -> list[str]:
    """List the squares from which a piece of this type could reach `move`.

    Squares run from rank 8 down to rank 1, files a to h; with a sign other
    than "i" only squares on that file are kept. An unknown piece type gives
    ["error"].
    """
    if not is_chess_piece(piece_type):
        return ["error"]
    piece = make_piece(piece_type, "white", move)
    return [
        square
        for rank in range(8, 0, -1)
        for square in (f"{letter}{rank}" for letter in FILES)
        if piece.is_on_my_way(square) and (sign == "i" or square[0] == sign)
    ]


def _shift(coord: str, file_step: int, rank_step: int) -> str:
    return chr(ord(coord[0]) + file_step) + chr(ord(coord[1]) + rank_step) + coord[2:]


def get_pawn_sequence(move: str, turn: int, sign: str) -> list[str]:
    """List the squares a pawn may come from to land on `move`.

    A trailing promotion letter is ignored. With a sign other than "i" only
    squares on that file are kept.
    """
    base = move[:-1] if len(move) > 2 else move
    if turn % 2 == 0:
        steps = ((0, -1), (0, -2), (-1, -1), (1, -1))
    else:
        steps = ((0, 1), (0, 2), (1, 1), (-1, 1))
    coords = [_shift(base, df, dr) for df, dr in steps]
    return [coord for coord in coords if sign == "i" or coord[0] == sign]