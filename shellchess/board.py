"""The playable board: making moves, keeping history and printing the game."""

from __future__ import annotations

import sys
from dataclasses import replace

from .console import COLOR_END, CURSOR_UP, ERASE_LINE, GREEN, GREY, ORANGE, RED, YELLOW
from .evaluation import ScoringBoard
from .notation import CASTLES, ParsedMove
from .pieces import FILES, is_chess_piece, make_piece

_HEADER = "    a  b  c  d  e  f  g  h"
_EMPTY_CELL = "│ ▕"
_GLYPHS = {
    ("white", "P"): "♟",
    ("black", "P"): "♙",
    ("white", "N"): "♞",
    ("black", "N"): "♘",
    ("white", "B"): "♝",
    ("black", "B"): "♗",
    ("white", "R"): "♜",
    ("black", "R"): "♖",
    ("white", "Q"): "♛",
    ("black", "Q"): "♕",
    ("white", "K"): "♚",
    ("black", "K"): "♔",
}
_PROMOTIONS = "QNBR"


def _code(text: str, index: int) -> int:
    return ord(text[index]) if 0 <= index < len(text) else 0


def _other(color: str) -> str:
    return "black" if color == "white" else "white"


class ChessBoard(ScoringBoard):
    """A full game board: moves are played on it and the game is printed."""

    @property
    def failed(self) -> bool:
        """Whether the last move given to play_move was refused."""
        return self.info.move_failed

    # Playing moves

    def play_move(self, parsed: ParsedMove | None = None, text: str = "") -> bool:
        """Play a parsed move, or one written as text (e.g. "Pe2e4" or "O-O").

        Return False when the move is illegal.
        """
        info = self.info
        if text:
            self.load_move(text)
        elif parsed is not None:
            info.last_move = replace(parsed)
        else:
            raise ValueError("no move given")

        if not self.is_legal():
            info.move_failed = True
            return False
        info.move_failed = False

        last = info.last_move
        if self._piece_at(last.dest) is not None:
            last.action = "x"
        src, dest, action = last.src, last.dest, last.action

        if dest in CASTLES:
            if info.color == "white":
                self._white_castles()
            elif info.color == "black":
                self._black_castles()
        elif (
            action in ("x", "-")
            and not self._is_there_something(dest)
            and info.en_passant
            and info.en_passant_dest == dest
        ):
            self._take_en_passant()
        else:
            self._move_piece(src, dest)
            if dest and is_chess_piece(dest[-1]):
                self._promote_piece(dest, dest[-1])

        self._update_en_passant()
        self._add_to_history()
        self.count_materials()
        self.switch_players()
        return True

    def _update_en_passant(self) -> None:
        info = self.info
        last = info.last_move
        src, dest = last.src, last.dest
        if last.obj == "P" and (
            (info.color == "white" and _code(dest, 1) == _code(src, 1) + 2 and dest[1:2] == "4")
            or (info.color == "black" and _code(dest, 1) == _code(src, 1) - 2 and dest[1:2] == "5")
        ):
            step = -1 if info.color == "white" else 1
            info.en_passant = True
            info.en_passant_dest = dest[0] + chr(ord(dest[1]) + step) + dest[2:]
        else:
            info.en_passant = False
            info.en_passant_dest = ""

    def _take_en_passant(self) -> None:
        last = self.info.last_move
        origin = self.squares[self.index_of(last.src)]
        piece, origin.piece = origin.piece, None
        target = self.squares[self.index_of(last.dest)]
        target.piece = piece
        if piece is not None:
            piece.move()
            piece.update_pos(last.dest)

        step = -1 if self.info.color == "white" else 1
        captured = last.dest[0] + chr(ord(last.dest[1]) + step)
        self._remove_piece(captured)

    def _remove_piece(self, coord: str) -> None:
        square = self.squares[self.index_of(coord)]
        piece = square.piece
        if piece is None:
            return
        if piece.color == "black":
            self.white_captured.append(piece.kind)
        if piece.color == "white":
            self.black_captured.append(piece.kind)
        square.piece = None

    def _promote_piece(self, initial_coord: str, piece_type: str) -> None:
        coord = initial_coord[:2]
        square = self.squares[self.index_of(coord)]
        color = square.piece.color if square.piece is not None else self.info.color
        self._remove_piece(initial_coord)
        if piece_type not in _PROMOTIONS:
            self.allocated = False
            raise ValueError(f"cannot promote to {piece_type!r}")
        square.piece = make_piece(piece_type, color, coord)

    def _move_piece(self, initial_coord: str, new_coord: str) -> None:
        origin = self.squares[self.index_of(initial_coord)]
        piece, origin.piece = origin.piece, None
        if piece is None:
            raise ValueError(f"no piece on {initial_coord[:2]}")

        self._remove_piece(new_coord[:2])
        self.squares[self.index_of(new_coord)].piece = piece
        piece.move()
        piece.update_pos(new_coord)

        if piece.kind == "K":
            if piece.original_coord == "e1":
                self.info.white_castle = False
            if piece.original_coord == "e8":
                self.info.black_castle = False

    def _white_castles(self) -> None:
        if self.info.last_move.dest == "O-O":
            self._move_piece("h1", "f1")
            self._move_piece("e1", "g1")
        if self.info.last_move.dest == "O-O-O":
            self._move_piece("e1", "c1")
            self._move_piece("a1", "d1")
        self.info.white_castle = False
        self.info.white_castled = True

    def _black_castles(self) -> None:
        if self.info.last_move.dest == "O-O":
            self._move_piece("e8", "g8")
            self._move_piece("h8", "f8")
        if self.info.last_move.dest == "O-O-O":
            self._move_piece("e8", "c8")
            self._move_piece("a8", "d8")
        self.info.black_castle = False
        self.info.black_castled = True

    def _add_to_history(self) -> None:
        last = self.info.last_move
        action, obj, src, dest = last.action, last.obj, last.src, last.dest

        if dest in CASTLES:
            src = "e1" if self.info.turn % 2 == 0 else "e8"
            letter = "g" if len(dest) == 3 else "c"
            number = "1" if src == "e1" else "8"
            self.simple_history.append(src + letter + number)
            self.history.append(dest)
            return

        if action == "x":
            self.history.append(f"{obj}{src}x{dest}" if obj != "P" else f"{src}x{dest}")
        else:
            self.history.append(f"{obj}{src}-{dest}" if obj != "P" else dest)

        if len(dest) == 3:
            dest = dest[:2] + dest[2].lower()
        self.simple_history.append(src + dest)

    # Printing

    def _rank_line(self, rank: int) -> str:
        cells = []
        for letter in FILES:
            piece = self._piece_at(f"{letter}{rank}")
            if piece is None:
                cells.append(_EMPTY_CELL)
            else:
                cells.append(f"│{_GLYPHS.get((piece.color, piece.kind), ' ')}▕")
        return f" {rank} {''.join(cells)} {rank}"

    def board_text(self, ai_side: int = -1) -> str:
        """The board as text lines; white is at the bottom unless ai_side is 0."""
        ranks = range(8, 0, -1) if ai_side in (-1, 1) else range(1, 9)
        lines = [_HEADER, *(self._rank_line(rank) for rank in ranks), _HEADER]
        return "\n".join(lines)

    def print_board(self, ai_side: int = -1) -> None:
        """Draw the board, over the previous drawing once the game has begun."""
        out = []
        if self.info.turn != 0:
            out.append("\033[12A")
        out.extend(f"{ERASE_LINE}{line}\n" for line in self.board_text(ai_side).splitlines())
        out.append("\n")
        sys.stdout.write("".join(out))
        sys.stdout.flush()

    def history_text(self) -> str:
        """The numbered list of moves played so far, or an empty string."""
        if not self.history:
            return ""
        moves = " ".join(f"{i}.{move}" for i, move in enumerate(self.history, 1))
        return f"Game summary: {moves}"

    def _print_history(self) -> None:
        out = [ERASE_LINE]
        if len(self.history) > 21:
            out.append("\n")
        if self.history:
            out.append(self.history_text() + "\n\n")
        sys.stdout.write("".join(out))

    def print_end_game(self, value: int = 0) -> None:
        """Announce the winner or the draw and print the game summary."""
        winner = _other(self.info.color).capitalize()
        out = []
        if self.is_checkmate():
            if value == 0:
                out.append(f"{CURSOR_UP}{ERASE_LINE}\n{ERASE_LINE}")
            out.append(f"Checkmate. {GREEN}{winner} won the game{COLOR_END}! 🎉\n")
        if self.is_draw():
            if value == 0:
                out.append(f"{CURSOR_UP}{ERASE_LINE}\n{ERASE_LINE}")
            out.append(f"Draw. {GREY}No one won the game{COLOR_END}.\n")
        sys.stdout.write("".join(out))
        self._print_history()
        sys.stdout.flush()

    def print_event(self, parser_failed: bool, move_failed: bool, blind_mode: bool) -> None:
        """Print the outcome of the last move and whose turn it is."""
        out = [ERASE_LINE]
        if blind_mode and self.info.turn != 0:
            out.append(CURSOR_UP + ERASE_LINE)

        if parser_failed or move_failed:
            if not blind_mode:
                out.append(CURSOR_UP + ERASE_LINE)
            if parser_failed:
                out.append(f"{RED}Invalid move{COLOR_END}. ")
            else:
                out.append(f"{YELLOW}Illegal move{COLOR_END}. ")

        if self.info.turn > 0 and not parser_failed and not move_failed:
            player = _other(self.info.color).capitalize()
            move = self.info.last_move.move
            if self.is_check():
                out.append(f"{player} played {move}{ORANGE} (check){COLOR_END}. ")
            else:
                out.append(f"{player} played {move}. ")

        out.append(f"{self.info.color.capitalize()} to play.\n")
        sys.stdout.write("".join(out))
        sys.stdout.flush()