"""Move legality, check, checkmate, draw and square-safety tests."""

from __future__ import annotations

from .board_base import BoardCore
from .notation import CASTLES
from .pieces import FILES, Piece, is_chess_piece, make_piece

_PROMOTIONS = "QBNR"
_HOME_RANKS = {"white": "1", "black": "8"}
# Rook file, squares that must be empty, squares the king walks through.
_CASTLING_LAYOUT = {
    "O-O": ("h", "gf", "gf"),
    "O-O-O": ("a", "dbc", "dc"),
}


def _ch(text: str, index: int) -> str:
    return text[index] if 0 <= index < len(text) else "\0"


def _code(text: str, index: int) -> int:
    return ord(_ch(text, index))


class RulesBoard(BoardCore):
    """A board that knows which moves are legal and how a game ends."""

    def _piece_at(self, coord: str) -> Piece | None:
        return self.squares[self.index_of(coord)].piece

    # Loading and checking moves

    def load_move(self, move: str) -> None:
        """Load a move written as piece, source and destination (e.g. "Pe2e4")."""
        last = self.info.last_move
        if move in CASTLES:
            last.src = "e1" if self.info.turn % 2 == 0 else "e8"
            last.dest = move
            return

        last.obj = move[:1]
        last.move = move
        last.src = move[1:3]
        last.dest = move[3:]
        if last.dest == self.info.en_passant_dest or self._piece_at(move[3:]) is not None:
            last.action = "x"
        else:
            last.action = "-"
        last.error = False

    def _is_there_something(self, coord: str) -> bool:
        return self._piece_at(coord) is not None

    def _is_there_ally(self) -> bool:
        piece = self._piece_at(self.info.last_move.dest)
        return piece is not None and piece.color == self.info.color

    def _is_right_side(self) -> bool:
        piece = self._piece_at(self.info.last_move.src)
        return piece is None or piece.color == self.info.color

    def _is_destination_safe(self) -> bool:
        occupied = self.pieces_coords()
        dest = self.info.last_move.dest
        return not any(
            square.piece is not None
            and square.piece.color != self.info.color
            and square.piece.is_on_my_way(dest, occupied, 1, self.info.en_passant_dest)
            for square in self.squares
        )

    def _check_pawn_dest(self) -> bool:
        info = self.info
        src = info.last_move.src
        dest = info.last_move.dest
        square = self.squares[self.index_of(dest)]
        coord = square.coord

        if coord[1] in "18" and (len(dest) != 3 or not is_chess_piece(dest[2]) or dest[2] == "K"):
            return False

        file_gap = ord(coord[0]) - _code(src, 0)
        if file_gap != 0:
            if abs(file_gap) != 1:
                return False
            if square.piece is None:
                return info.en_passant and info.en_passant_dest == dest
            if info.color == "white" and _code(src, 1) != _code(dest, 1) - 1:
                return False
            if info.color == "black" and _code(src, 1) != _code(dest, 1) + 1:
                return False
            return True

        if self._is_there_something(dest):
            return False
        advance = _code(dest, 1) - _code(src, 1)
        if info.color == "white":
            if advance not in (1, 2):
                return False
            if advance == 2 and _ch(src, 1) != "2":
                return False
        if info.color == "black":
            if -advance not in (1, 2):
                return False
            if advance == -2 and _ch(src, 1) != "7":
                return False
        return True

    def _check_pawn_source(self) -> bool:
        last = self.info.last_move
        if self._piece_at(last.dest) is not None:
            return False
        dest_rank = _code(last.dest, 1)
        for candidate in (a + b for a, b in zip(last.src[::2], last.src[1::2])):
            piece = self._piece_at(candidate)
            if piece is None or piece.kind != "P":
                continue
            if abs(ord(candidate[1]) - dest_rank) == 2 and piece.moves != 0:
                return False
            last.src = candidate
            return True
        return False

    def _check_normal_source(self) -> bool:
        last = self.info.last_move
        candidates = last.src
        occupied = self.pieces_coords()
        last.src = "".join(
            square.coord
            for square in self.squares
            if square.coord in candidates
            and square.piece is not None
            and square.piece.color == self.info.color
            and square.piece.kind == last.obj
            and square.piece.is_on_my_way(last.dest, occupied)
        )
        return len(last.src) == 2

    def _check_normal_dest(self) -> bool:
        last = self.info.last_move
        if not is_chess_piece(last.obj):
            return True
        probe = make_piece(last.obj, "white", last.src)
        return probe.is_on_my_way(last.dest, self.pieces_coords())

    def _is_there_valid_source(self) -> bool:
        if self.info.last_move.obj == "P":
            return self._check_pawn_source()
        return self._check_normal_source()

    def _is_valid_en_passant(self) -> bool:
        info = self.info
        last = info.last_move
        if last.obj != "P" or not info.en_passant or info.en_passant_dest != last.dest:
            return False
        captured_coord = info.en_passant_dest[:1] + _ch(last.src, 1)
        mover = self._piece_at(last.src)
        captured = self._piece_at(captured_coord)
        if mover is None or captured is None:
            return False
        return mover.color != captured.color

    def _is_it_valid_source(self) -> bool:
        last = self.info.last_move
        piece = self._piece_at(last.src)
        return piece is not None and piece.kind == last.obj

    def is_legal(self, move: str = "") -> bool:
        """Tell whether the given move, or the last loaded one, may be played."""
        if move:
            self.load_move(move)
        last = self.info.last_move

        if last.dest in CASTLES:
            return self.is_castling_possible(last.dest) and not self.is_check()

        if last.action == "x" and not self._is_there_something(last.dest):
            if not self._is_valid_en_passant():
                return False

        if len(last.src) != 2:
            if not self._is_there_valid_source():
                return False
        elif not self._is_it_valid_source():
            return False

        dest_ok = self._check_pawn_dest() if last.obj == "P" else self._check_normal_dest()
        if not dest_ok:
            return False

        if (
            self._is_there_ally()
            or not self._is_right_side()
            or (last.obj == "K" and not self._is_destination_safe())
        ):
            return False

        return self.resolves_check(last.src + last.dest)

    def legal_moves(self) -> list[str]:
        """Every legal move for the side to play, castles first."""
        candidates = list(CASTLES)
        for letter in FILES:
            for rank in range(1, 9):
                coord = f"{letter}{rank}"
                piece = self._piece_at(coord)
                if piece is None or piece.color != self.info.color:
                    continue
                for target in self.possible_targets(coord):
                    move = piece.kind + target
                    if piece.kind == "P" and move[-1] in "81":
                        candidates.extend(move + promotion for promotion in _PROMOTIONS)
                    else:
                        candidates.append(move)
        return [move for move in candidates if self.is_legal(move)]

    def possible_targets(self, coord: str) -> list[str]:
        """Source-destination pairs the piece on coord can reach, own pieces excluded."""
        piece = self._piece_at(coord)
        if piece is None:
            return []
        occupied = self.pieces_coords()
        moves: list[str] = []
        for letter in FILES:
            for rank in range(1, 9):
                target = f"{letter}{rank}"
                if piece.is_on_my_way(target, occupied, 0, self.info.en_passant_dest):
                    other = self._piece_at(target)
                    if other is None or other.color != self.info.color:
                        moves.append(coord + target)
        return moves

    # Game end

    def is_check(self) -> bool:
        """Tell whether the king of the side to play is attacked."""
        occupied = self.pieces_coords()
        king_pos = king_color = ""
        for square in self.squares:
            piece = square.piece
            if piece is not None and piece.kind == "K" and piece.color == self.info.color:
                king_pos, king_color = square.coord, piece.color
        return any(
            square.piece is not None
            and square.piece.color != king_color
            and square.piece.is_on_my_way(king_pos, occupied, 1)
            for square in self.squares
        )

    def resolves_check(self, srcdest: str) -> bool:
        """Tell whether the trial move leaves the side to play out of check."""
        self.try_move(srcdest)
        try:
            return not self.is_check()
        finally:
            self.undo_move(srcdest)

    def is_checkmate(self, value: int = 0) -> bool:
        """Tell whether the side to play is mated.

        With value 0 the check and checkmate flags of the game are updated.
        """
        if not self.is_check():
            if value == 0:
                self.info.check = False
            return False

        if value == 0:
            self.info.check = True
        for square in self.squares:
            piece = square.piece
            if piece is not None and piece.color == self.info.color:
                if any(self.resolves_check(move) for move in self.possible_targets(square.coord)):
                    return False
        if value == 0:
            self.info.checkmate = True
        return True

    def _can_the_king_move(self) -> bool:
        king_square = None
        for square in self.squares:
            piece = square.piece
            if piece is not None and piece.kind == "K" and piece.color == self.info.color:
                king_square = square
        if king_square is None or king_square.piece is None:
            return False
        king = king_square.piece
        origin = king_square.coord
        for square in self.squares:
            if king.is_on_my_way(square.coord, ()):
                if (square.piece is None or square.piece.color != king.color) and self.resolves_check(
                    origin + square.coord
                ):
                    return True
        return False

    def _can_any_ally_piece_move(self) -> bool:
        occupied = self.pieces_coords()
        for square in self.squares:
            piece = square.piece
            if piece is None or piece.color != self.info.color or piece.kind == "K":
                continue
            for target in self.squares:
                if piece.is_on_my_way(
                    target.coord, occupied, 0, self.info.en_passant_dest
                ) and self.resolves_check(square.coord + target.coord):
                    return True
        return False

    def _is_checkmate_impossible(self) -> bool:
        self.count_pieces()
        c = self.counter
        kings = c.white_king + c.black_king
        knights = kings + c.white_knight + c.black_knight
        bishops = kings + c.white_bishop + c.black_bishop

        if c.total == 2:
            return True
        if knights == c.total and c.total in (3, 4, 6):
            return True
        if bishops == c.total and c.total in (3, 4):
            return True
        if c.white_pawn + c.black_pawn + kings == c.total:
            if not self._can_the_king_move() and not self._can_any_ally_piece_move():
                return True
        return False

    def is_draw(self) -> bool:
        """Tell whether the game is drawn; the draw flag is set when it is."""
        if self.is_check():
            return False
        if self._is_checkmate_impossible() or (
            not self._can_the_king_move() and not self._can_any_ally_piece_move()
        ):
            self.info.draw = True
            return True
        return False

    def is_game_over(self) -> bool:
        """Tell whether the game has ended by failure, checkmate or draw."""
        return not self.allocated or self.is_checkmate() or self.is_draw()

    def is_castling_possible(self, castle: str) -> bool:
        """Tell whether the side to play may castle on the given side."""
        rank = _HOME_RANKS.get(self.info.color)
        if rank is None:
            return True
        rights = self.info.white_castle if self.info.color == "white" else self.info.black_castle
        if not rights:
            return False
        layout = _CASTLING_LAYOUT.get(castle)
        if layout is None:
            return True

        corner, between, steps = layout
        rook = self._piece_at(corner + rank)
        if rook is None or rook.moves != 0:
            return False
        if any(self._piece_at(letter + rank) is not None for letter in between):
            return False
        if self._piece_at("e" + rank) is None:
            return False
        return all(self.resolves_check(f"e{rank}{letter}{rank}") for letter in steps)

    # Square safety

    def is_free(self, coord: str) -> bool:
        """Tell whether no enemy piece bears on coord."""
        if self.en_passant_target() == coord:
            return self.is_free(self.info.en_passant_dest)
        self.switch_players()
        try:
            attackers = self.watchers(coord)
        finally:
            self.unswitch_players()
        return not attackers

    def is_safe(self, coord: str) -> bool:
        """Tell whether a piece on coord is protected or not attacked at all."""
        return self.is_protected(coord) or self.is_free(coord)

    def is_protected(self, coord: str) -> bool:
        """Tell whether an exchange on coord would not lose material."""
        defenders = self.watchers(coord)
        if not defenders:
            return False

        self.switch_players()
        try:
            attackers = self.watchers(coord)
        finally:
            self.unswitch_players()
        if not attackers:
            return True

        if coord == self.info.en_passant_dest:
            occupant = self._piece_at(self.en_passant_target())
        else:
            occupant = self._piece_at(coord)
        if occupant is not None:
            defenders.append(occupant)

        lost = gained = 0
        while attackers and defenders:
            lost += self.material_value(defenders.pop().kind)
            if not defenders:
                break
            gained += self.material_value(attackers.pop().kind)
            if lost > gained:
                break
        return lost <= gained

    def is_end_game(self) -> bool:
        """Tell whether either side has less than 21 points of material left."""
        totals = {"white": 0, "black": 0}
        for square in self.squares:
            piece = square.piece
            if piece is not None and piece.kind != "K" and piece.color in totals:
                totals[piece.color] += self.material_value(piece.kind)
        return totals["white"] < 21 or totals["black"] < 21

    def checkmate_in_one(self) -> bool:
        """Tell whether the side to play has a move that mates at once."""
        for move in self.legal_moves():
            if not move.startswith("O"):
                move = move[1:]
            self.try_move(move)
            self.switch_players()
            try:
                mated = self.is_checkmate(-1)
            finally:
                self.unswitch_players()
                self.undo_move(move)
            if mated:
                return True
        return False

    def is_defeat_next(self) -> bool:
        """Tell whether the opponent would have a mate in one."""
        self.switch_players()
        try:
            return self.checkmate_in_one()
        finally:
            self.unswitch_players()