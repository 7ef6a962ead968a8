"""Positional scoring of a board for one side."""

from __future__ import annotations

from .pieces import FILES, King, Piece
from .rules import RulesBoard

_CENTER = ("e4", "e5", "d4", "d5")


class ScoringBoard(RulesBoard):
    """A board that can weigh a position for either colour."""

    def _own_pieces(self):
        for square in self.squares:
            piece = square.piece
            if piece is not None and piece.color == self.info.color:
                yield square.coord, piece

    def _king_coord(self, own: bool) -> str:
        for square in self.squares:
            piece = square.piece
            if piece is None or piece.kind != "K":
                continue
            if (piece.color == self.info.color) == own:
                return square.coord
        return ""

    def _ring_watch(self, king_coord: str) -> int:
        king = King("white", king_coord)
        ring = [
            f"{letter}{rank}"
            for letter in FILES
            for rank in range(1, 9)
            if king.is_on_my_way(f"{letter}{rank}")
        ]
        value = 0
        for way in ring:
            for piece in reversed(self.watchers(way)):
                if self.is_safe(piece.coord):
                    value += 1
        return value

    def _evaluate_material(self, color_switch: bool) -> int:
        own = self.info.color
        value = enemy = 0
        for square in self.squares:
            piece = square.piece
            if piece is None or piece.kind == "K":
                continue
            worth = self.material_value(piece.kind) * 2
            if piece.color == own:
                value += worth
            else:
                enemy += worth
        value += 78 - enemy

        attacked: list[Piece] = []
        attacking: list[Piece] = []
        for square in self.squares:
            piece = square.piece
            if piece is None or piece.kind == "K":
                continue
            if piece.color == own:
                if not self.is_safe(square.coord):
                    attacked.append(piece)
            else:
                self.switch_players()
                try:
                    unsafe = not self.is_safe(square.coord)
                finally:
                    self.unswitch_players()
                if unsafe:
                    attacking.append(piece)

        if attacking:
            attacking = self.order_by_value(attacking)
            if color_switch:
                attacking.pop()
            if attacking:
                value += self.material_value(attacking[-1].kind) * 2

        if attacked:
            attacked = self.order_by_value(attacked)
            if not color_switch:
                attacked.pop()
            if attacked:
                value -= self.material_value(attacked[-1].kind) * 2

        return max(value, 0)

    def _evaluate_defense(self) -> int:
        return sum(
            self.material_value(piece.kind)
            for coord, piece in list(self._own_pieces())
            if piece.kind != "K" and self.is_safe(coord)
        )

    def _evaluate_attack(self) -> int:
        occupied = self.pieces_coords()
        enemies = [
            square.coord
            for square in self.squares
            if square.piece is not None and square.piece.color != self.info.color
        ]
        value = 0
        for coord, piece in list(self._own_pieces()):
            if piece.kind == "K" or not self.is_safe(coord):
                continue
            value += sum(
                piece.is_on_my_way(target, occupied, 0, self.info.en_passant_dest)
                for target in enemies
            )
        return value

    def _evaluate_king_control(self, color_switch: bool) -> int:
        value = 0
        if not self.info.check and self.checkmate_in_one():
            value += 50 if color_switch else 42000
        return value + self._ring_watch(self._king_coord(own=False))

    def _evaluate_king_defense(self, color_switch: bool) -> int:
        value = 0
        if not self.info.check and self.is_defeat_next():
            value += -42000 if color_switch else 50
        if self.info.color == "white" and self.info.white_castled:
            value += 15
        if self.info.color == "black" and self.info.black_castled:
            value += 15
        if value != 0 or self.is_end_game():
            value += self._ring_watch(self._king_coord(own=True))
        return value

    def _evaluate_mobility(self) -> int:
        return sum(
            len(self.possible_targets(coord))
            for coord, _piece in list(self._own_pieces())
            if self.is_safe(coord)
        )

    def _evaluate_promotion(self) -> int:
        step = {"white": 1, "black": -1}.get(self.info.color)
        value = 0
        for coord, piece in list(self._own_pieces()):
            if piece.kind != "P" or step is None or not self.is_safe(coord):
                continue
            ahead = coord[0] + chr(ord(coord[1]) + step)
            blocker = self.squares[self.index_of(ahead)].piece
            if blocker is None or blocker.color == self.info.color or blocker.kind != "P":
                value += piece.moves
        return value

    def _evaluate_pawns(self) -> int:
        value = 0
        for coord, piece in list(self._own_pieces()):
            if piece.kind == "P" and self.is_safe(coord):
                value += sum(watcher.kind == "P" for watcher in self.watchers(coord))
        return value

    def _evaluate_center(self) -> int:
        occupied = self.pieces_coords()
        value = 0
        for coord, piece in list(self._own_pieces()):
            if not self.is_safe(coord):
                continue
            worth = 1 if piece.kind == "K" else self.material_value(piece.kind)
            for target in _CENTER:
                if piece.is_on_my_way(target, occupied, 1, self.info.en_passant_dest):
                    value += worth
        for coord, piece in list(self._own_pieces()):
            if coord in _CENTER and self.is_safe(coord):
                value += 1 if piece.kind == "K" else self.material_value(piece.kind)
                value += 1
        return value

    def _evaluate_development(self) -> int:
        back = "1" if self.info.color == "white" else "8"
        # The central pawn squares are looked up on the seventh rank for both sides.
        pawn_rank = "7"
        value = 0
        for letter in "bgcf":
            piece = self.squares[self.index_of(letter + back)].piece
            if piece is None or piece.moves != 0:
                value += 8
        for letter in "de":
            piece = self.squares[self.index_of(letter + pawn_rank)].piece
            if piece is None or piece.kind != "P":
                value += 16
        return value

    def score(self, color: str) -> int:
        """Weigh the position from the point of view of color."""
        normal = end = 1
        if self.is_end_game():
            end = 4
        else:
            normal = 4

        switched = self.info.color != color
        if switched:
            self.switch_players()
        try:
            total = self._evaluate_king_control(switched) * (normal + end)
            total += self._evaluate_king_defense(switched) * (normal + end)
            total += self._evaluate_material(switched) * (normal * 2 + end)
            total += self._evaluate_defense() * 4
            total += self._evaluate_attack() * 4
            total += self._evaluate_promotion() * (normal + end)
            total += self._evaluate_mobility()
            total += self._evaluate_pawns() * 4 * end
            if normal == 4:
                total += self._evaluate_center() * normal
                total += self._evaluate_development() * normal
        finally:
            if switched:
                self.unswitch_players()
        return total