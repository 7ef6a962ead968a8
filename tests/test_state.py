from shellchess.notation import ParsedMove
from shellchess.pieces import Pawn
from shellchess.state import GameInfo, PieceCounter, Square


def test_square_defaults_to_empty():
    square = Square(coord="e4")
    assert square.piece is None
    assert square.coord == "e4"


def test_square_holds_piece():
    pawn = Pawn("white", "e2")
    square = Square(coord="e2", piece=pawn)
    assert square.piece is pawn


def test_game_info_starts_with_white_to_move():
    info = GameInfo()
    assert info.turn == 0
    assert info.color == "white"
    assert info.white_castle is True
    assert info.black_castle is True
    assert info.white_castled is False
    assert info.en_passant is False
    assert info.en_passant_dest == ""
    assert info.last_move == ParsedMove()


def test_game_info_last_moves_are_independent():
    first = GameInfo()
    second = GameInfo()
    first.last_move.move = "e4"
    assert second.last_move.move == ""


def test_counter_reset_keeps_material():
    counter = PieceCounter(white_pawn=5, black_queen=1, total=6, white_material=39, black_material=30)
    counter.reset()
    assert counter.white_pawn == 0
    assert counter.black_queen == 0
    assert counter.total == 0
    assert counter.white_material == 39
    assert counter.black_material == 30