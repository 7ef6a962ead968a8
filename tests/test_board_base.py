import pytest

from shellchess.board_base import BoardCore
from shellchess.pieces import FILES, King, Knight, Pawn, Queen


def _place(board, coord, piece):
    board.squares[board.index_of(coord)].piece = piece


def test_fresh_board_has_all_pieces():
    board = BoardCore()
    assert len(board.squares) == 64
    assert len(board.pieces_coords()) == 32
    assert board.type_at("e1") == "K"
    assert board.color_at("e8") == "black"
    assert board.type_at("d1") == "Q"
    assert board.type_at("e4") == " "
    assert board.color_at("e4") == ""


def test_index_of_round_trip():
    board = BoardCore()
    for letter in FILES:
        for rank in range(1, 9):
            coord = f"{letter}{rank}"
            assert board.squares[board.index_of(coord)].coord == coord


def test_index_of_ignores_suffix_and_defaults_to_zero():
    board = BoardCore()
    assert board.index_of("e8Q") == board.index_of("e8")
    assert board.index_of("zz") == 0


def test_castling_moves_per_side():
    board = BoardCore()
    assert board.castling_moves("O-O") == ["e1g1", "h1f1"]
    assert board.castling_moves("O-O-O") == ["e1c1", "a1d1"]
    board.switch_players()
    assert board.castling_moves("O-O") == ["e8g8", "h8f8"]
    assert board.castling_moves("e2e4") == []


def test_switch_and_unswitch_players():
    board = BoardCore()
    board.switch_players()
    assert board.info.turn == 1
    assert board.info.color == "black"
    board.unswitch_players()
    assert board.info.turn == 0
    assert board.info.color == "white"


def test_state_value():
    board = BoardCore()
    assert board.state_value() == 0
    board.info.draw = True
    assert board.state_value() == 2
    board.info.checkmate = True
    assert board.state_value() == 1
    other = BoardCore()
    other.allocated = False
    assert other.state_value() == 2


def test_en_passant_target():
    board = BoardCore()
    assert board.en_passant_target() == ""
    board.info.turn = 1
    board.info.en_passant_dest = "e3"
    assert board.en_passant_target() == "e2"


def test_material_values():
    assert BoardCore.material_value("P") == 1
    assert BoardCore.material_value("N") == 3
    assert BoardCore.material_value("B") == 3
    assert BoardCore.material_value("R") == 5
    assert BoardCore.material_value("Q") == 9
    assert BoardCore.material_value("K") == 200
    assert BoardCore.material_value("x") == 0


def test_order_by_value_puts_most_valuable_on_top():
    board = BoardCore()
    pieces = [King("white", "a1"), Pawn("white", "a2"), Queen("white", "a3"), Knight("white", "a4")]
    ordered = board.order_by_value(pieces)
    values = [board.material_value(p.kind) for p in ordered]
    assert values == sorted(values)
    assert sorted(map(id, ordered)) == sorted(map(id, pieces))


def test_order_by_value_reverses_equal_pieces():
    board = BoardCore()
    first, second = Pawn("white", "a2"), Pawn("white", "b2")
    assert board.order_by_value([first, second]) == [second, first]


def test_watchers_of_occupied_square():
    board = BoardCore()
    result = board.watchers("d2")
    assert {p.coord for p in result} == {"b1", "c1", "d1", "e1"}
    assert result[0].kind == "K"
    assert result[-1].kind in "BN"
    assert len(board.pieces_coords()) == 32


def test_watchers_of_unwatched_square():
    board = BoardCore()
    assert board.watchers("e4") == []


def test_try_and_undo_simple_move():
    board = BoardCore()
    pawn = board.squares[board.index_of("e2")].piece
    board.try_move("e2e4")
    assert board.type_at("e4") == "P"
    assert board.type_at("e2") == " "
    assert pawn.coord == "e4"
    board.undo_move("e2e4")
    assert board.type_at("e2") == "P"
    assert board.type_at("e4") == " "
    assert pawn.coord == "e2"


def test_try_and_undo_capture():
    board = BoardCore()
    victim = board.squares[board.index_of("d7")].piece
    board.try_move("d1d7")
    assert board.type_at("d7") == "Q"
    board.undo_move("d1d7")
    assert board.squares[board.index_of("d7")].piece is victim
    assert board.type_at("d1") == "Q"


def test_king_move_toggles_castling_rights():
    board = BoardCore()
    board.try_move("e1f2")
    assert board.info.white_castle is False
    assert board.info.white_castle_lost == "e1f2"
    board.undo_move("e1f2")
    assert board.info.white_castle is True
    assert board.info.white_castle_lost == ""
    assert board.type_at("f2") == "P"


def test_castle_round_trip():
    board = BoardCore()
    _place(board, "f1", None)
    _place(board, "g1", None)
    board.try_move("O-O")
    assert board.type_at("g1") == "K"
    assert board.type_at("f1") == "R"
    assert board.info.white_castled is True
    board.undo_move("O-O")
    assert board.type_at("e1") == "K"
    assert board.type_at("h1") == "R"
    assert board.type_at("f1") == " "
    assert board.info.white_castle is True


def test_en_passant_round_trip():
    board = BoardCore()
    _place(board, "e5", Pawn("white", "e5"))
    victim = Pawn("black", "d5")
    _place(board, "d5", victim)
    board.info.en_passant = True
    board.info.en_passant_dest = "d6"
    board.try_move("e5d6")
    assert board.type_at("d6") == "P"
    assert board.type_at("d5") == " "
    assert board.info.en_passant is False
    board.undo_move("e5d6")
    assert board.squares[board.index_of("d5")].piece is victim
    assert board.type_at("e5") == "P"
    assert board.type_at("d6") == " "
    assert board.info.en_passant is True


def test_try_move_from_empty_square_raises():
    board = BoardCore()
    with pytest.raises(ValueError):
        board.try_move("e4e5")


def test_count_pieces_on_fresh_board():
    board = BoardCore()
    board.count_pieces()
    assert board.counter.total == 32
    assert board.counter.white_pawn == 8
    assert board.counter.black_pawn == 8
    assert board.counter.black_queen == 1
    assert board.counter.white_king + board.counter.black_king == 2


def test_count_materials():
    board = BoardCore()
    board.count_materials()
    assert board.counter.white_material == 39
    assert board.counter.black_material == 39
    _place(board, "d1", None)
    board.count_materials()
    assert board.counter.white_material == 39 - BoardCore.material_value("Q")
    assert board.counter.black_material == 39


def test_copy_shares_pieces_and_state():
    board = BoardCore()
    board.switch_players()
    copy = BoardCore(board)
    assert copy.info.turn == board.info.turn
    assert copy.info.color == "black"
    assert copy.squares[copy.index_of("e1")].piece is board.squares[board.index_of("e1")].piece
    copy.squares[copy.index_of("e1")].piece = None
    assert board.type_at("e1") == "K"