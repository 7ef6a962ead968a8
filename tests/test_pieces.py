import pytest

from shellchess.pieces import (
    FILES,
    Bishop,
    King,
    Knight,
    Pawn,
    Queen,
    Rook,
    is_chess_coord,
    is_chess_digit,
    is_chess_piece,
    make_piece,
)

ALL_SQUARES = [f"{f}{r}" for f in "abcdefgh" for r in "12345678"]


def reach(piece, board_coords=()):
    return {sq for sq in ALL_SQUARES if piece.is_on_my_way(sq, board_coords)}


def test_character_classes():
    assert all(is_chess_coord(c) for c in "abcdefgh")
    assert all(is_chess_digit(c) for c in "12345678")
    assert all(is_chess_piece(c) for c in "KQRBN")
    assert not any(is_chess_coord(c) for c in "ix1AO-")
    assert not any(is_chess_digit(c) for c in "09ax")
    assert not any(is_chess_piece(c) for c in "Pkqx")
    assert not is_chess_coord("")
    assert not is_chess_digit("")


def test_make_piece_kinds():
    for letter in "KQRBNP":
        piece = make_piece(letter, "white", "d4")
        assert piece.kind == letter
        assert piece.color == "white"
        assert piece.coord == "d4"


def test_make_piece_unknown():
    with pytest.raises(ValueError):
        make_piece("X", "white", "a1")


def test_move_and_update_pos():
    piece = make_piece("R", "black", "h8")
    assert piece.moves == 0
    piece.move()
    piece.move()
    assert piece.moves == 2
    piece.update_pos("a3")
    assert piece.coord == "a3"
    assert piece.original_coord == "h8"
    assert (piece.x, piece.y) == (FILES.index("a"), 3)


def test_toggle_visibility_round_trip():
    piece = make_piece("N", "white", "b1")
    assert piece.visible
    piece.toggle_visibility()
    assert not piece.visible
    piece.toggle_visibility()
    assert piece.visible


@pytest.mark.parametrize("cls", [King, Knight])
def test_jump_reach_is_symmetric(cls):
    for a in ALL_SQUARES:
        for b in reach(cls("white", a)):
            assert cls("white", b).is_on_my_way(a)


def test_king_never_reaches_own_square():
    for sq in ALL_SQUARES:
        assert sq not in reach(King("white", sq))
        assert len(reach(King("white", sq))) <= 8


def test_king_neighbours():
    king = King("white", "e1")
    assert king.is_on_my_way("d2")
    assert king.is_on_my_way("f1")
    assert not king.is_on_my_way("e3")


def test_rook_reach_on_empty_board():
    for sq in ALL_SQUARES:
        assert len(reach(Rook("white", sq))) == 14


def test_queen_is_rook_plus_bishop():
    for sq in ALL_SQUARES:
        queen = reach(Queen("white", sq))
        assert queen == reach(Rook("white", sq)) | reach(Bishop("white", sq))
        assert not reach(Rook("white", sq)) & reach(Bishop("white", sq))


def test_rook_is_blocked():
    rook = Rook("white", "a1")
    board = ["a1", "a3"]
    assert rook.is_on_my_way("a2", board)
    assert rook.is_on_my_way("a3", board)
    assert not rook.is_on_my_way("a4", board)
    assert rook.is_on_my_way("h1", board)


def test_bishop_is_blocked():
    bishop = Bishop("white", "c1")
    board = ["c1", "e3"]
    assert bishop.is_on_my_way("d2", board)
    assert bishop.is_on_my_way("e3", board)
    assert not bishop.is_on_my_way("f4", board)
    assert not bishop.is_on_my_way("c2", board)


def test_knight_reach_counts():
    assert len(reach(Knight("white", "a1"))) == 2
    assert len(reach(Knight("white", "d4"))) == 8


def test_knight_rejects_invalid_target():
    knight = Knight("white", "b1")
    assert not knight.is_on_my_way("z3")
    assert not knight.is_on_my_way("a")
    assert knight.is_on_my_way("c3")


def test_white_pawn_pushes():
    pawn = Pawn("white", "e2")
    assert pawn.is_on_my_way("e3", ["e2"])
    assert pawn.is_on_my_way("e4", ["e2"])
    assert not pawn.is_on_my_way("e4", ["e2", "e3"])
    assert not pawn.is_on_my_way("e3", ["e2", "e3"])
    pawn.move()
    assert not pawn.is_on_my_way("e4", ["e2"])


def test_white_pawn_captures_only_occupied():
    pawn = Pawn("white", "e4")
    assert not pawn.is_on_my_way("d5", ["e4"])
    assert pawn.is_on_my_way("d5", ["e4", "d5"])
    assert pawn.is_on_my_way("f5", ["e4", "f5"])


def test_pawn_attack_mode_excludes_pushes():
    pawn = Pawn("white", "e2")
    assert not pawn.is_on_my_way("e3", ["e2"], 1)
    assert pawn.is_on_my_way("d3", ["e2", "d3"], 1)


def test_black_pawn_mirrors_white():
    pawn = Pawn("black", "d7")
    assert pawn.is_on_my_way("d6", ["d7"])
    assert pawn.is_on_my_way("d5", ["d7"])
    assert not pawn.is_on_my_way("d8", ["d7"])
    assert pawn.is_on_my_way("c6", ["d7", "c6"])


def test_en_passant():
    white = Pawn("white", "e5")
    assert white.is_on_my_way("d6", ["e5", "d5"], 0, "d6")
    assert not white.is_on_my_way("d6", ["e5", "d5"], 0, "")
    black = Pawn("black", "d4")
    assert black.is_on_my_way("e3", ["d4", "e4"], 0, "e3")
    assert not Pawn("black", "d5").is_on_my_way("e4", ["d5"], 0, "e4")


def test_pawn_edge_files():
    assert not reach(Pawn("white", "a2"), ["a2"]) - {"a3", "a4"}
    assert not reach(Pawn("black", "h7"), ["h7"]) - {"h6", "h5"}
    assert reach(Pawn("white", "h2"), ["h2"]) == reach(Pawn("white", "h2"), ["h2", "a3"])