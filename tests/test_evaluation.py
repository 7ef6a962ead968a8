from shellchess.evaluation import ScoringBoard
from shellchess.pieces import make_piece


def _play(board, *moves):
    for move in moves:
        board.try_move(move)
        board.switch_players()


def _snapshot(board):
    return [(s.coord, s.piece.kind if s.piece else None) for s in board.squares]


def _endgame_board():
    board = ScoringBoard()
    for square in board.squares:
        square.piece = None
    for kind, color, coord in (("K", "white", "c1"), ("R", "white", "a2"), ("K", "black", "e5")):
        board.squares[board.index_of(coord)].piece = make_piece(kind, color, coord)
    return board


def test_initial_position_is_balanced():
    board = ScoringBoard()
    assert board.score("white") == board.score("black")


def test_score_leaves_board_untouched():
    board = ScoringBoard()
    before = _snapshot(board)
    board.score("black")
    assert board.info.turn == 0
    assert board.info.color == "white"
    assert _snapshot(board) == before
    assert all(s.piece.visible for s in board.squares if s.piece is not None)


def test_mate_in_one_dominates_score():
    board = ScoringBoard()
    _play(board, "f2f3", "e7e5", "g2g4")
    black = board.score("black")
    white = board.score("white")
    assert black > 0 > white
    assert board.info.turn == 3
    assert board.info.color == "black"


def test_extra_rook_in_endgame_favours_its_side():
    board = _endgame_board()
    assert board.is_end_game()
    assert board.score("white") > board.score("black")


def test_score_is_repeatable():
    board = _endgame_board()
    white = board.score("white")
    black = board.score("black")
    assert white > 0
    assert board.score("white") == white
    assert board.score("black") == black
    assert white > black