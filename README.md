# shellchess

A chess game played in the terminal. Moves are typed in algebraic notation
(`e4`, `Nf3`, `exd5`, `Bb5+`, `O-O`, `e8Q`, ...). The board is redrawn after
every move, and malformed ("Invalid move") or illegal ("Illegal move") input
is reported without ending the game. Checkmate and draws (no legal move while
not in check, or material that cannot mate) end the game, and a summary of
all moves played is printed at the end.

## Installing

```
pip install .
```

To play against the computer, a `stockfish` executable must be on your `PATH`.
Its strength is limited to an Elo rating picked at random between 1400 and
2000, and it is given either white or black at random. While it runs, its
answers are collected in a file named `.stockfish.answer` in the current
directory; the file is removed when the game ends.

## Playing

```
shell-chess [--sandbox] [--blind-mode]
```

- with no option, you play one side and Stockfish plays the other;
- `--sandbox` lets you play both sides yourself, no engine needed;
- `--blind-mode` hides the board: only the moves are shown.

Both options may be given together, each at most once. Any other argument
prints a usage message and nothing else.

Press ENTER at the title screen to start, then type a move at each `>` prompt.
Type `end` to leave the game.

## Notation accepted

| Input     | Meaning                                  |
|-----------|------------------------------------------|
| `e4`      | pawn to e4                               |
| `Nf3`     | knight to f3                             |
| `Nbd2`    | knight from the b-file to d2             |
| `exd5`    | pawn on the e-file takes on d5           |
| `Bxc6+`   | bishop takes on c6, giving check         |
| `e2-e4`   | explicit source and destination          |
| `e8Q`     | pawn promotes to a queen                 |
| `O-O`     | castle kingside                          |
| `O-O-O`   | castle queenside                         |

## Using the modules

The game can also be driven from Python:

```python
from shellchess.board import ChessBoard
from shellchess.notation import AlgebraParser

board = ChessBoard()
parser = AlgebraParser()
for text in ["e4", "e5", "Nf3"]:
    parsed = parser.parse(text)
    if parser.failed or not board.play_move(parsed):
        raise SystemExit(f"bad move: {text}")
    parser.turn = board.info.turn

print(board.board_text())
print(board.history_text())
```

- `shellchess.notation.AlgebraParser.parse` checks a typed move and returns a
  `ParsedMove`; `failed` tells whether the text was malformed.
- `shellchess.board.ChessBoard.play_move` plays a parsed move, or a move given
  as text in the form piece, source, destination (`text="Pe2e4"`) or as a
  castle (`text="O-O"`), and returns `False` when it is illegal.
- `ChessBoard` also answers `is_legal`, `legal_moves`, `is_check`,
  `is_checkmate`, `is_draw`, `is_game_over` and `score(color)`, and keeps the
  moves played in `history` and, in engine form (`e2e4`), in
  `simple_history`.
- `shellchess.engine.ChessAi` starts the engine (by default the `stockfish`
  command) and, used as a context manager, stops it on exit;
  `best_move(moves)` returns its move after the given history, and raises
  `EngineError` when the engine cannot be started or gives no answer.

## What it does not do

There is no graphical board: the game is played only in the terminal. Games
cannot be saved or loaded, there is no undo, and draws by repetition or by the
fifty-move rule are not detected.

## Running the tests

```
pip install .[test]
pytest
```