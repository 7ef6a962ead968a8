"""The terminal game: title screen, the move loop and the command line."""

from __future__ import annotations

import random
import sys
import time
from typing import Sequence

from .board import ChessBoard
from .console import COLOR_END, CURSOR_UP, ERASE_LINE, GREEN, memory_failed, system_failed
from .engine import ChessAi, EngineError
from .notation import AlgebraParser

_OPTIONS = ("--sandbox", "--blind-mode")
_KING_CASTLES = {
    "Ke1g1": "O-O",
    "Ke8g8": "O-O",
    "Ke1c1": "O-O-O",
    "Ke8c8": "O-O-O",
}

_TITLE = (
    "                         #-# ############ #-#                            \n"
    "##           #-######-#                         #-######-#           ##  \n"
    "#                 #/-/# ♛ ♞ ♝ shell-chess ♛ ♞ ♝ #\\-\\#                 #\n"
    "#        #-######-#       #-# by pcapurro #-#       #-######-#        #  \n"
    "##                #-######-#               #-######-#                ##  \n"
    "                                                                         \n"
    "                    ♖ ## Press ENTER to start! ## ♖                      \n"
)


class ShellGameError(RuntimeError):
    """The game had to stop: input ended, the engine failed or the board broke."""

    def __init__(self, message: str, memory: bool = False) -> None:
        super().__init__(message)
        self.memory = memory


def _read_line() -> str:
    line = sys.stdin.readline()
    if line == "":
        raise EOFError("end of input")
    return line.rstrip("\r\n")


class ShellGame:
    """A game played in the terminal, against the engine or in sandbox mode.

    Outside sandbox mode an engine must be given; the side it plays is drawn
    at random and kept in `ai_side` (0 for white, 1 for black, -1 for none).
    """

    def __init__(self, blind_mode: bool = False, sandbox_mode: bool = False, ai=None) -> None:
        self.blind_mode = blind_mode
        self.sandbox_mode = sandbox_mode
        self.ai = ai
        self.ai_side = -1
        if not sandbox_mode:
            if ai is None:
                raise ValueError("an engine is needed outside sandbox mode")
            self.ai_side = random.randrange(2)
        self.board = ChessBoard()
        self.parser = AlgebraParser()

    def _ai_to_play(self) -> bool:
        return not self.sandbox_mode and self.board.info.turn % 2 == self.ai_side % 2

    def _engine_answer(self) -> str:
        try:
            answer = self.ai.best_move(list(self.board.simple_history))
        except (EngineError, OSError) as exc:
            raise ShellGameError("Stockfish failed.") from exc
        if not answer or answer == "error" or len(answer) < 4:
            raise ShellGameError("Stockfish failed.")

        kind = self.board.type_at(answer[:2])
        castle = _KING_CASTLES.get(kind + answer)
        if castle is not None:
            return castle

        src = answer[0:2]
        dest = answer[2:4]
        if kind != "P":
            src = kind + src
        if len(answer) == 5:
            dest += answer[4]
        separator = "x" if self.board.type_at(dest) != " " else "-"
        return src + separator + dest

    def answer(self) -> str:
        """The next move: asked of the engine on its turn, read from the player otherwise."""
        if self._ai_to_play():
            return self._engine_answer()

        sys.stdout.write(f"{ERASE_LINE}> ")
        sys.stdout.flush()
        try:
            line = _read_line()
        except EOFError as exc:
            raise ShellGameError("getline() failed.") from exc
        finally:
            sys.stdout.write(CURSOR_UP)
            sys.stdout.flush()
        return line

    def run(self) -> None:
        """Play until the game ends or the player types "end"."""
        board = self.board
        parser = self.parser
        if not self.blind_mode:
            board.print_board(self.ai_side)

        while not board.is_game_over():
            board.print_event(parser.failed, board.failed, self.blind_mode)
            text = self.answer()
            if text == "end":
                return

            parsed = parser.parse(text)
            if not parsed.error and (parser.failed or not board.play_move(parsed)):
                continue
            if parsed.error or not board.allocated:
                raise ShellGameError("board allocation failed.", memory=True)

            if not self.blind_mode:
                board.print_board(self.ai_side)
            parser.turn = board.info.turn

        board.print_end_game()


def print_title() -> None:
    """Print the title screen."""
    sys.stdout.write(_TITLE)
    sys.stdout.flush()


def print_gradually(text: str, value: int) -> None:
    """Print text followed by a growing row of dots, slowly when value is 1."""
    points = ""
    for _ in range(4):
        sys.stdout.write(f"{CURSOR_UP}{text}{points}\n")
        sys.stdout.flush()
        points += "."
        time.sleep(1 if value == 1 else 0.005)


def print_loading() -> None:
    """Show the loading animation and announce that the game is ready."""
    print_gradually("Loading", 1)
    sys.stdout.write(f"{GREEN}Game is ready.{COLOR_END}\n")
    sys.stdout.flush()
    time.sleep(1)
    sys.stdout.write("\n")
    sys.stdout.flush()


def init_welcome() -> None:
    """Show the title and wait for ENTER."""
    print_title()
    try:
        _read_line()
    except EOFError:
        system_failed(True, "getline() failed.")
    else:
        sys.stdout.write(f"\033[2A{ERASE_LINE}\n")
        sys.stdout.flush()


def _play(game: ShellGame) -> int:
    try:
        game.run()
    except ShellGameError as exc:
        if exc.memory:
            return memory_failed(True)
        return system_failed(True, str(exc))
    return 0


def initialize_shell_game(sandbox_mode: bool = False, blind_mode: bool = False) -> int:
    """Run a whole game from the title screen; return the exit status."""
    init_welcome()
    print_loading()

    if sandbox_mode:
        return _play(ShellGame(blind_mode, sandbox_mode))

    try:
        ai = ChessAi()
    except (EngineError, OSError) as exc:
        return system_failed(False, str(exc) or "Stockfish not found.")
    with ai:
        return _play(ShellGame(blind_mode, sandbox_mode, ai))


def _print_invalid_arguments() -> None:
    sys.stderr.write("Error! Invalid arguments.\n")
    sys.stderr.write("Usage: ./shell-chess [--sandbox] or/and [--blind-mode]\n")


def validate_arguments(argv: Sequence[str]) -> bool:
    """Tell whether the arguments are at most both options, each given once."""
    if len(argv) > 2:
        return False
    if any(arg not in _OPTIONS for arg in argv):
        return False
    return len(set(argv)) == len(argv)


def parse_arguments(argv: Sequence[str]) -> tuple[bool, bool]:
    """Return (sandbox_mode, blind_mode) from the arguments."""
    if not validate_arguments(argv):
        raise ValueError("invalid arguments")
    return "--sandbox" in argv, "--blind-mode" in argv


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not validate_arguments(args):
        _print_invalid_arguments()
        return 0
    sandbox_mode, blind_mode = parse_arguments(args)
    if initialize_shell_game(sandbox_mode, blind_mode) != 0:
        return 1
    return 0