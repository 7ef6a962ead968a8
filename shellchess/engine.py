"""A UCI chess engine driven through its standard input."""

from __future__ import annotations

import random
import shlex
import subprocess
import time
from pathlib import Path
from typing import Iterable, Sequence

_ELO_LEVELS = ("1400", "1500", "1600", "1700", "1800", "1900", "2000")


class EngineError(RuntimeError):
    """The engine could not be started or gave no usable answer."""


def parse_best_move(output: str) -> str:
    """Extract the move following "bestmove" from engine output.

    A promotion letter is returned in upper case.
    """
    if not output:
        raise EngineError("Stockfish failed.")

    word = ""
    index = 0
    while index < len(output) and word != "bestmove":
        char = output[index]
        word = "" if char in " \n" else word + char
        index += 1
    if word != "bestmove":
        raise EngineError("Stockfish failed.")

    best = ""
    for char in output[index + 1:]:
        if char in " \n\0":
            break
        best += char

    if not best or len(best) > 5:
        raise EngineError("Stockfish failed.")
    if len(best) == 5:
        best = best[:4] + best[4].upper()
    return best


class ChessAi:
    """An engine process whose answers are collected in a file."""

    wait_seconds = 1.0

    def __init__(
        self,
        command: str | Sequence[str] = "stockfish",
        answer_path: str | Path = ".stockfish.answer",
    ) -> None:
        self._argv = shlex.split(command) if isinstance(command, str) else list(command)
        self._answer_path = Path(answer_path)
        self._process: subprocess.Popen | None = None
        self._writer = None
        self._reader = None

        self._probe()

        try:
            self._writer = open(self._answer_path, "w")
            self._reader = open(self._answer_path, "r")
        except OSError as exc:
            self.close()
            raise EngineError("Cannot open the engine answer file.") from exc

        try:
            self._process = subprocess.Popen(
                self._argv,
                stdin=subprocess.PIPE,
                stdout=self._writer,
                text=True,
            )
        except OSError as exc:
            self.close()
            raise EngineError("Cannot start the engine.") from exc

        try:
            self._send("uci")
            self._send("setoption name UCI_LimitStrength value true")
            self._send(f"setoption name UCI_Elo {random.choice(_ELO_LEVELS)}")
        except EngineError:
            self.close()
            raise

    def _probe(self) -> None:
        if not self._argv:
            raise EngineError("Stockfish not found.")
        try:
            result = subprocess.run(
                self._argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as exc:
            raise EngineError("Stockfish not found.") from exc
        if result.returncode != 0:
            raise EngineError("Stockfish not found.")

    def _send(self, line: str) -> None:
        if self._process is None or self._process.stdin is None:
            raise EngineError("Stockfish failed.")
        try:
            self._process.stdin.write(f"{line}\n")
            self._process.stdin.flush()
        except (OSError, ValueError) as exc:
            raise EngineError("Stockfish failed.") from exc

    def best_move(self, moves: Iterable[str]) -> str:
        """Ask the engine for its move after the given UCI move history."""
        history = "".join(f"{move} " for move in moves)
        self._send(f"position startpos moves {history}")
        self._send("go movetime 500")
        time.sleep(self.wait_seconds)
        if self._reader is None:
            raise EngineError("Stockfish failed.")
        return parse_best_move(self._reader.read())

    def close(self) -> None:
        """Stop the engine and remove its answer file."""
        if self._process is not None:
            process, self._process = self._process, None
            if process.stdin is not None:
                try:
                    process.stdin.close()
                except OSError:
                    pass
            try:
                process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                process.kill()
                process.wait()
        if self._reader is not None:
            self._reader.close()
            self._reader = None
        if self._writer is not None:
            self._writer.close()
            self._writer = None
            self._answer_path.unlink(missing_ok=True)

    def __enter__(self) -> "ChessAi":
        return self

    def __exit__(self, *args) -> None:
        self.close()