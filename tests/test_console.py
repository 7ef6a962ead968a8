from shellchess.console import (
    COLOR_END,
    CURSOR_UP,
    ERASE_LINE,
    memory_failed,
    system_failed,
)


def test_system_failed_reports_message(capsys):
    status = system_failed(False, "Stockfish not found.")
    captured = capsys.readouterr()
    assert status == 1
    assert captured.err == "System failed: Stockfish not found.\nClosing the game...\n"
    assert captured.out == ""


def test_system_failed_erases_previous_line(capsys):
    system_failed(True, "getline() failed.")
    captured = capsys.readouterr()
    assert captured.out == f"{CURSOR_UP}{ERASE_LINE}\n{ERASE_LINE}"
    assert "getline() failed." in captured.err


def test_memory_failed_reports(capsys):
    status = memory_failed(False)
    captured = capsys.readouterr()
    assert status == 1
    assert captured.err == "Memory allocation failed. Closing the game...\n"
    assert captured.out == ""


def test_memory_failed_erases_previous_line(capsys):
    memory_failed(True)
    captured = capsys.readouterr()
    assert captured.out.startswith(CURSOR_UP)
    assert captured.out.count(ERASE_LINE) == 2


def test_erase_output_uses_terminal_codes(capsys):
    memory_failed(True)
    captured = capsys.readouterr()
    assert captured.out == "\033[1A\033[2K\n\033[2K"
    assert COLOR_END not in captured.out