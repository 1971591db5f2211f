# tests/conftest.py
import pytest

import hrad


class ScriptedConsole:
    """Stands in for the terminal: feeds prepared lines, records everything written."""

    def __init__(self, lines=()):
        self.lines = list(lines)
        self.output = []

    def feed(self, *lines):
        self.lines.extend(lines)

    def read_line(self):
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)

    def write(self, text):
        self.output.append(text)

    @property
    def transcript(self):
        return "\n".join(self.output)


@pytest.fixture(autouse=True)
def debug_log(tmp_path, monkeypatch):
    """Keep the game's debug log out of the working directory."""
    log_path = tmp_path / "debug.log"
    monkeypatch.setattr(hrad.Config, "DEBUG_LOG", str(log_path))
    return log_path


@pytest.fixture
def console():
    return ScriptedConsole()


@pytest.fixture
def fixed_question(monkeypatch):
    """Every fight asks "2 + 2" so scripted answers are predictable."""
    monkeypatch.setattr(hrad, "generate_question", lambda rng=None: ("2 + 2", 4))
    return "4"


@pytest.fixture
def session(console):
    game = hrad.new_session(read_line=console.read_line, write=console.write)
    # Hide the key somewhere known.
    for room in game.rooms.values():
        room.has_key = False
    game.rooms["Knihovna"].has_key = True
    return game
