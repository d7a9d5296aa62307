from pathlib import Path

import pytest
from loguru import logger

from gamerack.settings import parse_config


class FakeProcess:
    pid = 4242

    def __init__(self, code: int):
        self.code = code

    def wait(self):
        return self.code


def mock_popen_calls(code: int = 0, raises: Exception = None):
    calls = []

    def _popen(*a, **kw):
        calls.append((a, kw))
        if raises is not None:
            raise raises
        return FakeProcess(code)
    return _popen, calls


@pytest.fixture(autouse=True)
def _quiet_logs(tmp_path, monkeypatch):
    monkeypatch.setenv("GAMERACK_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("GAMERACK_CONFIG", raising=False)
    logger.remove()
    yield
    logger.remove()


@pytest.fixture
def popen(monkeypatch):
    """Replace subprocess.Popen; returns the list of recorded calls."""
    import gamerack.launch as L
    fake, calls = mock_popen_calls()
    monkeypatch.setattr(L.subprocess, "Popen", fake)
    return calls


@pytest.fixture
def write_config(tmp_path):
    def _write(text: str) -> Path:
        p = tmp_path / "games.toml"
        p.write_text(text, encoding="utf-8")
        return p
    return _write


LIBRARY = """
[settings]
width = 1920
height = 1080

[directories]
games_dir = "/home/u/Games"

[games.morrowind]
name = "Morrowind"
cmd = "openmw"
tags = ["rpg", "classic"]

[games.bg3]
name = "Baldur's Gate 3"
prefix_dir = "games_dir"
dir = "Baldur's Gate 3"
wine_exe = "bg3.exe"
tags = ["rpg"]

[games.doom]
name = "Doom"
cmd = "dsda-doom -iwad DOOM.WAD"
tags = ["classic", "fps"]

[games.sc2k]
name = "SimCity 2000"
dosbox_config = "sc2k.conf"
installed = false
tags = ["classic", "sim"]

[games.atlantis]
name = "Indiana Jones and the Fate of Atlantis"
scummvm_id = "atlantis"
"""


@pytest.fixture
def library():
    return parse_config(LIBRARY)
