from pathlib import Path

import pytest

from launcherz.models import LibraryItem, ScanMode


def touch(p: Path, data: bytes = b"stub") -> Path:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data)
    return p


class FakePopen:
    """Stands in for subprocess.Popen; records argv and exits immediately."""
    calls = []
    returncode = 0

    def __init__(self, argv, **kw):
        FakePopen.calls.append((argv, kw))

    def wait(self):
        return self.returncode


@pytest.fixture
def fake_popen(monkeypatch):
    import launcherz.launch as L
    FakePopen.calls = []
    monkeypatch.setattr(L.subprocess, "Popen", FakePopen)
    return FakePopen


@pytest.fixture
def games_root(tmp_path):
    root = tmp_path / "Games"
    touch(root / "GameA" / "GameA.exe")
    touch(root / "GameA" / "UnityCrashHandler.exe")
    touch(root / "GameA" / "unins000.exe")
    return root


def game_item(root: Path, name: str = "GameA.exe", sub: str = "GameA") -> LibraryItem:
    return LibraryItem(name=name, mode=ScanMode.GAMES, folder=str(root / sub))
