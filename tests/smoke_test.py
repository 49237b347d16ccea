#!/usr/bin/env python3
"""
Smoke test for Game Launcher Z.

Checks:
- Games folder scan (Unity*/unins* filtered) and shortcuts scan
- Settings + playtime persisted in separate files
- Launch path composed and dispatched (Popen mocked), playtime accumulated
- Restart picks up persisted folder and playtime
"""
import shutil, tempfile
from pathlib import Path

from launcherz import create_app, ensure_state_dir
from launcherz.models import ScanMode
from launcherz.playtime import load_playtime
from launcherz.settings import load_settings


def _touch(p: Path, data: bytes = b""):
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data or b"stub")


def mock_popen_calls():
    calls = []
    class _P:
        def __init__(self, *a, **kw):
            calls.append((a, kw))
        def wait(self):
            return 0
    return _P, calls


def main():
    tmp = Path(tempfile.mkdtemp(prefix="launcherz_test_"))
    try:
        state = tmp / "state"
        state.mkdir()
        games = tmp / "Games"
        _touch(games / "GameA" / "GameA.exe")
        _touch(games / "GameA" / "UnityCrashHandler64.exe")
        _touch(games / "GameA" / "unins000.exe")
        _touch(games / "GameB" / "bin" / "nested.exe")
        shortcuts = tmp / "Shortcuts"
        _touch(shortcuts / "Foo.lnk")
        _touch(shortcuts / "Foo.txt")

        ensure_state_dir(str(state))
        app = create_app(str(state))
        cfg = app.config
        ctrl = app.extensions["launcherz"]

        # Fresh start: nothing configured
        assert ctrl.current_items() == [], "expected no items before a folder is picked"

        # Shortcuts first, then games
        views = ctrl.on_folder_picked(ScanMode.SHORTCUTS, str(shortcuts))
        assert [v.name for v in views] == ["Foo.lnk"]
        views = ctrl.on_folder_picked(ScanMode.GAMES, str(games))
        assert [v.name for v in views] == ["GameA.exe"], f"unexpected items: {views}"

        saved = load_settings(Path(cfg["SETTINGS_FILE"]))
        assert saved.games_folder == str(games) and saved.shortcuts_folder == str(shortcuts)

        # Mock Popen: synchronous launch
        import launcherz.launch as L
        PopenSaved = L.subprocess.Popen
        FakePopen, calls = mock_popen_calls()
        L.subprocess.Popen = FakePopen  # type: ignore
        try:
            elapsed = ctrl.on_item_activated("GameA.exe")
            assert elapsed is not None, "launch failed"
            assert calls, "no Popen call captured for exe launch"
            argv = calls[0][0][0]
            assert argv == [str(games / "GameA" / "GameA.exe")]
        finally:
            L.subprocess.Popen = PopenSaved

        pt = load_playtime(Path(cfg["PLAYTIME_FILE"]))
        assert pt == {"GameA.exe": elapsed}
        assert "path." not in Path(cfg["PLAYTIME_FILE"]).read_text(encoding="utf-8")

        # Restart: games folder wins over shortcuts, playtime survives
        app2 = create_app(str(state))
        ctrl2 = app2.extensions["launcherz"]
        assert ctrl2.session.active_mode is ScanMode.GAMES
        assert [(v.name, v.playtime_ms) for v in ctrl2.current_items()] == [("GameA.exe", elapsed)]

        # Report
        print("[OK] Items:", [v.label for v in ctrl2.current_items()])
        print("[OK] Settings:", saved)
        print("[OK] Launch path composed and dispatched (mocked).")
        print("[OK] Playtime persisted:", pt)

    finally:
        shutil.rmtree(tmp, ignore_errors=True)


def test_smoke():
    main()


if __name__ == "__main__":
    main()
