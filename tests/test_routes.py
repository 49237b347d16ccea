import pytest

from launcherz import create_app
from launcherz.settings import load_settings

from conftest import touch


@pytest.fixture
def client(tmp_path):
    state = tmp_path / "state"
    state.mkdir()
    app = create_app(str(state))
    app.config["TESTING"] = True
    return app, app.test_client()


def test_index_without_folders(client):
    _, c = client
    r = c.get("/")
    assert r.status_code == 200
    assert b"Select a games folder" in r.data


def test_pick_folder_persists_and_lists(client, games_root):
    app, c = client
    r = c.post("/folder", data={"mode": "games", "path": str(games_root)}, follow_redirects=True)
    assert r.status_code == 200
    assert b"GameA.exe (Playtime: 0 min)" in r.data
    assert b"UnityCrashHandler" not in r.data
    saved = load_settings(app.extensions["launcherz"].settings_file)
    assert saved.games_folder == str(games_root)


def test_pick_folder_rejects_bad_input(client, tmp_path):
    _, c = client
    r = c.post("/folder", data={"mode": "games", "path": "relative/dir"}, follow_redirects=True)
    assert b"absolute folder path" in r.data
    r = c.post("/folder", data={"mode": "games", "path": str(tmp_path / "missing")}, follow_redirects=True)
    assert b"Folder not found" in r.data
    r = c.post("/folder", data={"mode": "roms", "path": str(tmp_path)}, follow_redirects=True)
    assert b"Unknown folder type" in r.data


def test_launch_json_and_completion(client, tmp_path):
    app, c = client
    sc = tmp_path / "Shortcuts"
    touch(sc / "Foo.lnk")
    ctrl = app.extensions["launcherz"]
    ctrl.launcher = lambda item, root: 90000
    c.post("/folder", data={"mode": "shortcuts", "path": str(sc)})

    r = c.post("/launch/Foo.lnk", headers={"Accept": "application/json"})
    assert r.status_code == 200
    assert r.get_json()["ok"] is True
    assert ctrl.wait_for_launch(timeout=5)

    data = c.get("/api/items").get_json()
    assert data["mode"] == "shortcuts"
    assert data["launching"] is None
    assert data["items"] == [
        {"name": "Foo.lnk", "mode": "shortcuts", "folder": str(sc),
         "playtime_ms": 90000, "playtime_minutes": 1}
    ]


def test_launch_unknown_item(client):
    _, c = client
    r = c.post("/launch/nope.exe", headers={"Accept": "application/json"})
    assert r.status_code == 409
    assert "Unknown item" in r.get_json()["error"]


def test_rescan_and_favicon(client, games_root):
    _, c = client
    c.post("/folder", data={"mode": "games", "path": str(games_root)})
    touch(games_root / "GameB" / "GameB.exe")
    r = c.get("/rescan", follow_redirects=True)
    assert b"GameB.exe" in r.data
    assert c.get("/favicon.ico").status_code == 204


def test_launch_form_targets_the_clicked_folder(client, tmp_path):
    app, c = client
    touch(tmp_path / "G" / "A" / "launcher.exe")
    touch(tmp_path / "G" / "B" / "launcher.exe")
    roots = []
    ctrl = app.extensions["launcherz"]
    ctrl.launcher = lambda item, root: roots.append(root) or 0
    r = c.post("/folder", data={"mode": "games", "path": str(tmp_path / "G")}, follow_redirects=True)
    assert r.data.count(b'name="folder"') == 2

    second = str(tmp_path / "G" / "B")
    r = c.post("/launch/launcher.exe", data={"folder": second},
               headers={"Accept": "application/json"})
    assert r.get_json()["ok"] is True
    assert ctrl.wait_for_launch(timeout=5)
    assert roots == [second]
