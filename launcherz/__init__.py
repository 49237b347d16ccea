import os
from pathlib import Path
from flask import Flask
from .routes import bp as routes_bp
from .session import SessionController

# Bind only localhost unless overridden
BIND = os.environ.get("BIND", "127.0.0.1")
PORT = int(os.environ.get("PORT", "5000"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

def ensure_state_dir(state_dir: str) -> None:
    if not os.path.isdir(state_dir):
        raise SystemExit(f"LAUNCHERZ_HOME does not exist: {state_dir}")

def create_app(state_dir: str, *, startup: bool = True) -> Flask:
    app = Flask(__name__)
    app.secret_key = os.environ.get("FLASK_SECRET", "dev-" + os.urandom(8).hex())
    app.config["STATE_DIR"] = state_dir
    app.config["APP_TITLE"] = "Game Launcher Z"
    app.config["SETTINGS_FILE"] = os.path.join(state_dir, "settings.properties")
    app.config["PLAYTIME_FILE"] = os.path.join(state_dir, "playtime.properties")
    app.config["EXEC_EXT"] = ".exe"
    app.config["SHORTCUT_EXT"] = ".lnk"
    app.config["EXCLUDED_PREFIXES"] = ("Unity", "unins")

    controller = SessionController(
        Path(app.config["SETTINGS_FILE"]),
        Path(app.config["PLAYTIME_FILE"]),
        exec_ext=app.config["EXEC_EXT"],
        shortcut_ext=app.config["SHORTCUT_EXT"],
        excluded=app.config["EXCLUDED_PREFIXES"],
    )
    app.extensions["launcherz"] = controller
    if startup:
        controller.on_startup()

    app.register_blueprint(routes_bp)
    return app
