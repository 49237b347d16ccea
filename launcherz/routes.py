from __future__ import annotations
import os
from flask import Blueprint, current_app, render_template_string, redirect, url_for, flash, request, jsonify

from .models import ScanMode
from .session import SessionController
from .templates import INDEX_HTML

bp = Blueprint("launcherz", __name__)

def _controller() -> SessionController:
    return current_app.extensions["launcherz"]

def _wants_json() -> bool:
    return request.accept_mimetypes.accept_json and not request.accept_mimetypes.accept_html

@bp.before_request
def _apply_finished_launches():
    # the only place worker results are folded back into the session
    _controller().poll()

@bp.get("/")
def index():
    c = _controller()
    s = c.session
    return render_template_string(
        INDEX_HTML,
        app_title=current_app.config["APP_TITLE"],
        items=c.current_items(),
        settings=s.settings,
        active_mode=s.active_mode,
        active_folder=s.active_folder,
        launching=s.launching,
        launching_folder=s.launching_folder,
        status=s.status,
    )

@bp.post("/folder")
def pick_folder():
    c = _controller()
    try:
        mode = ScanMode(request.form.get("mode", ""))
    except ValueError:
        flash("Unknown folder type.")
        return redirect(url_for("launcherz.index"))

    path = (request.form.get("path") or "").strip().strip('"')
    if not path or not os.path.isabs(path):
        flash("Please enter an absolute folder path.")
        return redirect(url_for("launcherz.index"))
    if not os.path.isdir(path):
        flash(f"Folder not found: {path}")
        return redirect(url_for("launcherz.index"))

    items = c.on_folder_picked(mode, path)
    flash(f"Found {len(items)} item(s) in {path}.")
    return redirect(url_for("launcherz.index"))

@bp.post("/launch/<path:name>")
def launch_item(name):
    c = _controller()
    ok = c.request_launch(name, request.values.get("folder") or None)
    if ok:
        msg = f"Launched {name}."
    elif c.is_launching:
        msg = f"{c.session.launching} is still running."
    else:
        msg = f"Unknown item: {name}"

    if _wants_json():
        return (jsonify({"ok": ok, ("message" if ok else "error"): msg}), 200 if ok else 409)

    flash(msg)
    return redirect(url_for("launcherz.index"))

@bp.get("/rescan")
def rescan():
    items = _controller().rescan()
    flash(f"Rescanned: {len(items)} item(s).")
    return redirect(url_for("launcherz.index"))

@bp.get("/api/items")
def api_items():
    c = _controller()
    s = c.session
    return jsonify({
        "state": s.state.value,
        "launching": s.launching,
        "mode": s.active_mode.value if s.active_mode else None,
        "status": s.status,
        "items": [v.to_dict() for v in c.current_items()],
    })

@bp.get("/favicon.ico")
def favicon():
    return ("", 204)
