"""
Session controller: owns settings, playtime and the current item list.

All mutating methods are meant to be called from one thread (the view's).
`request_launch` hands the blocking wait to a worker thread; the worker only
puts a LaunchOutcome on a queue, and `poll()` applies it back on the caller's
thread.
"""
from __future__ import annotations

import logging
import queue
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from . import launch as tracker
from .models import ItemView, LaunchOutcome, LibraryItem, ScanMode, Session, SessionState, Settings
from .playtime import load_legacy_paths, load_playtime, save_playtime
from .scanning import EXCLUDED_PREFIXES, EXEC_EXT, SHORTCUT_EXT, scan
from .settings import load_settings, save_settings

logger = logging.getLogger(__name__)

Publish = Callable[[List[ItemView]], None]

class SessionController:
    def __init__(self, settings_file: Path, playtime_file: Path, *,
                 publish: Optional[Publish] = None,
                 exec_ext: str = EXEC_EXT,
                 shortcut_ext: str = SHORTCUT_EXT,
                 excluded: Sequence[str] = EXCLUDED_PREFIXES,
                 launcher: Callable[..., int] = tracker.launch):
        self.settings_file = Path(settings_file)
        self.playtime_file = Path(playtime_file)
        self.publish = publish
        self.exec_ext = exec_ext
        self.shortcut_ext = shortcut_ext
        self.excluded = tuple(excluded)
        self.launcher = launcher
        self.session = Session()
        self._done: "queue.Queue[LaunchOutcome]" = queue.Queue()
        self._worker: Optional[threading.Thread] = None

    # ── views ────────────────────────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def settings(self) -> Settings:
        return self.session.settings

    @property
    def playtime(self) -> Dict[str, int]:
        return self.session.playtime

    @property
    def is_launching(self) -> bool:
        return self.session.launching is not None

    def current_items(self) -> List[ItemView]:
        pt = self.session.playtime
        return [ItemView(name=i.name, mode=i.mode, folder=i.folder, playtime_ms=pt.get(i.name, 0))
                for i in self.session.items]

    def find_item(self, name: str, folder: Optional[str] = None) -> Optional[LibraryItem]:
        """Same-named files in two game folders are told apart by `folder`."""
        return next((i for i in self.session.items
                     if i.name == name and (folder is None or i.folder == folder)), None)

    # ── events ───────────────────────────────────────────────────────────────

    def on_startup(self) -> List[ItemView]:
        s = self.session
        s.settings = load_settings(self.settings_file)
        if s.settings.is_empty():
            self._migrate_legacy_paths()
        s.playtime = load_playtime(self.playtime_file)
        s.state = SessionState.READY

        if s.settings.games_folder:
            return self._rescan(ScanMode.GAMES)
        if s.settings.shortcuts_folder:
            return self._rescan(ScanMode.SHORTCUTS)
        s.active_mode = None
        s.items = []
        return self._publish()

    def on_folder_picked(self, mode: ScanMode, path: str) -> List[ItemView]:
        mode = ScanMode(mode)
        self.session.settings.set_folder(mode, str(path))
        self._persist_settings()
        return self._rescan(mode)

    def on_item_activated(self, name: str, folder: Optional[str] = None) -> Optional[int]:
        """Launch and wait on the calling thread. Returns elapsed ms or None."""
        item = self.find_item(name, folder)
        if item is None or self.is_launching:
            logger.warning("Ignoring activation of %r", name)
            return None
        self._begin(item)
        outcome = self._run(item)
        self.complete_launch(outcome)
        return outcome.elapsed_ms

    def request_launch(self, name: str, folder: Optional[str] = None) -> bool:
        """Start a launch on a worker thread. False if ignored."""
        item = self.find_item(name, folder)
        if item is None:
            logger.warning("No item named %r in the current list", name)
            self.session.status = f"Unknown item: {name}"
            return False
        if self.is_launching:
            logger.info("Launch of %r ignored, %r is still running", name, self.session.launching)
            return False
        self._begin(item)
        self._worker = threading.Thread(target=lambda: self._done.put(self._run(item)),
                                        name=f"launch-{item.name}", daemon=True)
        self._worker.start()
        return True

    def poll(self) -> bool:
        """Apply finished launches. Returns True if anything changed."""
        changed = False
        while True:
            try:
                outcome = self._done.get_nowait()
            except queue.Empty:
                return changed
            self.complete_launch(outcome)
            changed = True

    def wait_for_launch(self, timeout: Optional[float] = None) -> bool:
        """Block until the in-flight launch posts its outcome, then apply it."""
        try:
            outcome = self._done.get(timeout=timeout)
        except queue.Empty:
            return False
        self.complete_launch(outcome)
        return True

    def complete_launch(self, outcome: LaunchOutcome) -> None:
        s = self.session
        s.launching = None
        s.launching_folder = None
        s.state = SessionState.READY
        if not outcome.ok:
            logger.error("Launch failed: %s", outcome.error)
            s.status = f"Launch failed: {outcome.error}"
            return

        name = outcome.item.name
        total = tracker.accumulate(s.playtime, name, outcome.elapsed_ms)
        s.status = f"{name} ran for {outcome.elapsed_ms // 1000} s"
        logger.info("%s: +%d ms, total %d ms", name, outcome.elapsed_ms, total)
        try:
            save_playtime(self.playtime_file, s.playtime)
        except OSError as e:
            logger.error("Could not save playtime to %s: %s", self.playtime_file, e)
            s.status = f"Could not save playtime: {e}"
        if s.active_mode is not None:
            self._rescan(s.active_mode)

    def rescan(self) -> List[ItemView]:
        if self.session.active_mode is None:
            return self._publish()
        return self._rescan(self.session.active_mode)

    # ── internals ────────────────────────────────────────────────────────────

    def _begin(self, item: LibraryItem) -> None:
        self.session.launching = item.name
        self.session.launching_folder = item.folder
        self.session.state = SessionState.LAUNCHING
        self.session.status = f"Running {item.name}"

    def _run(self, item: LibraryItem) -> LaunchOutcome:
        # worker side: touches nothing but its own arguments
        try:
            elapsed = self.launcher(item, item.folder)
        except tracker.LaunchError as e:
            return LaunchOutcome(item=item, error=str(e))
        except Exception as e:
            # an outcome must always be posted or the session stays LAUNCHING
            logger.exception("Launcher crashed on %s", item.name)
            return LaunchOutcome(item=item, error=f"{item.name}: {e}")
        return LaunchOutcome(item=item, elapsed_ms=elapsed)

    def _rescan(self, mode: ScanMode) -> List[ItemView]:
        s = self.session
        folder = s.settings.folder_for(mode)
        s.active_mode = mode
        s.state = SessionState.SCANNING
        try:
            s.items = scan(folder, mode, exec_ext=self.exec_ext,
                           shortcut_ext=self.shortcut_ext, excluded=self.excluded)
        finally:
            s.state = SessionState.LAUNCHING if self.is_launching else SessionState.READY
        return self._publish()

    def _publish(self) -> List[ItemView]:
        views = self.current_items()
        if self.publish is not None:
            self.publish(views)
        return views

    def _persist_settings(self) -> None:
        try:
            save_settings(self.settings_file, self.session.settings)
        except OSError as e:
            logger.error("Could not save settings to %s: %s", self.settings_file, e)
            self.session.status = f"Could not save settings: {e}"

    def _migrate_legacy_paths(self) -> None:
        games, shortcuts = load_legacy_paths(self.playtime_file)
        legacy = Settings(games_folder=games, shortcuts_folder=shortcuts)
        if legacy.is_empty():
            return
        logger.info("Moving folder paths out of %s into %s", self.playtime_file, self.settings_file)
        self.session.settings = legacy
        self._persist_settings()
