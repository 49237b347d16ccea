# launcherz/launch.py
from __future__ import annotations

import logging
import subprocess
import time
from pathlib import Path
from typing import Callable, Dict, List, Union

from .models import LibraryItem
from .scanning import SHORTCUT_EXT
from .utils import is_windows

logger = logging.getLogger(__name__)

class LaunchError(Exception):
    def __init__(self, name: str, reason: str):
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason

# ──────────────────────────────────────────────────────────────────────────────
# Small helpers
# ──────────────────────────────────────────────────────────────────────────────

def resolve_target(item: LibraryItem, root: Union[Path, str]) -> Path:
    return Path(root) / item.name

def build_argv(target: Path) -> List[str]:
    """Direct spawn, no arguments. Windows can't CreateProcess a .lnk, so
    those go through `start /wait` which blocks until the target exits."""
    if is_windows() and target.suffix.lower() == SHORTCUT_EXT:
        return ["cmd.exe", "/c", "start", "", "/wait", str(target)]
    return [str(target)]

def _now_ms(clock: Callable[[], float]) -> int:
    return int(round(clock() * 1000))

# ──────────────────────────────────────────────────────────────────────────────
# Public API
# ──────────────────────────────────────────────────────────────────────────────

def launch(item: LibraryItem, root: Union[Path, str], *,
           clock: Callable[[], float] = time.time) -> int:
    """
    Spawn `root/item.name` and block until it exits.

    Returns elapsed wall-clock milliseconds. Raises LaunchError if the process
    can't be started or waited on; nothing is recorded in that case.
    """
    target = resolve_target(item, root)
    argv = build_argv(target)
    logger.info("Launching %s", target)

    start = _now_ms(clock)
    try:
        p = subprocess.Popen(argv, shell=False)
    except FileNotFoundError:
        raise LaunchError(item.name, f"not found: {target}") from None
    except PermissionError:
        raise LaunchError(item.name, f"permission denied: {target}") from None
    except OSError as e:
        raise LaunchError(item.name, str(e)) from e

    try:
        code = p.wait()
    except OSError as e:
        raise LaunchError(item.name, f"interrupted while waiting: {e}") from e

    elapsed = max(0, _now_ms(clock) - start)
    logger.info("%s exited with %s after %d ms", item.name, code, elapsed)
    return elapsed

def accumulate(playtime: Dict[str, int], name: str, elapsed_ms: int) -> int:
    total = playtime.get(name, 0) + max(0, int(elapsed_ms))
    playtime[name] = total
    return total
