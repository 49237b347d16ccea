"""Playtime persistence: bare filename -> accumulated milliseconds."""
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

from .utils import read_kv_file, write_kv_file

logger = logging.getLogger(__name__)

# Folder paths lived in the playtime file before settings got their own file.
LEGACY_GAMES_KEY = "path.games"
LEGACY_SHORTCUTS_KEY = "path.shortcuts"
LEGACY_KEYS = (LEGACY_GAMES_KEY, LEGACY_SHORTCUTS_KEY)

def _read(playtime_file: Path) -> Dict[str, str]:
    try:
        if playtime_file.exists():
            return read_kv_file(playtime_file)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read playtime from %s: %s", playtime_file, e)
    return {}

def load_playtime(playtime_file: Path) -> Dict[str, int]:
    """Bad entries are skipped one by one; the rest of the file still loads."""
    playtime: Dict[str, int] = {}
    for name, value in _read(playtime_file).items():
        if name in LEGACY_KEYS:
            continue
        raw = value.strip()
        if not (raw.isascii() and raw.isdigit()):
            logger.warning("Skipping playtime entry %r: %r is not a millisecond count", name, value)
            continue
        playtime[name] = int(raw)
    return playtime

def load_legacy_paths(playtime_file: Path) -> Tuple[Optional[str], Optional[str]]:
    """(games folder, shortcuts folder) from an old merged playtime file."""
    data = _read(playtime_file)
    return (data.get(LEGACY_GAMES_KEY) or None, data.get(LEGACY_SHORTCUTS_KEY) or None)

def save_playtime(playtime_file: Path, playtime: Dict[str, int]) -> None:
    data = {k: str(int(v)) for k, v in playtime.items() if k not in LEGACY_KEYS}
    write_kv_file(playtime_file, data, header="Playtime data")
