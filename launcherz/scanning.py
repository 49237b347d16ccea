import logging
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from .models import LibraryItem, ScanMode

logger = logging.getLogger(__name__)

EXEC_EXT = ".exe"
SHORTCUT_EXT = ".lnk"
# engine crash handlers and uninstallers ship next to the game binary
EXCLUDED_PREFIXES = ("Unity", "unins")

class ScanError(OSError):
    pass

def _list_dir(folder: Path) -> List[Path]:
    try:
        return list(folder.iterdir())
    except OSError as e:
        err = ScanError(e.errno, e.strerror, str(folder))
        logger.warning("Skipping %s: %s", folder, err)
        return []

def _is_file(p: Path) -> bool:
    try:
        return p.is_file()
    except OSError:
        return False

def _is_dir(p: Path) -> bool:
    try:
        return p.is_dir()
    except OSError:
        return False

def is_game_executable(name: str, exec_ext: str = EXEC_EXT,
                       excluded: Sequence[str] = EXCLUDED_PREFIXES) -> bool:
    # prefixes are case-sensitive
    return name.endswith(exec_ext) and not name.startswith(tuple(excluded))

def scan_shortcuts(root: Path, shortcut_ext: str = SHORTCUT_EXT) -> List[LibraryItem]:
    return [
        LibraryItem(name=p.name, mode=ScanMode.SHORTCUTS, folder=str(root))
        for p in _list_dir(root)
        if p.name.endswith(shortcut_ext) and _is_file(p)
    ]

def scan_games(root: Path, exec_ext: str = EXEC_EXT,
               excluded: Sequence[str] = EXCLUDED_PREFIXES) -> List[LibraryItem]:
    """One level of game folders; executables directly inside each, no deeper."""
    items: List[LibraryItem] = []
    for sub in _list_dir(root):
        if not _is_dir(sub):
            continue
        for f in _list_dir(sub):
            if is_game_executable(f.name, exec_ext, excluded) and _is_file(f):
                items.append(LibraryItem(name=f.name, mode=ScanMode.GAMES, folder=str(sub)))
    return items

def sort_items(items: Iterable[LibraryItem]) -> List[LibraryItem]:
    return sorted(items, key=lambda i: (i.name, i.folder))

def scan(root: Union[str, Path], mode: ScanMode, *,
         exec_ext: str = EXEC_EXT, shortcut_ext: str = SHORTCUT_EXT,
         excluded: Sequence[str] = EXCLUDED_PREFIXES) -> List[LibraryItem]:
    root = Path(root)
    if mode is ScanMode.SHORTCUTS:
        items = scan_shortcuts(root, shortcut_ext)
    else:
        items = scan_games(root, exec_ext, excluded)
    logger.info("Scanned %s (%s): %d item(s)", root, mode.value, len(items))
    return sort_items(items)
