from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .utils import format_minutes

class ScanMode(str, Enum):
    GAMES = "games"
    SHORTCUTS = "shortcuts"

class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    SCANNING = "scanning"
    LAUNCHING = "launching"

@dataclass(frozen=True)
class LibraryItem:
    name: str           # bare filename, also the playtime key
    mode: ScanMode
    folder: str         # directory that holds the file

@dataclass
class Settings:
    games_folder: Optional[str] = None
    shortcuts_folder: Optional[str] = None

    def folder_for(self, mode: ScanMode) -> Optional[str]:
        return self.games_folder if mode is ScanMode.GAMES else self.shortcuts_folder

    def set_folder(self, mode: ScanMode, path: Optional[str]) -> None:
        if mode is ScanMode.GAMES:
            self.games_folder = path
        else:
            self.shortcuts_folder = path

    def is_empty(self) -> bool:
        return not self.games_folder and not self.shortcuts_folder

@dataclass
class ItemView:
    name: str
    mode: ScanMode
    folder: str
    playtime_ms: int

    @property
    def playtime_minutes(self) -> int:
        return format_minutes(self.playtime_ms)

    @property
    def label(self) -> str:
        return f"{self.name} (Playtime: {self.playtime_minutes} min)"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "mode": self.mode.value,
            "folder": self.folder,
            "playtime_ms": self.playtime_ms,
            "playtime_minutes": self.playtime_minutes,
        }

@dataclass
class LaunchOutcome:
    item: LibraryItem
    elapsed_ms: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.elapsed_ms is not None

@dataclass
class Session:
    settings: Settings = field(default_factory=Settings)
    playtime: Dict[str, int] = field(default_factory=dict)
    active_mode: Optional[ScanMode] = None
    items: List[LibraryItem] = field(default_factory=list)
    state: SessionState = SessionState.UNINITIALIZED
    launching: Optional[str] = None     # name of the item in flight
    launching_folder: Optional[str] = None
    status: str = ""                    # last message for the view

    @property
    def active_folder(self) -> Optional[str]:
        if self.active_mode is None:
            return None
        return self.settings.folder_for(self.active_mode)
