import logging
from pathlib import Path

from .models import Settings
from .utils import read_kv_file, write_kv_file

logger = logging.getLogger(__name__)

GAMES_KEY = "gamesFolder"
SHORTCUTS_KEY = "shortcutsFolder"

def load_settings(settings_file: Path) -> Settings:
    settings = Settings()
    try:
        if settings_file.exists():
            data = read_kv_file(settings_file)
            settings.games_folder = data.get(GAMES_KEY) or None
            settings.shortcuts_folder = data.get(SHORTCUTS_KEY) or None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read settings from %s: %s", settings_file, e)
    return settings

def save_settings(settings_file: Path, settings: Settings) -> None:
    data = {}
    if settings.games_folder:
        data[GAMES_KEY] = settings.games_folder
    if settings.shortcuts_folder:
        data[SHORTCUTS_KEY] = settings.shortcuts_folder
    write_kv_file(settings_file, data, header="Game Launcher Z settings")
