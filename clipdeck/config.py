"""User preferences (theme and mute) with JSON persistence."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".clipdeck"
DEFAULT_PREFERENCES_PATH = DEFAULT_CONFIG_DIR / "preferences.json"

THEME_KEY = "summoner-clips-theme"
MUTE_KEY = "summoner-clips-muted"

THEMES = ("dark", "light")
DEFAULT_THEME = "dark"


@dataclass
class Preferences:
    # Only these two values survive across sessions
    theme: str = DEFAULT_THEME
    start_muted: bool = False

    def save(self, path: Path | None = None) -> None:
        path = path or DEFAULT_PREFERENCES_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            THEME_KEY: self.theme,
            MUTE_KEY: "true" if self.start_muted else "false",
        }
        path.write_text(json.dumps(data, indent=2))

    @classmethod
    def load(cls, path: Path | None = None) -> "Preferences":
        path = path or DEFAULT_PREFERENCES_PATH
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable preferences file: %s", path)
            return cls()
        if not isinstance(data, dict):
            return cls()
        theme = data.get(THEME_KEY)
        return cls(
            theme=theme if theme in THEMES else DEFAULT_THEME,
            start_muted=data.get(MUTE_KEY) == "true",
        )

    def toggle_theme(self) -> str:
        self.theme = "light" if self.theme == "dark" else "dark"
        return self.theme

    @property
    def is_dark(self) -> bool:
        return self.theme != "light"
