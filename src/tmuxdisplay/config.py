"""Configuration management for tmuxdisplay.

Handles default pane placement and runtime settings from tmuxdisplay.toml.
"""

from pathlib import Path
from typing import Optional
import tempfile
import tomllib

from .types import PaneConfig

CONFIG_FILENAME = "tmuxdisplay.toml"


def _find_config_file() -> Optional[Path]:
    """Find tmuxdisplay.toml in current or parent directories."""
    current = Path.cwd()

    for parent in [current] + list(current.parents):
        config_file = parent / CONFIG_FILENAME
        if config_file.exists():
            return config_file

    return None


def _load_config(path: Optional[Path] = None) -> dict:
    """Load raw configuration from file."""
    if path is None:
        path = _find_config_file()

    if path is None or not path.exists():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


class ConfigManager:
    """Manages configuration for tmuxdisplay."""

    def __init__(self, path: Optional[Path] = None, data: Optional[dict] = None):
        if data is None:
            self._config_file = path or _find_config_file()
            data = _load_config(self._config_file)
        else:
            self._config_file = path
        self.data = data
        self._default_config = self.data.get("default", {})

    @property
    def config_file(self) -> Optional[Path]:
        return self._config_file

    def pane_config(self) -> PaneConfig:
        """Get placement for panes created without an explicit config."""
        return PaneConfig(
            horizontal=bool(self._default_config.get("horizontal", False)),
            size=self._default_config.get("size"),
            focus=bool(self._default_config.get("focus", False)),
        )

    @property
    def tmux_binary(self) -> str:
        """Get tmux executable."""
        return self._default_config.get("tmux", "tmux")

    @property
    def join_timeout(self) -> float:
        """Get bounded wait for watcher shutdown, in seconds."""
        return float(self._default_config.get("join_timeout", 1.0))

    @property
    def channel_dir(self) -> Path:
        """Get directory for synchronization channel nodes."""
        channel_dir = self._default_config.get("channel_dir")
        if channel_dir:
            return Path(channel_dir).expanduser()
        return Path(tempfile.gettempdir())


# Global instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def set_config_manager(manager: Optional[ConfigManager]) -> None:
    """Replace the global config manager. None reloads on next access."""
    global _config_manager
    _config_manager = manager
