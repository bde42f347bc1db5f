"""Application configuration manager wrapping QSettings."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from PySide6.QtCore import QObject, QSettings, Signal

from token_watcher.types import Service

logger = logging.getLogger(__name__)

ORGANIZATION = "token-watcher"
APPLICATION = "token-watcher"

# Default values
DEFAULTS = {
    "general/projectsDir": "~/.claude/projects",
    "general/maxConcurrentScans": 16,
    "claude/enabled": True,
    "claude/credentialsPath": "~/.claude/.credentials.json",
    "codex/enabled": True,
    "codex/credentialsPath": "~/.codex/auth.json",
    "network/timeout": 10,
    "advanced/debugLogging": False,
}


@dataclass(frozen=True)
class ServiceAvailability:
    claude: bool
    codex: bool
    configured: list[Service] = field(default_factory=list)

    @property
    def any_configured(self) -> bool:
        return bool(self.configured)


class ConfigManager(QObject):
    """Centralized application settings."""

    settings_changed = Signal(str)  # key

    def __init__(self, settings: QSettings | None = None, parent=None):
        super().__init__(parent)
        self._settings = settings if settings is not None else QSettings(ORGANIZATION, APPLICATION)

    def get_string(self, key: str) -> str:
        return str(self._settings.value(key, DEFAULTS.get(key, "")))

    def get_int(self, key: str) -> int:
        val = self._settings.value(key, DEFAULTS.get(key, 0))
        try:
            return int(val)
        except (ValueError, TypeError):
            logger.warning("Invalid integer for %s: %r", key, val)
            return DEFAULTS.get(key, 0)

    def get_bool(self, key: str) -> bool:
        val = self._settings.value(key, DEFAULTS.get(key, False))
        if isinstance(val, bool):
            return val
        if isinstance(val, str):
            return val.lower() in ("true", "1", "yes")
        return bool(val)

    def get_path(self, key: str) -> Path:
        """Get a path setting with ~ expanded; blank values use the default."""
        value = self.get_string(key).strip() or str(DEFAULTS.get(key, ""))
        return Path(value).expanduser()

    def set_string(self, key: str, value: str):
        self._settings.setValue(key, value)
        self.settings_changed.emit(key)

    def set_int(self, key: str, value: int):
        self._settings.setValue(key, value)
        self.settings_changed.emit(key)

    def set_bool(self, key: str, value: bool):
        self._settings.setValue(key, value)
        self.settings_changed.emit(key)

    def sync(self):
        self._settings.sync()


def check_service_availability(config: ConfigManager) -> ServiceAvailability:
    """Report which services are enabled and have a credentials file."""
    claude = (config.get_bool("claude/enabled")
              and config.get_path("claude/credentialsPath").is_file())
    codex = (config.get_bool("codex/enabled")
             and config.get_path("codex/credentialsPath").is_file())

    configured = []
    if claude:
        configured.append(Service.CLAUDE)
    if codex:
        configured.append(Service.CODEX)
    return ServiceAvailability(claude=claude, codex=codex, configured=configured)
