"""
Config Provider Port - Abstract interface and configuration records.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from ..domain.naming import DEFAULT_EXTENSION

DEFAULT_OPEN_DIR = "issues"
DEFAULT_CLOSED_DIR = "issues/closed"
DEFAULT_STATE_FILE = ".issues-sync-state"
DEFAULT_API_URL = "https://api.github.com"


@dataclass
class TrackerConfig:
    """Remote tracker connection settings."""

    token: str = ""
    repository: str = ""  # owner/name
    api_url: str = DEFAULT_API_URL
    timeout: float = 30.0


@dataclass
class SyncConfig:
    """
    Local layout settings, passed explicitly into every reconciler.

    Relative directories and the state file resolve against ``root``.
    """

    root: Path = field(default_factory=Path.cwd)
    open_dir: Path = Path(DEFAULT_OPEN_DIR)
    closed_dir: Path = Path(DEFAULT_CLOSED_DIR)
    state_file: Path = Path(DEFAULT_STATE_FILE)
    extension: str = DEFAULT_EXTENSION

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        self.open_dir = self._resolve(self.open_dir)
        self.closed_dir = self._resolve(self.closed_dir)
        self.state_file = self._resolve(self.state_file)

    def _resolve(self, path: Any) -> Path:
        path = Path(path)
        if path.is_absolute():
            return path
        return self.root / path

    @property
    def tracked_dirs(self) -> tuple[Path, Path]:
        return (self.open_dir, self.closed_dir)

    def ensure_dirs(self) -> None:
        """Create both tracked directories if absent."""
        self.open_dir.mkdir(parents=True, exist_ok=True)
        self.closed_dir.mkdir(parents=True, exist_ok=True)


@dataclass
class AppConfig:
    """Complete application configuration."""

    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    verbose: bool = False


class ConfigProviderPort(ABC):
    """Abstract interface for configuration sources."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def load(self) -> AppConfig:
        """Load complete configuration."""
        ...

    @abstractmethod
    def get(self, key: str, default: Optional[Any] = None) -> Any:
        ...

    @abstractmethod
    def validate(self) -> list[str]:
        """Return a list of human-readable configuration problems."""
        ...
