"""
Environment Config Provider - Load configuration from environment variables.

Supports:
- Environment variables (GITHUB_TOKEN, GITHUB_REPOSITORY, MDISSUES_*)
- .env files
- Programmatic overrides
"""

import os
from pathlib import Path
from typing import Any, Optional

from ...core.ports.config_provider import (
    ConfigProviderPort,
    AppConfig,
    TrackerConfig,
    SyncConfig,
    DEFAULT_API_URL,
    DEFAULT_CLOSED_DIR,
    DEFAULT_OPEN_DIR,
    DEFAULT_STATE_FILE,
)


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Configuration provider that loads from environment variables and .env files.

    Precedence: overrides, then environment, then .env file.
    """

    ENV_MAPPING = {
        "GH_TOKEN": "token",
        "GITHUB_TOKEN": "token",
        "GITHUB_REPOSITORY": "repository",
        "GITHUB_API_URL": "api_url",
        "MDISSUES_OPEN_DIR": "open_dir",
        "MDISSUES_CLOSED_DIR": "closed_dir",
        "MDISSUES_STATE_FILE": "state_file",
        "MDISSUES_TIMEOUT": "timeout",
        "MDISSUES_VERBOSE": "verbose",
    }

    def __init__(
        self,
        root: Optional[Path] = None,
        env_file: Optional[Path] = None,
        overrides: Optional[dict[str, Any]] = None,
        environ: Optional[dict[str, str]] = None,
    ):
        """
        Initialize the config provider.

        Args:
            root: Working tree root; relative paths resolve against it
            env_file: Path to .env file (auto-detected if not specified)
            overrides: Values that win over every other source
            environ: Environment mapping (defaults to os.environ)
        """
        self._values: dict[str, Any] = {}
        self._root = Path(root) if root else Path.cwd()
        self._env_file = env_file
        self._overrides = overrides or {}
        self._environ = os.environ if environ is None else environ

        # Load configuration
        self._load_env_file()
        self._load_environment()

    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Environment"

    def load(self) -> AppConfig:
        """Load complete configuration."""
        tracker = TrackerConfig(
            token=self.get("token", ""),
            repository=self.get("repository", ""),
            api_url=self.get("api_url", DEFAULT_API_URL),
            timeout=float(self.get("timeout", 30.0)),
        )

        sync = SyncConfig(
            root=self._root,
            open_dir=Path(self.get("open_dir", DEFAULT_OPEN_DIR)),
            closed_dir=Path(self.get("closed_dir", DEFAULT_CLOSED_DIR)),
            state_file=Path(self.get("state_file", DEFAULT_STATE_FILE)),
        )

        return AppConfig(
            tracker=tracker,
            sync=sync,
            verbose=self.get("verbose", False) is True,
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        # Normalize key
        key = key.lower().replace("-", "_")

        if key in self._overrides and self._overrides[key] is not None:
            return self._overrides[key]

        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        key = key.lower().replace("-", "_")
        self._values[key] = value

    def validate(self) -> list[str]:
        """Validate configuration."""
        errors = []

        if not self.get("token"):
            errors.append("Missing GITHUB_TOKEN - set in environment or .env file")
        if not self.get("repository"):
            errors.append(
                "Missing GITHUB_REPOSITORY - set it or add a GitHub 'origin' remote"
            )

        try:
            float(self.get("timeout", 30.0))
        except (TypeError, ValueError):
            errors.append(f"Invalid MDISSUES_TIMEOUT: {self.get('timeout')!r}")

        return errors

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _load_env_file(self) -> None:
        """Load values from .env file."""
        env_file = self._find_env_file()
        if not env_file:
            return

        for line in env_file.read_text().splitlines():
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            # Parse key=value
            if "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip().upper()
            value = value.strip().strip('"').strip("'")

            if key in self.ENV_MAPPING:
                self._store(self.ENV_MAPPING[key], value)

    def _find_env_file(self) -> Optional[Path]:
        """Find .env file."""
        if self._env_file and self._env_file.exists():
            return self._env_file

        root_env = self._root / ".env"
        if root_env.exists():
            return root_env

        return None

    def _load_environment(self) -> None:
        """Load values from environment variables."""
        for env_key, config_key in self.ENV_MAPPING.items():
            raw_value = self._environ.get(env_key)
            if raw_value:
                self._store(config_key, raw_value)

    def _store(self, config_key: str, raw_value: str) -> None:
        if config_key == "verbose":
            # Convert boolean-ish values
            self._values[config_key] = raw_value.lower() in ("true", "1", "yes")
        else:
            self._values[config_key] = raw_value
