"""
Sync State - Persist the last successful pull watermark.

The state file holds a single RFC3339 UTC timestamp. A missing or
unreadable watermark is not an error: the next pull fetches full history.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from ...core.domain.clock import format_timestamp, parse_timestamp


class TimestampStore:
    """Reads and writes the pull watermark file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.logger = logging.getLogger("TimestampStore")

    def load(self) -> Optional[datetime]:
        """
        Load the last sync time.

        Returns:
            Aware UTC datetime, or None to request a full resync
        """
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self.logger.info("No state file found. Performing full sync...")
            return None
        except UnicodeDecodeError:
            content = ""
        except OSError as e:
            self.logger.warning(f"Could not read state file {self.path}: {e}. Performing full sync.")
            return None

        last_sync = parse_timestamp(content)
        if last_sync is None:
            self.logger.warning(
                f"Could not parse state file {self.path}. Performing full sync."
            )
            return None

        self.logger.info(f"Pulling issues updated since {format_timestamp(last_sync)}")
        return last_sync

    def save(self, when: datetime) -> None:
        """
        Commit a new watermark.

        Raises:
            OSError: If the state file cannot be written
        """
        timestamp = format_timestamp(when)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(timestamp, encoding="utf-8")
        self.logger.info(f"Updated state file to {timestamp}")
