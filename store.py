"""Remembers the last static address between runs."""

import logging
import os
from pathlib import Path
from typing import Optional

from netconfig import NetworkConfigError
from settings import APP_NAME

log = logging.getLogger(__name__)

STATE_FILENAME = "last_ip.txt"


def state_file_path(app_name: str = APP_NAME) -> Path:
    home = os.environ.get("HOME")
    if not home:
        raise NetworkConfigError("failed to read HOME")
    return Path(home) / "Library" / "Application Support" / app_name / STATE_FILENAME


class LastIPStore:
    """A single trimmed address kept in a text file."""

    def __init__(self, path: Optional[Path] = None, app_name: str = APP_NAME):
        self._path = Path(path) if path is not None else None
        self.app_name = app_name

    @property
    def path(self) -> Path:
        # Resolved lazily so a missing HOME surfaces as a toggle failure
        if self._path is None:
            return state_file_path(self.app_name)
        return self._path

    def load(self) -> Optional[str]:
        path = self.path
        if not path.exists():
            return None
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise NetworkConfigError(f"read last_ip: {e}") from e
        ip = content.strip()
        return ip or None

    def save(self, ip: str) -> None:
        path = self.path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise NetworkConfigError(f"create state dir: {e}") from e
        try:
            path.write_text(ip.strip(), encoding="utf-8")
        except OSError as e:
            raise NetworkConfigError(f"write last_ip: {e}") from e
        log.info("Saved last address %s to %s", ip.strip(), path)
