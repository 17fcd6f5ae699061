"""
Toggle state for the menu-bar app.

Kept free of any toolkit import so the logic can run without a menu bar.
"""

import logging
from typing import Callable, Optional

import netconfig
from netconfig import NetworkConfigError
from settings import Settings
from store import LastIPStore

log = logging.getLogger(__name__)

STATUS_READY = "Ready."
STATUS_STATIC = "Static"
STATUS_DHCP = "DHCP"
STATUS_UNKNOWN = "Unknown"


class ToggleController:
    """Owns `applied`, `status` and `current_ip` and runs the toggle."""

    def __init__(
        self,
        settings: Settings,
        store: LastIPStore,
        probe: Optional[Callable[[str], bool]] = None,
        detect=netconfig.detect_network_state,
        apply=netconfig.apply_config,
        stop=netconfig.stop_config,
    ):
        self.settings = settings
        self.store = store
        self.probe = probe
        self._detect = detect
        self._apply = apply
        self._stop = stop

        self.applied = False
        self.status = STATUS_READY
        self.current_ip: Optional[str] = None
        self.last_error: Optional[str] = None

    def refresh(self) -> None:
        """Re-derive state from the OS."""
        try:
            info = self._detect(self.settings.service)
        except NetworkConfigError as e:
            log.warning("Could not read state of %s: %s", self.settings.service, e)
            self.applied = False
            self.status = STATUS_UNKNOWN
            self.current_ip = None
            return

        self.applied = not info.is_dhcp
        self.status = STATUS_STATIC if self.applied else STATUS_DHCP
        self.current_ip = info.ip

    def toggle(self) -> bool:
        """
        Switch between static and DHCP.

        Returns True on success. On failure the mode is left as it was and
        the error is reported through `status` and `last_error`.
        """
        try:
            if self.applied:
                self._stop(self.settings)
            else:
                self.current_ip = self._apply(self.settings, self.store, self.probe)
        except NetworkConfigError as e:
            log.warning("Toggle failed: %s", e)
            self.last_error = str(e)
            self.status = f"Failed: {e}. Try running with sudo."
            return False

        self.applied = not self.applied
        self.last_error = None
        self.status = STATUS_STATIC if self.applied else STATUS_DHCP
        if not self.applied:
            self.current_ip = None
        log.info("Switched %s to %s", self.settings.service, self.tooltip)
        return True

    @property
    def tooltip(self) -> str:
        if self.current_ip:
            return f"{self.status} ({self.current_ip})"
        return self.status

    @property
    def toggle_label(self) -> str:
        return "Stop" if self.applied else "Apply"
