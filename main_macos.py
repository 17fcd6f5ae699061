"""
MacNetConfig - macOS menu bar app
Toggles a network service between DHCP and a static address in a fixed
/24 subnet using `networksetup`.
"""

import logging
import sys
import tempfile
from pathlib import Path

# macOS menu bar support
try:
    import rumps
except ImportError:
    print("rumps not installed. Install with: pip install rumps")
    sys.exit(1)

from controller import ToggleController
from icons import icon_path
from settings import APP_NAME, load_settings
from store import LastIPStore

LOG_DIR = Path.home() / "Library" / "Logs" / APP_NAME
LOG_FILE = LOG_DIR / "app.log"
CACHE_DIR = Path.home() / "Library" / "Caches" / APP_NAME
REFRESH_INTERVAL = 30

log = logging.getLogger(APP_NAME)


def setup_logging(filename, name="App"):
    # Remove existing handlers
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    try:
        Path(filename).parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        filename = Path(tempfile.gettempdir()) / Path(filename).name

    logging.basicConfig(
        filename=str(filename),
        level=logging.INFO,
        format=f"%(asctime)s [{name}] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Add console handler
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter(f"%(asctime)s [{name}] %(message)s"))
    logging.getLogger().addHandler(console)


class NetConfigApp(rumps.App):
    """macOS Menu Bar Application."""

    def __init__(self, controller: ToggleController):
        self.controller = controller
        self.controller.refresh()

        super().__init__(
            name=APP_NAME,
            icon=icon_path(self.controller.applied, CACHE_DIR),
            quit_button=None  # We'll add our own quit button
        )

        self.setup_menu()
        self.update_ui()

        # Re-read the service state periodically
        self.timer = rumps.Timer(self.timer_refresh, REFRESH_INTERVAL)
        self.timer.start()

    def setup_menu(self):
        """Setup the menu bar menu."""
        self.status_item = rumps.MenuItem(self.controller.tooltip)
        self.status_item.set_callback(None)  # Non-clickable

        self.toggle_item = rumps.MenuItem(
            self.controller.toggle_label, callback=self.toggle_clicked
        )

        self.service_item = rumps.MenuItem(f"Service: {self.controller.settings.service}")
        self.service_item.set_callback(None)  # Non-clickable

        self.menu = [
            self.status_item,
            None,  # Separator
            self.toggle_item,
            None,  # Separator
            self.service_item,
            None,  # Separator
            rumps.MenuItem("Quit", callback=self.quit_app)
        ]

    def timer_refresh(self, sender):
        """Timer callback to refresh status."""
        self.controller.refresh()
        self.update_ui()

    def update_ui(self):
        """Update UI elements based on current state."""
        self.icon = icon_path(self.controller.applied, CACHE_DIR)
        self.status_item.title = self.controller.tooltip
        self.toggle_item.title = self.controller.toggle_label

    def toggle_clicked(self, sender):
        """Handle toggle menu item click."""
        if self.controller.toggle():
            mode = "static address" if self.controller.applied else "DHCP"
            rumps.notification(
                title=APP_NAME,
                subtitle="",
                message=f"{self.controller.settings.service} now on {mode}: "
                        f"{self.controller.tooltip}",
                sound=False
            )
        else:
            rumps.alert("Error", self.controller.status)
        self.update_ui()

    def quit_app(self, sender):
        """Quit the application."""
        log.info("Quit requested")
        rumps.quit_application()


def main():
    setup_logging(LOG_FILE, "Main")
    settings = load_settings()
    log.info("Starting for service %s (%s.0/24, router %s)",
             settings.service, settings.ip_base, settings.router)

    controller = ToggleController(settings, LastIPStore())
    app = NetConfigApp(controller)
    app.run()


if __name__ == "__main__":
    main()
