"""Settings for the static/DHCP toggle."""

import json
import logging
import sys
from dataclasses import dataclass, fields, replace
from pathlib import Path

APP_NAME = "MacNetConfig"
BUNDLE_ID = "com.macnetconfig.toggle"

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    service: str = "Wi-Fi"
    ip_base: str = "192.168.50"
    mask: str = "255.255.255.0"
    router: str = "192.168.50.222"
    max_probes: int = 100
    ping_timeout_ms: int = 1000


def config_paths() -> list:
    """Candidate config.json locations, highest priority first."""
    paths = [Path.home() / ".config" / "macnetconfig" / "config.json"]
    if getattr(sys, 'frozen', False):
        # Running as bundled app
        paths.append(Path(sys.executable).parent.parent / "Resources" / "config.json")
    else:
        paths.append(Path(__file__).parent / "config.json")
    return paths


def load_settings(paths=None) -> Settings:
    """
    Build Settings from the first config.json found.

    Unknown keys are ignored; a missing file means defaults. A file that
    cannot be read or parsed is logged and the defaults are used.
    """
    if paths is None:
        paths = config_paths()

    config_path = None
    for p in paths:
        if Path(p).exists():
            config_path = Path(p)
            break

    if config_path is None:
        log.info("No config.json found, using defaults")
        return Settings()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        log.warning("Failed to parse config %s: %s", config_path, e)
        return Settings()

    if not isinstance(data, dict):
        log.warning("Ignoring config %s: expected a JSON object", config_path)
        return Settings()

    known = {f.name for f in fields(Settings)}
    overrides = {}
    for key, value in data.items():
        if key not in known:
            log.warning("Ignoring unknown config key %r", key)
            continue
        default = getattr(Settings, key)
        if isinstance(default, int):
            try:
                value = int(value)
            except (TypeError, ValueError):
                log.warning("Ignoring non-integer %s=%r", key, value)
                continue
            if value < 1:
                log.warning("Ignoring %s=%r: must be at least 1", key, value)
                continue
        else:
            value = str(value).strip()
        overrides[key] = value

    log.info("Loaded config from %s", config_path)
    return replace(Settings(), **overrides)
