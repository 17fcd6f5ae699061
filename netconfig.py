"""
networksetup wrappers: read the service state, pick a free address,
switch between a static configuration and DHCP.
"""

import ipaddress
import logging
import random
import subprocess
from dataclasses import dataclass
from typing import Callable, List, Optional

log = logging.getLogger(__name__)

NETWORKSETUP = "networksetup"
PING = "ping"
DEFAULT_ROUTER_HOST = 222


class NetworkConfigError(Exception):
    """A failed query, apply or store operation. str(e) is shown to the user."""


@dataclass
class NetworkInfo:
    is_dhcp: bool
    ip: Optional[str] = None


def _run(args: List[str]) -> subprocess.CompletedProcess:
    log.debug("Running: %s", " ".join(args))
    try:
        return subprocess.run(args, capture_output=True, text=True, errors="replace")
    except OSError as e:
        raise NetworkConfigError(f"failed to run command: {e}") from e


def parse_getinfo(text: str) -> NetworkInfo:
    """Parse the output of `networksetup -getinfo <service>`."""
    is_dhcp = "DHCP Configuration" in text or "dhcp" in text
    ip = None
    for line in text.splitlines():
        if line.startswith("IP address:"):
            value = line[len("IP address:"):].strip()
            if value:
                ip = value
    return NetworkInfo(is_dhcp=is_dhcp, ip=ip)


def detect_network_state(service: str) -> NetworkInfo:
    result = _run([NETWORKSETUP, "-getinfo", service])
    if result.returncode != 0:
        raise NetworkConfigError(f"command exited with status {result.returncode}")
    return parse_getinfo(result.stdout)


def ping_host(ip: str, timeout_ms: int = 1000) -> bool:
    """Return True if `ip` answers a single ICMP echo.

    A ping still running two seconds past its own timeout is killed and the
    host counted as free.
    """
    try:
        result = subprocess.run(
            [PING, "-c", "1", "-W", str(timeout_ms), ip],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=timeout_ms / 1000 + 2,
        )
    except subprocess.TimeoutExpired:
        log.warning("Probe %s: ping timed out", ip)
        return False
    except OSError as e:
        raise NetworkConfigError(f"failed to run ping: {e}") from e
    in_use = result.returncode == 0
    log.debug("Probe %s: %s", ip, "in use" if in_use else "free")
    return in_use


def router_host(router: str) -> int:
    try:
        host = int(router.rsplit(".", 1)[-1])
    except ValueError:
        return DEFAULT_ROUTER_HOST
    if not 0 <= host <= 255:
        return DEFAULT_ROUTER_HOST
    return host


def candidate_hosts(router: str) -> List[int]:
    """Host numbers 2..254 minus the router's."""
    skip = router_host(router)
    return [n for n in range(2, 255) if n != skip]


def choose_free_ip(
    ip_base: str,
    router: str,
    probe: Callable[[str], bool],
    max_probes: int = 100,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Return the first address in `ip_base`.0/24 that does not answer `probe`.

    Candidates are tried in random order and at most `max_probes` of them
    are probed.
    """
    candidates = candidate_hosts(router)
    (rng or random).shuffle(candidates)

    for host in candidates[:max(0, max_probes)]:
        ip = f"{ip_base}.{host}"
        if not probe(ip):
            log.info("Picked free address %s", ip)
            return ip

    raise NetworkConfigError("no available IP found in subnet")


def is_reusable(ip: Optional[str], ip_base: str, router: str) -> bool:
    """True if a persisted address may be tried again in this subnet."""
    if not ip or not ip.startswith(f"{ip_base}."):
        return False
    try:
        addr = ipaddress.IPv4Address(ip)
    except ValueError:
        return False
    return int(str(addr).rsplit(".", 1)[-1]) in candidate_hosts(router)


def apply_config(settings, store, probe: Optional[Callable[[str], bool]] = None) -> str:
    """Switch `settings.service` to a static address and return that address."""
    if probe is None:
        def probe(ip):
            return ping_host(ip, settings.ping_timeout_ms)

    last = store.load()
    if is_reusable(last, settings.ip_base, settings.router) and not probe(last):
        ip = last
        log.info("Reusing last address %s", ip)
    else:
        if last:
            log.info("Last address %s not reusable, allocating", last)
        ip = choose_free_ip(
            settings.ip_base, settings.router, probe, settings.max_probes
        )

    result = _run([
        NETWORKSETUP, "-setmanual", settings.service,
        ip, settings.mask, settings.router,
    ])
    if result.returncode != 0:
        raise NetworkConfigError(f"command exited with status {result.returncode}")

    try:
        store.save(ip)
    except NetworkConfigError as e:
        log.warning("Could not remember %s: %s", ip, e)
    return ip


def stop_config(settings) -> None:
    """Put `settings.service` back on DHCP."""
    result = _run([NETWORKSETUP, "-setdhcp", settings.service])
    if result.returncode != 0:
        raise NetworkConfigError(f"command exited with status {result.returncode}")
