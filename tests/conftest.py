# tests/conftest.py
import sys, os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from settings import Settings
from store import LastIPStore


class FakeProbe:
    """Liveness probe that answers for a fixed set of addresses."""

    def __init__(self, busy=()):
        self.busy = set(busy)
        self.calls = []

    def __call__(self, ip):
        self.calls.append(ip)
        return ip in self.busy


@pytest.fixture
def settings():
    return Settings(service="Wi-Fi", ip_base="192.168.50", router="192.168.50.222")

@pytest.fixture
def store(tmp_path):
    return LastIPStore(path=tmp_path / "MacNetConfig" / "last_ip.txt")

@pytest.fixture
def make_probe():
    return FakeProbe
