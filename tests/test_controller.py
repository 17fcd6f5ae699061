# tests/test_controller.py
import pytest
from unittest.mock import MagicMock, patch
from controller import ToggleController
from netconfig import NetworkConfigError, NetworkInfo

def make_controller(settings, store, detect=None, apply=None, stop=None, probe=None):
    return ToggleController(
        settings, store, probe=probe,
        detect=detect or MagicMock(return_value=NetworkInfo(is_dhcp=True, ip="192.168.1.23")),
        apply=apply or MagicMock(return_value="192.168.50.50"),
        stop=stop or MagicMock(),
    )

def test_initial_state(settings, store):
    c = make_controller(settings, store)
    assert c.applied is False
    assert c.status == "Ready."
    assert c.tooltip == "Ready."
    assert c.toggle_label == "Apply"

def test_refresh_dhcp(settings, store):
    c = make_controller(settings, store)
    c.refresh()
    assert c.applied is False
    assert c.status == "DHCP"
    assert c.tooltip == "DHCP (192.168.1.23)"

def test_refresh_static(settings, store):
    detect = MagicMock(return_value=NetworkInfo(is_dhcp=False, ip="192.168.50.50"))
    c = make_controller(settings, store, detect=detect)
    c.refresh()
    detect.assert_called_once_with("Wi-Fi")
    assert c.applied is True
    assert c.status == "Static"
    assert c.toggle_label == "Stop"

def test_refresh_failure_is_unknown(settings, store):
    detect = MagicMock(side_effect=NetworkConfigError("command exited with status 1"))
    c = make_controller(settings, store, detect=detect)
    c.applied = True
    c.current_ip = "192.168.50.50"
    c.refresh()
    assert c.applied is False
    assert c.status == "Unknown"
    assert c.current_ip is None

def test_toggle_apply_success(settings, store, make_probe):
    probe = make_probe()
    apply = MagicMock(return_value="192.168.50.77")
    c = make_controller(settings, store, apply=apply, probe=probe)
    c.refresh()
    assert c.toggle() is True
    apply.assert_called_once_with(settings, store, probe)
    assert c.applied is True
    assert c.current_ip == "192.168.50.77"
    assert c.tooltip == "Static (192.168.50.77)"
    assert c.toggle_label == "Stop"
    assert c.last_error is None

def test_toggle_stop_success_clears_ip(settings, store):
    stop = MagicMock()
    detect = MagicMock(return_value=NetworkInfo(is_dhcp=False, ip="192.168.50.50"))
    c = make_controller(settings, store, detect=detect, stop=stop)
    c.refresh()
    assert c.toggle() is True
    stop.assert_called_once_with(settings)
    assert c.applied is False
    assert c.current_ip is None
    assert c.tooltip == "DHCP"

def test_toggle_failure_keeps_mode_and_reports(settings, store):
    apply = MagicMock(side_effect=NetworkConfigError("command exited with status 1"))
    c = make_controller(settings, store, apply=apply)
    c.refresh()
    assert c.toggle() is False
    assert c.applied is False
    assert c.status == "Failed: command exited with status 1. Try running with sudo."
    assert c.last_error == "command exited with status 1"
    assert c.toggle_label == "Apply"

def test_toggle_usable_after_failure(settings, store):
    apply = MagicMock(side_effect=[NetworkConfigError("no available IP found in subnet"), "192.168.50.9"])
    c = make_controller(settings, store, apply=apply)
    assert c.toggle() is False
    assert c.toggle() is True
    assert c.applied is True
    assert c.last_error is None

def test_toggle_round_trip(settings, store):
    c = make_controller(settings, store)
    c.refresh()
    c.toggle()
    c.toggle()
    assert c.applied is False
    assert c.status == "DHCP"

def test_end_to_end_with_fake_probe(settings, store, make_probe):
    """Real apply/stop with networksetup mocked out."""
    store.save("192.168.50.50")
    done = MagicMock(returncode=0, stdout="", stderr="")
    with patch("netconfig._run", return_value=done):
        c = ToggleController(settings, store, probe=make_probe(),
                             detect=MagicMock(return_value=NetworkInfo(is_dhcp=True)))
        c.refresh()
        assert c.toggle() is True
        assert c.tooltip == "Static (192.168.50.50)"
        assert c.toggle() is True
    assert c.tooltip == "DHCP"

def test_toggle_with_corrupt_last_ip_file_fails_cleanly(settings, store, make_probe):
    store.path.parent.mkdir(parents=True)
    store.path.write_bytes(b"\xff\xfe192.168.50.50")
    done = MagicMock(returncode=0, stdout="", stderr="")
    with patch("netconfig._run", return_value=done) as run:
        c = ToggleController(settings, store, probe=make_probe())
        assert c.toggle() is False
    run.assert_not_called()
    assert c.applied is False
    assert c.status.startswith("Failed: read last_ip")
