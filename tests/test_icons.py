# tests/test_icons.py
from icons import create_tray_icon, to_grayscale, render_icon, icon_path, write_app_icon

def test_applied_icon_keeps_color():
    img = render_icon(True)
    r, g, b, a = img.getpixel((32, 32))
    assert (r, g, b) != (r, r, r)
    assert a == 255

def test_unapplied_icon_is_gray():
    img = render_icon(False)
    for xy in [(32, 32), (5, 32), (0, 0)]:
        r, g, b, _ = img.getpixel(xy)
        assert r == g == b

def test_grayscale_keeps_alpha():
    img = create_tray_icon()
    gray = to_grayscale(img)
    assert gray.getpixel((0, 0))[3] == img.getpixel((0, 0))[3] == 0
    assert gray.size == img.size

def test_icon_path_writes_once(tmp_path):
    p = icon_path(False, tmp_path / "cache")
    assert p.endswith("icon_off.png")
    first = (tmp_path / "cache" / "icon_off.png").stat().st_mtime_ns
    assert icon_path(False, tmp_path / "cache") == p
    assert (tmp_path / "cache" / "icon_off.png").stat().st_mtime_ns == first

def test_icon_path_distinguishes_states(tmp_path):
    assert icon_path(True, tmp_path) != icon_path(False, tmp_path)

def test_write_app_icon_produces_icns(tmp_path):
    p = write_app_icon(tmp_path / "build" / "MacNetConfig.icns", size=512)
    with open(p, "rb") as f:
        assert f.read(4) == b"icns"
