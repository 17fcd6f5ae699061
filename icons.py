"""Menu bar icons drawn with Pillow."""

from pathlib import Path

from PIL import Image, ImageDraw

ICON_SIZE = 64
COLOR_ON = "#00d9a5"


def create_tray_icon(color: str = COLOR_ON, size: int = ICON_SIZE) -> Image.Image:
    """Create a simple colored circle icon for the menu bar."""
    image = Image.new('RGBA', (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)

    # Draw outer circle (border)
    draw.ellipse([2, 2, size - 2, size - 2], fill='#1a1a2e', outline='#3a3a5e', width=2)

    # Draw inner status circle
    inner_margin = size // 4
    draw.ellipse(
        [inner_margin, inner_margin, size - inner_margin, size - inner_margin],
        fill=color
    )

    return image


def to_grayscale(image: Image.Image) -> Image.Image:
    """Luma-convert the color channels, keeping alpha."""
    rgba = image.convert('RGBA')
    alpha = rgba.getchannel('A')
    # "L" conversion uses L = R * 299/1000 + G * 587/1000 + B * 114/1000
    gray = rgba.convert('L')
    return Image.merge('RGBA', (gray, gray, gray, alpha))


def render_icon(applied: bool) -> Image.Image:
    image = create_tray_icon()
    return image if applied else to_grayscale(image)


def icon_path(applied: bool, cache_dir: Path) -> str:
    """Write the icon for `applied` into `cache_dir` once and return its path."""
    path = Path(cache_dir) / ("icon_on.png" if applied else "icon_off.png")
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        render_icon(applied).save(path)
    return str(path)


def write_app_icon(path, size: int = 1024) -> str:
    """Save the applied-state disc as an .icns bundle icon."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    create_tray_icon(size=size).save(path, format='ICNS')
    return str(path)
