import io
from enum import Enum
from pathlib import Path
from typing import Tuple

from PIL import Image, ImageOps

from .errors import CompositionError


Size = Tuple[int, int]

TRANSPARENT = (0, 0, 0, 0)


class FitPolicy(str, Enum):
    CONTAIN = "contain"
    COVER = "cover"


class Gravity(str, Enum):
    NORTH = "north"
    NORTHEAST = "northeast"
    EAST = "east"
    SOUTHEAST = "southeast"
    SOUTH = "south"
    SOUTHWEST = "southwest"
    WEST = "west"
    NORTHWEST = "northwest"
    CENTER = "center"


def load_image(path: Path) -> Image.Image:
    """
    Decode an image file fully into RGBA.

    Missing, corrupt or unsupported files raise CompositionError so callers can
    count the failure and move on to the next item.
    """
    try:
        with Image.open(path) as img:
            img.load()
            return img.convert("RGBA")
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise CompositionError(path.name, str(exc)) from exc


def contain_size(source: Size, size: Size) -> Size:
    """Largest size with the source aspect that fits in `size`, never below 1px."""
    source_w, source_h = source
    target_w, target_h = size
    scale = min(target_w / source_w, target_h / source_h)
    return (
        max(1, min(target_w, round(source_w * scale))),
        max(1, min(target_h, round(source_h * scale))),
    )


def resize_contain(img: Image.Image, size: Size) -> Image.Image:
    """
    Scale to fit entirely inside `size` and pad the rest with full transparency.
    The subject is centered and never cropped.
    """
    img = img.convert("RGBA")
    fitted = contain_size(img.size, size)
    if fitted != img.size:
        img = img.resize(fitted, Image.Resampling.LANCZOS)

    canvas = Image.new("RGBA", size, TRANSPARENT)
    canvas.paste(img, ((size[0] - fitted[0]) // 2, (size[1] - fitted[1]) // 2))
    return canvas


def resize_cover(img: Image.Image, size: Size) -> Image.Image:
    """
    Scale to fill `size` completely and crop the overflow symmetrically around
    the center. Never adds padding.
    """
    return ImageOps.fit(
        img.convert("RGBA"),
        size,
        method=Image.Resampling.LANCZOS,
        centering=(0.5, 0.5),
    )


def resize_to_fit(img: Image.Image, size: Size, fit: FitPolicy) -> Image.Image:
    if fit is FitPolicy.COVER:
        return resize_cover(img, size)
    return resize_contain(img, size)


def gravity_offset(canvas: Size, overlay: Size, gravity: Gravity) -> Tuple[int, int]:
    """Top-left position of an overlay placed on a canvas at a gravity point."""
    canvas_w, canvas_h = canvas
    overlay_w, overlay_h = overlay
    center_x = (canvas_w - overlay_w) // 2
    center_y = (canvas_h - overlay_h) // 2
    right = canvas_w - overlay_w
    bottom = canvas_h - overlay_h

    positions = {
        Gravity.NORTH: (center_x, 0),
        Gravity.NORTHEAST: (right, 0),
        Gravity.EAST: (right, center_y),
        Gravity.SOUTHEAST: (right, bottom),
        Gravity.SOUTH: (center_x, bottom),
        Gravity.SOUTHWEST: (0, bottom),
        Gravity.WEST: (0, center_y),
        Gravity.NORTHWEST: (0, 0),
        Gravity.CENTER: (center_x, center_y),
    }
    return positions[gravity]


def compose_sticker(
    base_path: Path,
    overlay_path: Path,
    size: Size,
    gravity: Gravity = Gravity.SOUTH,
) -> Image.Image:
    """
    Build one sticker: the base image contain-resized to `size` with the
    overlay (at native resolution) alpha-composited on top at `gravity`.
    """
    base = load_image(base_path)
    try:
        canvas = resize_contain(base, size)
    except ValueError as exc:
        raise CompositionError(base_path.name, str(exc)) from exc
    overlay = load_image(overlay_path)

    if overlay.width > canvas.width or overlay.height > canvas.height:
        raise CompositionError(
            overlay_path.name,
            f"overlay {overlay.width}x{overlay.height} is larger than the "
            f"{canvas.width}x{canvas.height} sticker",
        )

    x, y = gravity_offset(canvas.size, overlay.size, gravity)
    try:
        canvas.alpha_composite(overlay, dest=(x, y))
    except ValueError as exc:
        raise CompositionError(overlay_path.name, str(exc)) from exc
    return canvas


def fit_file(source_path: Path, size: Size, fit: FitPolicy) -> Image.Image:
    """Decode `source_path` and resize it to exactly `size` under `fit`."""
    img = load_image(source_path)
    try:
        return resize_to_fit(img, size, fit)
    except ValueError as exc:
        raise CompositionError(source_path.name, str(exc)) from exc


def derive_thumbnail(source_path: Path, size: Size, fit: FitPolicy) -> Image.Image:
    return fit_file(source_path, size, fit)


def encode_png(img: Image.Image) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def save_png(img: Image.Image, output_path: Path) -> None:
    """Write `img` as PNG, wrapping filesystem errors as CompositionError."""
    try:
        img.save(output_path, format="PNG")
    except OSError as exc:
        raise CompositionError(output_path.name, str(exc)) from exc
