import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

SOURCE_EXTENSIONS = {".png", ".jpg", ".jpeg"}
IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp"}
SEQUENCE_EXTENSIONS = {".png", ".webp"}
RESERVED_NAMES = {"main.png", "tab.png"}

# Files without any digits are listed after every numbered file.
NO_NUMBER_RANK = 999

_DIGITS = re.compile(r"(\d+)")


@dataclass(frozen=True, order=True)
class ImageFile:
    name: str
    directory: Path

    @property
    def path(self) -> Path:
        return self.directory / self.name

    @property
    def suffix(self) -> str:
        return Path(self.name).suffix


def list_images(directory: Path, extensions: Iterable[str] = SOURCE_EXTENSIONS) -> List[ImageFile]:
    """
    List the image files of `directory` sorted by filename.

    Only files whose (case-insensitive) extension is in `extensions` are kept.
    A missing directory yields an empty list; the caller decides whether that
    is fatal.
    """
    if not directory.is_dir():
        return []

    allowed = {ext.lower() for ext in extensions}
    names = sorted(
        entry.name
        for entry in directory.iterdir()
        if entry.is_file() and entry.suffix.lower() in allowed
    )
    return [ImageFile(name=name, directory=directory) for name in names]


def list_sequenceable(directory: Path) -> List[ImageFile]:
    """PNG/WebP outputs of `directory`, excluding the reserved thumbnail names."""
    return [
        image
        for image in list_images(directory, SEQUENCE_EXTENSIONS)
        if image.name.lower() not in RESERVED_NAMES
    ]


def sort_by_number(images: Iterable[ImageFile]) -> List[ImageFile]:
    """
    Order images by the first run of digits in their filename (01.png, 2.png,
    10.png...). Names without digits rank as 999; ties keep their input order.
    """
    return sorted(images, key=lambda image: _first_number(image.name))


def ensure_directory(path: Path) -> bool:
    """Create `path` if needed. Returns True when the folder was created."""
    if path.is_dir():
        return False
    path.mkdir(parents=True, exist_ok=True)
    return True


def sequence_name(index: int, suffix: str = ".png") -> str:
    """Two-digit, 1-based sticker filename for a 0-based index."""
    return f"{index + 1:02d}{suffix}"


def _first_number(name: str) -> int:
    match = _DIGITS.search(name)
    return int(match.group(1)) if match else NO_NUMBER_RANK
