from pathlib import Path

import pytest
from PIL import Image

from sticker_pipeline.config import StickerConfig


def write_image(path: Path, size=(100, 100), color=(255, 0, 0, 255), fmt=None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() in (".jpg", ".jpeg") or (fmt or "").upper() == "JPEG":
        color = tuple(color[:3])
    mode = "RGBA" if len(color) == 4 else "RGB"
    Image.new(mode, size, color).save(path, format=fmt)
    return path


def write_corrupt(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"definitely not an image")
    return path


@pytest.fixture
def config(tmp_path) -> StickerConfig:
    cfg = StickerConfig(
        base_dir=tmp_path / "base",
        text_dir=tmp_path / "text",
        output_dir=tmp_path / "output",
    )
    for folder in (cfg.base_dir, cfg.text_dir, cfg.output_dir):
        folder.mkdir()
    return cfg
