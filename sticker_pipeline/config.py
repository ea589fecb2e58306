import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple

from .render import Gravity

SizeSpec = Tuple[int, int]

STICKER_SIZE: SizeSpec = (370, 320)
MAIN_SIZE: SizeSpec = (240, 240)
TAB_SIZE: SizeSpec = (96, 74)

# LINE accepts at most 40 stickers per pack.
MAX_STICKERS = 40


@dataclass
class StickerConfig:
    base_dir: Path = Path("./base")
    text_dir: Path = Path("./text")
    output_dir: Path = Path("./output")
    sticker_size: SizeSpec = STICKER_SIZE
    main_size: SizeSpec = MAIN_SIZE
    tab_size: SizeSpec = TAB_SIZE
    text_gravity: Gravity = field(default=Gravity.SOUTH)
    max_stickers: int = MAX_STICKERS


def load_config(environ: Optional[Mapping[str, str]] = None) -> StickerConfig:
    """
    Build the run configuration.

    Only the three folders can be overridden, through STICKER_BASE_DIR,
    STICKER_TEXT_DIR and STICKER_OUTPUT_DIR (a local .env file is loaded by the
    CLI before this is called). Sizes, gravity and the sticker limit are fixed.
    """
    env = os.environ if environ is None else environ
    config = StickerConfig()

    base_dir = env.get("STICKER_BASE_DIR")
    if base_dir:
        config.base_dir = Path(base_dir)
    text_dir = env.get("STICKER_TEXT_DIR")
    if text_dir:
        config.text_dir = Path(text_dir)
    output_dir = env.get("STICKER_OUTPUT_DIR")
    if output_dir:
        config.output_dir = Path(output_dir)

    return config
