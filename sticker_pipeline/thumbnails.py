from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .assets import ImageFile, list_sequenceable, sort_by_number
from .config import StickerConfig
from .errors import CompositionError, SetupError
from .render import FitPolicy, Size, derive_thumbnail, save_png
from .selector import display_images, select_image


class ThumbnailKind(str, Enum):
    MAIN = "main"
    TAB = "tab"

    @property
    def filename(self) -> str:
        return f"{self.value}.png"

    def size(self, config: StickerConfig) -> Size:
        return config.main_size if self is ThumbnailKind.MAIN else config.tab_size


def create_thumbnail(
    config: StickerConfig,
    source: ImageFile,
    kind: ThumbnailKind,
    fit: FitPolicy,
) -> Path:
    """Derive main.png or tab.png from one sticker. Always written as PNG."""
    output_path = config.output_dir / kind.filename
    thumbnail = derive_thumbnail(source.path, kind.size(config), fit)
    save_png(thumbnail, output_path)
    return output_path


def selectable_outputs(config: StickerConfig) -> List[ImageFile]:
    """Stickers in the output folder, numeric-aware order, thumbnails excluded."""
    if not config.output_dir.is_dir():
        raise SetupError(
            f"Output folder not found: {config.output_dir}",
            hints=["Run the combine step first"],
        )
    files = sort_by_number(list_sequenceable(config.output_dir))
    if not files:
        raise SetupError(
            f"No sticker images found in {config.output_dir}",
            hints=["Run the combine step first"],
        )
    return files


def make_thumbnails(
    config: StickerConfig,
    fit: FitPolicy,
    read: Optional[Callable[[str], str]] = None,
    echo: Callable[[str], None] = print,
) -> Dict[ThumbnailKind, Path]:
    """
    Let the user pick a sticker for main.png and one for tab.png, then derive
    both. The same sticker may be picked twice. A failing derivation is
    reported and does not prevent the other one.
    """
    files = selectable_outputs(config)
    display_images(files, echo=echo)

    picks = {
        kind: files[select_image(kind.filename, files, read=read, echo=echo)]
        for kind in (ThumbnailKind.MAIN, ThumbnailKind.TAB)
    }

    created: Dict[ThumbnailKind, Path] = {}
    for kind, source in picks.items():
        width, height = kind.size(config)
        echo(f"🔄 Creating {kind.filename}... ({source.name} → {width}×{height}px, {fit.value})")
        try:
            created[kind] = create_thumbnail(config, source, kind, fit)
        except CompositionError as exc:
            echo(f"❌ {kind.filename} error: {exc}")
            continue
        echo(f"✅ {kind.filename}: {width}×{height}px")

    echo(f"📁 Output: {config.output_dir}")
    return created
