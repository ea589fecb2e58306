import argparse
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from dotenv import load_dotenv

from sticker_pipeline.assets import (
    IMAGE_EXTENSIONS,
    SOURCE_EXTENSIONS,
    ImageFile,
    ensure_directory,
    list_images,
)
from sticker_pipeline.config import StickerConfig, load_config
from sticker_pipeline.core import StickerPipeline
from sticker_pipeline.errors import SelectionAborted, SetupError
from sticker_pipeline.render import FitPolicy
from sticker_pipeline.renamer import renumber
from sticker_pipeline.thumbnails import make_thumbnails


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build LINE sticker pack images from character and text images."
    )
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser(
        "combine",
        help="Compose base/ images with text/ images into output/01.png, 02.png...",
    )
    commands.add_parser(
        "resize",
        help="Shrink every base/ image to sticker size and number the results.",
    )
    commands.add_parser(
        "thumbnails",
        help="Pick stickers for main.png and tab.png (whole image visible, padded).",
    )
    commands.add_parser(
        "thumbnails-crop",
        help="Pick stickers for main.png and tab.png (filled, center-cropped).",
    )
    return parser.parse_args(argv)


def run_combine(config: StickerConfig) -> None:
    print("🎨 LINE sticker image combiner")
    print("=====================================")

    for folder in (config.base_dir, config.text_dir, config.output_dir):
        if ensure_directory(folder):
            print(f"📁 Created folder {folder}")

    base_files = _require_images(config.base_dir, SOURCE_EXTENSIONS, "character")
    text_files = _require_images(config.text_dir, SOURCE_EXTENSIONS, "text")

    StickerPipeline(config).combine(base_files, text_files)


def run_resize(config: StickerConfig) -> None:
    print("🎨 LINE sticker resize tool")
    print("===============================================")
    print("* images are shrunk so the whole picture stays visible")

    if not config.base_dir.is_dir():
        raise SetupError(f"Folder not found: {config.base_dir}")
    if ensure_directory(config.output_dir):
        print(f"✅ Created folder {config.output_dir}")

    files = list_images(config.base_dir, IMAGE_EXTENSIONS)
    if not files:
        raise SetupError(
            f"No image files found in {config.base_dir}",
            hints=["Supported formats: PNG, JPG, JPEG, WebP"],
        )

    print(f"\n📋 Processing {len(files)} image(s)")
    print("===============================================\n")
    StickerPipeline(config).resize_all(files)

    print("\n🔄 Renumbering output files...")
    result = renumber(config.output_dir, limit=config.max_stickers)
    if result.total == 0:
        print("⚠️  Nothing to renumber")
        return
    if result.skipped:
        print(
            f"⚠️  More than {config.max_stickers} files; "
            f"left untouched: {', '.join(result.skipped)}"
        )
    for name in result.failed:
        print(f"❌ Could not rename {name}")
    print(f"✅ Renamed {result.renamed} file(s) (01〜{result.total:02d})")
    print("\n🎉 All done!")


def run_thumbnails(config: StickerConfig, fit: FitPolicy) -> None:
    print("🎨 LINE sticker main.png & tab.png tool")
    print("===============================================")
    if fit is FitPolicy.CONTAIN:
        print("* images are shrunk so the whole picture stays visible")
    else:
        print("* images fill the frame and are cropped around the center")

    created = make_thumbnails(config, fit)
    if len(created) == 2:
        print("\n🎉 Thumbnails created!")


def _require_images(folder: Path, extensions: Iterable[str], label: str) -> List[ImageFile]:
    files = list_images(folder, extensions)
    if not files:
        raise SetupError(
            f"No image files found in {folder}",
            hints=[
                f"Put the {label} images (PNG) into {folder}",
                "Supported formats: PNG, JPG, JPEG",
            ],
        )
    print(f"✅ {label} images: {len(files)} found")
    return files


def main(argv: Optional[List[str]] = None) -> int:
    # Folder overrides can live in a local .env file
    # (e.g. STICKER_OUTPUT_DIR=./my-pack).
    load_dotenv()

    args = parse_args(argv)
    config = load_config()

    try:
        if args.command == "combine":
            run_combine(config)
        elif args.command == "resize":
            run_resize(config)
        elif args.command == "thumbnails":
            run_thumbnails(config, FitPolicy.CONTAIN)
        else:
            run_thumbnails(config, FitPolicy.COVER)
    except SetupError as exc:
        print(f"❌ {exc}")
        if exc.hints:
            print("\n📝 How to fix:")
            for hint in exc.hints:
                print(f"- {hint}")
        return 1
    except SelectionAborted as exc:
        print(f"\n❌ {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
