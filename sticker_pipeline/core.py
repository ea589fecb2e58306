import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .assets import ImageFile, sequence_name
from .config import StickerConfig
from .errors import CompositionError
from .render import FitPolicy, Gravity, Size, compose_sticker, fit_file, save_png


Echo = Callable[[str], None]


@dataclass(frozen=True)
class CompositionJob:
    base: ImageFile
    overlay: ImageFile
    size: Size
    gravity: Gravity
    output_path: Path

    def run(self) -> None:
        sticker = compose_sticker(self.base.path, self.overlay.path, self.size, self.gravity)
        save_png(sticker, self.output_path)


@dataclass
class PairResult:
    index: int
    output_name: str
    sources: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    results: List[PairResult] = field(default_factory=list)
    ignored: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def error_count(self) -> int:
        return sum(1 for r in self.results if not r.ok)

    @property
    def output_names(self) -> List[str]:
        return [r.output_name for r in self.results if r.ok]


class StickerPipeline:
    """
    Batch side of the sticker tooling:
    - combine: pair base[i] with text[i], compose, save as 01.png, 02.png...
    - resize_all: contain-resize every base image to sticker size

    Every item is processed on its own; a broken image is reported and counted
    but never stops the batch.
    """

    def __init__(self, config: StickerConfig, echo: Echo = print) -> None:
        self.config = config
        self.echo = echo

    def combine(
        self,
        base_files: Sequence[ImageFile],
        overlay_files: Sequence[ImageFile],
    ) -> BatchResult:
        pair_count = min(len(base_files), len(overlay_files))
        result = BatchResult()
        if pair_count == 0:
            return result

        if len(base_files) != len(overlay_files):
            longer = base_files if len(base_files) > len(overlay_files) else overlay_files
            result.ignored = [image.name for image in longer[pair_count:]]
            self.echo("⚠️  File counts differ:")
            self.echo(f"   base: {len(base_files)}, text: {len(overlay_files)}")
            self.echo(f"   → only {pair_count} pair(s) will be combined")

        self.echo(f"\n🔄 Combining {pair_count} image pair(s) one-to-one")
        self.echo("=====================================")

        jobs = [
            CompositionJob(
                base=base_files[i],
                overlay=overlay_files[i],
                size=self.config.sticker_size,
                gravity=self.config.text_gravity,
                output_path=self.config.output_dir / sequence_name(i),
            )
            for i in range(pair_count)
        ]

        started = time.perf_counter()
        for i, job in enumerate(jobs):
            output_name = job.output_path.name
            sources = f"{job.base.name} + {job.overlay.name}"
            try:
                job.run()
            except CompositionError as exc:
                result.results.append(PairResult(i, output_name, sources, error=str(exc)))
                self.echo(f"❌ {output_name} error: {exc} [{i + 1}/{pair_count}]")
                continue
            result.results.append(PairResult(i, output_name, sources))
            self.echo(f"✅ {output_name} done [{i + 1}/{pair_count}] ({sources})")
        result.duration_seconds = time.perf_counter() - started

        self._report(result, "Combine finished!")
        if result.error_count:
            self.echo("\n💡 If some stickers failed:")
            self.echo("- check that the image files are not corrupted")
            self.echo("- check that text images are transparent PNGs no larger than the sticker")
        return result

    def resize_all(self, files: Sequence[ImageFile]) -> BatchResult:
        """
        Contain-resize each file to sticker size and save it as <stem>.png in
        the output folder, ready to be renumbered. When two inputs share a stem
        (a.png, a.jpg) only the first is written; the others are errors.
        """
        result = BatchResult()
        total = len(files)
        started = time.perf_counter()
        used_names = set()

        for i, image in enumerate(files):
            output_name = f"{Path(image.name).stem}.png"
            try:
                if output_name.lower() in used_names:
                    raise CompositionError(image.name, f"{output_name} is already taken by another input")
                resized = fit_file(image.path, self.config.sticker_size, FitPolicy.CONTAIN)
                save_png(resized, self.config.output_dir / output_name)
                used_names.add(output_name.lower())
            except CompositionError as exc:
                result.results.append(PairResult(i, output_name, image.name, error=str(exc)))
                self.echo(f"❌ [error] {image.name}: {exc.reason}")
                continue
            result.results.append(PairResult(i, output_name, image.name))
            self.echo(f"✅ [{result.success_count}/{total}] {image.name}")
        result.duration_seconds = time.perf_counter() - started

        width, height = self.config.sticker_size
        self._report(result, f"Resize finished! {result.success_count}/{total} image(s) processed")
        self.echo(f"📏 Size: {width}×{height}px (shrunk to fit, transparent padding)")
        return result

    def _report(self, result: BatchResult, title: str) -> None:
        self.echo(f"\n🎉 {title}")
        self.echo("=====================================")
        self.echo(f"📊 Result: {result.success_count} succeeded / {result.error_count} failed")
        self.echo(f"⏱️  Elapsed: {round(result.duration_seconds)}s")
        self.echo(f"📁 Output: {self.config.output_dir}")
