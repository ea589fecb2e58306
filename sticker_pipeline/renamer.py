from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .assets import list_sequenceable, sequence_name
from .config import MAX_STICKERS


@dataclass
class RenumberResult:
    renamed: int = 0
    # Names left untouched because they are beyond the limit.
    skipped: List[str] = field(default_factory=list)
    # Names that could not be renamed (target taken or filesystem refused).
    failed: List[str] = field(default_factory=list)
    total: int = 0


def renumber(output_dir: Path, limit: int = MAX_STICKERS) -> RenumberResult:
    """
    Rename the sequenceable outputs of `output_dir` to 01.png, 02.png...

    Files are taken in filename order and only the first `limit` are touched.
    The original extension is kept, main.png / tab.png are never listed, and a
    file that already carries its target name is left alone, so running this
    twice renames nothing the second time.
    """
    files = list_sequenceable(output_dir)
    to_rename = files[:limit]
    result = RenumberResult(
        skipped=[image.name for image in files[limit:]],
        total=len(to_rename),
    )

    selected = {image.name for image in to_rename}
    pending = []
    for i, image in enumerate(to_rename):
        target_name = sequence_name(i, image.suffix)
        if image.name == target_name:
            continue
        # A target held by another selected file frees up once that file moves.
        if target_name not in selected and (output_dir / target_name).exists():
            result.failed.append(image.name)
            continue
        pending.append((image, target_name))

    # Move everything aside first so no rename lands on a name still in use.
    staged = []
    for i, (image, target_name) in enumerate(pending):
        temp = output_dir / f".renumber-{i:02d}{image.suffix}.tmp"
        try:
            image.path.rename(temp)
        except OSError:
            result.failed.append(image.name)
            continue
        staged.append((image, temp, output_dir / target_name))

    for image, temp, target in staged:
        try:
            if target.exists():
                raise FileExistsError(target)
            temp.rename(target)
        except OSError:
            try:
                temp.rename(image.path)
                result.failed.append(image.name)
            except OSError:
                result.failed.append(f"{image.name} (left as {temp.name})")
            continue
        result.renamed += 1

    return result

