from typing import Callable, Optional, Sequence

from .assets import ImageFile
from .errors import SelectionAborted


def display_images(files: Sequence[ImageFile], echo: Callable[[str], None] = print) -> None:
    echo(f"\n📋 Available images ({len(files)}):")
    echo("===============================================")
    for index, image in enumerate(files, start=1):
        echo(f"{index:>2}. {image.name}")
    echo("")


def select_image(
    purpose: str,
    files: Sequence[ImageFile],
    read: Optional[Callable[[str], str]] = None,
    echo: Callable[[str], None] = print,
) -> int:
    """
    Ask for a 1-based choice among `files` until a valid one is entered.

    Returns the 0-based index of the chosen file. Closing stdin or pressing
    Ctrl-C raises SelectionAborted. `read` defaults to input().
    """
    read = read or input
    count = len(files)
    if count == 0:
        raise ValueError("select_image() needs at least one choice")

    while True:
        try:
            answer = read(f"Choose the image for {purpose} (1-{count}): ")
        except (EOFError, KeyboardInterrupt) as exc:
            raise SelectionAborted(f"selection for {purpose} aborted") from exc

        answer = answer.strip()
        # ASCII digits only.
        selection = int(answer) if answer.isascii() and answer.isdecimal() else 0

        if 1 <= selection <= count:
            chosen = files[selection - 1]
            echo(f"✅ Selected {chosen.name}")
            return selection - 1

        echo(f"❌ Please enter a number from 1 to {count}")
