from typing import Sequence


class StickerError(Exception):
    """Base class for every error raised by the sticker pipeline."""


class SetupError(StickerError):
    """
    Raised when a run cannot start at all (missing or empty source folder).

    `hints` are short remediation lines shown to the user before exiting.
    """

    def __init__(self, message: str, hints: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.hints = list(hints)


class CompositionError(StickerError):
    """A single image could not be decoded, composed or written."""

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"{filename}: {reason}")
        self.filename = filename
        self.reason = reason


class SelectionAborted(StickerError):
    """The user closed standard input (or pressed Ctrl-C) at a prompt."""
