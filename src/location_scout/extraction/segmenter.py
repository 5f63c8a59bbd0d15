# ABOUTME: Crude boundary splitting of free text into candidate location phrases
# ABOUTME: Splits on newlines, semicolons and dashes; no sentence detection

import re
from collections.abc import Iterator

SEPARATOR_PATTERN = re.compile(r"[\n;—–-]+")


def segment(text: str | None) -> Iterator[str]:
    """Yield trimmed, non-empty pieces of ``text`` split on separator characters."""
    if not text:
        return
    for piece in SEPARATOR_PATTERN.split(text):
        piece = piece.strip()
        if piece:
            yield piece
