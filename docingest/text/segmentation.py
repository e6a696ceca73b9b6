"""Line-preserving text segmentation into bounded chunks."""

import re

DEFAULT_TARGET_LENGTH = 1600

_LINE_BREAKS = re.compile(r"\n+")


def segment(text: str, target_length: int = DEFAULT_TARGET_LENGTH) -> list[str]:
    """Split text into trimmed, non-empty segments of at most ``target_length``.

    Lines (runs of newlines are one delimiter) are accumulated into a buffer
    joined by single newlines. When the next line would overflow the buffer,
    the buffer is emitted and the line starts a new one. A line longer than
    ``target_length`` on its own is cut at character positions into
    ``target_length`` slices. Empty input yields an empty list.

    A non-positive ``target_length`` is treated as 1.
    """
    target_length = max(1, target_length)
    parts: list[str] = []
    buffer = ""

    for line in _LINE_BREAKS.split(text):
        candidate = f"{buffer}\n{line}" if buffer else line
        if len(candidate) <= target_length:
            buffer = candidate
            continue

        if buffer.strip():
            parts.append(buffer.strip())
        buffer = line

        if len(buffer) > target_length:
            for start in range(0, len(buffer), target_length):
                piece = buffer[start:start + target_length].strip()
                if piece:
                    parts.append(piece)
            buffer = ""

    if buffer.strip():
        parts.append(buffer.strip())
    return parts
