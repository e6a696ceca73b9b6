import re

_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_HORIZONTAL_WHITESPACE = re.compile(r"[^\S\n]{2,}")
_TRAILING_SPACES = re.compile(r"[^\S\n]+\n")


def clean_text(text: str) -> str:
    """Collapse whitespace runs in extracted text while keeping line structure.

    Runs of three or more newlines become a blank line, runs of spaces and tabs
    become one space, and spaces before a newline are dropped.
    """
    cleaned = text.replace("\r\n", "\n").replace("\r", "\n")
    cleaned = _HORIZONTAL_WHITESPACE.sub(" ", cleaned)
    cleaned = _TRAILING_SPACES.sub("\n", cleaned)
    cleaned = _EXCESS_NEWLINES.sub("\n\n", cleaned)
    return cleaned.strip()


def truncate_text(text: str, max_chars: int) -> str:
    """Cut text to at most ``max_chars`` characters."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars]


def take_segments(segments: list[str], budget: int) -> str:
    """Join leading segments with newlines while the result fits ``budget``.

    Falls back to a hard cut of the first segment when not even one fits.
    """
    taken: list[str] = []
    used = 0
    for piece in segments:
        extra = len(piece) + (1 if taken else 0)
        if used + extra > budget:
            break
        taken.append(piece)
        used += extra
    if not taken and segments:
        return truncate_text(segments[0], budget)
    return "\n".join(taken)
