from urllib.parse import unquote

DEFAULT_FILENAME = "document.pdf"


def normalize_original_name(name: str | None, default: str = DEFAULT_FILENAME) -> str:
    """Repair a client-supplied file name.

    Browsers either URL-encode the name or send UTF-8 bytes that the multipart
    parser decoded as latin-1. Undo whichever applies; otherwise keep the name.
    """
    if not name:
        return default

    if "%" in name:
        try:
            decoded = unquote(name, errors="strict")
        except UnicodeDecodeError:
            decoded = name
        if decoded != name:
            return decoded

    try:
        return name.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return name
