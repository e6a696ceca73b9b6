from docingest.extraction.base import BaseTextExtractor
from docingest.extraction.exceptions import ExtractionError


class PlainTextAdapter(BaseTextExtractor):
    """Decodes UTF-8 text files, dropping a leading byte order mark."""

    def extract(self, data: bytes) -> str:
        try:
            return data.decode("utf-8-sig").strip()
        except UnicodeDecodeError as exc:
            raise ExtractionError(f"text file is not valid UTF-8: {exc}") from exc
