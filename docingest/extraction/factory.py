from typing import ClassVar

from docingest.config.settings import Settings
from docingest.extraction.base import BaseTextExtractor
from docingest.extraction.exceptions import UnsupportedFormatError
from docingest.extraction.pdfplumber_adapter import PdfPlumberAdapter
from docingest.extraction.plain_text_adapter import PlainTextAdapter
from docingest.extraction.pymupdf_adapter import PyMuPdfAdapter

PDF_MIME_TYPE = "application/pdf"
TEXT_MIME_TYPE = "text/plain"


class ExtractorRegistry:
    """Maps document MIME types to the extractor that handles them."""

    def __init__(self, extractors: dict[str, BaseTextExtractor]) -> None:
        self._extractors = dict(extractors)

    def supports(self, mime_type: str) -> bool:
        return mime_type.lower() in self._extractors

    def for_mime_type(self, mime_type: str) -> BaseTextExtractor:
        """Return the extractor for a MIME type.

        Raises:
            UnsupportedFormatError: if no extractor handles the type.
        """
        extractor = self._extractors.get(mime_type.lower())
        if extractor is None:
            raise UnsupportedFormatError(f"Unsupported document format '{mime_type}'")
        return extractor


class ExtractorFactory:
    """Creates the extractor registry based on settings."""

    PDF_ENGINES: ClassVar[dict[str, type[BaseTextExtractor]]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create_pdf_extractor(cls, settings: Settings) -> BaseTextExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.PDF_ENGINES.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ENGINES)}"
            )
        return adapter_cls()

    @classmethod
    def create(cls, settings: Settings) -> ExtractorRegistry:
        return ExtractorRegistry(
            {
                PDF_MIME_TYPE: cls.create_pdf_extractor(settings),
                TEXT_MIME_TYPE: PlainTextAdapter(),
            }
        )
