from field_mapper.config.settings import Settings
from field_mapper.pdf.base import BasePageInspector
from field_mapper.pdf.pdfplumber_adapter import PdfPlumberAdapter
from field_mapper.pdf.pymupdf_adapter import PyMuPdfAdapter


class PageInspectorFactory:
    """Creates the page inspector named by settings.pdf_engine."""

    ADAPTERS: dict[str, type[BasePageInspector]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePageInspector:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
