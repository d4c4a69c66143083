from abc import ABC, abstractmethod

from field_mapper.pdf.models import PageFrame


class BasePageInspector(ABC):
    """Contract for adapters that report page frame sizes of a PDF."""

    @abstractmethod
    def page_frames(self, pdf_bytes: bytes, scale: float = 1.0) -> list[PageFrame]:
        """Return one frame per page, in page order, sized at ``scale``.

        Sizes are PDF points times scale, matching a viewport rendered at
        that scale.

        Raises:
            PdfInspectionError: if the document cannot be opened.
        """
