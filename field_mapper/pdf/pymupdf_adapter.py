import pymupdf

from field_mapper.pdf.base import BasePageInspector
from field_mapper.pdf.exceptions import PdfInspectionError
from field_mapper.pdf.models import PageFrame


class PyMuPdfAdapter(BasePageInspector):
    """Reads page sizes using PyMuPDF."""

    def page_frames(self, pdf_bytes: bytes, scale: float = 1.0) -> list[PageFrame]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return [
                    PageFrame(
                        page=page.number + 1,
                        width=float(page.rect.width) * scale,
                        height=float(page.rect.height) * scale,
                        scale=scale,
                    )
                    for page in doc
                ]
        except Exception as exc:
            raise PdfInspectionError(f"pymupdf inspection failed: {exc}") from exc
