import io

import pdfplumber

from field_mapper.pdf.base import BasePageInspector
from field_mapper.pdf.exceptions import PdfInspectionError
from field_mapper.pdf.models import PageFrame


class PdfPlumberAdapter(BasePageInspector):
    """Reads page sizes using pdfplumber."""

    def page_frames(self, pdf_bytes: bytes, scale: float = 1.0) -> list[PageFrame]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return [
                    PageFrame(
                        page=number,
                        width=float(page.width) * scale,
                        height=float(page.height) * scale,
                        scale=scale,
                    )
                    for number, page in enumerate(pdf.pages, start=1)
                ]
        except Exception as exc:
            raise PdfInspectionError(f"pdfplumber inspection failed: {exc}") from exc
