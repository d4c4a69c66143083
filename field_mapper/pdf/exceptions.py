class PdfInspectionError(Exception):
    """Raised when page geometry cannot be read from a document."""
