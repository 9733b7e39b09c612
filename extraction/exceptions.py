"""
Errors raised while reading invoice PDFs.

Only the PDF-reading side raises: a file that cannot be opened or yields no
text fails that one invoice. Malformed product table text never raises; the
parser drops what it cannot read.
"""

from typing import Any, Dict, Optional


class PDFProcessingError(Exception):
    """
    Base error for one invoice PDF.

    Attributes:
        pdf_path: Path of the PDF, None for in-memory input
        details: Extra diagnostic values for logs and JSON output
    """

    def __init__(self, message: str, pdf_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.pdf_path = pdf_path
        self.details = dict(details or {})

    def __str__(self) -> str:
        message = super().__str__()
        if self.pdf_path:
            return f"{message} (PDF: {self.pdf_path})"
        return message


class PDFReadabilityError(PDFProcessingError):
    """The PDF is missing, not a file, has no pages, or pdfplumber cannot open it."""

    def __init__(self, message: str, pdf_path: Optional[str] = None,
                 original_error: Optional[Exception] = None):
        super().__init__(message, pdf_path)
        self.original_error = original_error
        if original_error is not None:
            self.details.update(
                original_error=str(original_error),
                error_type=type(original_error).__name__,
            )


class TextExtractionError(PDFProcessingError):
    """The PDF opened but its text layer could not be read or is empty."""

    def __init__(self, message: str, pdf_path: Optional[str] = None,
                 page_number: Optional[int] = None,
                 extraction_method: Optional[str] = None):
        super().__init__(message, pdf_path)
        self.page_number = page_number
        self.extraction_method = extraction_method
        if page_number is not None:
            self.details['page_number'] = page_number
        if extraction_method:
            self.details['extraction_method'] = extraction_method
