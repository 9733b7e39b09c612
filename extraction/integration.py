"""
Batch integration for processing several invoice PDFs in one run.

Each file is processed independently: a file that cannot be read is logged
and reported in the batch result while the remaining files are still
processed.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from .models import ExtractedInvoiceData
from .pdf_processor import PDFProcessor


@dataclass
class BatchProgress:
    """Progress snapshot passed to batch progress callbacks."""
    total_files: int
    processed_files: int
    current_file: Optional[str] = None
    current_step: Optional[str] = None


@dataclass
class BatchResult:
    """
    Outcome of a batch run.

    Attributes:
        invoices: Extraction results for files that were processed
        failures: (path, error message) for files that could not be processed
    """
    invoices: List[ExtractedInvoiceData] = field(default_factory=list)
    failures: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def total_products(self) -> int:
        return sum(len(invoice.products) for invoice in self.invoices)

    def get_summary(self) -> dict:
        """Summary statistics for display."""
        return {
            'files_processed': len(self.invoices),
            'files_failed': len(self.failures),
            'total_products': self.total_products,
        }


ProgressCallback = Callable[[BatchProgress], None]


class InvoiceBatchProcessor:
    """Runs PDF extraction over many files and collects the results."""

    def __init__(self, logger: Optional[logging.Logger] = None,
                 pdf_processor: Optional[PDFProcessor] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.pdf_processor = pdf_processor or PDFProcessor(logger=self.logger)

    def process_files(self, pdf_paths: Iterable[Path],
                      progress_callback: Optional[ProgressCallback] = None) -> BatchResult:
        """
        Process a list of PDF files.

        Args:
            pdf_paths: Paths of the PDFs to process
            progress_callback: Optional callable receiving BatchProgress updates

        Returns:
            BatchResult with the processed invoices and the failed files
        """
        pdf_paths = [Path(p) for p in pdf_paths]
        total = len(pdf_paths)
        result = BatchResult()

        for index, pdf_path in enumerate(pdf_paths):
            self._report(progress_callback, total, index, pdf_path.name,
                         f"Processing {pdf_path.name}")
            try:
                invoice_data = self.pdf_processor.extract_invoice_data(pdf_path)
            except Exception as e:
                self.logger.error(f"Failed to process {pdf_path}: {e}")
                result.failures.append((str(pdf_path), str(e)))
                continue

            result.invoices.append(invoice_data)
            self._report(progress_callback, total, index + 1, pdf_path.name,
                         f"Extracted {len(invoice_data.products)} products from "
                         f"{invoice_data.client_name}")

        self.logger.info(
            f"Batch processing complete: {len(result.invoices)} successful, "
            f"{len(result.failures)} failed"
        )
        if result.failures:
            self.logger.warning("Failed files:")
            for file_path, error in result.failures:
                self.logger.warning(f"  {file_path}: {error}")

        return result

    def process_directory(self, pdf_directory: Path,
                          progress_callback: Optional[ProgressCallback] = None) -> BatchResult:
        """
        Process every PDF file in a directory, in file name order.

        Args:
            pdf_directory: Directory containing PDF files
            progress_callback: Optional callable receiving BatchProgress updates

        Returns:
            BatchResult for the directory

        Raises:
            ValueError: If the directory does not exist
        """
        pdf_directory = Path(pdf_directory)
        if not pdf_directory.exists() or not pdf_directory.is_dir():
            raise ValueError(f"Directory does not exist: {pdf_directory}")

        pdf_files = find_pdf_files(pdf_directory)
        if not pdf_files:
            self.logger.warning(f"No PDF files found in {pdf_directory}")
            return BatchResult()

        self.logger.info(f"Found {len(pdf_files)} PDF files to process")
        return self.process_files(pdf_files, progress_callback)

    @staticmethod
    def _report(callback: Optional[ProgressCallback], total: int, processed: int,
                current_file: str, current_step: str) -> None:
        if callback is not None:
            callback(BatchProgress(total, processed, current_file, current_step))


def find_pdf_files(directory: Path) -> List[Path]:
    """PDF files directly inside ``directory``, sorted by name, any case of suffix."""
    return sorted(
        (p for p in Path(directory).iterdir() if p.is_file() and p.suffix.lower() == '.pdf'),
        key=lambda p: p.name
    )
