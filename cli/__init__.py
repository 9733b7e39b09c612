"""
CLI package for the Aruba invoice extractor.

This package provides the command-line interface for extracting product
line items from Aruba invoice PDFs and exporting them as tables, CSV or JSON.
"""

from .version import __version__
