"""
Exit-code carrying errors raised by aruba-extractor commands.

``cli.main.main`` prints the message of any ``CLIError`` and exits with its
``exit_code``; the exit codes are stable so shell scripts can branch on them.
"""

from typing import List, Optional, Tuple


class CLIError(Exception):
    """Base class; ``exit_code`` defaults to 1."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class ValidationError(CLIError):
    """Invalid combination of command line options (exit code 2)."""

    def __init__(self, message: str):
        super().__init__(f"Validation Error: {message}", exit_code=2)


class InputFileError(CLIError):
    """An input text file exists but cannot be read (exit code 3)."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(f"Cannot read {file_path}: {reason}", exit_code=3)
        self.file_path = file_path


class ConfigurationError(CLIError):
    """Bad config file, unknown key or unconvertible value (exit code 5)."""

    def __init__(self, message: str):
        super().__init__(f"Configuration Error: {message}", exit_code=5)


class ProcessingError(CLIError):
    """
    No invoice could be extracted (exit code 6).

    Attributes:
        failures: (path, error message) pairs for the files that failed
    """

    def __init__(self, message: str, failures: Optional[List[Tuple[str, str]]] = None):
        super().__init__(f"Processing Error: {message}", exit_code=6)
        self.failures = failures or []
