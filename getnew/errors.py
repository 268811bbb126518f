"""
Error taxonomy for getnew.

Every failure is terminal for the current run: nothing is retried. The CLI
catches GetNewError, prints it and exits with status 1.
"""

from pathlib import Path
from typing import Optional, Union


class GetNewError(Exception):
    """Base class for all errors reported by getnew."""
    pass


class DirectoryReadError(GetNewError):
    """Raised when a directory cannot be listed or an entry cannot be stat'ed."""
    pass


class NotFoundError(GetNewError):
    """Raised when no file survives filtering."""
    pass


class OutOfRangeError(GetNewError):
    """Raised when the requested rank is outside the candidate list."""
    pass


class RelocationError(GetNewError):
    """
    Raised when copying or removing the selected file fails.

    Attributes:
        step: Which step failed (open, create, copy, close, remove)
        path: The file the step was operating on
    """

    def __init__(self, step: str, path: Union[str, Path], message: str):
        super().__init__(message)
        self.step = step
        self.path = Path(path)


class ExtractionError(GetNewError):
    """Raised when the external archive tool fails or the archive cannot be removed."""

    def __init__(self, archive: str, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.archive = archive
        self.returncode = returncode


class NoArchiveFoundError(GetNewError):
    """Raised when the directory holds no file with a known archive extension."""
    pass
