from pathlib import Path
from typing import Union


class SourceStructureError(Exception):
    """Base class for every error raised by source_structure."""


class ScanIOError(SourceStructureError):
    """
    Listing a directory or reading a file failed during a scan.

    The scan branch that hit the failure is aborted; the underlying
    OSError is chained as ``__cause__``.
    """

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = str(path)
        self.reason = reason
        message = f"Failed to scan {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ProjectLoadError(SourceStructureError):
    """A persisted project document could not be read or is structurally invalid."""


class ScanInProgressError(SourceStructureError):
    """A scan is already running against the project."""


class NodeNotFoundError(SourceStructureError, LookupError):
    """No folder or file exists at the requested tree path."""
