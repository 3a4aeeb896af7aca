import logging
import os
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, TextIO, Union

from source_structure.config import (
    DEFAULT_EXCLUDED_EXTENSIONS,
    PROJECT_FILE_NAME,
    REPORT_ENCODING,
    REPORT_HEADER,
    REPORT_ROOT_MARKER,
)
from source_structure.models import FolderNode, Project
from source_structure.services.export import export_folder
from source_structure.services.scanner import CancellationToken, scan_folder

logger = logging.getLogger(__name__)


def new_project(
    root_path: Union[str, Path],
    excluded_extensions: Optional[Iterable[str]] = None,
) -> Project:
    if excluded_extensions is None:
        excluded_extensions = DEFAULT_EXCLUDED_EXTENSIONS
    return Project(
        root_path=os.path.abspath(root_path),
        excluded_extensions=list(excluded_extensions),
        root_folder=FolderNode(),
    )


# The default project document lives in the scan root and is not part of the tree.
PROJECT_FILE_NAMES = frozenset(
    name.casefold() for name in (PROJECT_FILE_NAME, PROJECT_FILE_NAME + ".tmp")
)


def excluded_extension_set(project: Project) -> FrozenSet[str]:
    return frozenset(ext.casefold() for ext in project.excluded_extensions)


def scan_project(project: Project, cancel: Optional[CancellationToken] = None) -> bool:
    """
    Merge the live directory tree under ``project.root_path`` into the project.

    Runs synchronously on the calling thread; use ScanRunner to run it in the
    background. Returns False if the scan was cancelled before finishing.
    """
    if cancel is None:
        cancel = CancellationToken()

    root = project.root_folder
    if root.excluded:
        root.folders.clear()
        root.files.clear()
        return True

    logger.info("Scanning %s", project.root_path)
    completed = scan_folder(
        root,
        project.root_path,
        excluded_extension_set(project),
        cancel,
        skip_files=PROJECT_FILE_NAMES,
    )
    if completed:
        logger.info("Finished scanning %s", project.root_path)
    else:
        logger.info("Scan of %s cancelled", project.root_path)
    return completed


def export_project(project: Project, writer: TextIO) -> None:
    writer.write(REPORT_HEADER + "\n")
    files, lines = export_folder(project.root_folder, REPORT_ROOT_MARKER, writer)
    logger.debug("Exported %d files, %d lines", files, lines)


def export_project_to_path(project: Project, path: Union[str, Path]) -> None:
    with open(path, "w", encoding=REPORT_ENCODING, newline="\n") as f:
        export_project(project, f)
    logger.info("Wrote report to %s", path)
