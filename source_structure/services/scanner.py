import logging
import os
import threading
from typing import AbstractSet, Dict, List, Tuple

from source_structure.errors import ScanIOError
from source_structure.models import FileRecord, FolderNode

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    Cooperative cancellation signal shared between a scan and its caller.

    The scan only polls it at the start of each folder and before each file,
    so cancelling never interrupts a node halfway through its update.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


def file_extension(name: str) -> str:
    """
    Return the extension of a file name including its leading dot.

    Everything from the last dot counts, so ``.gitignore`` is its own
    extension. A trailing dot or no dot at all yields an empty string.
    """
    index = name.rfind(".")
    if index == -1 or index == len(name) - 1:
        return ""
    return name[index:]


def count_lines(path: str) -> int:
    """Count text lines; a trailing line break does not start an extra empty line."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace", newline=None) as f:
            return sum(1 for _ in f)
    except OSError as exc:
        raise ScanIOError(path, exc.strerror or str(exc)) from exc


def _list_entries(path: str) -> Tuple[List[Tuple[str, str]], List[Tuple[str, str]]]:
    """Split a directory listing into (name, path) pairs of sub-directories and files."""
    directories: List[Tuple[str, str]] = []
    files: List[Tuple[str, str]] = []
    try:
        with os.scandir(path) as entries:
            for entry in sorted(entries, key=lambda e: e.name):
                if entry.is_dir():
                    directories.append((entry.name, entry.path))
                elif entry.is_file():
                    files.append((entry.name, entry.path))
    except OSError as exc:
        raise ScanIOError(path, exc.strerror or str(exc)) from exc
    return directories, files


def scan_file(record: FileRecord, path: str) -> None:
    record.lines = 0 if record.excluded else count_lines(path)
    logger.debug("Counted %d lines in %s", record.lines, path)


def scan_folder(
    node: FolderNode,
    path: str,
    excluded_extensions: AbstractSet[str],
    cancel: CancellationToken,
    skip_files: AbstractSet[str] = frozenset(),
) -> bool:
    """
    Merge the directory at ``path`` into ``node`` in place.

    Sub-folders and files are matched to existing children by case-insensitive
    name so that their annotations survive. New directories are appended with
    default annotations and new files are appended unless their extension is
    in ``excluded_extensions`` (expected casefolded). A tracked file whose
    extension has since become excluded is dropped. Excluded sub-folders are
    emptied and not descended into. Children that no longer exist on disk are
    left alone. Files named in ``skip_files`` (casefolded, this level only) are
    treated like excluded extensions.

    Returns False as soon as ``cancel`` is observed, True when the whole
    subtree was merged. Filesystem failures raise ScanIOError.
    """
    if cancel.cancelled:
        return False

    directories, files = _list_entries(path)

    known_folders: Dict[str, FolderNode] = {f.name.casefold(): f for f in node.folders}

    for name, dir_path in directories:
        folder = known_folders.get(name.casefold())
        if folder is None:
            folder = FolderNode(name=name)
            known_folders[name.casefold()] = folder
            node.folders.append(folder)
        elif folder.excluded:
            folder.folders.clear()
            folder.files.clear()
            continue

        if not scan_folder(folder, dir_path, excluded_extensions, cancel):
            return False

    known_files: Dict[str, FileRecord] = {f.name.casefold(): f for f in node.files}

    for name, file_path in files:
        if cancel.cancelled:
            return False

        key = name.casefold()
        allowed = key not in skip_files and file_extension(name).casefold() not in excluded_extensions

        record = known_files.get(key)
        if record is None:
            if not allowed:
                continue
            record = FileRecord(name=name)
            known_files[key] = record
            node.files.append(record)
        elif not allowed:
            del known_files[key]
            node.files[:] = [f for f in node.files if f is not record]
            logger.debug("Dropped %s, its extension is excluded", file_path)
            continue

        scan_file(record, file_path)

    return True
