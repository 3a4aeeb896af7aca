import posixpath
from typing import TextIO, Tuple

from source_structure.models import FileRecord, FolderNode


def format_count(value: int) -> str:
    """Format a count with ``,`` thousands grouping, e.g. ``12,345``."""
    return f"{value:,}"


def join_display_path(directory: str, name: str) -> str:
    # The root folder has no name and shows up as the bare prefix.
    if not name:
        return directory
    return posixpath.join(directory, name)


def export_file(record: FileRecord, directory: str, writer: TextIO) -> None:
    path = join_display_path(directory, record.name)
    writer.write(f"{path}\t1\t{format_count(record.lines)}\n")


def export_folder(node: FolderNode, directory: str, writer: TextIO) -> Tuple[int, int]:
    """
    Write the report rows for ``node`` and everything below it.

    Rows come out post-order: each sub-folder's complete block first, then
    this folder's own files, then one summary row for this folder carrying
    the cumulative file and line counts.

    Returns the cumulative ``(files, lines)`` for the folder.
    """
    path = join_display_path(directory, node.name)

    files = 0
    lines = 0

    for folder in node.folders:
        child_files, child_lines = export_folder(folder, path, writer)
        files += child_files
        lines += child_lines

    for record in node.files:
        export_file(record, path, writer)
        files += 1
        lines += record.lines

    writer.write(f"{path}\t{format_count(files)}\t{format_count(lines)}\n")

    return files, lines
