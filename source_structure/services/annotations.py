from typing import List, Optional, Tuple

from source_structure.errors import NodeNotFoundError
from source_structure.models import FileRecord, FolderColor, FolderNode


def split_tree_path(path: str) -> List[str]:
    """Split a ``/`` (or ``\\``) separated path relative to the root folder."""
    return [part for part in path.replace("\\", "/").split("/") if part and part != "."]


def _child_folder(node: FolderNode, name: str) -> Optional[FolderNode]:
    key = name.casefold()
    for folder in node.folders:
        if folder.name.casefold() == key:
            return folder
    return None


def find_folder(root: FolderNode, path: str) -> FolderNode:
    """Resolve a tree path to a folder; an empty path is the root itself."""
    node = root
    for part in split_tree_path(path):
        child = _child_folder(node, part)
        if child is None:
            raise NodeNotFoundError(f"No folder {path!r} in the project tree")
        node = child
    return node


def find_file(root: FolderNode, path: str) -> Tuple[FolderNode, FileRecord]:
    parts = split_tree_path(path)
    if not parts:
        raise NodeNotFoundError("A file path must not be empty")

    folder = find_folder(root, "/".join(parts[:-1]))
    key = parts[-1].casefold()
    for record in folder.files:
        if record.name.casefold() == key:
            return folder, record
    raise NodeNotFoundError(f"No file {path!r} in the project tree")


def annotate_folder(
    root: FolderNode,
    path: str,
    color: Optional[FolderColor] = None,
    description: Optional[str] = None,
    excluded: Optional[bool] = None,
) -> FolderNode:
    """
    Update the annotations of one folder. Arguments left as None are unchanged.

    Marking a folder excluded does not drop its contents here; the next scan
    empties it.
    """
    folder = find_folder(root, path)
    if color is not None:
        folder.color = color
    if description is not None:
        # An empty string clears the description.
        folder.description = description or None
    if excluded is not None:
        folder.excluded = excluded
    return folder


def set_file_excluded(root: FolderNode, path: str, excluded: bool) -> FileRecord:
    """
    Flag a single file as excluded from line counting.

    The record stays in the tree; its line count becomes 0 at the next scan.
    """
    _, record = find_file(root, path)
    record.excluded = excluded
    return record
