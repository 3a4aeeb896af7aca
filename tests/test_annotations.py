import pytest

from source_structure.errors import NodeNotFoundError
from source_structure.models import FileRecord, FolderColor, FolderNode
from source_structure.services.annotations import (
    annotate_folder,
    find_file,
    find_folder,
    set_file_excluded,
    split_tree_path,
)


def _tree() -> FolderNode:
    return FolderNode(
        folders=[
            FolderNode(
                name="src",
                folders=[FolderNode(name="Core", files=[FileRecord(name="Engine.cs", lines=40)])],
            )
        ],
        files=[FileRecord(name="README.md", lines=3)],
    )


def test_split_tree_path() -> None:
    assert split_tree_path("") == []
    assert split_tree_path("/src//core/") == ["src", "core"]
    assert split_tree_path("src\\core") == ["src", "core"]
    assert split_tree_path("./src") == ["src"]


def test_find_folder_is_case_insensitive() -> None:
    root = _tree()

    assert find_folder(root, "") is root
    assert find_folder(root, "SRC/core").name == "Core"


def test_find_file() -> None:
    root = _tree()

    folder, record = find_file(root, "src/core/engine.CS")

    assert folder.name == "Core"
    assert record.lines == 40


@pytest.mark.parametrize("path", ["", "missing.txt", "src/nope/Engine.cs"])
def test_find_file_missing(path: str) -> None:
    with pytest.raises(NodeNotFoundError):
        find_file(_tree(), path)


def test_annotate_folder_updates_only_given_fields() -> None:
    root = _tree()

    annotate_folder(root, "src", color=FolderColor.RED, description="Sources")
    folder = annotate_folder(root, "src", excluded=True)

    assert folder.color == FolderColor.RED
    assert folder.description == "Sources"
    assert folder.excluded is True
    # Contents are only dropped by the next scan.
    assert folder.folders[0].name == "Core"


def test_annotate_folder_clears_description() -> None:
    root = _tree()
    annotate_folder(root, "src", description="Sources")

    assert annotate_folder(root, "src", description="").description is None


def test_annotate_missing_folder() -> None:
    with pytest.raises(NodeNotFoundError):
        annotate_folder(_tree(), "docs", color=FolderColor.GREEN)


def test_set_file_excluded() -> None:
    root = _tree()

    record = set_file_excluded(root, "README.md", True)

    assert record.excluded is True
    assert root.files[0] is record
