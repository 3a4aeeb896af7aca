import pytest
from pydantic import ValidationError

from source_structure.models import FileRecord, FolderColor, FolderNode, Project


def test_folder_defaults() -> None:
    folder = FolderNode(name="src")

    assert folder.color == FolderColor.NORMAL
    assert folder.excluded is False
    assert folder.description is None
    assert folder.folders == []
    assert folder.files == []


def test_folder_lists_are_not_shared() -> None:
    a = FolderNode(name="a")
    b = FolderNode(name="b")
    a.files.append(FileRecord(name="x.py"))

    assert b.files == []


def test_duplicate_names_differing_in_case_are_rejected() -> None:
    with pytest.raises(ValidationError):
        FolderNode(folders=[FolderNode(name="Docs"), FolderNode(name="docs")])


def test_same_name_for_file_and_folder_is_allowed() -> None:
    folder = FolderNode(folders=[FolderNode(name="build")], files=[FileRecord(name="BUILD")])

    assert folder.folders[0].name == "build"


def test_unnamed_sub_folder_is_rejected() -> None:
    with pytest.raises(ValidationError):
        FolderNode(folders=[FolderNode()])


def test_project_accepts_field_names_and_aliases() -> None:
    by_name = Project(root_path="/r", excluded_extensions=[".tmp"])
    by_alias = Project.model_validate({"rootPath": "/r", "excludedExtensions": [".tmp"]})

    assert by_name == by_alias


def test_iter_folders_and_files_walk_the_whole_tree() -> None:
    root = FolderNode(
        folders=[
            FolderNode(
                name="a",
                folders=[FolderNode(name="b", folders=[FolderNode(name="c", files=[FileRecord(name="deep.txt")])])],
                files=[FileRecord(name="a.txt")],
            ),
            FolderNode(name="d"),
        ],
        files=[FileRecord(name="top.txt")],
    )

    assert [f.name for f in root.iter_folders()] == ["a", "b", "c", "d"]
    assert [f.name for f in root.iter_files()] == ["top.txt", "a.txt", "deep.txt"]
