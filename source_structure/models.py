from enum import Enum
from typing import Iterator, List, Optional

from pydantic import BaseModel, Field, model_validator


class FolderColor(str, Enum):
    NORMAL = "Normal"
    GREEN = "Green"
    ORANGE = "Orange"
    RED = "Red"


def _duplicate_names(names: List[str]) -> List[str]:
    seen: set[str] = set()
    duplicates: List[str] = []
    for name in names:
        key = name.casefold()
        if key in seen:
            duplicates.append(name)
        seen.add(key)
    return duplicates


class FileRecord(BaseModel):
    name: str = Field(min_length=1)
    # Lines counted at the last scan; forced to 0 while the file is excluded.
    lines: int = Field(default=0, ge=0)
    excluded: bool = False


class FolderNode(BaseModel):
    # Empty for the root folder only.
    name: str = ""
    description: Optional[str] = None
    color: FolderColor = FolderColor.NORMAL
    excluded: bool = False
    # Use default_factory to avoid sharing the same list across instances
    folders: List["FolderNode"] = Field(default_factory=list)
    files: List[FileRecord] = Field(default_factory=list)

    model_config = {
        "populate_by_name": True
    }

    @model_validator(mode="after")
    def _check_children(self) -> "FolderNode":
        for folder in self.folders:
            if not folder.name:
                raise ValueError(f"folder {self.name!r} has a sub-folder without a name")
        dup_folders = _duplicate_names([f.name for f in self.folders])
        if dup_folders:
            raise ValueError(f"folder {self.name!r} has duplicate sub-folders: {dup_folders}")
        dup_files = _duplicate_names([f.name for f in self.files])
        if dup_files:
            raise ValueError(f"folder {self.name!r} has duplicate files: {dup_files}")
        return self

    def iter_folders(self) -> Iterator["FolderNode"]:
        """Yield every descendant folder, depth-first, parents before children."""
        for folder in self.folders:
            yield folder
            yield from folder.iter_folders()

    def iter_files(self) -> Iterator[FileRecord]:
        """Yield this folder's files, then the files of each sub-folder in turn."""
        yield from self.files
        for folder in self.folders:
            yield from folder.iter_files()


class Project(BaseModel):
    root_path: str = Field(alias="rootPath", min_length=1)
    excluded_extensions: List[str] = Field(default_factory=list, alias="excludedExtensions")
    root_folder: FolderNode = Field(default_factory=FolderNode, alias="rootFolder")

    model_config = {
        "populate_by_name": True
    }


class CreateProjectRequest(BaseModel):
    root_path: str
    excluded_extensions: Optional[List[str]] = None


class ProjectFileRequest(BaseModel):
    path: Optional[str] = None


class ExcludedExtensionsUpdate(BaseModel):
    excluded_extensions: List[str]


class FolderAnnotationUpdate(BaseModel):
    path: str = ""
    color: Optional[FolderColor] = None
    description: Optional[str] = None
    excluded: Optional[bool] = None


class FileAnnotationUpdate(BaseModel):
    path: str
    excluded: bool


class ScanStatus(BaseModel):
    state: str  # "idle", "running", "completed", "cancelled", "failed"
    error: Optional[str] = None
    folder_count: int = 0
    file_count: int = 0


FolderNode.model_rebuild()
