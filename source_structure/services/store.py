import logging
import os
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from source_structure.config import PROJECT_FILE_NAME
from source_structure.errors import ProjectLoadError
from source_structure.models import Project

logger = logging.getLogger(__name__)


def get_project_path(root_path: Union[str, Path]) -> Path:
    return Path(root_path) / PROJECT_FILE_NAME


def dump_project(project: Project) -> str:
    return project.model_dump_json(indent=2, by_alias=True)


def parse_project(data: Union[str, bytes]) -> Project:
    """Parse a project document; any structural problem raises ProjectLoadError."""
    try:
        return Project.model_validate_json(data)
    except ValidationError as e:
        raise ProjectLoadError(f"Invalid project document: {e}") from e


def save_project(project: Project, path: Union[str, Path]) -> None:
    # Write next to the target first so a failed write never truncates it.
    path = Path(path)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(dump_project(project))
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.info("Saved project to %s", path)


def load_project(path: Union[str, Path]) -> Project:
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ProjectLoadError(f"Failed to read {path}: {e}") from e

    project = parse_project(data)
    logger.info("Loaded project for %s from %s", project.root_path, path)
    return project
