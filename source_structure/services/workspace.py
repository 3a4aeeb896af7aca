import logging
from pathlib import Path
from typing import Optional, Union

from source_structure.errors import ScanInProgressError
from source_structure.models import Project
from source_structure.services import store
from source_structure.services.scan_jobs import ScanRunner

logger = logging.getLogger(__name__)


class Workspace:
    """
    The project currently open in this process, where it is saved, and the
    runner that scans it.
    """

    def __init__(self, runner: Optional[ScanRunner] = None):
        self.runner = runner or ScanRunner()
        self.project: Optional[Project] = None
        self.project_path: Optional[Path] = None

    def ensure_idle(self) -> None:
        if self.runner.busy:
            raise ScanInProgressError("Wait for the running scan to finish or cancel it first")

    def open(self, project: Project, project_path: Optional[Union[str, Path]] = None) -> None:
        self.ensure_idle()
        self.project = project
        self.project_path = Path(project_path) if project_path else None
        logger.info("Opened project for %s", project.root_path)

    def load(self, path: Union[str, Path]) -> Project:
        self.ensure_idle()
        project = store.load_project(path)
        self.open(project, path)
        return project

    def save(self, path: Optional[Union[str, Path]] = None) -> Path:
        self.ensure_idle()
        if self.project is None:
            raise LookupError("No project is open")
        target = Path(path) if path else self.project_path
        if target is None:
            target = store.get_project_path(self.project.root_path)
        store.save_project(self.project, target)
        self.project_path = target
        return target


workspace = Workspace()


def get_workspace() -> Workspace:
    return workspace
