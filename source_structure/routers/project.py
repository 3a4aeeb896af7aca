import io
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from source_structure.errors import NodeNotFoundError, ProjectLoadError, ScanInProgressError
from source_structure.models import (
    CreateProjectRequest,
    ExcludedExtensionsUpdate,
    FileAnnotationUpdate,
    FileRecord,
    FolderAnnotationUpdate,
    FolderNode,
    Project,
    ProjectFileRequest,
    ScanStatus,
)
from source_structure.services import annotations
from source_structure.services.project import export_project, new_project
from source_structure.services.workspace import Workspace, get_workspace

router = APIRouter(prefix="/api/project", tags=["project"])


def _require_project(ws: Workspace) -> Project:
    if ws.project is None:
        raise HTTPException(status_code=404, detail="No project is open")
    return ws.project


def _require_idle(ws: Workspace) -> None:
    try:
        ws.ensure_idle()
    except ScanInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("", response_model=Project)
async def create_project(request: CreateProjectRequest, ws: Workspace = Depends(get_workspace)):
    """
    Start a fresh, empty project for a directory. Nothing is scanned yet.
    """
    root = Path(request.root_path)
    if not root.is_dir():
        raise HTTPException(status_code=404, detail="Directory not found")

    _require_idle(ws)
    project = new_project(root, request.excluded_extensions)
    ws.open(project)
    return project


@router.get("", response_model=Project)
async def get_project(ws: Workspace = Depends(get_workspace)):
    project = _require_project(ws)
    _require_idle(ws)
    return project


@router.post("/open", response_model=Project)
async def open_project(request: ProjectFileRequest, ws: Workspace = Depends(get_workspace)):
    if not request.path:
        raise HTTPException(status_code=400, detail="A project file path is required")

    _require_idle(ws)
    try:
        return ws.load(request.path)
    except ProjectLoadError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/save")
async def save_project(request: ProjectFileRequest, ws: Workspace = Depends(get_workspace)):
    _require_project(ws)
    _require_idle(ws)
    try:
        target = ws.save(request.path)
    except OSError as e:
        raise HTTPException(status_code=500, detail=f"Failed to save project: {e}")
    return {"path": str(target)}


@router.put("/excluded-extensions", response_model=Project)
async def update_excluded_extensions(request: ExcludedExtensionsUpdate, ws: Workspace = Depends(get_workspace)):
    """
    Replace the extension exclusion list. Takes effect on the next scan.
    """
    project = _require_project(ws)
    _require_idle(ws)
    project.excluded_extensions = list(request.excluded_extensions)
    return project


@router.patch("/folders", response_model=FolderNode)
async def update_folder(request: FolderAnnotationUpdate, ws: Workspace = Depends(get_workspace)):
    project = _require_project(ws)
    _require_idle(ws)
    try:
        return annotations.annotate_folder(
            project.root_folder,
            request.path,
            color=request.color,
            description=request.description,
            excluded=request.excluded,
        )
    except NodeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/files", response_model=FileRecord)
async def update_file(request: FileAnnotationUpdate, ws: Workspace = Depends(get_workspace)):
    project = _require_project(ws)
    _require_idle(ws)
    try:
        return annotations.set_file_excluded(project.root_folder, request.path, request.excluded)
    except NodeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _scan_status(ws: Workspace) -> ScanStatus:
    job = ws.runner.current
    if job is None or job.project is not ws.project:
        return ScanStatus(state="idle")

    error = job.error
    status = ScanStatus(state=job.state.value, error=str(error) if error else None)
    if job.done:
        # Counting walks the tree, so only do it once the scan has let go of it.
        status.folder_count = sum(1 for _ in job.project.root_folder.iter_folders())
        status.file_count = sum(1 for _ in job.project.root_folder.iter_files())
    return status


@router.post("/scan", response_model=ScanStatus, status_code=202)
async def start_scan(ws: Workspace = Depends(get_workspace)):
    project = _require_project(ws)
    try:
        ws.runner.start(project)
    except ScanInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _scan_status(ws)


@router.get("/scan", response_model=ScanStatus)
async def get_scan_status(ws: Workspace = Depends(get_workspace)):
    _require_project(ws)
    return _scan_status(ws)


@router.delete("/scan", response_model=ScanStatus)
async def cancel_scan(ws: Workspace = Depends(get_workspace)):
    _require_project(ws)
    ws.runner.cancel()
    return _scan_status(ws)


@router.get("/report", response_class=PlainTextResponse)
async def get_report(ws: Workspace = Depends(get_workspace)):
    """
    Cumulative file and line counts per folder as tab-separated text.
    """
    project = _require_project(ws)
    _require_idle(ws)

    buffer = io.StringIO()
    export_project(project, buffer)
    return buffer.getvalue()
