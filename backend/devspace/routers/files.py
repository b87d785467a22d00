from fastapi import APIRouter, Depends

from devspace.dependencies import get_workspace
from devspace.schemas.file import FileCreate, FileRename, WorkspaceFileResponse, FileUpdate
from devspace.services.workspace_service import Workspace
from devspace.utils.sandbox import get_mime_type

router = APIRouter(prefix="/api/v1/workspace/files", tags=["files"])


def _file_response(workspace: Workspace, name: str) -> WorkspaceFileResponse:
    return WorkspaceFileResponse(name=name, content=workspace.read(name), file_type=get_mime_type(name))


@router.get("", response_model=list[WorkspaceFileResponse])
async def list_files(workspace: Workspace = Depends(get_workspace)):
    return [_file_response(workspace, name) for name in workspace.files.names()]


@router.post("", response_model=WorkspaceFileResponse, status_code=201)
async def create_file(data: FileCreate, workspace: Workspace = Depends(get_workspace)):
    await workspace.create_file(data.name)
    return _file_response(workspace, data.name)


@router.get("/{name}", response_model=WorkspaceFileResponse)
async def get_file(name: str, workspace: Workspace = Depends(get_workspace)):
    return _file_response(workspace, name)


@router.put("/{name}", response_model=WorkspaceFileResponse)
async def update_file(name: str, data: FileUpdate, workspace: Workspace = Depends(get_workspace)):
    await workspace.update_file(name, data.content)
    return _file_response(workspace, name)


@router.post("/{name}/rename", response_model=WorkspaceFileResponse)
async def rename_file(name: str, data: FileRename, workspace: Workspace = Depends(get_workspace)):
    await workspace.rename_file(name, data.new_name)
    return _file_response(workspace, data.new_name)


@router.delete("/{name}", status_code=204)
async def delete_file(name: str, workspace: Workspace = Depends(get_workspace)):
    await workspace.delete_file(name)
