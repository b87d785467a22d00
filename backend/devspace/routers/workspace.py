from fastapi import APIRouter, Depends

from devspace.dependencies import get_workspace
from devspace.routers.preview import preview_response
from devspace.schemas.preview import PreviewResponse
from devspace.schemas.workspace import WorkspaceState
from devspace.services.workspace_service import Workspace

router = APIRouter(prefix="/api/v1/workspace", tags=["workspace"])


def workspace_state(workspace: Workspace) -> WorkspaceState:
    return WorkspaceState(
        files=workspace.files.names(),
        open_files=workspace.selection.open_files,
        active=workspace.selection.active,
        active_exists=workspace.exists(workspace.selection.active),
        revision=workspace.revision,
    )


@router.get("", response_model=WorkspaceState)
async def get_state(workspace: Workspace = Depends(get_workspace)):
    return workspace_state(workspace)


@router.post("/tabs/{name}/open", response_model=WorkspaceState)
async def open_tab(name: str, workspace: Workspace = Depends(get_workspace)):
    workspace.open_file(name)
    return workspace_state(workspace)


@router.post("/tabs/{name}/activate", response_model=WorkspaceState)
async def activate_tab(name: str, workspace: Workspace = Depends(get_workspace)):
    workspace.activate(name)
    return workspace_state(workspace)


@router.post("/tabs/{name}/close", response_model=WorkspaceState)
async def close_tab(name: str, workspace: Workspace = Depends(get_workspace)):
    workspace.close_tab(name)
    return workspace_state(workspace)


@router.post("/run", response_model=PreviewResponse)
async def run(workspace: Workspace = Depends(get_workspace)):
    workspace.run()
    return preview_response(workspace)


@router.post("/reset", response_model=WorkspaceState)
async def reset(workspace: Workspace = Depends(get_workspace)):
    await workspace.reset()
    return workspace_state(workspace)
