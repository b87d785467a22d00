from fastapi import HTTPException, Request

from devspace.services.workspace_service import Workspace


def get_workspace(request: Request) -> Workspace:
    workspace: Workspace | None = getattr(request.app.state, "workspace", None)
    if workspace is None:
        raise HTTPException(status_code=503, detail="Workspace not loaded")
    return workspace
