from fastapi import APIRouter, Depends
from fastapi.responses import Response

from devspace.dependencies import get_workspace
from devspace.schemas.preview import PreviewResponse
from devspace.services.workspace_service import Workspace
from devspace.utils.sandbox import preview_headers

router = APIRouter(prefix="/api/v1/workspace/preview", tags=["preview"])


def preview_response(workspace: Workspace) -> PreviewResponse:
    preview = workspace.preview()
    return PreviewResponse(
        revision=preview.revision,
        sandbox=preview.sandbox,
        document_url=f"{router.prefix}/document?rev={preview.revision}",
        report=workspace.report(),
    )


@router.get("", response_model=PreviewResponse)
async def get_preview(workspace: Workspace = Depends(get_workspace)):
    return preview_response(workspace)


@router.get("/document")
async def serve_document(workspace: Workspace = Depends(get_workspace)):
    preview = workspace.preview()
    return Response(content=preview.document, media_type="text/html", headers=preview_headers(preview.revision))
