from pydantic import BaseModel

from devspace.utils.sandbox import SANDBOX_ATTRS


class CompositionReport(BaseModel):
    entry_found: bool
    stylesheet_reference: bool
    script_reference: bool
    missing_files: list[str] = []
    warnings: list[str] = []


class PreviewDocument(BaseModel):
    revision: int
    document: str
    sandbox: str = SANDBOX_ATTRS

    model_config = {"frozen": True}


class PreviewResponse(BaseModel):
    revision: int
    sandbox: str
    document_url: str
    report: CompositionReport
