from pydantic import BaseModel


class WorkspaceState(BaseModel):
    files: list[str]
    open_files: list[str]
    active: str
    active_exists: bool
    revision: int
