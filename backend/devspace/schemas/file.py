from pydantic import BaseModel


class WorkspaceFileResponse(BaseModel):
    name: str
    content: str
    file_type: str


class FileCreate(BaseModel):
    name: str


class FileUpdate(BaseModel):
    content: str


class FileRename(BaseModel):
    new_name: str
