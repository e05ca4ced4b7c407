from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SchemaBase(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class ObjectRecordOut(SchemaBase):
    name: str
    path: str
    relative_path: str
    url: str | None = None
    size: int
    created: datetime
    modified: datetime
    accessed: datetime
    is_file: bool
    is_directory: bool


class UploadOut(SchemaBase):
    message: str = "File uploaded successfully!"
    filename: str
    custom_file_name: str = ""
    folder: str
    dir: str = ""
    path: str
    relative_path: str
    url: str
    size: int


class DeleteOut(SchemaBase):
    message: str = "File deleted successfully!"
    file_path: str


class FileListOut(SchemaBase):
    folder: str
    total: int
    files: list[ObjectRecordOut]


class HealthOut(SchemaBase):
    status: str = "ok"
    message: str = "File storage server is running"
