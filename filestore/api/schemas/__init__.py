from filestore.api.schemas.files import (
    DeleteOut,
    FileListOut,
    HealthOut,
    ObjectRecordOut,
    UploadOut,
)

__all__ = [
    "ObjectRecordOut",
    "UploadOut",
    "DeleteOut",
    "FileListOut",
    "HealthOut",
]
