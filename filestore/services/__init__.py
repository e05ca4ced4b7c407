from filestore.services.files_service import (
    UploadRequest,
    delete_object,
    get_object_info,
    list_objects,
    upload_object,
)

__all__ = [
    "UploadRequest",
    "upload_object",
    "delete_object",
    "get_object_info",
    "list_objects",
]
