from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile

from filestore.api.errors import http_error_from_service
from filestore.api.schemas.files import DeleteOut, FileListOut, ObjectRecordOut, UploadOut
from filestore.services import files_service
from filestore.services.exceptions import ServiceError
from filestore.storage.base import StorageAdapter
from filestore.storage.factory import get_storage

router = APIRouter(tags=["files"])

Storage = Annotated[StorageAdapter, Depends(get_storage)]


def _base_url(request: Request) -> str:
    return str(request.base_url)


@router.post("/upload", response_model=UploadOut)
def upload_file(
    request: Request,
    storage: Storage,
    file: UploadFile | None = File(None),
    body_dir: str | None = Form(None, alias="dir"),
    body_file_name: str | None = Form(None, alias="fileName"),
    query_dir: str | None = Query(None, alias="dir"),
    query_file_name: str | None = Query(None, alias="fileName"),
):
    # Browsers submit an empty, unnamed part when no file was picked
    has_payload = file is not None and bool(file.filename)
    upload = files_service.UploadRequest.from_sources(
        body_dir=body_dir,
        query_dir=query_dir,
        body_name=body_file_name,
        query_name=query_file_name,
        stream=file.file if has_payload else None,
        original_name=file.filename if has_payload else None,
    )
    try:
        result = files_service.upload_object(storage, upload, _base_url(request))
    except ServiceError as err:
        raise http_error_from_service(err) from err
    finally:
        if file is not None:
            file.file.close()

    record = result.record
    return UploadOut(
        filename=record.name,
        custom_file_name=result.custom_file_name,
        folder=result.folder,
        dir=result.raw_dir,
        path=record.path,
        relative_path=record.relative_path,
        url=record.url,
        size=record.size,
    )


@router.get("/files", response_model=FileListOut)
def list_files(request: Request, storage: Storage, folder: str = ""):
    try:
        listing = files_service.list_objects(storage, folder, _base_url(request))
    except ServiceError as err:
        raise http_error_from_service(err) from err

    return FileListOut(
        folder=listing.folder,
        total=listing.total,
        files=[ObjectRecordOut.model_validate(record) for record in listing.records],
    )


@router.get("/files/{file_path:path}", response_model=ObjectRecordOut)
def get_file_info(file_path: str, request: Request, storage: Storage):
    try:
        record = files_service.get_object_info(storage, file_path, _base_url(request))
    except ServiceError as err:
        raise http_error_from_service(err) from err
    return ObjectRecordOut.model_validate(record)


@router.delete("/files/{file_path:path}", response_model=DeleteOut)
def delete_file(file_path: str, storage: Storage):
    try:
        files_service.delete_object(storage, file_path)
    except ServiceError as err:
        raise http_error_from_service(err) from err
    return DeleteOut(file_path=file_path)
