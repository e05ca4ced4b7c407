from fastapi import HTTPException

from filestore.services.exceptions import (
    NoFileProvidedError,
    NotADirError,
    NotAFileError,
    NotFoundError,
    PathEscapeError,
    ServiceError,
)


def http_error_from_service(err: ServiceError) -> HTTPException:
    if isinstance(err, NotFoundError):
        status = 404
    elif isinstance(err, (NotAFileError, NotADirError, PathEscapeError, NoFileProvidedError)):
        status = 400
    else:
        status = 500

    return HTTPException(
        status_code=status,
        detail={"code": err.code, "message": err.message},
    )
