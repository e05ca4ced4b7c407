class ServiceError(Exception):
    code = "SERVICE_ERROR"

    def __init__(self, code: str | None = None, message: str | None = None) -> None:
        self.code = code or self.code
        self.message = message or self.code
        super().__init__(self.message)


class NotFoundError(ServiceError):
    code = "NOT_FOUND"


class NotAFileError(ServiceError):
    code = "NOT_A_FILE"


class NotADirError(ServiceError):
    code = "NOT_A_DIRECTORY"


class PathEscapeError(ServiceError):
    code = "PATH_ESCAPE"


class NoFileProvidedError(ServiceError):
    code = "NO_FILE_PROVIDED"


class IOFailureError(ServiceError):
    code = "IO_FAILURE"
