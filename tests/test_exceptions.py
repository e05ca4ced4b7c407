from __future__ import annotations

from filestore.api.errors import http_error_from_service
from filestore.services.exceptions import NotFoundError, PathEscapeError, ServiceError


def test_code_comes_first_positionally():
    err = ServiceError("CUSTOM_CODE", "something broke")
    assert err.code == "CUSTOM_CODE"
    assert err.message == "something broke"
    assert str(err) == "something broke"


def test_subclass_defaults_code_and_message():
    err = NotFoundError()
    assert err.code == "NOT_FOUND"
    assert err.message == "NOT_FOUND"

    err = PathEscapeError(message="path escapes storage root")
    assert err.code == "PATH_ESCAPE"
    assert err.message == "path escapes storage root"


def test_http_error_carries_code_and_message():
    exc = http_error_from_service(NotFoundError(message="File not found."))
    assert exc.status_code == 404
    assert exc.detail == {"code": "NOT_FOUND", "message": "File not found."}

    exc = http_error_from_service(ServiceError("ODD", "unmapped"))
    assert exc.status_code == 500
