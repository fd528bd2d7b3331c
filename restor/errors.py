from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_REQUEST = "invalid_request"
    STORE_UNAVAILABLE = "store_unavailable"
    INTERNAL = "internal"


STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.STORE_UNAVAILABLE: 500,
    ErrorKind.INTERNAL: 500,
}


class CatalogError(Exception):
    """A failure with a closed kind, translated to an HTTP status at the edge."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": self.kind.value}


def not_found(message: str) -> CatalogError:
    return CatalogError(ErrorKind.NOT_FOUND, message)


def invalid_request(message: str) -> CatalogError:
    return CatalogError(ErrorKind.INVALID_REQUEST, message)


def store_unavailable(message: str) -> CatalogError:
    return CatalogError(ErrorKind.STORE_UNAVAILABLE, message)
