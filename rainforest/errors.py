from typing import Optional


class CatalogError(Exception):
    """An expected failure that maps onto a client-facing status code."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInput(CatalogError):
    status_code = 400


class NotFound(CatalogError):
    status_code = 404


class CatalogLoadError(RuntimeError):
    """The static catalog files are missing or malformed. Fatal at startup."""
