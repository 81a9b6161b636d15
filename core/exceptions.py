"""
Error kinds raised by the stores and the file workflows.

Each error carries the HTTP status the API answers with, so route handlers
never have to translate store failures themselves.
"""

from fastapi import status


class FilerError(Exception):
    """Base class for errors reported to API callers"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(FilerError):
    """Required configuration is missing or unreadable"""


class BadInputError(FilerError):
    """Missing form field, empty secret or missing filename"""

    status_code = status.HTTP_400_BAD_REQUEST


class RecordNotFoundError(FilerError):
    """No file record matches the presented secret"""

    status_code = status.HTTP_404_NOT_FOUND


class BlobNotFoundError(FilerError):
    """The blob store has no object under the requested name"""

    status_code = status.HTTP_404_NOT_FOUND


class RecordStoreError(FilerError):
    """The record store is unreachable or rejected the operation"""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class BlobStoreError(FilerError):
    """The blob store failed to store or return an object"""

    status_code = status.HTTP_502_BAD_GATEWAY


class SecretGenerationError(FilerError):
    """The random source could not supply entropy"""
