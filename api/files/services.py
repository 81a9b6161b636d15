"""
Services for the Files API
"""

from urllib.parse import quote

from fastapi import UploadFile, status

from api.files.models import FileRecord, UploadResponse
from core.exceptions import BadInputError, RecordStoreError
from core.logger import logger
from core.mongo import RecordStore
from core.security import SECRET_LENGTH, make_random_str
from core.storage import BlobStore


def upload_file(
    file: UploadFile | None,
    blob_store: BlobStore,
    record_store: RecordStore,
) -> UploadResponse:
    """
    Store an uploaded file and issue the secret needed to retrieve it.

    Args:
        file: The uploaded form file
        blob_store: Store receiving the file contents
        record_store: Store receiving the lookup record

    Returns:
        UploadResponse holding the generated secret

    Raises:
        BadInputError: If no file or no filename was submitted
        BlobStoreError: If the upload fails (no record is created)
        SecretGenerationError: If no secret can be generated
        RecordStoreError: If the record cannot be saved
    """
    if file is None or not file.filename:
        raise BadInputError("A file field with a filename is required")

    filename = file.filename
    logger.info("Upload file is %s", filename)

    blob_reference = blob_store.put_object(filename, file.file)
    secret = make_random_str(SECRET_LENGTH)

    record = FileRecord(blob_reference=blob_reference, secret=secret, filename=filename)
    try:
        record.id = record_store.insert(record)
    except RecordStoreError:
        # The blob stays in the store without a record pointing at it
        logger.warning("Blob '%s' is orphaned: its file record was not saved", blob_reference)
        raise

    return UploadResponse(status=status.HTTP_200_OK, secret=secret)


def download_file(
    secret: str,
    blob_store: BlobStore,
    record_store: RecordStore,
) -> tuple[bytes, str]:
    """
    Resolve a secret to the uploaded file.

    Args:
        secret: Secret issued at upload time
        blob_store: Store holding the file contents
        record_store: Store holding the lookup records

    Returns:
        Tuple of (file content, original filename)

    Raises:
        BadInputError: If the secret is empty or the record has no filename
        RecordNotFoundError: If no record matches the secret
        BlobNotFoundError: If the file contents are gone
        RecordStoreError, BlobStoreError: If a store fails
    """
    if not secret:
        raise BadInputError("A secret is required")

    record = record_store.find_by_secret(secret)
    logger.info("Find filename: %s", record.filename)
    if not record.filename:
        raise BadInputError("File record has no filename")

    content = blob_store.get_object(record.filename)
    return content, record.filename


def content_disposition(filename: str) -> str:
    """
    Build an attachment Content-Disposition header for filename.

    Non-ASCII names get an RFC 6266 filename* parameter next to an
    ASCII fallback.
    """
    escaped = "".join(ch for ch in filename if ch not in "\r\n")
    escaped = escaped.replace("\\", "\\\\").replace('"', '\\"')
    if escaped.isascii():
        return f'attachment; filename="{escaped}"'
    fallback = escaped.encode("ascii", "replace").decode("ascii")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
