"""
Routes/endpoints for the Files API

HTTP   URI                          Action
----   ---                          ------
POST   /api/UploadTrigger           Upload a file, returns its secret
GET    /api/DownloadTrigger         Download a file by secret
"""

import io

from fastapi import APIRouter, File, Query, UploadFile
from fastapi.responses import StreamingResponse

from api.files.models import UploadResponse
from api.files import services
from core.deps import BlobStoreDep, RecordStoreDep

router = APIRouter(tags=["File Endpoints"])


@router.post("/UploadTrigger", response_model=UploadResponse, tags=["File Endpoints"])
def upload_file(
    blob_store: BlobStoreDep,
    record_store: RecordStoreDep,
    file: UploadFile | None = File(None, description="File to upload"),
) -> UploadResponse:
    """
    Upload a file.

    The file is stored under its original name and a secret is returned.
    Anyone holding the secret can download the file.
    """
    return services.upload_file(
        file=file, blob_store=blob_store, record_store=record_store
    )


@router.get("/DownloadTrigger", tags=["File Endpoints"])
def download_file(
    blob_store: BlobStoreDep,
    record_store: RecordStoreDep,
    secret: str = Query("", description="Secret returned by the upload"),
) -> StreamingResponse:
    """
    Download a file by its secret.

    Returns the file as an attachment named after the original filename.
    """
    file_content, filename = services.download_file(
        secret=secret, blob_store=blob_store, record_store=record_store
    )

    return StreamingResponse(
        io.BytesIO(file_content),
        media_type="application/octet-stream",
        headers={
            "Content-Disposition": services.content_disposition(filename),
            "Cache-Control": "no-store",
        }
    )
