"""
Models for the Files API
"""

from typing import Any
from sqlmodel import SQLModel


class FileRecord(SQLModel):
    """
    Lookup record linking a secret to an uploaded blob.

    Stored as {"_id", "url", "uuid", "filename"} in the record store.
    """

    id: str | None = None
    blob_reference: str = ""
    secret: str
    filename: str = ""

    def to_document(self) -> dict[str, Any]:
        """Document written to the record store (store assigns _id)"""
        return {
            "url": self.blob_reference,
            "uuid": self.secret,
            "filename": self.filename,
        }

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "FileRecord":
        """Build a record from a stored document, tolerating missing fields"""
        record_id = document.get("_id")
        return cls(
            id=str(record_id) if record_id is not None else None,
            blob_reference=document.get("url") or "",
            secret=document.get("uuid") or "",
            filename=document.get("filename") or "",
        )


class UploadResponse(SQLModel):
    """Response body for a successful upload"""

    status: int
    secret: str
