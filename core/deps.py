"""
Define functions/aliases for dependency injection
"""
from typing import Annotated, TypeAlias
from fastapi import Depends, Request

from core.mongo import RecordStore
from core.storage import BlobStore


def get_blob_store(request: Request) -> BlobStore:
  blob_store = getattr(request.app.state, "blob_store", None)
  if blob_store is None:
    raise RuntimeError("Blob store is not available.")
  return blob_store


def get_record_store(request: Request) -> RecordStore:
  record_store = getattr(request.app.state, "record_store", None)
  if record_store is None:
    raise RuntimeError("Record store is not available.")
  return record_store


BlobStoreDep: TypeAlias = Annotated[BlobStore, Depends(get_blob_store)]
RecordStoreDep: TypeAlias = Annotated[RecordStore, Depends(get_record_store)]
