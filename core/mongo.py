"""
Record store configuration

File records live in a single MongoDB collection. One client is built at
startup and shared by every request.
"""

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from api.files.models import FileRecord
from core.config import Settings
from core.exceptions import RecordNotFoundError, RecordStoreError
from core.logger import logger


class RecordStore:
    """Persists file records and looks them up by secret"""

    def __init__(self, collection: Collection, client: MongoClient | None = None):
        self.collection = collection
        self.client = client

    def ping(self) -> None:
        """
        Verify the server is reachable.

        Raises:
            RecordStoreError: If the server cannot be reached in time
        """
        try:
            self.collection.database.command("ping")
        except PyMongoError as exc:
            logger.error("Unable to connect to record store: %s", exc)
            raise RecordStoreError("Unable to connect to record store") from exc

    def insert(self, record: FileRecord) -> str:
        """
        Insert a new file record.

        Returns:
            Identifier assigned by the store

        Raises:
            RecordStoreError: If the insert fails
        """
        try:
            result = self.collection.insert_one(record.to_document())
        except PyMongoError as exc:
            logger.error("Failed to add file record for '%s': %s", record.filename, exc)
            raise RecordStoreError("Failed to add file record") from exc
        logger.info("Added file link %s", result.inserted_id)
        return str(result.inserted_id)

    def find_by_secret(self, secret: str) -> FileRecord:
        """
        Look up the record holding secret.

        Raises:
            RecordNotFoundError: If no record matches
            RecordStoreError: If the lookup itself fails
        """
        try:
            document = self.collection.find_one({"uuid": secret})
        except PyMongoError as exc:
            logger.error("Failed to find file record: %s", exc)
            raise RecordStoreError("Failed to find file record") from exc
        if document is None:
            logger.info("document not found")
            raise RecordNotFoundError("File record not found")
        return FileRecord.from_document(document)

    def close(self) -> None:
        if self.client is not None:
            self.client.close()


def create_record_store(settings: Settings) -> RecordStore:
    """
    Build the record store from the application settings.

    Connection setup is bounded by MONGODB_TIMEOUT_SECONDS.
    """
    timeout_ms = int(settings.MONGODB_TIMEOUT_SECONDS * 1000)
    uri = settings.MONGODB_CONNECTION_STRING
    client = MongoClient(
        uri,
        # SRV URIs resolve to a replica set and reject direct connections
        directConnection=not uri.startswith("mongodb+srv://"),
        connectTimeoutMS=timeout_ms,
        serverSelectionTimeoutMS=timeout_ms,
    )
    collection = client[settings.MONGODB_DATABASE][settings.MONGODB_COLLECTION]
    return RecordStore(collection, client=client)
