import pytest
from bson import ObjectId
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError
from core.deps import get_blob_store, get_record_store
from core.mongo import RecordStore
from core.storage import BlobStore
from main import app


class MockS3Meta:
    """Mock client metadata"""

    def __init__(self, region_name: str):
        self.region_name = region_name


class MockS3Client:
    """Mock S3 client for testing"""

    def __init__(self, region_name: str = "us-east-1"):
        self.buckets = {}  # Store object data: {bucket_name: {key: bytes}}
        self.meta = MockS3Meta(region_name)
        self.error_mode = None  # For simulating errors
        self.calls = []  # Names of the operations called

    def _raise_error(self, operation: str):
        if self.error_mode is None:
            return
        raise ClientError(
            {"Error": {"Code": self.error_mode, "Message": self.error_mode}},
            operation,
        )

    def create_bucket(self, Bucket: str, CreateBucketConfiguration=None):
        """Mock bucket creation"""
        self.calls.append("create_bucket")
        self._raise_error("CreateBucket")
        if Bucket in self.buckets:
            raise ClientError(
                {
                    "Error": {
                        "Code": "BucketAlreadyOwnedByYou",
                        "Message": "Your previous request to create the named bucket succeeded",
                    }
                },
                "CreateBucket",
            )
        self.buckets[Bucket] = {}
        return {"Location": f"/{Bucket}"}

    def upload_fileobj(self, Fileobj, Bucket: str, Key: str, Config=None):
        """Mock managed upload"""
        self.calls.append("upload_fileobj")
        self._raise_error("PutObject")
        self.buckets.setdefault(Bucket, {})[Key] = Fileobj.read()

    def download_fileobj(self, Bucket: str, Key: str, Fileobj, Config=None):
        """Mock managed download (a missing key fails the HeadObject call)"""
        self.calls.append("download_fileobj")
        self._raise_error("GetObject")
        if Key not in self.buckets.get(Bucket, {}):
            raise ClientError(
                {"Error": {"Code": "404", "Message": "Not Found"}},
                "HeadObject",
            )
        Fileobj.write(self.buckets[Bucket][Key])

    def simulate_error(self, error_type: str):
        """
        Configure client to raise a ClientError with the given code

        Args:
            error_type: Error code, e.g. "AccessDenied" or "InternalError"
        """
        self.error_mode = error_type


class MockInsertOneResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class MockDatabase:
    """Mock database supporting the ping command"""

    def __init__(self, collection):
        self.collection = collection

    def command(self, name: str):
        self.collection._check_available()
        return {"ok": 1.0}


class MockMongoCollection:
    """Mock MongoDB collection for testing"""

    def __init__(self):
        self.documents = []
        self.database = MockDatabase(self)
        self.unavailable = False  # Simulate an unreachable server
        self.calls = []  # Names of the operations called

    def _check_available(self):
        if self.unavailable:
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    def insert_one(self, document: dict):
        """Mock insert_one operation"""
        self.calls.append("insert_one")
        self._check_available()
        stored = dict(document)
        stored["_id"] = ObjectId()
        self.documents.append(stored)
        return MockInsertOneResult(stored["_id"])

    def find_one(self, filter: dict):
        """Mock find_one operation (equality filters only)"""
        self.calls.append("find_one")
        self._check_available()
        for document in self.documents:
            if all(document.get(key) == value for key, value in filter.items()):
                return dict(document)
        return None

    def simulate_unavailable(self):
        """Make every following operation fail as if the server were down"""
        self.unavailable = True


@pytest.fixture(name="mock_s3_client")
def mock_s3_client_fixture():
    """Provide a mock S3 client for testing"""
    return MockS3Client()


@pytest.fixture(name="mock_collection")
def mock_collection_fixture():
    """Provide a mock MongoDB collection for testing"""
    return MockMongoCollection()


@pytest.fixture(name="blob_store")
def blob_store_fixture(mock_s3_client: MockS3Client):
    return BlobStore(mock_s3_client, "filer")


@pytest.fixture(name="record_store")
def record_store_fixture(mock_collection: MockMongoCollection):
    return RecordStore(mock_collection)


@pytest.fixture(name="client")
def client_fixture(blob_store: BlobStore, record_store: RecordStore):
    def get_blob_store_override():
        return blob_store

    def get_record_store_override():
        return record_store

    app.dependency_overrides[get_blob_store] = get_blob_store_override
    app.dependency_overrides[get_record_store] = get_record_store_override

    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
