"""In-memory stand-ins for the Firestore client and the thumbnail bucket."""

from typing import Any, Optional

from src.storage import BaseStorage


class FakeSnapshot:
    def __init__(self, reference: "FakeDocumentReference", data: Optional[dict]):
        self.reference = reference
        self.id = reference.id
        self.exists = data is not None
        self._data = data

    def to_dict(self) -> Optional[dict]:
        return self._data


class FakeDocumentReference:
    def __init__(self, client: "FakeFirestoreClient", path: str):
        self._client = client
        self.path = path
        self.id = path.rsplit("/", 1)[-1]

    def get(self, timeout=None, **kwargs) -> FakeSnapshot:
        self._client.gets.append(self.path)
        return FakeSnapshot(self, self._client.documents.get(self.path))

    def set(self, data: dict, timeout=None, **kwargs) -> None:
        self._client.documents[self.path] = data

    def collection(self, name: str) -> "FakeCollection":
        return FakeCollection(self._client, f"{self.path}/{name}")

    def collections(self) -> list["FakeCollection"]:
        prefix = f"{self.path}/"
        names = []
        for path in self._client.documents:
            if path.startswith(prefix):
                name = path[len(prefix):].split("/", 1)[0]
                if name not in names:
                    names.append(name)
        return [self.collection(name) for name in names]


class FakeQuery:
    def __init__(self, collection: "FakeCollection", limit: int):
        self._collection = collection
        self._limit = limit

    def stream(self, timeout=None, **kwargs):
        docs = self._collection.document_paths()[: self._limit]
        self._collection._client.pages.append((self._collection.path, len(docs)))
        for path in docs:
            ref = FakeDocumentReference(self._collection._client, path)
            yield FakeSnapshot(ref, self._collection._client.documents[path])


class FakeCollection:
    def __init__(self, client: "FakeFirestoreClient", path: str):
        self._client = client
        self.path = path
        self.id = path.rsplit("/", 1)[-1]

    def document(self, doc_id: str) -> FakeDocumentReference:
        return FakeDocumentReference(self._client, f"{self.path}/{doc_id}")

    def limit(self, count: int) -> FakeQuery:
        return FakeQuery(self, count)

    def document_paths(self) -> list[str]:
        depth = self.path.count("/") + 1
        return [
            path
            for path in self._client.documents
            if path.startswith(f"{self.path}/") and path.count("/") == depth
        ]


class FakeBatch:
    def __init__(self, client: "FakeFirestoreClient"):
        self._client = client
        self._ops: list[tuple[str, str, Optional[dict]]] = []

    def set(self, ref: FakeDocumentReference, data: dict) -> None:
        self._ops.append(("set", ref.path, data))

    def delete(self, ref: FakeDocumentReference) -> None:
        self._ops.append(("delete", ref.path, None))

    def commit(self, timeout=None, **kwargs) -> list:
        if len(self._ops) > 500:
            raise ValueError("too many operations in one batch")
        if self._client.commit_errors:
            raise self._client.commit_errors.pop(0)
        for op, path, data in self._ops:
            if op == "set":
                self._client.documents[path] = data
            else:
                self._client.documents.pop(path, None)
        self._client.commits.append(len(self._ops))
        return []


class FakeFirestoreClient:
    """
    Dict-backed Firestore client.

    Attributes:
        documents: document path -> stored data
        commits: number of operations of each successful batch commit
        pages: (collection path, size) of each page streamed
        gets: document paths read with ``get``
        commit_errors: exceptions raised by the next commits, in order
    """

    def __init__(self):
        self.documents: dict[str, dict[str, Any]] = {}
        self.commits: list[int] = []
        self.pages: list[tuple[str, int]] = []
        self.gets: list[str] = []
        self.commit_errors: list[Exception] = []
        self.closed = False

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self, name)

    def batch(self) -> FakeBatch:
        return FakeBatch(self)

    def close(self) -> None:
        self.closed = True


class FakeStorage(BaseStorage):
    """Thumbnail bucket kept in a dict, with the Cloud Storage URL layout."""

    def __init__(self, bucket_name: str = "thumbs"):
        self.bucket_name = bucket_name
        self.objects: dict[str, tuple[bytes, str]] = {}

    def file_exist(self, filename: str) -> bool:
        return filename in self.objects

    def get_public_url(self, filename: str) -> str:
        return f"https://storage.googleapis.com/{self.bucket_name}/{filename}"

    def save_file(self, filename: str, content: bytes, content_type: str) -> str:
        self.objects[filename] = (content, content_type)
        return self.get_public_url(filename)
