"""Tests for the Firestore helpers (paged delete, batched writes, existence)."""

from unittest.mock import MagicMock, patch

import pytest
from google.api_core import exceptions as gcp_exceptions

from src.db import (
    commit_in_batches,
    delete_collection,
    document_exists,
    episodes_collection,
    get_firestore_client,
    podcasts_collection,
)
from src.utils.retry import TEST_RETRY_CONFIG


def seed(client, count: int, collection: str = "podcasts") -> None:
    for i in range(count):
        client.documents[f"{collection}/doc-{i:05d}"] = {"ID": f"doc-{i:05d}"}


class TestDeleteCollection:
    def test_pages_until_empty(self, firestore_client):
        seed(firestore_client, 1200)

        deleted = delete_collection(
            firestore_client, podcasts_collection(firestore_client), batch_size=500
        )

        assert deleted == 1200
        assert firestore_client.documents == {}
        assert firestore_client.commits == [500, 500, 200]
        assert [size for _, size in firestore_client.pages] == [500, 500, 200, 0]

    def test_empty_collection(self, firestore_client):
        assert delete_collection(firestore_client, podcasts_collection(firestore_client)) == 0
        assert firestore_client.commits == []

    def test_batch_size_is_capped(self, firestore_client):
        seed(firestore_client, 600)
        delete_collection(firestore_client, podcasts_collection(firestore_client), batch_size=1000)
        assert firestore_client.commits == [500, 100]

    def test_recursive_removes_episodes(self, firestore_client):
        seed(firestore_client, 2)
        for podcast in ("doc-00000", "doc-00001"):
            for i in range(3):
                firestore_client.documents[f"podcasts/{podcast}/episodes/ep-{i}"] = {}

        deleted = delete_collection(
            firestore_client, podcasts_collection(firestore_client), recursive=True
        )

        assert deleted == 2
        assert firestore_client.documents == {}

    def test_non_recursive_keeps_subcollections(self, firestore_client):
        seed(firestore_client, 1)
        firestore_client.documents["podcasts/doc-00000/episodes/ep-0"] = {}

        delete_collection(firestore_client, podcasts_collection(firestore_client))

        assert list(firestore_client.documents) == ["podcasts/doc-00000/episodes/ep-0"]

    def test_transient_commit_error_is_retried(self, firestore_client):
        seed(firestore_client, 3)
        firestore_client.commit_errors.append(gcp_exceptions.ServiceUnavailable("busy"))

        deleted = delete_collection(
            firestore_client,
            podcasts_collection(firestore_client),
            retry_config=TEST_RETRY_CONFIG,
        )

        assert deleted == 3
        assert firestore_client.commits == [3]

    def test_permanent_error_propagates(self, firestore_client):
        seed(firestore_client, 3)
        firestore_client.commit_errors.append(gcp_exceptions.PermissionDenied("nope"))

        with pytest.raises(gcp_exceptions.PermissionDenied):
            delete_collection(
                firestore_client,
                podcasts_collection(firestore_client),
                retry_config=TEST_RETRY_CONFIG,
            )
        assert len(firestore_client.documents) == 3


class TestCommitInBatches:
    def test_splits_writes(self, firestore_client):
        collection = episodes_collection(firestore_client, "p1")
        writes = [(collection.document(f"ep-{i}"), {"ID": i}) for i in range(1201)]

        commits = commit_in_batches(firestore_client, writes)

        assert commits == 3
        assert firestore_client.commits == [500, 500, 201]
        assert len(firestore_client.documents) == 1201

    def test_custom_batch_size(self, firestore_client):
        collection = episodes_collection(firestore_client, "p1")
        writes = [(collection.document(f"ep-{i}"), {}) for i in range(10)]

        assert commit_in_batches(firestore_client, writes, batch_size=4) == 3
        assert firestore_client.commits == [4, 4, 2]

    def test_no_writes(self, firestore_client):
        assert commit_in_batches(firestore_client, []) == 0

    def test_retry_rebuilds_the_batch(self, firestore_client):
        collection = episodes_collection(firestore_client, "p1")
        writes = [(collection.document("ep-0"), {"ID": "ep-0"})]
        firestore_client.commit_errors.append(gcp_exceptions.DeadlineExceeded("slow"))

        assert commit_in_batches(firestore_client, writes, retry_config=TEST_RETRY_CONFIG) == 1
        assert firestore_client.commits == [1]


class TestDocumentExists:
    def test_existing_and_missing(self, firestore_client):
        firestore_client.documents["podcasts/p1"] = {"ID": "p1"}
        podcasts = podcasts_collection(firestore_client)

        assert document_exists(podcasts.document("p1")) is True
        assert document_exists(podcasts.document("p2")) is False

    def test_not_found_is_false(self):
        doc_ref = MagicMock()
        doc_ref.get.side_effect = gcp_exceptions.NotFound("missing")
        assert document_exists(doc_ref, retry_config=TEST_RETRY_CONFIG) is False

    def test_other_errors_propagate(self):
        doc_ref = MagicMock()
        doc_ref.get.side_effect = gcp_exceptions.PermissionDenied("denied")
        with pytest.raises(gcp_exceptions.PermissionDenied):
            document_exists(doc_ref, retry_config=TEST_RETRY_CONFIG)

    def test_transient_errors_retry(self):
        doc_ref = MagicMock()
        doc_ref.get.side_effect = [
            gcp_exceptions.ServiceUnavailable("busy"),
            MagicMock(exists=True),
        ]
        assert document_exists(doc_ref, timeout=5, retry_config=TEST_RETRY_CONFIG) is True
        doc_ref.get.assert_called_with(timeout=5)


class TestGetFirestoreClient:
    def test_service_account_client_is_closed(self):
        with patch("src.db.firestore_client.firestore.Client") as client_cls:
            client = client_cls.from_service_account_json.return_value
            with get_firestore_client("sa.json") as yielded:
                assert yielded is client

        client_cls.from_service_account_json.assert_called_once_with("sa.json")
        client.close.assert_called_once()

    def test_default_credentials(self):
        with patch("src.db.firestore_client.firestore.Client") as client_cls:
            with get_firestore_client() as yielded:
                assert yielded is client_cls.return_value
        client_cls.return_value.close.assert_called_once()
