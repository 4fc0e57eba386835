"""
Tests for the Qdrant wrapper.

These tests verify that:
1. ensure_collection is idempotent and absorbs 409 conflicts
2. A missing collection is a normal False, not an error
3. upsert overwrites by id and count reflects distinct ids
4. search returns at most top_k hits, most similar first
5. Remote failures come back as failed Results, never as exceptions
"""

from unittest.mock import MagicMock
import httpx
from qdrant_client.http.exceptions import UnexpectedResponse
from src.memory.vector_store import VectorStoreClient, timeout_seconds
from src.models.points import StoredPoint
from src.models.results import ErrorKind
from fakes import COLLECTION, DIMENSIONS, KeywordEmbeddings


def http_error(status_code: int, reason: str) -> UnexpectedResponse:
    return UnexpectedResponse(
        status_code=status_code,
        reason_phrase=reason,
        content=b'{"status": {"error": "test"}}',
        headers=httpx.Headers(),
    )


def vector(text: str):
    return KeywordEmbeddings().embed_query(text)


class TestEnsureCollection:
    """Test idempotent collection creation."""

    def test_creates_missing_collection(self, store):
        """Should create the collection and report it as new."""
        result = store.ensure_collection(COLLECTION, DIMENSIONS, "Cosine")

        assert result.ok is True
        assert result.value is True
        assert store.collection_exists(COLLECTION).value is True

    def test_second_call_does_not_fail(self, store):
        """Should absorb 'already exists' on the second call."""
        store.ensure_collection(COLLECTION, DIMENSIONS, "Cosine")
        result = store.ensure_collection(COLLECTION, DIMENSIONS, "Cosine")

        assert result.ok is True
        assert result.value is False

    def test_conflict_is_success(self):
        """Should treat a 409 from create_collection as already existing."""
        client = MagicMock()
        client.collection_exists.return_value = False
        client.create_collection.side_effect = http_error(409, "Conflict")

        result = VectorStoreClient(client).ensure_collection(COLLECTION)

        assert result.ok is True
        assert result.value is False

    def test_other_errors_are_reported(self):
        """Should report non-conflict errors as TRANSPORT failures."""
        client = MagicMock()
        client.collection_exists.return_value = False
        client.create_collection.side_effect = http_error(500, "Internal Server Error")

        result = VectorStoreClient(client).ensure_collection(COLLECTION)

        assert result.ok is False
        assert result.error == ErrorKind.TRANSPORT

    def test_unreachable_store_is_reported(self):
        """Should not try to create when the existence check fails."""
        client = MagicMock()
        client.collection_exists.side_effect = ConnectionError("connection refused")

        result = VectorStoreClient(client).ensure_collection(COLLECTION)

        assert result.ok is False
        client.create_collection.assert_not_called()


class TestCollectionExists:
    """Test the existence check."""

    def test_missing_collection_is_false(self, store):
        """Should return False for an unknown collection."""
        result = store.collection_exists("nope")

        assert result.ok is True
        assert result.value is False

    def test_not_found_response_is_false(self):
        """Should map a 404 response to False."""
        client = MagicMock()
        client.collection_exists.side_effect = http_error(404, "Not Found")

        result = VectorStoreClient(client).collection_exists(COLLECTION)

        assert result.ok is True
        assert result.value is False


class TestUpsertAndCount:
    """Test upsert semantics through count."""

    def test_empty_collection_counts_zero(self, store, collection):
        """Should count 0 before anything is upserted."""
        assert store.count(collection) == 0

    def test_count_tracks_distinct_ids(self, store, collection):
        """Should count N after N distinct ids and not grow on re-upsert."""
        for point_id, text in enumerate(["laptop", "tablet", "smartwatch"], start=1):
            assert store.upsert(collection, point_id, vector(text), {"name": text}).ok

        assert store.count(collection) == 3

        store.upsert(collection, 2, vector("tablet stylus"), {"name": "tablet v2"})

        assert store.count(collection) == 3

    def test_last_write_wins(self, store, collection):
        """Should overwrite the payload of an existing id."""
        store.upsert(collection, 7, vector("laptop"), {"name": "old"})
        store.upsert(collection, 7, vector("laptop"), {"name": "new"})

        points = store.client.retrieve(collection, ids=[7], with_payload=True)

        assert points[0].payload == {"name": "new"}

    def test_upsert_many_keeps_caller_ids(self, store, collection):
        """Should key batch points by their own ids, not list position."""
        result = store.upsert_many(collection, [
            StoredPoint(id=10, vector=vector("laptop"), payload={"name": "a"}),
            StoredPoint(id=20, vector=vector("tablet"), payload={"name": "b"}),
        ])

        assert result.value == 2
        ids = {p.id for p in store.client.retrieve(collection, ids=[10, 20])}
        assert ids == {10, 20}

    def test_upsert_many_empty_batch(self, store, collection):
        """Should accept an empty batch without calling the store."""
        assert store.upsert_many(collection, []).value == 0

    def test_upsert_into_missing_collection_fails(self, store):
        """Should report a failure instead of raising."""
        result = store.upsert("missing", 1, vector("laptop"), {})

        assert result.ok is False
        assert result.error == ErrorKind.TRANSPORT

    def test_count_failure_is_zero(self, store):
        """Should return 0 when the collection cannot be counted."""
        assert store.count("missing") == 0


class TestSearch:
    """Test nearest-neighbour search."""

    def fill(self, store, collection):
        catalog = {
            1: "Powerful laptop with 16GB RAM and 512GB SSD.",
            2: "High-end smartphone with 128GB storage.",
            3: "Comfortable headphones with noise cancelling technology.",
            4: "Fitness smartwatch with heart rate monitor.",
            5: "10-inch tablet with 64GB storage and stylus support.",
            6: "Spare laptop charger.",
            7: "Tablet sleeve.",
        }
        for point_id, text in catalog.items():
            store.upsert(collection, point_id, vector(text), {"name": text})

    def test_closest_first(self, store, collection):
        """Should rank the closest point first."""
        self.fill(store, collection)

        result = store.search(collection, vector("noise cancelling headphones"))

        assert result.ok is True
        assert result.value[0].point_id == 3
        scores = [hit.score for hit in result.value]
        assert scores == sorted(scores, reverse=True)

    def test_default_top_k_is_five(self, store, collection):
        """Should return at most 5 hits by default."""
        self.fill(store, collection)

        result = store.search(collection, vector("laptop"))

        assert len(result.value) == 5

    def test_top_k_limits_hits(self, store, collection):
        """Should honour an explicit top_k."""
        self.fill(store, collection)

        assert len(store.search(collection, vector("laptop"), top_k=2).value) == 2

    def test_payload_included(self, store, collection):
        """Should return the stored payload with each hit."""
        self.fill(store, collection)

        hit = store.search(collection, vector("smartwatch heart"), top_k=1).value[0]

        assert hit.payload["name"].startswith("Fitness smartwatch")

    def test_empty_collection_is_empty_success(self, store, collection):
        """Should distinguish 'no matches' from a failed call."""
        result = store.search(collection, vector("laptop"))

        assert result.ok is True
        assert result.value == []

    def test_failure_is_reported(self, store):
        """Should return a TRANSPORT failure for a missing collection."""
        result = store.search("missing", vector("laptop"))

        assert result.ok is False
        assert result.error == ErrorKind.TRANSPORT


class TestTimeoutSeconds:
    """Test the request timeout handed to QdrantClient."""

    def test_whole_seconds_unchanged(self):
        assert timeout_seconds(30.0) == 30

    def test_fractions_round_up(self):
        """Should never turn a short timeout into 0 (no timeout)."""
        assert timeout_seconds(0.5) == 1
        assert timeout_seconds(2.1) == 3
