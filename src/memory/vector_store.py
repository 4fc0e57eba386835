"""
Qdrant Vector Store Wrapper.

Thin layer over qdrant_client.QdrantClient exposing the operations the
chatbot needs: ensure a collection exists, upsert points, search by
vector and count points.

Error Contract:
--------------
No method raises. Remote failures are logged and returned as a failed
Result (or 0 for count). "Already exists" on create and "not found" on
the existence check are normal outcomes, not failures.

The wrapper holds no state besides the Qdrant client, so a failed call
never leaves it in a bad state.
"""

import logging
import math
from typing import Iterable, List
from qdrant_client import QdrantClient
from qdrant_client.http import models
from qdrant_client.http.exceptions import UnexpectedResponse
from src.config.settings import Settings
from src.models.points import PointId, SearchHit, StoredPoint
from src.models.results import ErrorKind, Result


logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 5

# Vector size of text-embedding-ada-002
DEFAULT_DIMENSIONS = 1536


def timeout_seconds(timeout: float) -> int:
    """Qdrant takes whole seconds; round up so short timeouts never become 0."""
    return max(1, math.ceil(timeout))


class VectorStoreClient:
    """
    Vector store operations against a Qdrant instance.

    Use from_settings() in application code; pass a QdrantClient directly
    (e.g. QdrantClient(":memory:")) in tests.
    """

    def __init__(self, client: QdrantClient):
        """
        Initialize the wrapper.

        Args:
            client: A connected QdrantClient
        """
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "VectorStoreClient":
        """
        Build a REST client from settings.

        Args:
            settings: Application settings (qdrant_url, qdrant_api_key)

        Returns:
            VectorStoreClient: Wrapper around a new QdrantClient
        """
        client = QdrantClient(
            url=settings.qdrant_url,
            api_key=settings.qdrant_api_key,
            prefer_grpc=False,
            timeout=timeout_seconds(settings.request_timeout),
        )
        return cls(client)

    def collection_exists(self, name: str) -> Result[bool]:
        """
        Check whether a collection exists.

        Args:
            name: Collection name

        Returns:
            Result[bool]: True/False on success; a TRANSPORT failure if
                          the store could not be asked
        """
        try:
            return Result.success(bool(self.client.collection_exists(name)))
        except UnexpectedResponse as e:
            if e.status_code == 404:
                return Result.success(False)
            logger.error("Checking collection '%s' failed: %s", name, e)
            return Result.failure(ErrorKind.TRANSPORT, str(e))
        except Exception as e:
            logger.error("Checking collection '%s' failed: %s", name, e)
            return Result.failure(ErrorKind.TRANSPORT, str(e))

    def ensure_collection(
        self,
        name: str,
        dimensions: int = DEFAULT_DIMENSIONS,
        distance: str = "Cosine",
    ) -> Result[bool]:
        """
        Create a collection unless it already exists.

        Calling this repeatedly is safe. A 409 Conflict from the server
        (another process created it in between) counts as success.

        Args:
            name: Collection name
            dimensions: Vector size; must match the embedding model
            distance: Qdrant distance name ("Cosine", "Dot", "Euclid", ...)

        Returns:
            Result[bool]: True if the collection was created,
                          False if it was already there
        """
        exists = self.collection_exists(name)
        if not exists.ok:
            return exists
        if exists.value:
            logger.info("Collection '%s' already exists", name)
            return Result.success(False)

        try:
            self.client.create_collection(
                collection_name=name,
                vectors_config=models.VectorParams(
                    size=dimensions,
                    distance=models.Distance(distance),
                ),
            )
        except UnexpectedResponse as e:
            if e.status_code == 409:
                logger.info("Collection '%s' already exists", name)
                return Result.success(False)
            logger.error("Creating collection '%s' failed: %s", name, e)
            return Result.failure(ErrorKind.TRANSPORT, str(e))
        except Exception as e:
            logger.error("Creating collection '%s' failed: %s", name, e)
            return Result.failure(ErrorKind.TRANSPORT, str(e))

        logger.info("Collection '%s' created (%d dims, %s)", name, dimensions, models.Distance(distance).value)
        return Result.success(True)

    def upsert(
        self,
        name: str,
        point_id: PointId,
        vector: List[float],
        payload: dict,
    ) -> Result[int]:
        """
        Insert or overwrite a single point.

        The same id always maps to the same point; the last write wins.

        Returns:
            Result[int]: Number of points written (1) or a TRANSPORT failure
        """
        return self.upsert_many(
            name, [StoredPoint(id=point_id, vector=vector, payload=payload)]
        )

    def upsert_many(self, name: str, points: Iterable[StoredPoint]) -> Result[int]:
        """
        Insert or overwrite a batch of points keyed by their own ids.

        Args:
            name: Collection name
            points: Points to write

        Returns:
            Result[int]: Number of points written, or a TRANSPORT failure
        """
        structs = [
            models.PointStruct(id=p.id, vector=p.vector, payload=p.payload)
            for p in points
        ]
        if not structs:
            return Result.success(0)

        try:
            self.client.upsert(collection_name=name, points=structs, wait=True)
        except Exception as e:
            logger.error("Upsert into '%s' failed: %s", name, e)
            return Result.failure(ErrorKind.TRANSPORT, str(e))

        logger.debug("Upserted %d point(s) into '%s'", len(structs), name)
        return Result.success(len(structs))

    def search(
        self,
        name: str,
        vector: List[float],
        top_k: int = DEFAULT_TOP_K,
    ) -> Result[List[SearchHit]]:
        """
        Find the points closest to a query vector.

        Ranking uses the collection's distance metric; ties are ordered
        however Qdrant orders them.

        Args:
            name: Collection name
            vector: Query vector
            top_k: Maximum number of hits

        Returns:
            Result[List[SearchHit]]: Hits, most similar first (possibly
                                     empty), or a TRANSPORT failure
        """
        try:
            response = self.client.query_points(
                collection_name=name,
                query=vector,
                limit=top_k,
                with_payload=True,
            )
        except Exception as e:
            logger.error("Search in '%s' failed: %s", name, e)
            return Result.failure(ErrorKind.TRANSPORT, str(e))

        hits = [
            SearchHit(point_id=p.id, score=p.score, payload=p.payload or {})
            for p in response.points
        ]
        logger.info("Search in '%s' returned %d hit(s)", name, len(hits))
        return Result.success(hits)

    def count(self, name: str) -> int:
        """
        Count the points in a collection.

        Returns:
            int: Exact point count; 0 if the collection is empty or the
                 lookup failed
        """
        try:
            return self.client.count(collection_name=name, exact=True).count
        except Exception as e:
            logger.error("Counting points in '%s' failed: %s", name, e)
            return 0
