"""
Catalog Ingestion Pipeline.

Embeds each product description and upserts it into the vector store,
keyed by the product id. Products are processed one at a time, in
catalog order: the next embedding request is only sent once the previous
upsert has finished.

A product whose embedding or upsert fails is recorded as failed and the
pass continues with the next one. Nothing is rolled back. Running the
pipeline again over the same catalog overwrites the same points.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List
from src.llm.embeddings import EmbeddingClient
from src.memory.vector_store import DEFAULT_DIMENSIONS, VectorStoreClient
from src.models.product import Product
from src.models.results import Result


logger = logging.getLogger(__name__)


@dataclass
class IngestionReport:
    """
    Outcome of one ingestion pass.

    Attributes:
        succeeded: Ids of products that were upserted
        failed: Ids of products that were skipped
        reasons: Failure message per skipped id
    """

    succeeded: List[int] = field(default_factory=list)
    failed: List[int] = field(default_factory=list)
    reasons: dict = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)


class IngestionPipeline:
    """Loads a product catalog into a vector store collection."""

    def __init__(
        self,
        embedder: EmbeddingClient,
        store: VectorStoreClient,
        collection_name: str,
        dimensions: int = DEFAULT_DIMENSIONS,
        distance: str = "Cosine",
    ):
        self.embedder = embedder
        self.store = store
        self.collection_name = collection_name
        self.dimensions = dimensions
        self.distance = distance

    def ensure_collection(self) -> Result[bool]:
        """Create the target collection if it is missing."""
        return self.store.ensure_collection(
            self.collection_name, self.dimensions, self.distance
        )

    def ingest_product(self, product: Product) -> Result[int]:
        """
        Embed and upsert a single product.

        Returns:
            Result[int]: Upsert result, or the embedding failure
        """
        embedding = self.embedder.embed(product.description)
        if not embedding.ok:
            return Result.failure(embedding.error, embedding.message)

        return self.store.upsert(
            self.collection_name,
            product.id,
            embedding.value,
            product.payload(),
        )

    def run(self, products: Iterable[Product]) -> IngestionReport:
        """
        Ingest a catalog.

        Args:
            products: Products in catalog order

        Returns:
            IngestionReport: Which ids succeeded and which failed
        """
        report = IngestionReport()

        for product in products:
            result = self.ingest_product(product)
            if result.ok:
                logger.info("Product '%s' (id %d) upserted", product.name, product.id)
                report.succeeded.append(product.id)
            else:
                logger.error(
                    "Product '%s' (id %d) skipped: %s",
                    product.name, product.id, result.message,
                )
                report.failed.append(product.id)
                report.reasons[product.id] = result.message

        return report
