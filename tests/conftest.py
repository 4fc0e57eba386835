"""
Shared test fixtures.

Qdrant runs in local in-memory mode and embeddings come from a keyword
model, so the whole pipeline runs without network access.
"""

import pytest
from qdrant_client import QdrantClient
from src.llm.embeddings import EmbeddingClient
from src.memory.vector_store import VectorStoreClient
from fakes import COLLECTION, DIMENSIONS, KeywordEmbeddings


@pytest.fixture
def embedder():
    return EmbeddingClient(KeywordEmbeddings())


@pytest.fixture
def store():
    """Fresh in-memory Qdrant per test."""
    client = QdrantClient(":memory:")
    yield VectorStoreClient(client)
    client.close()


@pytest.fixture
def collection(store):
    """An empty, ready-to-use collection."""
    store.ensure_collection(COLLECTION, DIMENSIONS, "Cosine")
    return COLLECTION
