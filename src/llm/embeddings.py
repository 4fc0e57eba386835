"""
Embedding client wrapper.

This module turns text into vectors through an OpenAI-compatible
embeddings endpoint (POST /v1/embeddings, bearer token auth).
The LangChain Embeddings object is injected, so tests can swap in a
fake without touching the network.
"""

import logging
from typing import List
from langchain_core.embeddings import Embeddings
from langchain_openai import OpenAIEmbeddings
from src.config.settings import Settings
from src.models.results import ErrorKind, Result


logger = logging.getLogger(__name__)


def get_embeddings(settings: Settings) -> OpenAIEmbeddings:
    """
    Build the OpenAI embeddings model from settings.

    Args:
        settings: Application settings

    Returns:
        OpenAIEmbeddings: Configured embeddings model

    Example:
        >>> embeddings = get_embeddings(get_settings())
        >>> vector = embeddings.embed_query("wireless headphones")
    """
    return OpenAIEmbeddings(
        model=settings.embedding_model,
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        timeout=settings.request_timeout,
        # One request per call: failures surface immediately
        max_retries=0,
        # Send the raw string as "input" instead of tiktoken token ids
        check_embedding_ctx_length=False,
    )


class EmbeddingClient:
    """
    Converts text into an embedding vector.

    Every call issues exactly one request; there is no cache and no retry.
    Failures are logged and returned as a failed Result.
    """

    def __init__(self, embeddings: Embeddings):
        """
        Initialize the client.

        Args:
            embeddings: Any LangChain Embeddings implementation
        """
        self.embeddings = embeddings

    def embed(self, text: str) -> Result[List[float]]:
        """
        Embed a single text.

        Args:
            text: Text to embed. Empty strings are forwarded as-is;
                  what the provider does with them is up to the provider.

        Returns:
            Result[List[float]]: The vector, or a failure:
                - TRANSPORT: network/auth/provider error
                - INVALID_RESPONSE: the provider returned an empty vector
        """
        try:
            vector = self.embeddings.embed_query(text)
        except Exception as e:
            logger.error("Embedding request failed: %s", e)
            return Result.failure(ErrorKind.TRANSPORT, str(e))

        if not vector:
            logger.error("Embedding provider returned an empty vector")
            return Result.failure(
                ErrorKind.INVALID_RESPONSE, "empty embedding vector"
            )

        logger.debug("Embedded %d characters into %d dimensions", len(text), len(vector))
        return Result.success([float(x) for x in vector])
