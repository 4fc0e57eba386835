"""
LangGraph Node Functions.

Each node takes the current QueryState and returns updates to it:
- embed node: turn the query into a vector
- search node: look up the nearest products
- render node: format the result listing

Nodes that need a remote client are built by factory functions so the
clients are passed in explicitly instead of being looked up globally.
"""

import logging
from typing import Callable, List
from src.agent.state import QueryState
from src.llm.embeddings import EmbeddingClient
from src.memory.vector_store import DEFAULT_TOP_K, VectorStoreClient
from src.models.points import SearchHit


logger = logging.getLogger(__name__)

EMBEDDING_FAILED_MESSAGE = "Could not generate an embedding for your query."
SEARCH_FAILED_MESSAGE = "Could not search the product catalog."
NOTHING_FOUND_MESSAGE = "No products found."
RESULTS_HEADER = "Suggested products:"

Node = Callable[[QueryState], dict]


def format_price(price) -> str:
    """Render a price without a trailing .0 for whole amounts."""
    try:
        value = float(price)
    except (TypeError, ValueError):
        return str(price)
    if value.is_integer():
        return str(int(value))
    return f"{value:.2f}"


def render_hits(hits: List[SearchHit]) -> List[str]:
    """
    Format search hits as a numbered listing.

    Args:
        hits: Hits in the order the store returned them

    Returns:
        List[str]: Header plus one "N. name - price EUR" line per hit,
                   or just the nothing-found message
    """
    if not hits:
        return [NOTHING_FOUND_MESSAGE]

    lines = [RESULTS_HEADER]
    for index, hit in enumerate(hits, start=1):
        name = hit.payload.get("name", f"#{hit.point_id}")
        price = format_price(hit.payload.get("price", "?"))
        lines.append(f"{index}. {name} - {price} EUR")
    return lines


def make_embed_node(embedder: EmbeddingClient) -> Node:
    """
    Build the EMBED node.

    On failure the node sets an error message and leaves vector as None;
    the graph then skips straight to rendering.
    """

    def embed_node(state: QueryState) -> dict:
        result = embedder.embed(state["query"])
        if not result.ok:
            logger.warning("Query not embedded (%s): %s", result.error.value, result.message)
            return {"vector": None, "hits": [], "error": EMBEDDING_FAILED_MESSAGE}
        return {"vector": result.value}

    return embed_node


def make_search_node(
    store: VectorStoreClient,
    collection_name: str,
    top_k: int = DEFAULT_TOP_K,
) -> Node:
    """Build the SEARCH node for a fixed collection and result limit."""

    def search_node(state: QueryState) -> dict:
        result = store.search(collection_name, state["vector"], top_k)
        if not result.ok:
            return {"hits": [], "error": SEARCH_FAILED_MESSAGE}
        return {"hits": result.value}

    return search_node


def render_node(state: QueryState) -> dict:
    """
    RENDER Node: produce the output lines for this query.

    A failure message, if any, comes first, followed by the listing
    (which is the nothing-found message when there are no hits).
    """
    lines = []
    if state.get("error"):
        lines.append(state["error"])
    lines.extend(render_hits(state.get("hits") or []))
    return {"lines": lines}
