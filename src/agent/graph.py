"""
LangGraph Query Workflow.

This module builds the state machine that answers one product query.

Workflow:
START → EMBED → (vector?) → SEARCH → RENDER → END
                    └──(no)──────────→ RENDER

Waiting for the next query happens outside the graph, in the chat loop.
"""

from langgraph.graph import StateGraph, END
from src.agent.state import QueryState
from src.agent.nodes import make_embed_node, make_search_node, render_node
from src.llm.embeddings import EmbeddingClient
from src.memory.vector_store import DEFAULT_TOP_K, VectorStoreClient


def has_vector(state: QueryState) -> str:
    """
    Decision function: was the query embedded?

    A failed embedding must never reach the vector store.

    Returns:
        str: "search" if a vector is available, "render" otherwise
    """
    if state.get("vector"):
        return "search"
    return "render"


def create_query_graph(
    embedder: EmbeddingClient,
    store: VectorStoreClient,
    collection_name: str,
    top_k: int = DEFAULT_TOP_K,
):
    """
    Create the query workflow.

    Args:
        embedder: Client used to embed the query
        store: Vector store to search
        collection_name: Collection holding the product points
        top_k: Maximum number of products to suggest

    Returns:
        CompiledGraph: Ready to invoke with initial_state(query)
    """
    graph = StateGraph(QueryState)

    graph.add_node("embed", make_embed_node(embedder))
    graph.add_node("search", make_search_node(store, collection_name, top_k))
    graph.add_node("render", render_node)

    graph.set_entry_point("embed")

    graph.add_conditional_edges(
        "embed",
        has_vector,
        {
            "search": "search",
            "render": "render"
        }
    )

    graph.add_edge("search", "render")
    graph.add_edge("render", END)

    return graph.compile()
