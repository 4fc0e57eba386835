"""
LangGraph Query State Definition.

This module defines the state that flows through the query graph for a
single user query: Embedding -> Searching -> Rendering.
"""

from typing import List, Optional, TypedDict
from src.models.points import SearchHit


class QueryState(TypedDict):
    """
    State that flows through the query workflow.

    Each node reads what it needs and returns only the keys it changes.
    A fresh state is built for every query, so nothing leaks between
    iterations of the chat loop.

    Attributes:
        query: The user's free-text query
        vector: Query embedding (None until embedded, or if embedding failed)
        hits: Search results, most similar first
        error: User-facing explanation when a step failed, else None
        lines: Rendered output lines
    """

    query: str
    vector: Optional[List[float]]
    hits: List[SearchHit]
    error: Optional[str]
    lines: List[str]


def initial_state(query: str) -> QueryState:
    """Build the starting state for one query."""
    return {
        "query": query,
        "vector": None,
        "hits": [],
        "error": None,
        "lines": [],
    }
