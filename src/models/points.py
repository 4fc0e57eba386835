"""
Vector store record types.
"""

from typing import Any, Dict, List, Union
from pydantic import BaseModel, Field


PointId = Union[int, str]


class StoredPoint(BaseModel):
    """A point sent to the vector store: id, vector and metadata."""

    id: PointId
    vector: List[float]
    payload: Dict[str, Any] = Field(default_factory=dict)


class SearchHit(BaseModel):
    """One nearest-neighbour match, as returned by the store."""

    point_id: PointId
    score: float
    payload: Dict[str, Any] = Field(default_factory=dict)
