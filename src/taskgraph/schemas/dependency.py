"""Pydantic schemas for task dependency edges."""

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from taskgraph.common.exceptions import InvalidEdgeError


class DependencyType(str, Enum):
    """Kind of dependency between two tasks.

    Only BLOCKS edges constrain scheduling; RELATES edges are informational.
    """

    BLOCKS = "blocks"
    RELATES = "relates"


# Spellings used by the storage layer
_TYPE_ALIASES = {
    "blocks": DependencyType.BLOCKS,
    "relates": DependencyType.RELATES,
    "relates_to": DependencyType.RELATES,
}


class DependencyEdge(BaseModel):
    """Directed dependency: the predecessor task blocks (or relates to) the successor."""

    model_config = ConfigDict(frozen=True)

    id: str
    org_id: str = ""
    predecessor_task_id: str = Field(..., min_length=1)
    successor_task_id: str = Field(..., min_length=1)
    type: DependencyType = DependencyType.BLOCKS
    created_at: datetime | None = None

    @property
    def is_blocking(self) -> bool:
        """Whether this edge participates in scheduling and cycle detection."""
        return self.type == DependencyType.BLOCKS

    @property
    def pair(self) -> tuple[str, str]:
        """The (predecessor, successor) pair."""
        return (self.predecessor_task_id, self.successor_task_id)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DependencyEdge":
        """Build an edge from a persisted dependency row.

        Args:
            row: Mapping with ``id``, ``org_id``, ``predecessor_task_id``,
                ``successor_task_id``, ``type`` and optional ``created_at``.

        Returns:
            The dependency edge.

        Raises:
            InvalidEdgeError: If the type is unknown or a field is invalid.
        """
        raw_type = str(row.get("type", "")).strip().lower()
        dep_type = _TYPE_ALIASES.get(raw_type)
        if dep_type is None:
            raise InvalidEdgeError(
                f"Unknown dependency type: {row.get('type')!r}",
                details={"edge_id": row.get("id"), "type": row.get("type")},
            )

        try:
            return cls(
                id=str(row.get("id") or ""),
                org_id=str(row.get("org_id") or ""),
                predecessor_task_id=str(row.get("predecessor_task_id") or ""),
                successor_task_id=str(row.get("successor_task_id") or ""),
                type=dep_type,
                created_at=row.get("created_at"),
            )
        except PydanticValidationError as e:
            raise InvalidEdgeError(
                details={"edge_id": row.get("id"), "errors": e.errors(include_url=False)},
                cause=e,
            ) from e
