"""Task Pydantic schemas."""

from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from taskgraph.common.exceptions import InvalidTaskError


class Task(BaseModel):
    """A task as seen by the scheduling engine.

    Dates are carried through for callers but never read by the
    critical path calculation, which works in abstract hours.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str
    project_id: str
    estimated_hours: float | None = Field(None, ge=0)
    start_date: date | None = None
    due_date: date | None = None
    milestone_id: str | None = None

    def duration(self, default_hours: float = 1.0) -> float:
        """Effective duration in hours.

        Missing or zero estimates fall back to ``default_hours``, which is
        also the floor for every estimate.
        """
        return max(default_hours, self.estimated_hours or default_hours)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Task":
        """Build a task from a persisted task row.

        Columns other than the task fields are ignored.

        Args:
            row: Mapping with ``id``, ``title``, ``project_id`` and optional
                ``estimated_hours``, ``start_date``, ``due_date``,
                ``milestone_id``.

        Returns:
            The task.

        Raises:
            InvalidTaskError: If a field is missing or invalid.
        """
        fields = {name: row[name] for name in cls.model_fields if name in row}
        try:
            return cls.model_validate(fields)
        except PydanticValidationError as e:
            raise InvalidTaskError(
                details={"task_id": row.get("id"), "errors": e.errors(include_url=False)},
                cause=e,
            ) from e
