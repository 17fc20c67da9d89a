"""Data models for mdtodo.

This module contains the core data structures shared by the codec, the
document model and the engine: the task status enum, the fixed section
layout and the task record itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Tuple


class TaskStatus(str, Enum):
    """Status of a task; each status owns exactly one document section."""

    SELECTED = "selected"
    INCOMPLETE = "incomplete"
    COMPLETE = "complete"

    @property
    def section(self) -> str:
        return SECTION_FOR_STATUS[self]

    @property
    def checked(self) -> bool:
        return self is TaskStatus.COMPLETE

    @classmethod
    def parse(cls, value: "TaskStatus | str") -> "TaskStatus":
        """Accept an enum member or its name/value in any case."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(status.value for status in cls)
            raise ValueError(f"Invalid status: {value!r} (expected one of {valid})") from None


# Section names in document order.
SECTIONS: Tuple[str, ...] = ("SELECTED", "INCOMPLETE", "COMPLETE")

SECTION_FOR_STATUS: Dict[TaskStatus, str] = {
    TaskStatus.SELECTED: "SELECTED",
    TaskStatus.INCOMPLETE: "INCOMPLETE",
    TaskStatus.COMPLETE: "COMPLETE",
}
STATUS_FOR_SECTION: Dict[str, TaskStatus] = {
    section: status for status, section in SECTION_FOR_STATUS.items()
}

ALL_STATUSES: Tuple[TaskStatus, ...] = tuple(STATUS_FOR_SECTION[name] for name in SECTIONS)


@dataclass(slots=True)
class Task:
    """A single task stored in the document."""

    id: int
    text: str
    status: TaskStatus = TaskStatus.INCOMPLETE

    @property
    def section(self) -> str:
        return self.status.section

    @property
    def completed(self) -> bool:
        return self.status.checked

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "text": self.text,
            "status": self.status.value,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Create from dictionary representation."""
        return cls(
            id=int(data["id"]),
            text=data.get("text", ""),
            status=TaskStatus.parse(data.get("status", TaskStatus.INCOMPLETE)),
        )

    def validate(self) -> List[str]:
        """Validate the task and return any issues."""
        issues = []

        if not isinstance(self.id, int) or isinstance(self.id, bool) or self.id < 0:
            issues.append(f"Task ID must be a non-negative integer, got: {self.id!r}")
        if "\n" in self.text or "\r" in self.text:
            issues.append("Task text must be a single line")
        if not isinstance(self.status, TaskStatus):
            issues.append(f"Invalid status: {self.status!r}")

        return issues
