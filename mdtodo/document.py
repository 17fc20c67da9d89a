"""In-memory document model.

The document is parsed once into a flat, ordered list of tasks carrying an
explicit status. Sections are a view over that list: rendering groups the
tasks by status, keeping each group's relative order, so inserting a task at
the front of the list puts it at the top of its section.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from .codec import decode_task, encode_task
from .errors import DuplicateTaskId
from .models import ALL_STATUSES, SECTIONS, STATUS_FOR_SECTION, Task, TaskStatus
from .sections import SEPARATOR, header_for, outside_lines, section_bodies

logger = logging.getLogger("mdtodo.document")


def next_task_id(tasks: Iterable[Task]) -> int:
    """Return the id for a new task: one past the highest id, 0 when empty."""
    return max((task.id for task in tasks), default=-1) + 1


def empty_document_lines() -> List[str]:
    return TaskDocument().render()


@dataclass
class TaskDocument:
    """All tasks of one document, in document order."""

    tasks: List[Task] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Parsing and rendering
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, lines: Sequence[str]) -> "TaskDocument":
        """Build the model from raw lines.

        Raises the section errors from the section index, the codec errors
        for bad task lines, and DuplicateTaskId when an id appears twice.
        """
        bodies = section_bodies(lines)

        tasks: List[Task] = []
        seen: Dict[int, str] = {}
        for name in SECTIONS:
            for line in bodies[name]:
                task = decode_task(line, name)
                if task is None:
                    if line.strip():
                        logger.warning(f"Dropping non-task line in section {name}: {line!r}")
                    continue
                if task.id in seen:
                    raise DuplicateTaskId(
                        f"Task id {task.id} appears in both {seen[task.id]} and {name}"
                        if seen[task.id] != name
                        else f"Task id {task.id} appears twice in {name}"
                    )
                seen[task.id] = name
                tasks.append(task)

        for index, line in outside_lines(lines):
            if line.strip():
                logger.warning(f"Dropping line {index + 1} outside any section: {line!r}")

        return cls(tasks=tasks)

    def render(self) -> List[str]:
        """Serialize to the canonical line layout.

        Each section is its header, a blank line, its task lines followed by
        a blank spacer when there are any, and the separator. Sections are
        separated by one blank line.
        """
        lines: List[str] = []
        for position, name in enumerate(SECTIONS):
            if position:
                lines.append("")
            lines.append(header_for(name))
            lines.append("")
            section_tasks = self.section(STATUS_FOR_SECTION[name])
            if section_tasks:
                lines.extend(encode_task(task) for task in section_tasks)
                lines.append("")
            lines.append(SEPARATOR)
        return lines

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def section(self, status: TaskStatus) -> List[Task]:
        return [task for task in self.tasks if task.status is status]

    def ordered(self, statuses: Optional[Iterable[TaskStatus]] = None) -> List[Task]:
        """Tasks grouped SELECTED, INCOMPLETE, COMPLETE, optionally filtered."""
        wanted = set(ALL_STATUSES if statuses is None else statuses)
        ordered: List[Task] = []
        for status in ALL_STATUSES:
            if status in wanted:
                ordered.extend(self.section(status))
        return ordered

    def find(self, task_id: int) -> Optional[Task]:
        """Find a task, scanning SELECTED, INCOMPLETE, COMPLETE in that order."""
        for task in self.ordered():
            if task.id == task_id:
                return task
        return None

    def next_id(self) -> int:
        return next_task_id(self.tasks)

    def counts(self) -> Dict[str, int]:
        return {status.value: len(self.section(status)) for status in ALL_STATUSES}

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def insert_top(self, task: Task) -> None:
        """Place ``task`` at the top of the section matching its status."""
        self.tasks.insert(0, task)

    def remove(self, task: Task) -> None:
        self.tasks.remove(task)
