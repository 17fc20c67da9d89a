"""Mutation engine for task documents.

This module provides :class:`TaskBook`, which binds one document path and
exposes the add, move and query operations. Each call loads the document,
parses it into a :class:`~mdtodo.document.TaskDocument`, validates the
request against the model and only then writes the re-rendered document
back in a single save.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from .document import TaskDocument
from .errors import AlreadyInTargetState, InvalidTaskText, TaskNotFound
from .models import Task, TaskStatus
from .storage import create_document, load_lines, save_lines
from .mdtodo_logging import (
    log_document_created,
    log_error_with_context,
    log_operation,
    log_performance,
    log_task_added,
    log_task_moved,
)

logger = logging.getLogger("mdtodo.engine")

CHECK_FORBIDDEN: FrozenSet[TaskStatus] = frozenset({TaskStatus.COMPLETE})
UNCHECK_FORBIDDEN: FrozenSet[TaskStatus] = frozenset({TaskStatus.INCOMPLETE, TaskStatus.SELECTED})
SELECT_FORBIDDEN: FrozenSet[TaskStatus] = frozenset({TaskStatus.SELECTED, TaskStatus.COMPLETE})
DESELECT_FORBIDDEN: FrozenSet[TaskStatus] = frozenset({TaskStatus.INCOMPLETE, TaskStatus.COMPLETE})


class TaskBook:
    """Operations on the task document stored at ``path``."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"TaskBook({str(self.path)!r})"

    # ------------------------------------------------------------------
    # Document access
    # ------------------------------------------------------------------

    def load(self) -> TaskDocument:
        """Read and parse the document without changing it."""
        return TaskDocument.parse(load_lines(self.path))

    def save(self, document: TaskDocument) -> None:
        save_lines(self.path, document.render())

    @log_performance("create")
    def create(self) -> Path:
        """Write an empty document; fails with AlreadyExists if one is there."""
        try:
            with log_operation("create", path=str(self.path)):
                path = create_document(self.path)
        except Exception as e:
            log_error_with_context(e, {"operation": "create", "path": str(self.path)})
            raise

        log_document_created(str(path))
        return path

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @log_performance("add")
    def add(self, text: str, status: TaskStatus | str = TaskStatus.INCOMPLETE) -> int:
        """Add a task at the top of its section and return its new id."""
        try:
            status = TaskStatus.parse(status)
            if "\n" in text or "\r" in text:
                raise InvalidTaskText("Task text must be a single line")
            try:
                text.encode("utf-8")
            except UnicodeEncodeError as e:
                raise InvalidTaskText(f"Task text is not valid UTF-8: {e.reason}") from e

            with log_operation("add", path=str(self.path), status=status.value):
                document = self.load()
                task = Task(id=document.next_id(), text=text, status=status)
                document.insert_top(task)
                self.save(document)
        except Exception as e:
            log_error_with_context(e, {
                "operation": "add",
                "path": str(self.path),
                "status": str(status),
            })
            raise

        logger.info(f"Added task {task.id} to {task.section} in {self.path}")
        log_task_added(str(self.path), task.id, task.status.value)
        return task.id

    @log_performance("move_task")
    def move_task(
        self,
        task_id: int,
        destination: TaskStatus | str,
        forbidden: Iterable[TaskStatus] = (),
    ) -> Task:
        """Move a task to the top of the ``destination`` section.

        The task is looked up in SELECTED, INCOMPLETE, then COMPLETE. Fails
        with AlreadyInTargetState when its current status is in ``forbidden``
        or already equals ``destination``, and with TaskNotFound when no
        section holds ``task_id``. The file is untouched on failure.
        """
        destination = TaskStatus.parse(destination)
        forbidden = {TaskStatus.parse(status) for status in forbidden}

        try:
            with log_operation("move_task", path=str(self.path), task_id=task_id,
                               destination=destination.value):
                document = self.load()
                task = document.find(task_id)
                if task is None:
                    raise TaskNotFound(f"Task {task_id} not found in {self.path}")

                source = task.status
                if source in forbidden or source is destination:
                    raise AlreadyInTargetState(_transition_message(task_id, source, destination))

                document.remove(task)
                moved = Task(id=task.id, text=task.text, status=destination)
                document.insert_top(moved)
                self.save(document)
        except Exception as e:
            log_error_with_context(e, {
                "operation": "move_task",
                "path": str(self.path),
                "task_id": task_id,
                "destination": destination.value,
            })
            raise

        logger.info(f"Moved task {task_id} from {source.section} to {destination.section}")
        log_task_moved(str(self.path), task_id, source.value, destination.value)
        return moved

    def check(self, task_id: int) -> Task:
        """Mark a selected or incomplete task complete."""
        return self.move_task(task_id, TaskStatus.COMPLETE, CHECK_FORBIDDEN)

    def uncheck(self, task_id: int, select: bool = False) -> Task:
        """Reopen a complete task as incomplete, or as selected when ``select``."""
        destination = TaskStatus.SELECTED if select else TaskStatus.INCOMPLETE
        return self.move_task(task_id, destination, UNCHECK_FORBIDDEN)

    def select(self, task_id: int) -> Task:
        return self.move_task(task_id, TaskStatus.SELECTED, SELECT_FORBIDDEN)

    def deselect(self, task_id: int) -> Task:
        return self.move_task(task_id, TaskStatus.INCOMPLETE, DESELECT_FORBIDDEN)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_tasks(self, statuses: Optional[Iterable[TaskStatus | str]] = None) -> List[Task]:
        """Return tasks whose status is in ``statuses`` (all when None).

        Tasks come grouped SELECTED, INCOMPLETE, COMPLETE, each group in
        document order.
        """
        wanted = None if statuses is None else [TaskStatus.parse(status) for status in statuses]
        return self.load().ordered(wanted)

    def get_task(self, task_id: int) -> Task:
        task = self.load().find(task_id)
        if task is None:
            raise TaskNotFound(f"Task {task_id} not found in {self.path}")
        return task

    def summary(self) -> Dict[str, Any]:
        """Report per-section counts for the document."""
        document = self.load()
        counts = document.counts()
        total = sum(counts.values())
        return {
            "path": str(self.path),
            "counts": counts,
            "total": total,
            "remaining": total - counts[TaskStatus.COMPLETE.value],
            "all_completed": total > 0 and counts[TaskStatus.COMPLETE.value] == total,
            "next_id": document.next_id(),
        }


def _transition_message(task_id: int, source: TaskStatus, destination: TaskStatus) -> str:
    if source is destination:
        return f"Task {task_id} is already {source.value}"
    if destination is TaskStatus.SELECTED and source is TaskStatus.COMPLETE:
        return f"Task {task_id} is complete, not incomplete; uncheck it before selecting"
    if destination is TaskStatus.INCOMPLETE and source is TaskStatus.COMPLETE:
        return f"Task {task_id} is complete, not selected; use uncheck to reopen it"
    return f"Task {task_id} is {source.value}; cannot move it to {destination.value}"
