"""mdtodo - a markdown task list with SELECTED, INCOMPLETE and COMPLETE sections."""

from .engine import TaskBook
from .errors import (
    AlreadyExists,
    AlreadyInTargetState,
    DocumentNotFound,
    DuplicateTaskId,
    InvalidTaskText,
    MalformedTaskId,
    SectionMalformed,
    SectionNotFound,
    StatusSectionMismatch,
    StorageError,
    TaskDocError,
    TaskNotFound,
)
from .models import Task, TaskStatus

__version__ = "0.1.0"

__all__ = [
    "TaskBook",
    "Task",
    "TaskStatus",
    "TaskDocError",
    "SectionNotFound",
    "SectionMalformed",
    "MalformedTaskId",
    "StatusSectionMismatch",
    "DuplicateTaskId",
    "TaskNotFound",
    "AlreadyInTargetState",
    "AlreadyExists",
    "StorageError",
    "DocumentNotFound",
    "InvalidTaskText",
]
