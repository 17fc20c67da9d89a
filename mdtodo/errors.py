"""Error taxonomy for mdtodo.

Every failure raised by the engine derives from :class:`TaskDocError` and
carries a short ``kind`` string so shells can map it to an exit status or a
tool error without string matching on messages.
"""

from __future__ import annotations


class TaskDocError(Exception):
    """Base class for all task document failures."""

    kind = "error"


class SectionNotFound(TaskDocError):
    """A section header is missing from the document."""

    kind = "section_not_found"


class SectionMalformed(TaskDocError):
    """A section header is not closed by a separator line."""

    kind = "section_malformed"


class MalformedTaskId(TaskDocError):
    """A checkbox line does not carry a well-formed ``**<id>**`` marker."""

    kind = "malformed_task_id"


class StatusSectionMismatch(TaskDocError):
    """A task's checkbox disagrees with the section it is stored in."""

    kind = "status_section_mismatch"


class DuplicateTaskId(TaskDocError):
    kind = "duplicate_task_id"


class TaskNotFound(TaskDocError):
    kind = "task_not_found"


class AlreadyInTargetState(TaskDocError):
    """The requested move is not a legal transition from the task's status."""

    kind = "already_in_target_state"


class AlreadyExists(TaskDocError, FileExistsError):
    kind = "already_exists"


class StorageError(TaskDocError, OSError):
    """Reading or writing the document failed."""

    kind = "io_error"


class DocumentNotFound(StorageError, FileNotFoundError):
    kind = "not_found"


class InvalidTaskText(TaskDocError, ValueError):
    kind = "invalid_task_text"


# Errors that mean the document itself cannot be trusted.
DOCUMENT_FORMAT_ERRORS = (
    SectionNotFound,
    SectionMalformed,
    MalformedTaskId,
    StatusSectionMismatch,
    DuplicateTaskId,
)
