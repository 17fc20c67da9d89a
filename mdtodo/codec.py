"""Task line codec.

A task line is ``- [ ] **<id>**: <text>`` (unchecked) or
``- [x] **<id>**: <text>`` (checked). The id always sits between the first
pair of ``**`` delimiters after the checkbox, so it can be sliced out even
when the text itself contains asterisks or colons.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .errors import MalformedTaskId, StatusSectionMismatch
from .models import STATUS_FOR_SECTION, Task, TaskStatus

UNCHECKED_PREFIX = "- [ ] "
CHECKED_PREFIX = "- [x] "
ID_DELIMITER = "**"
TEXT_SEPARATOR = ": "

_ID_PATTERN = re.compile(r"0|[1-9][0-9]*")


@dataclass(slots=True, frozen=True)
class TaskLine:
    """The raw content of a task line, before its section is known."""

    id: int
    text: str
    checked: bool


def is_task_line(line: str) -> bool:
    return line.startswith(UNCHECKED_PREFIX) or line.startswith(CHECKED_PREFIX)


def parse_task_line(line: str) -> Optional[TaskLine]:
    """Decode a raw line, returning None when it is not a task line.

    Raises MalformedTaskId when the line has a checkbox prefix but the
    ``**<id>**`` marker that must follow it is missing or not a
    non-negative integer in canonical form (no sign, no leading zeros).
    """
    if line.startswith(CHECKED_PREFIX):
        checked = True
    elif line.startswith(UNCHECKED_PREFIX):
        checked = False
    else:
        return None

    rest = line[len(UNCHECKED_PREFIX):]
    if not rest.startswith(ID_DELIMITER):
        raise MalformedTaskId(f"Task line has no '**<id>**' marker: {line!r}")

    end = rest.find(ID_DELIMITER, len(ID_DELIMITER))
    if end == -1:
        raise MalformedTaskId(f"Task id is not closed by '**': {line!r}")

    raw_id = rest[len(ID_DELIMITER):end]
    if not _ID_PATTERN.fullmatch(raw_id):
        raise MalformedTaskId(f"Task id {raw_id!r} is not a canonical non-negative integer: {line!r}")

    tail = rest[end + len(ID_DELIMITER):]
    if tail.startswith(TEXT_SEPARATOR):
        text = tail[len(TEXT_SEPARATOR):]
    elif tail == TEXT_SEPARATOR.rstrip():
        # "- [ ] **3**:" with the trailing space stripped by an editor
        text = ""
    else:
        raise MalformedTaskId(f"Task id must be followed by {TEXT_SEPARATOR!r}: {line!r}")

    return TaskLine(id=int(raw_id), text=text, checked=checked)


def decode_task(line: str, section: str) -> Optional[Task]:
    """Decode a line stored in ``section`` into a Task.

    The checkbox must agree with the section: only COMPLETE holds checked
    lines. A disagreement raises StatusSectionMismatch instead of coercing
    the status.
    """
    parsed = parse_task_line(line)
    if parsed is None:
        return None

    status = STATUS_FOR_SECTION[section]
    if parsed.checked != status.checked:
        state = "checked" if parsed.checked else "unchecked"
        raise StatusSectionMismatch(
            f"Task {parsed.id} is {state} but stored in section {section}"
        )
    return Task(id=parsed.id, text=parsed.text, status=status)


def encode_task(task: Task) -> str:
    prefix = CHECKED_PREFIX if task.status is TaskStatus.COMPLETE else UNCHECKED_PREFIX
    return f"{prefix}{ID_DELIMITER}{task.id}{ID_DELIMITER}{TEXT_SEPARATOR}{task.text}"
