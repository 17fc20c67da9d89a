"""MCP server exposing mdtodo task document tools."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from mdtodo import TaskBook, TaskStatus
from mdtodo.codec import encode_task
from mdtodo.config import load_settings, resolve_document_path
from mdtodo.errors import DocumentNotFound
from mdtodo.mdtodo_logging import setup_logging

mcp = FastMCP("mdtodo")


def _book(path: Optional[str]) -> TaskBook:
    return TaskBook(resolve_document_path(path))


def _task_result(book: TaskBook, task, message: str) -> Dict[str, Any]:
    summary = book.summary()
    return {
        "path": str(book.path),
        "task": task.to_dict(),
        "remaining": summary["remaining"],
        "all_completed": summary["all_completed"],
        "message": message,
    }


@mcp.tool()
def create_task_list(path: Optional[str] = None) -> Dict[str, str]:
    """Create an empty task document with SELECTED, INCOMPLETE and COMPLETE sections.
    Fails if a file already exists at the path."""

    book = _book(path)
    created = book.create()
    return {
        "path": str(created),
        "message": f"Task document created at {created}",
    }


@mcp.tool()
def add_task(text: str, status: str = "incomplete", path: Optional[str] = None) -> Dict[str, Any]:
    """Add a task at the top of its section (incomplete by default) and return its id."""

    book = _book(path)
    task_id = book.add(text, TaskStatus.parse(status))
    task = book.get_task(task_id)
    return _task_result(book, task, f"Added task {task_id} to {task.section}")


@mcp.tool()
def check_task(task_id: int, path: Optional[str] = None) -> Dict[str, Any]:
    """Mark a selected or incomplete task complete."""

    book = _book(path)
    task = book.check(task_id)
    return _task_result(book, task, f"Checked task {task_id}")


@mcp.tool()
def uncheck_task(task_id: int, select: bool = False, path: Optional[str] = None) -> Dict[str, Any]:
    """Reopen a complete task into INCOMPLETE, or into SELECTED when select is true."""

    book = _book(path)
    task = book.uncheck(task_id, select=select)
    return _task_result(book, task, f"Unchecked task {task_id} into {task.section}")


@mcp.tool()
def select_task(task_id: int, path: Optional[str] = None) -> Dict[str, Any]:
    """Move an incomplete task into SELECTED."""

    book = _book(path)
    task = book.select(task_id)
    return _task_result(book, task, f"Selected task {task_id}")


@mcp.tool()
def deselect_task(task_id: int, path: Optional[str] = None) -> Dict[str, Any]:
    """Move a selected task back into INCOMPLETE."""

    book = _book(path)
    task = book.deselect(task_id)
    return _task_result(book, task, f"Deselected task {task_id}")


@mcp.tool()
def list_tasks(statuses: Optional[List[str]] = None, path: Optional[str] = None) -> Dict[str, Any]:
    """List tasks grouped SELECTED, INCOMPLETE, COMPLETE; filter by status names if given."""

    book = _book(path)
    tasks = book.list_tasks(statuses)
    return {
        "path": str(book.path),
        "tasks": [task.to_dict() for task in tasks],
        "count": len(tasks),
    }


@mcp.tool()
def task_summary(path: Optional[str] = None) -> Dict[str, Any]:
    """Report how many tasks each section holds and the next id to be assigned."""

    return _book(path).summary()


@mcp.resource("mdtodo://tasks")
def resource_tasks() -> str:
    """Resource view of the default task document."""

    book = _book(None)
    try:
        tasks = book.list_tasks()
    except DocumentNotFound:
        return f"No task document at {book.path}. Use create_task_list to start one."

    if not tasks:
        return f"{book.path} has no tasks yet."

    lines = [f"Tasks in {book.path}"]
    current = None
    for task in tasks:
        if task.section != current:
            current = task.section
            lines.append("")
            lines.append(current)
        lines.append(encode_task(task))
    return "\n".join(lines)


if __name__ == "__main__":
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_file)
    mcp.run(transport="stdio")
