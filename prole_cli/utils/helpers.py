"""General utility functions for working with repository files."""

import json
from pathlib import Path
from typing import Any


def is_git_repository(path: Path) -> bool:
    """Return True if the directory contains a .git entry (directory or worktree file)."""
    return (path / ".git").exists()


def read_text_file(path: Path) -> str:
    """Read a file as UTF-8 text with its line endings untouched.

    Bytes that are not valid UTF-8 are decoded as U+FFFD instead of raising.
    """
    with open(path, encoding="utf-8", errors="replace", newline="") as f:
        return f.read()


def write_text_file(path: Path, content: str) -> None:
    """Write text to a file verbatim, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="")


def write_file_if_not_exists(path: Path, content: str, force: bool = False) -> bool:
    """Write a file unless it already exists and force is not set.

    Returns True if the file was written.
    """
    if path.exists() and not force:
        return False
    write_text_file(path, content)
    return True


def dump_json(data: Any) -> str:
    """Serialize data the way configuration files are stored on disk."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json_file(path: Path, data: Any) -> None:
    """Write data to a JSON file with two-space indentation."""
    write_text_file(path, dump_json(data))
