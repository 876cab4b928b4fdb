"""
File Utility Functions
==================

This module provides utility functions for snapshot file operations.
"""

import shutil
from pathlib import Path


def copy_file(source: str | Path, destination: str | Path) -> Path:
    """
    Copy a file wholesale, creating the destination directory if needed.

    Args:
        source: File to copy
        destination: Target file path, overwritten if present

    Returns:
        Path: The destination path

    Raises:
        FileNotFoundError: If the source file does not exist
    """
    source = Path(source)
    destination = Path(destination)
    if not source.is_file():
        raise FileNotFoundError(f"No such file: {source}")

    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, destination)
    return destination


def read_lines(file_path: str | Path) -> list[str]:
    """
    Read the non-blank lines of a text file.

    Args:
        file_path: Path to the file to read

    Returns:
        list[str]: Stripped lines, blank lines dropped, in file order
    """
    text = Path(file_path).read_text(encoding="utf-8")
    return [line.strip() for line in text.splitlines() if line.strip()]


def write_lines(file_path: str | Path, lines: list[str]) -> Path:
    """
    Write lines to a file, one per line with a trailing newline.

    Args:
        file_path: Path to the file to write
        lines: Lines to write

    Returns:
        Path: The written path
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    content = "".join(f"{line}\n" for line in lines)
    path.write_text(content, encoding="utf-8")
    return path
