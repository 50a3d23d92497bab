"""Test fixtures for scopepack.

Provides a recording artifact writer and helpers for laying out
project files.
"""

from .builders import (
    RecordingWriter,
    create_jar,
    create_webapp_project,
    write_file,
)

__all__ = [
    "RecordingWriter",
    "create_jar",
    "create_webapp_project",
    "write_file",
]
