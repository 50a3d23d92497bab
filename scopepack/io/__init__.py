"""I/O utilities for scopepack.

Provides the archive writer service and build-report logging helpers.
"""

from .archive import ArchiveEntry, ArtifactWriter, ZipArtifactWriter
from .logging import get_timestamped_log_path, log_json, read_json_lines

__all__ = [
    # Archive writing
    "ArchiveEntry",
    "ArtifactWriter",
    "ZipArtifactWriter",
    # Logging
    "get_timestamped_log_path",
    "log_json",
    "read_json_lines",
]
