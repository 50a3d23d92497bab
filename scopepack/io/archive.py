"""Artifact writer service: composes file entries into an archive."""

from __future__ import annotations

import logging
import os
import zipfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Tuple, Union

from ..errors import ArchiveWriteError

PathLike = Union[str, Path]
ArchiveEntry = Tuple[Path, str]

logger = logging.getLogger(__name__)

# 1980-01-01, the earliest timestamp the zip format can store
FIXED_TIMESTAMP = (1980, 1, 1, 0, 0, 0)

# rw-r--r--, stored in the high 16 bits of external_attr
FILE_MODE = 0o644


class ArtifactWriter(ABC):
    """Writes (source path, archive path) entries to a destination file."""

    @abstractmethod
    def write(self, entries: Iterable[ArchiveEntry], destination: PathLike) -> Path:
        """Write ``entries`` to ``destination`` and return its path.

        Raises
        ------
        ArchiveWriteError
            If the archive cannot be written
        """


class ZipArtifactWriter(ArtifactWriter):
    """Writes entries into a deflated zip archive (jar/war compatible).

    Parameters
    ----------
    reproducible : bool
        If True, every entry gets the same fixed timestamp so identical
        inputs give byte-identical archives. Default: True
    """

    def __init__(self, reproducible: bool = True):
        self.reproducible = reproducible

    def write(self, entries: Iterable[ArchiveEntry], destination: PathLike) -> Path:
        """Write the archive next to ``destination`` and move it into place.

        A failed write leaves any previous archive at ``destination``
        untouched and removes the partial file.
        """
        destination = Path(destination)
        partial = destination.with_name(f".{destination.name}.part")
        count = 0

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(partial, "w", zipfile.ZIP_DEFLATED) as archive:
                for source, archive_path in entries:
                    if self.reproducible:
                        info = zipfile.ZipInfo(archive_path, date_time=FIXED_TIMESTAMP)
                        info.compress_type = zipfile.ZIP_DEFLATED
                        info.external_attr = FILE_MODE << 16
                        archive.writestr(info, Path(source).read_bytes())
                    else:
                        archive.write(source, archive_path)
                    count += 1
            os.replace(partial, destination)
        except OSError as e:
            raise ArchiveWriteError(destination, e) from e
        finally:
            if partial.exists():
                partial.unlink()

        logger.debug(f"Wrote {count} entries to {destination}")
        return destination
