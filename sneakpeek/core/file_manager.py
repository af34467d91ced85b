"""
File management for sneakpeek.

Validates the directory to upload and packs it into a temporary zip
archive with its contents at the archive root.
"""
import logging
import os
import tempfile
import zipfile
from typing import Iterator, Tuple

from sneakpeek.rich_utils.ui_helpers import get_console
from sneakpeek.upload.exceptions import ArchiveError, PathValidationError

logger = logging.getLogger(__name__)

COMPRESSION_LEVEL = 9


def _raise_walk_error(error: OSError):
    raise error


def _is_link_cycle(path: str, real_root: str) -> bool:
    """True when path is a symlink to real_root or one of its ancestors."""
    if not os.path.islink(path):
        return False
    target = os.path.realpath(path)
    return real_root == target or real_root.startswith(target.rstrip(os.sep) + os.sep)


class FileManager:
    """Manages upload path validation and archiving."""

    def __init__(self, console=None):
        self.console = console or get_console()

    def validate_directory(self, path: str) -> None:
        """Raise PathValidationError unless path is an existing directory."""
        if not os.path.exists(path):
            raise PathValidationError(f"Path {path} does not exist")
        if not os.path.isdir(path):
            raise PathValidationError(f"Path {path} is not a directory")

    def iter_files(self, source_path: str) -> Iterator[Tuple[str, str]]:
        """Yield (file path, archive name) for every file below source_path.

        Directory symlinks are followed like file symlinks, except those
        that point back at an ancestor. Unreadable directories raise.
        """
        for root, dirs, files in os.walk(source_path, onerror=_raise_walk_error, followlinks=True):
            real_root = os.path.realpath(root)
            dirs[:] = sorted(
                d for d in dirs
                if not _is_link_cycle(os.path.join(root, d), real_root)
            )
            for name in sorted(files):
                file_path = os.path.join(root, name)
                arcname = os.path.relpath(file_path, source_path).replace(os.sep, "/")
                yield file_path, arcname

    def archive_directory(self, source_path: str) -> str:
        """Zip the contents of source_path into a temp file and return its path."""
        self.console.print(f"Zipping: {source_path}", style="cyan")

        fd, archive_path = tempfile.mkstemp(prefix="sneakpeek-", suffix=".zip")
        os.close(fd)

        count = 0
        try:
            with zipfile.ZipFile(
                archive_path,
                "w",
                compression=zipfile.ZIP_DEFLATED,
                compresslevel=COMPRESSION_LEVEL
            ) as zf:
                for file_path, arcname in self.iter_files(source_path):
                    zf.write(file_path, arcname)
                    count += 1
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            os.unlink(archive_path)
            raise ArchiveError(f"Failed to archive {source_path}: {e}")

        logger.info(f"Archived {count} files from {source_path} into {archive_path}")
        return archive_path
