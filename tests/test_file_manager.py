"""
Test suite for FileManager.

Covers upload path validation and directory archiving.
"""

import io
import os
import tempfile
import zipfile
import zlib
from unittest.mock import patch

import pytest
from rich.console import Console

from sneakpeek.core.file_manager import FileManager
from sneakpeek.upload.exceptions import ArchiveError, PathValidationError


@pytest.fixture
def file_manager():
    return FileManager(Console(file=io.StringIO(), no_color=True))


@pytest.fixture
def site_dir(tmp_path):
    site = tmp_path / "site"
    (site / "assets" / "css").mkdir(parents=True)
    (site / "index.html").write_text("<h1>Preview</h1>")
    (site / "assets" / "app.js").write_text("console.log('hi')")
    (site / "assets" / "css" / "main.css").write_text("body { margin: 0 }")
    (site / "empty").mkdir()
    return site


class TestValidateDirectory:
    """Tests for upload path validation."""

    def test_existing_directory(self, file_manager, tmp_path):
        file_manager.validate_directory(str(tmp_path))

    def test_missing_path(self, file_manager, tmp_path):
        with pytest.raises(PathValidationError, match="does not exist"):
            file_manager.validate_directory(str(tmp_path / "missing"))

    def test_file_instead_of_directory(self, file_manager, tmp_path):
        target = tmp_path / "index.html"
        target.write_text("hi")

        with pytest.raises(PathValidationError, match="is not a directory"):
            file_manager.validate_directory(str(target))


class TestArchiveDirectory:
    """Tests for zip archive creation."""

    def test_archive_contains_files_at_root(self, file_manager, site_dir, tmp_path):
        """Extracted archive matches the directory without an enclosing folder"""
        archive_path = file_manager.archive_directory(str(site_dir))

        try:
            with zipfile.ZipFile(archive_path) as zf:
                names = sorted(zf.namelist())
                extract_dir = tmp_path / "extracted"
                zf.extractall(extract_dir)
        finally:
            os.unlink(archive_path)

        assert names == ["assets/app.js", "assets/css/main.css", "index.html"]
        assert (extract_dir / "index.html").read_text() == "<h1>Preview</h1>"
        assert (extract_dir / "assets" / "css" / "main.css").read_text() == "body { margin: 0 }"

    def test_archive_uses_deflate(self, file_manager, site_dir):
        archive_path = file_manager.archive_directory(str(site_dir))

        try:
            with zipfile.ZipFile(archive_path) as zf:
                assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in zf.infolist())
        finally:
            os.unlink(archive_path)

    def test_archive_uses_maximum_compression(self, file_manager, tmp_path):
        """Entries match a raw deflate stream at level 9"""
        data = "".join(f"<li>item {i} of the preview listing</li>\n" for i in range(2000)).encode()
        site = tmp_path / "site"
        site.mkdir()
        (site / "list.html").write_bytes(data)

        compressor = zlib.compressobj(9, zlib.DEFLATED, -15)
        expected_size = len(compressor.compress(data) + compressor.flush())

        archive_path = file_manager.archive_directory(str(site))

        try:
            with zipfile.ZipFile(archive_path) as zf:
                assert zf.getinfo("list.html").compress_size == expected_size
        finally:
            os.unlink(archive_path)

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_symlinked_directory_is_followed(self, file_manager, site_dir, tmp_path):
        """A symlinked directory is stored like a symlinked file"""
        shared = tmp_path / "shared"
        shared.mkdir()
        (shared / "lib.js").write_text("export default 1")
        os.symlink(shared, site_dir / "vendor")

        archive_path = file_manager.archive_directory(str(site_dir))

        try:
            with zipfile.ZipFile(archive_path) as zf:
                assert "vendor/lib.js" in zf.namelist()
                assert zf.read("vendor/lib.js") == b"export default 1"
        finally:
            os.unlink(archive_path)

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_symlink_cycle_is_not_followed(self, file_manager, site_dir):
        os.symlink(site_dir, site_dir / "assets" / "loop")

        archive_path = file_manager.archive_directory(str(site_dir))

        try:
            with zipfile.ZipFile(archive_path) as zf:
                names = sorted(zf.namelist())
        finally:
            os.unlink(archive_path)

        assert names == ["assets/app.js", "assets/css/main.css", "index.html"]

    def test_unreadable_directory_raises_archive_error(self, file_manager, site_dir):
        """A directory that cannot be listed fails the archive instead of being skipped"""
        (site_dir / "secret").mkdir()
        (site_dir / "secret" / "a.txt").write_text("hidden")
        real_scandir = os.scandir

        def failing_scandir(path="."):
            if os.path.basename(os.fspath(path)) == "secret":
                raise PermissionError(13, "Permission denied", os.fspath(path))
            return real_scandir(path)

        with patch.object(os, "scandir", side_effect=failing_scandir):
            with pytest.raises(ArchiveError, match="Permission denied"):
                file_manager.archive_directory(str(site_dir))

    def test_archive_is_unique_temp_file(self, file_manager, site_dir):
        first = file_manager.archive_directory(str(site_dir))
        second = file_manager.archive_directory(str(site_dir))

        try:
            assert first != second
            assert first.endswith(".zip")
            assert os.path.exists(first) and os.path.exists(second)
        finally:
            os.unlink(first)
            os.unlink(second)

    def test_empty_directory(self, file_manager, tmp_path):
        archive_path = file_manager.archive_directory(str(tmp_path))

        try:
            with zipfile.ZipFile(archive_path) as zf:
                assert zf.namelist() == []
        finally:
            os.unlink(archive_path)

    def test_write_failure_raises_archive_error(self, file_manager, site_dir):
        """A failed write raises ArchiveError and removes the partial archive"""
        real_mkstemp = tempfile.mkstemp
        created = []

        def recording_mkstemp(*args, **kwargs):
            fd, path = real_mkstemp(*args, **kwargs)
            created.append(path)
            return fd, path

        with patch("sneakpeek.core.file_manager.tempfile.mkstemp", side_effect=recording_mkstemp):
            with patch("sneakpeek.core.file_manager.zipfile.ZipFile.write", side_effect=OSError("disk full")):
                with pytest.raises(ArchiveError, match="disk full"):
                    file_manager.archive_directory(str(site_dir))

        assert len(created) == 1
        assert not os.path.exists(created[0])
