"""Test suite for the asynchronous file reader."""

import pytest

from urlquery.file_reader import AsyncFileReader, FileReaderResult


@pytest.fixture
def text_files(tmp_path):
    """Create a few text files."""
    paths = []
    for name, contents in (("a.txt", "alpha"), ("b.txt", "beta"), ("c.txt", "gamma")):
        path = tmp_path / name
        path.write_text(contents, encoding="utf-8")
        paths.append(path)
    return paths


class TestReadAsText:
    """Test reading a single file."""

    @pytest.mark.asyncio
    async def test_yields_single_result(self, text_files):
        """Test that exactly one result is produced."""
        results = [r async for r in AsyncFileReader.read_as_text(text_files[0])]
        assert results == [FileReaderResult(name="a.txt", contents="alpha")]

    @pytest.mark.asyncio
    async def test_encoding(self, tmp_path):
        """Test reading with an explicit encoding."""
        path = tmp_path / "latin.txt"
        path.write_bytes("café".encode("latin-1"))

        results = [r async for r in AsyncFileReader.read_as_text(str(path), "latin-1")]
        assert results[0].contents == "café"

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, tmp_path):
        """Test that read errors propagate."""
        with pytest.raises(OSError):
            async for _ in AsyncFileReader.read_as_text(tmp_path / "missing.txt"):
                pass


class TestReadAllAsText:
    """Test reading several files."""

    @pytest.mark.asyncio
    async def test_one_result_per_file(self, text_files):
        """Test that every file is read once."""
        results = [r async for r in AsyncFileReader.read_all_as_text(text_files)]
        assert sorted((r.name, r.contents) for r in results) == [
            ("a.txt", "alpha"),
            ("b.txt", "beta"),
            ("c.txt", "gamma"),
        ]

    @pytest.mark.asyncio
    async def test_empty_list(self):
        """Test that no files complete immediately."""
        results = [r async for r in AsyncFileReader.read_all_as_text([])]
        assert results == []

    @pytest.mark.asyncio
    async def test_failure_propagates(self, text_files, tmp_path):
        """Test that one unreadable file fails the stream."""
        paths = text_files + [tmp_path / "missing.txt"]
        with pytest.raises(OSError):
            async for _ in AsyncFileReader.read_all_as_text(paths):
                pass
