"""Asynchronous text file reading.

Blocking reads run in worker threads via ``asyncio.to_thread`` so callers can
consume file contents as an async stream.

Example:
    async for result in AsyncFileReader.read_all_as_text(["a.txt", "b.txt"]):
        print(result.name, len(result.contents))
"""

import asyncio
import logging
from pathlib import Path
from typing import AsyncIterator, Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileReaderResult(BaseModel):
    """Contents of one file.

    Attributes:
        name: File name without directories
        contents: Decoded text
    """

    model_config = ConfigDict(frozen=True)

    name: str
    contents: str


class AsyncFileReader:
    """Reads text files without blocking the event loop."""

    @staticmethod
    async def _read(path: PathLike, encoding: Optional[str]) -> FileReaderResult:
        file_path = Path(path)
        logger.debug(f"Reading file: {file_path}")
        try:
            contents = await asyncio.to_thread(
                file_path.read_text, encoding=encoding or "utf-8"
            )
        except Exception as e:
            logger.error(f"Failed to read file {file_path}: {e}")
            raise
        return FileReaderResult(name=file_path.name, contents=contents)

    @staticmethod
    async def read_as_text(
        path: PathLike, encoding: Optional[str] = None
    ) -> AsyncIterator[FileReaderResult]:
        """Read one file, yielding a single result.

        Args:
            path: File to read
            encoding: Text encoding (default: utf-8)

        Yields:
            FileReaderResult for the file

        Raises:
            OSError: If the file cannot be read
            UnicodeDecodeError: If the contents do not match ``encoding``
        """
        yield await AsyncFileReader._read(path, encoding)

    @staticmethod
    async def read_all_as_text(
        paths: Iterable[PathLike], encoding: Optional[str] = None
    ) -> AsyncIterator[FileReaderResult]:
        """Read several files concurrently.

        Results are yielded as each read finishes, so the order may differ
        from ``paths``. The first failure cancels the remaining reads and is
        raised to the caller.

        Args:
            paths: Files to read
            encoding: Text encoding (default: utf-8)

        Yields:
            One FileReaderResult per file
        """
        tasks = [
            asyncio.ensure_future(AsyncFileReader._read(path, encoding))
            for path in paths
        ]
        try:
            for next_done in asyncio.as_completed(tasks):
                yield await next_done
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()


__all__ = ["AsyncFileReader", "FileReaderResult"]
