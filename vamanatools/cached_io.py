"""Sequential binary file reading and writing through an in-memory cache."""

from __future__ import annotations

import logging
import os
from typing import BinaryIO

from .errors import ANNException

logger = logging.getLogger(__name__)


class CachedReader:
    """Reads a file sequentially, serving small reads from a cache block."""

    def __init__(self, filename: str | os.PathLike | None = None, cache_size: int = 0) -> None:
        self._reader: BinaryIO | None = None
        self._cache = b""
        self._cache_size = 0
        self._cur_off = 0
        self._fsize = 0
        if filename is not None:
            self.open(filename, cache_size)

    def open(self, filename: str | os.PathLike, cache_size: int) -> None:
        """Open a file and fill the cache with its first bytes."""
        if cache_size <= 0:
            raise ValueError("cache_size must be positive")
        self.close()
        self._reader = open(filename, "rb")
        self._fsize = os.fstat(self._reader.fileno()).st_size
        self._cache_size = min(cache_size, self._fsize)
        self._cache = self._reader.read(self._cache_size)
        self._cur_off = 0
        logger.info(
            "Opened: %s, size: %d, cache_size: %d",
            os.fspath(filename), self._fsize, self._cache_size,
        )

    def file_size(self) -> int:
        """Return the size of the open file in bytes."""
        return self._fsize

    def read(self, n_bytes: int) -> bytes:
        """Return the next n_bytes bytes of the file."""
        if self._reader is None:
            raise ANNException("Reader is not open", -1, "CachedReader.read")
        available = self._cache_size - self._cur_off
        if n_bytes <= available:
            data = self._cache[self._cur_off:self._cur_off + n_bytes]
            self._cur_off += n_bytes
            return data

        position = self._reader.tell()
        if n_bytes - available > self._fsize - position:
            text = (
                "Reading beyond end of file\n"
                f"n_bytes: {n_bytes} cached_bytes: {available} "
                f"fsize: {self._fsize} current pos:{position}\n"
            )
            logger.error(text)
            raise ANNException(text, -1, "CachedReader.read", __file__)

        head = self._cache[self._cur_off:]
        tail = self._reader.read(n_bytes - available)
        self._cur_off = self._cache_size

        size_left = self._fsize - self._reader.tell()
        if size_left >= self._cache_size:
            self._cache = self._reader.read(self._cache_size)
            self._cur_off = 0
        # Otherwise the cache stays exhausted and later reads go to the file.
        return head + tail

    def close(self) -> None:
        """Close the underlying file."""
        if self._reader is not None:
            self._reader.close()
            self._reader = None

    def __enter__(self) -> "CachedReader":
        return self

    def __exit__(self, *args) -> None:
        self.close()


class CachedWriter:
    """Writes a file sequentially, batching small writes in a cache block."""

    def __init__(self, filename: str | os.PathLike, cache_size: int) -> None:
        if cache_size <= 0:
            raise ValueError("cache_size must be positive")
        self._writer: BinaryIO | None = open(filename, "wb")
        self._cache_size = cache_size
        self._cache = bytearray()
        self._fsize = 0
        logger.info("Opened: %s, cache_size: %d", os.fspath(filename), cache_size)

    def file_size(self) -> int:
        """Return the number of bytes handed to the file so far."""
        return self._fsize

    def _require_open(self) -> BinaryIO:
        if self._writer is None:
            raise ANNException("Writer is closed", -1, "CachedWriter")
        return self._writer

    def write(self, data: bytes) -> None:
        """Write data, buffering it when it fits in the cache."""
        writer = self._require_open()
        if len(data) <= self._cache_size - len(self._cache):
            self._cache += data
            return
        writer.write(self._cache)
        self._fsize += len(self._cache)
        writer.write(data)
        self._fsize += len(data)
        self._cache.clear()

    def flush_cache(self) -> None:
        """Write any cached bytes to the file."""
        writer = self._require_open()
        writer.write(self._cache)
        self._fsize += len(self._cache)
        self._cache.clear()

    def reset(self) -> None:
        """Flush the cache and move the write position to the file start."""
        self.flush_cache()
        self._require_open().seek(0)

    def close(self) -> None:
        """Flush remaining data and close the file."""
        if self._writer is None:
            return
        if self._cache:
            self.flush_cache()
        self._writer.close()
        self._writer = None
        logger.info("Finished writing %dB", self._fsize)

    def __enter__(self) -> "CachedWriter":
        return self

    def __exit__(self, *args) -> None:
        self.close()