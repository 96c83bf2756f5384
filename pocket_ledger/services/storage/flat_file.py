"""
Flat File Storage Implementation

The ledger lives in a plain text file, one record per line, no header.

Every append opens the file, writes one line and closes it again;
no handle is held between operations. The file is created by the
first append and is never truncated, rewritten or compacted.
"""

import os
from pathlib import Path
from typing import Union

from pocket_ledger.services.storage.interface import (
    StorageReadError,
    StorageWriteError,
    TransactionStorageInterface,
)


class FlatFileStorage(TransactionStorageInterface):
    """Line storage backed by a local text file."""

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8"):
        self._path = Path(path)
        self._encoding = encoding

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def exists(self) -> bool:
        return self._path.exists()

    def read_lines(self) -> list[str]:
        """Read every line of the file, stripping line terminators."""
        try:
            with open(self._path, "r", encoding=self._encoding) as f:
                return [line.rstrip("\n") for line in f]
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read {self._path}: {e}") from e

    def append_line(self, line: str) -> None:
        """
        Append one record to the file.

        If the file does not end with a newline (edited by hand),
        the previous line is terminated first so records never merge.
        """
        try:
            data = (line + "\n").encode(self._encoding)
            with open(self._path, "a+b") as f:
                f.seek(0, os.SEEK_END)
                if f.tell() > 0:
                    f.seek(-1, os.SEEK_END)
                    if f.read(1) != b"\n":
                        data = b"\n" + data
                f.write(data)
        except (OSError, UnicodeEncodeError) as e:
            raise StorageWriteError(f"Failed to write to {self._path}: {e}") from e
