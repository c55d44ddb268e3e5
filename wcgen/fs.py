"""Filesystem capabilities used by the output writer."""

from __future__ import annotations

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Dict, Protocol


class FileSystem(Protocol):
    """Path joining and text writing as seen by the writer."""

    def join(self, base: str, name: str) -> str:
        """Return the path of ``name`` inside ``base``."""

    async def write_file(self, path: str, text: str) -> bool:
        """Write ``text`` to ``path``; return True when the content changed."""


class LocalFileSystem:
    """Writes files atomically on the local disk."""

    def __init__(self, file_mode: int | None = None) -> None:
        # os.umask can only be read by setting it, so it is sampled once here.
        self.file_mode = file_mode if file_mode is not None else 0o666 & ~_current_umask()

    def join(self, base: str, name: str) -> str:
        return str(Path(base) / name)

    async def write_file(self, path: str, text: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _write_atomic, Path(path), text, self.file_mode)


class MemoryFileSystem:
    """Keeps written files in memory, keyed by POSIX path."""

    def __init__(self) -> None:
        self.files: Dict[str, str] = {}

    def join(self, base: str, name: str) -> str:
        return f"{base.rstrip('/')}/{name}"

    async def write_file(self, path: str, text: str) -> bool:
        changed = self.files.get(path) != text
        self.files[path] = text
        return changed


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _write_atomic(path: Path, text: str, mode: int) -> bool:
    data = text.encode("utf-8")
    try:
        if path.read_bytes() == data:
            return False
    except FileNotFoundError:
        pass

    path.parent.mkdir(parents=True, exist_ok=True)
    handle = tempfile.NamedTemporaryFile(
        mode="wb",
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=path.parent,
        delete=False,
    )
    temp_path = Path(handle.name)
    try:
        with handle:
            handle.write(data)
        # Temporary files are created 0600.
        os.chmod(temp_path, mode)
        temp_path.replace(path)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
    return True


__all__ = ["FileSystem", "LocalFileSystem", "MemoryFileSystem"]
