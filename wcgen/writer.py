"""File naming and concurrent writing of web component outputs."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .fs import FileSystem
from .logging import get_logger
from .models import Component, OutputTarget, StyleMode


class OutputCollisionError(RuntimeError):
    """Raised when two outputs of one pass resolve to the same path."""


class WriteStatus(str, Enum):
    WRITTEN = "written"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class WriteResult:
    """Outcome of a single output file write."""

    path: Optional[str]
    subject: str
    mode: StyleMode
    status: WriteStatus
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.status is not WriteStatus.FAILED


class AbortSignal:
    """Cancellation token shared by the writes of one component grouping."""

    def __init__(self) -> None:
        self.reason: Optional[str] = None

    @property
    def aborted(self) -> bool:
        return self.reason is not None

    def abort(self, reason: str) -> None:
        if self.reason is None:
            self.reason = reason


def self_contained_file_name(component: Component, mode: StyleMode) -> str:
    return f"{component.tag_name}{mode.suffix()}.js"


def bundled_file_name(namespace: str, mode: StyleMode) -> str:
    return f"{namespace}{mode.suffix(lowercase=True)}.js"


class OutputWriter:
    """Resolves output paths and writes mode variants concurrently."""

    def __init__(self, fs: FileSystem) -> None:
        self.fs = fs
        self.logger = get_logger("writer")
        self._claimed: Dict[str, str] = {}

    def begin_pass(self) -> None:
        """Forget the paths claimed by the previous build pass."""
        self._claimed.clear()

    def self_contained_path(self, target: OutputTarget, component: Component, mode: StyleMode) -> str:
        if not target.dir:
            raise ValueError(f"'{target.kind}' output target has no dir configured")
        return self.fs.join(target.dir, self_contained_file_name(component, mode))

    def bundled_path(self, target: OutputTarget, namespace: str, mode: StyleMode) -> str:
        if not target.build_dir:
            raise ValueError(f"'{target.kind}' output target has no build_dir configured")
        return self.fs.join(target.build_dir, bundled_file_name(namespace, mode))

    async def write_self_contained(
        self,
        targets: Sequence[OutputTarget],
        component: Component,
        variants: Mapping[StyleMode, str],
        signal: AbortSignal,
    ) -> List[WriteResult]:
        jobs = []
        for mode, text in variants.items():
            for target in targets:
                jobs.append(
                    self._write(
                        lambda t=target, m=mode: self.self_contained_path(t, component, m),
                        component.tag_name,
                        mode,
                        text,
                        signal,
                    )
                )
        return await self._gather(jobs)

    async def write_bundled(
        self,
        targets: Sequence[OutputTarget],
        namespace: str,
        variants: Mapping[StyleMode, str],
        signal: AbortSignal,
    ) -> List[WriteResult]:
        jobs = []
        for mode, text in variants.items():
            for target in targets:
                jobs.append(
                    self._write(
                        lambda t=target, m=mode: self.bundled_path(t, namespace, m),
                        namespace,
                        mode,
                        text,
                        signal,
                    )
                )
        return await self._gather(jobs)

    async def _write(self, resolve, subject: str, mode: StyleMode, text: str, signal: AbortSignal) -> WriteResult:
        try:
            path = resolve()
        except ValueError as exc:
            self.logger.warning("Cannot resolve output for %s (%s): %s", subject, mode, exc)
            return WriteResult(None, subject, mode, WriteStatus.FAILED, exc)

        if signal.aborted:
            self.logger.debug("Skipping %s: %s", path, signal.reason)
            return WriteResult(path, subject, mode, WriteStatus.SKIPPED)

        owner = self._claimed.get(path)
        if owner is not None:
            error = OutputCollisionError(f"{path} is already written by {owner}")
            self.logger.warning("Output collision: %s", error)
            return WriteResult(path, subject, mode, WriteStatus.FAILED, error)
        self._claimed[path] = f"{subject} ({mode})"

        try:
            changed = await self.fs.write_file(path, text)
        except Exception as exc:
            self.logger.warning("Failed to write %s: %s", path, exc)
            return WriteResult(path, subject, mode, WriteStatus.FAILED, exc)

        status = WriteStatus.WRITTEN if changed else WriteStatus.UNCHANGED
        self.logger.debug("%s %s", status.value.capitalize(), path)
        return WriteResult(path, subject, mode, status)

    @staticmethod
    async def _gather(jobs: Iterable) -> List[WriteResult]:
        return list(await asyncio.gather(*jobs))


__all__ = [
    "AbortSignal",
    "OutputCollisionError",
    "OutputWriter",
    "WriteResult",
    "WriteStatus",
    "bundled_file_name",
    "self_contained_file_name",
]
