"""Test doubles for the code generator and filesystem capabilities."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from wcgen.features import FeatureFlags
from wcgen.fs import MemoryFileSystem
from wcgen.models import Component
from wcgen.styles import STYLE_PLACEHOLDER


class RecordingGenerator:
    """Emits one line per component and records every call."""

    def __init__(self, fail_for: Iterable[str] = ()) -> None:
        self.calls: List[tuple[list[str], FeatureFlags]] = []
        self._fail_for = set(fail_for)

    def generate(self, components: Sequence[Component], flags: FeatureFlags) -> str:
        tags = [cmp.tag_name for cmp in components]
        self.calls.append((tags, flags))
        failing = self._fail_for.intersection(tags)
        if failing:
            raise RuntimeError(f"cannot compile {', '.join(sorted(failing))}")
        return "".join(
            f"define({cmp.tag_name}, {STYLE_PLACEHOLDER.format(tag=cmp.tag_name)});\n"
            for cmp in components
        )


class FlakyFileSystem(MemoryFileSystem):
    """In-memory filesystem that refuses to write selected paths."""

    def __init__(self, fail_paths: Iterable[str] = ()) -> None:
        super().__init__()
        self.fail_paths = set(fail_paths)
        self.attempts: List[str] = []

    async def write_file(self, path: str, text: str) -> bool:
        self.attempts.append(path)
        if path in self.fail_paths:
            raise PermissionError(f"permission denied: {path}")
        return await super().write_file(path, text)


__all__ = ["FlakyFileSystem", "RecordingGenerator"]
