"""Core data models shared across wcgen components."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

DEFAULT_MODE_KEY = "$"

# Mode names end up in file names.
_MODE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

WEBCOMPONENT = "webcomponent"
WWW = "www"
DIST = "dist"


@dataclass(frozen=True)
class StyleMode:
    """A style variant; ``name is None`` marks the unnamed default mode."""

    name: Optional[str] = None

    @classmethod
    def named(cls, name: str) -> "StyleMode":
        if not isinstance(name, str) or not _MODE_NAME_PATTERN.fullmatch(name):
            raise ValueError(f"Invalid style mode name: {name!r}")
        return cls(name)

    @classmethod
    def parse(cls, value: str) -> "StyleMode":
        """Map a config key to a mode, treating ``$`` as the default mode."""
        if value == DEFAULT_MODE_KEY:
            return DEFAULT_MODE
        return cls.named(value)

    @property
    def is_default(self) -> bool:
        return self.name is None

    def suffix(self, *, lowercase: bool = False) -> str:
        """Return the file-name suffix for this mode (empty for the default mode)."""
        if self.name is None:
            return ""
        return f".{self.name.lower() if lowercase else self.name}"

    def __str__(self) -> str:
        return DEFAULT_MODE_KEY if self.name is None else self.name


DEFAULT_MODE = StyleMode()


@dataclass
class Component:
    """A compiled UI component as handed over by the compilation phase."""

    tag_name: str
    styles: Dict[StyleMode, str] = field(default_factory=dict)
    encapsulation: str = "none"
    props: Tuple[str, ...] = ()
    states: Tuple[str, ...] = ()
    methods: Tuple[str, ...] = ()
    events: Tuple[str, ...] = ()
    listeners: Tuple[str, ...] = ()
    has_slot: bool = False
    has_host_element: bool = False

    @property
    def style_modes(self) -> Tuple[StyleMode, ...]:
        return tuple(sorted(self.styles, key=_mode_sort_key))

    @property
    def class_name(self) -> str:
        return "".join(part[:1].upper() + part[1:] for part in self.tag_name.split("-"))


@dataclass(frozen=True)
class OutputTarget:
    """One configured output destination."""

    kind: str
    dir: Optional[str] = None
    build_dir: Optional[str] = None


@dataclass(frozen=True)
class BuildPassState:
    """Read-only view of the current compilation pass."""

    requires_full_build: bool = True
    is_rebuild: bool = False
    has_script_changes: bool = True
    has_error: bool = False


def _mode_sort_key(mode: StyleMode) -> Tuple[int, str]:
    return (0, "") if mode.is_default else (1, mode.name or "")


def sort_modes(modes) -> list[StyleMode]:
    """Order modes with the default mode first, then named modes lexically."""
    return sorted(set(modes), key=_mode_sort_key)


__all__ = [
    "DEFAULT_MODE",
    "DEFAULT_MODE_KEY",
    "DIST",
    "WEBCOMPONENT",
    "WWW",
    "BuildPassState",
    "Component",
    "OutputTarget",
    "StyleMode",
    "sort_modes",
]
