"""Configuration loading for wcgen (.wcgen.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from .features import FLAG_NAMES, FORCED_OFF_FLAGS
from .models import DEFAULT_MODE, Component, OutputTarget, StyleMode

CONFIG_FILE_NAME = ".wcgen.yml"

MIN_FOR_LAZY_LOAD = 6

_ENCAPSULATIONS = {"none", "shadow", "scoped"}
_TAG_PATTERN = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)+$")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class WcGenConfig:
    """Represents the settings defined in .wcgen.yml."""

    root: Path
    namespace: str = "App"
    lazy_load_threshold: int = MIN_FOR_LAZY_LOAD
    dev_mode: bool = False
    hydrated_flag: bool = True
    build_conditionals: Dict[str, bool] = field(default_factory=dict)
    output_targets: List[OutputTarget] = field(default_factory=list)
    components: List[Component] = field(default_factory=list)

    @property
    def fs_namespace(self) -> str:
        """Namespace as used in file names."""
        return self.namespace.lower()


def load_config(config_path: Path) -> WcGenConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return WcGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILE_NAME} must contain a mapping at the root")

    config = WcGenConfig(root=root)

    namespace = _as_str(data.get("namespace"))
    if namespace is not None:
        if not namespace.strip():
            raise ConfigError("namespace must not be empty")
        config.namespace = namespace.strip()

    config.lazy_load_threshold = _count(data, "lazy_load_threshold", config.lazy_load_threshold)
    config.dev_mode = _flag(data, "dev_mode", config.dev_mode)
    config.hydrated_flag = _flag(data, "hydrated_flag", config.hydrated_flag)

    build_data = _as_dict(data.get("build"))
    config.build_conditionals = _parse_conditionals(_as_dict(build_data.get("conditionals")))

    config.output_targets = [
        _parse_output_target(item, root) for item in _as_list(data.get("output_targets"))
    ]
    config.components = _parse_components(_as_list(data.get("components")))
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILE_NAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_conditionals(data: Dict[str, Any]) -> Dict[str, bool]:
    conditionals: Dict[str, bool] = {}
    for name in data:
        if name in FORCED_OFF_FLAGS:
            raise ConfigError(f"build.conditionals cannot enable '{name}' for web component output")
        if name not in FLAG_NAMES:
            raise ConfigError(f"Unknown build conditional '{name}'")
        conditionals[name] = _flag(data, name, False, section="build.conditionals")
    return conditionals


def _parse_output_target(item: Any, root: Path) -> OutputTarget:
    data = _as_dict(item)
    kind = _as_str(data.get("type"))
    if not kind:
        raise ConfigError("Each output target needs a 'type'")
    directory = _as_str(data.get("dir"))
    build_dir = _as_str(data.get("build_dir"))
    return OutputTarget(
        kind=kind.lower(),
        dir=str(root / directory) if directory else None,
        build_dir=str(root / build_dir) if build_dir else None,
    )


def _parse_components(items: Sequence[Any]) -> List[Component]:
    components: List[Component] = []
    seen: set[str] = set()
    mode_spellings: Dict[str, str] = {}
    for item in items:
        data = _as_dict(item)
        tag = _as_str(data.get("tag"))
        if not tag or not _TAG_PATTERN.match(tag):
            raise ConfigError(f"Invalid component tag name: {tag!r}")
        if tag in seen:
            raise ConfigError(f"Duplicate component tag name: {tag}")
        seen.add(tag)

        encapsulation = (_as_str(data.get("encapsulation")) or "none").lower()
        if encapsulation not in _ENCAPSULATIONS:
            raise ConfigError(f"Unsupported encapsulation '{encapsulation}' for {tag}")

        styles: Dict[StyleMode, str] = {}
        shorthand = _as_str(data.get("style"))
        if shorthand is not None:
            styles[DEFAULT_MODE] = shorthand
        for key, css in _as_dict(data.get("styles")).items():
            try:
                mode = StyleMode.parse(str(key))
            except ValueError as exc:
                raise ConfigError(f"{tag}: {exc}") from exc
            _check_mode_spelling(mode, tag, mode_spellings)
            styles[mode] = _as_str(css) or ""

        components.append(
            Component(
                tag_name=tag,
                styles=styles,
                encapsulation=encapsulation,
                props=_names(data, "props"),
                states=_names(data, "states"),
                methods=_names(data, "methods"),
                events=_names(data, "events"),
                listeners=_names(data, "listeners"),
                has_slot=_flag(data, "slot", False, section=tag),
                has_host_element=_flag(data, "host_element", False, section=tag),
            )
        )
    return components


def _check_mode_spelling(mode: StyleMode, tag: str, spellings: Dict[str, str]) -> None:
    """Reject mode names that only differ by case; bundled file names are lower-cased."""
    if mode.name is None:
        return
    known = spellings.setdefault(mode.name.lower(), mode.name)
    if known != mode.name:
        raise ConfigError(
            f"{tag}: style mode '{mode.name}' conflicts with '{known}' (mode names are case-insensitive)"
        )


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"Expected a list, got {type(value).__name__}")
    return value


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _flag(data: Dict[str, Any], key: str, default: bool, *, section: str | None = None) -> bool:
    raw = data.get(key)
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in {"true", "yes", "on", "1"}:
            return True
        if lowered in {"false", "no", "off", "0"}:
            return False
    name = f"{section}.{key}" if section else key
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _count(data: Dict[str, Any], key: str, default: int) -> int:
    raw = data.get(key)
    if raw is None:
        return default
    if isinstance(raw, int) and not isinstance(raw, bool) and raw >= 0:
        return raw
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw)
    raise ConfigError(f"{key} must be a non-negative integer, got {raw!r}")


def _names(data: Dict[str, Any], key: str) -> Tuple[str, ...]:
    """Read a list of identifiers; a bare string counts as a one-item list."""
    raw = data.get(key)
    if raw is None:
        return ()
    if isinstance(raw, str):
        return (raw,)
    if isinstance(raw, list) and all(isinstance(item, str) for item in raw):
        return tuple(raw)
    raise ConfigError(f"{key} must be a name or a list of names")
