"""Build feature descriptors for web component output."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, FrozenSet, Mapping, Sequence

from .models import Component

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .config import WcGenConfig


@dataclass(frozen=True)
class FeatureFlags:
    """Named build capabilities consumed by the code generator."""

    lazy_load: bool = True
    es5: bool = True
    slot_polyfill: bool = False
    polyfills: bool = True
    prerender_client_side: bool = True
    prerender_server_side: bool = True
    shadow_dom: bool = False
    scoped: bool = False
    slot: bool = False
    style: bool = False
    mode: bool = False
    prop: bool = False
    state: bool = False
    method: bool = False
    event: bool = False
    listener: bool = False
    host_element: bool = False
    is_dev: bool = False
    is_prod: bool = True
    hydrated_flag: bool = True

    def as_dict(self) -> dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


FLAG_NAMES: FrozenSet[str] = frozenset(f.name for f in fields(FeatureFlags))

# Self-contained and bundled output is always eager, modern-syntax and client-rendered.
FORCED_OFF_FLAGS: Mapping[str, bool] = {
    "lazy_load": False,
    "es5": False,
    "slot_polyfill": False,
    "polyfills": False,
    "prerender_client_side": False,
    "prerender_server_side": False,
}


def detect_base_features(components: Sequence[Component]) -> FeatureFlags:
    """Derive the baseline flags a lazy-loaded build of ``components`` would need."""
    uses_slot = any(cmp.has_slot for cmp in components)
    all_shadow = bool(components) and all(cmp.encapsulation == "shadow" for cmp in components)
    return FeatureFlags(
        lazy_load=True,
        es5=True,
        slot_polyfill=uses_slot and not all_shadow,
        polyfills=True,
        prerender_client_side=True,
        prerender_server_side=True,
        shadow_dom=any(cmp.encapsulation == "shadow" for cmp in components),
        scoped=any(cmp.encapsulation == "scoped" for cmp in components),
        slot=uses_slot,
        style=any(cmp.styles for cmp in components),
        mode=any(not mode.is_default for cmp in components for mode in cmp.styles),
        prop=any(cmp.props for cmp in components),
        state=any(cmp.states for cmp in components),
        method=any(cmp.methods for cmp in components),
        event=any(cmp.events for cmp in components),
        listener=any(cmp.listeners for cmp in components),
        host_element=any(cmp.has_host_element for cmp in components),
    )


def force_web_component_flags(flags: FeatureFlags) -> FeatureFlags:
    """Return ``flags`` with every flag incompatible with web component output turned off."""
    return replace(flags, **FORCED_OFF_FLAGS)


def update_build_conditionals(flags: FeatureFlags, config: "WcGenConfig | None") -> FeatureFlags:
    """Apply global configuration adjustments on top of ``flags``."""
    if config is None:
        return flags
    updated = replace(
        flags,
        is_dev=config.dev_mode,
        is_prod=not config.dev_mode,
        hydrated_flag=config.hydrated_flag,
    )
    overrides = {
        name: value
        for name, value in config.build_conditionals.items()
        if name not in FORCED_OFF_FLAGS
    }
    if overrides:
        updated = replace(updated, **overrides)
    return updated


def build_flags(
    components: Sequence[Component], config: "WcGenConfig | None" = None
) -> FeatureFlags:
    """Detect, force off and adjust the feature flags for ``components``."""
    ordered = sorted(components, key=lambda cmp: cmp.tag_name)
    flags = force_web_component_flags(detect_base_features(ordered))
    return update_build_conditionals(flags, config)


__all__ = [
    "FLAG_NAMES",
    "FORCED_OFF_FLAGS",
    "FeatureFlags",
    "build_flags",
    "detect_base_features",
    "force_web_component_flags",
    "update_build_conditionals",
]
