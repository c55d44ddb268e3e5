"""Style mode enumeration and placeholder substitution."""

from __future__ import annotations

import json
from typing import Dict, List, Sequence

from .models import DEFAULT_MODE, Component, StyleMode, sort_modes

STYLE_PLACEHOLDER = "/**:style:{tag}**/"
STYLE_ID_PLACEHOLDER = "/**:style-id:{tag}**/"


def get_all_modes(components: Sequence[Component]) -> List[StyleMode]:
    """Return every style mode used by ``components``, default mode first."""
    modes: set[StyleMode] = set()
    for cmp in components:
        if not cmp.styles:
            modes.add(DEFAULT_MODE)
            continue
        modes.update(cmp.styles)
    return sort_modes(modes)


def style_id(component: Component, mode: StyleMode) -> str:
    if mode.is_default:
        return component.tag_name
    return f"{component.tag_name}-{(mode.name or '').lower()}"


def replace_style_placeholders(
    components: Sequence[Component], mode: StyleMode, text: str
) -> str:
    """Substitute ``mode``'s CSS into the style placeholders found in ``text``."""
    for cmp in components:
        css = cmp.styles.get(mode)
        if css is None:
            css = cmp.styles.get(DEFAULT_MODE, "")
        text = text.replace(STYLE_PLACEHOLDER.format(tag=cmp.tag_name), json.dumps(css))
        text = text.replace(
            STYLE_ID_PLACEHOLDER.format(tag=cmp.tag_name), json.dumps(style_id(cmp, mode))
        )
    return text


class ModeExpander:
    """Materializes one output text per style mode."""

    def __init__(self, enumerate_modes=get_all_modes, substitute=replace_style_placeholders) -> None:
        self._enumerate_modes = enumerate_modes
        self._substitute = substitute

    def expand(self, components: Sequence[Component], text: str) -> Dict[StyleMode, str]:
        modes = sort_modes(self._enumerate_modes(components))
        return {mode: self._substitute(components, mode, text) for mode in modes}


__all__ = [
    "STYLE_ID_PLACEHOLDER",
    "STYLE_PLACEHOLDER",
    "ModeExpander",
    "get_all_modes",
    "replace_style_placeholders",
    "style_id",
]
