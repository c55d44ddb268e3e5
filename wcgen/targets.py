"""Classification of output targets into web component strategies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from .models import DIST, WEBCOMPONENT, WWW, OutputTarget

_BUNDLED_KINDS = {WWW, DIST}


@dataclass
class TargetPlan:
    """Output targets grouped by how their web components are emitted."""

    self_contained: List[OutputTarget] = field(default_factory=list)
    bundled: List[OutputTarget] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.self_contained and not self.bundled


def classify_targets(
    targets: Iterable[OutputTarget], component_count: int, threshold: int
) -> TargetPlan:
    """Split ``targets`` into self-contained and bundled groups.

    ``www`` and ``dist`` targets are bundled only while the component count
    stays below the lazy-load threshold; larger apps are left to the lazy
    loader and are not part of either group.
    """
    plan = TargetPlan()
    for target in targets:
        if target.kind == WEBCOMPONENT:
            plan.self_contained.append(target)
        elif target.kind in _BUNDLED_KINDS and component_count < threshold:
            plan.bundled.append(target)
    return plan


__all__ = ["TargetPlan", "classify_targets"]
