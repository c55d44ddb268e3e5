"""Tests for wcgen.targets."""

from __future__ import annotations

import pytest

from wcgen.config import MIN_FOR_LAZY_LOAD
from wcgen.models import OutputTarget
from wcgen.targets import classify_targets

SELF_CONTAINED = OutputTarget(kind="webcomponent", dir="/out")
WWW = OutputTarget(kind="www", build_dir="/www/build")
DIST = OutputTarget(kind="dist", build_dir="/dist")
DOCS = OutputTarget(kind="docs", dir="/docs")


@pytest.mark.parametrize("count", range(0, MIN_FOR_LAZY_LOAD))
def test_small_apps_bundle_www_and_dist(count: int) -> None:
    plan = classify_targets([SELF_CONTAINED, WWW, DIST], count, MIN_FOR_LAZY_LOAD)
    assert plan.self_contained == [SELF_CONTAINED]
    assert plan.bundled == [WWW, DIST]


@pytest.mark.parametrize("count", [MIN_FOR_LAZY_LOAD, MIN_FOR_LAZY_LOAD + 1, 50])
def test_large_apps_leave_www_and_dist_to_lazy_loader(count: int) -> None:
    plan = classify_targets([SELF_CONTAINED, WWW, DIST], count, MIN_FOR_LAZY_LOAD)
    assert plan.self_contained == [SELF_CONTAINED]
    assert plan.bundled == []


def test_unrelated_targets_are_ignored() -> None:
    plan = classify_targets([DOCS], 1, MIN_FOR_LAZY_LOAD)
    assert plan.is_empty


def test_no_targets_is_empty() -> None:
    assert classify_targets([], 3, MIN_FOR_LAZY_LOAD).is_empty
