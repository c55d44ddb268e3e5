"""Web component output generation for build pipelines."""

from .config import ConfigError, WcGenConfig, load_config
from .features import FeatureFlags, build_flags
from .models import DEFAULT_MODE, BuildPassState, Component, OutputTarget, StyleMode
from .orchestrator import OutputError, OutputReport, WebComponentOutput, should_run

__all__ = [
    "DEFAULT_MODE",
    "BuildPassState",
    "Component",
    "ConfigError",
    "FeatureFlags",
    "OutputError",
    "OutputReport",
    "OutputTarget",
    "StyleMode",
    "WcGenConfig",
    "WebComponentOutput",
    "build_flags",
    "load_config",
    "should_run",
]
