"""Code generation adapter for web component output."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Optional, Protocol, Sequence, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .features import FeatureFlags
from .logging import get_logger
from .models import Component
from .styles import STYLE_ID_PLACEHOLDER, STYLE_PLACEHOLDER

_TEMPLATES_DIR = Path(__file__).parent / "templates"
_TEMPLATE_NAME = "web-components.js.j2"


class GenerationError(RuntimeError):
    """Raised when code generation fails for a component grouping."""

    def __init__(self, group: str, message: str) -> None:
        super().__init__(f"{group}: {message}")
        self.group = group


class CodeGenerator(Protocol):
    """Turns a component list and feature flags into program text."""

    def generate(
        self, components: Sequence[Component], flags: FeatureFlags
    ) -> Union[str, Awaitable[str]]:
        """Return the generated module text."""


@dataclass
class GenerationResult:
    """Outcome of one generator call for a component grouping."""

    group: str
    text: Optional[str] = None
    error: Optional[GenerationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None


class TemplateCodeGenerator:
    """Renders custom element definitions from a Jinja template."""

    def __init__(self, namespace: str, templates_dir: Path | None = None) -> None:
        self.namespace = namespace
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir or _TEMPLATES_DIR)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def generate(self, components: Sequence[Component], flags: FeatureFlags) -> str:
        template = self._env.get_template(_TEMPLATE_NAME)
        return template.render(
            namespace=self.namespace,
            components=list(components),
            flags=flags,
            style_placeholder=lambda cmp: STYLE_PLACEHOLDER.format(tag=cmp.tag_name),
            style_id_placeholder=lambda cmp: STYLE_ID_PLACEHOLDER.format(tag=cmp.tag_name),
        )


class ArtifactGenerator:
    """Calls the code generator once per grouping and captures failures."""

    def __init__(self, generator: CodeGenerator) -> None:
        self.generator = generator
        self.logger = get_logger("generator")

    async def generate(
        self, group: str, components: Sequence[Component], flags: FeatureFlags
    ) -> GenerationResult:
        ordered = sorted(components, key=lambda cmp: cmp.tag_name)
        try:
            output = self.generator.generate(ordered, flags)
            if inspect.isawaitable(output):
                output = await output
        except Exception as exc:
            error = GenerationError(group, str(exc) or exc.__class__.__name__)
            self.logger.error("Code generation failed for %s: %s", group, exc)
            return GenerationResult(group=group, error=error)

        if not isinstance(output, str):
            error = GenerationError(
                group, f"generator returned {type(output).__name__}, expected str"
            )
            self.logger.error("Code generation failed for %s: %s", group, error)
            return GenerationResult(group=group, error=error)

        self.logger.debug("Generated %d characters for %s", len(output), group)
        return GenerationResult(group=group, text=output)


__all__ = [
    "ArtifactGenerator",
    "CodeGenerator",
    "GenerationError",
    "GenerationResult",
    "TemplateCodeGenerator",
]
