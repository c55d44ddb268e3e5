"""Decides whether and how web component outputs are generated for a build pass."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from .config import WcGenConfig
from .features import FeatureFlags, build_flags
from .fs import FileSystem, LocalFileSystem
from .generator import ArtifactGenerator, CodeGenerator, GenerationError, TemplateCodeGenerator
from .logging import get_logger
from .models import BuildPassState, Component, OutputTarget
from .styles import ModeExpander
from .targets import classify_targets
from .timing import timed_span
from .writer import AbortSignal, OutputWriter, WriteResult, WriteStatus

FlagBuilder = Callable[[Sequence[Component], Optional[WcGenConfig]], FeatureFlags]

_PathOutcome = Tuple[List[GenerationError], List[WriteResult]]


class OutputError(RuntimeError):
    """Raised when a build pass finished with generation or write failures."""

    def __init__(self, message: str, report: "OutputReport") -> None:
        super().__init__(message)
        self.report = report
        self.generation_errors = list(report.generation_errors)
        self.failures = report.failures


@dataclass
class OutputReport:
    """Everything a web component output pass did."""

    skipped_reason: Optional[str] = None
    generation_errors: List[GenerationError] = field(default_factory=list)
    writes: List[WriteResult] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None

    @property
    def failures(self) -> List[WriteResult]:
        return [result for result in self.writes if result.status is WriteStatus.FAILED]

    @property
    def written_paths(self) -> List[str]:
        return sorted(
            result.path
            for result in self.writes
            if result.path and result.status in (WriteStatus.WRITTEN, WriteStatus.UNCHANGED)
        )

    @property
    def ok(self) -> bool:
        return not self.generation_errors and not self.failures

    def raise_for_failures(self) -> None:
        if self.ok:
            return
        problems = [str(error) for error in self.generation_errors]
        problems.extend(f"{result.path or result.subject}: {result.error}" for result in self.failures)
        raise OutputError("Web component output failed: " + "; ".join(problems), self)


def should_run(state: BuildPassState) -> bool:
    """Return False for incremental passes without script changes."""
    return state.requires_full_build or not state.is_rebuild or state.has_script_changes


class WebComponentOutput:
    """Generates self-contained and bundled web component files."""

    def __init__(
        self,
        config: WcGenConfig,
        generator: CodeGenerator | None = None,
        fs: FileSystem | None = None,
        expander: ModeExpander | None = None,
        flag_builder: FlagBuilder = build_flags,
    ) -> None:
        self.config = config
        self.generator = ArtifactGenerator(generator or TemplateCodeGenerator(config.namespace))
        self.writer = OutputWriter(fs or LocalFileSystem())
        self.expander = expander or ModeExpander()
        self.flag_builder = flag_builder
        self.logger = get_logger("orchestrator")

    async def generate(
        self,
        state: BuildPassState,
        components: Sequence[Component] | None = None,
        styles_ready: Awaitable[object] | None = None,
    ) -> OutputReport:
        """Run the web component output stage for one build pass."""
        if not should_run(state):
            self.logger.info("No script changes in rebuild; skipping web component output")
            return OutputReport(skipped_reason="no script changes")

        components = list(self.config.components if components is None else components)
        plan = classify_targets(
            self.config.output_targets, len(components), self.config.lazy_load_threshold
        )
        if plan.is_empty:
            self.logger.info("No web component output targets; nothing to generate")
            return OutputReport(skipped_reason="no output targets")

        if styles_ready is not None:
            await styles_ready

        self.writer.begin_pass()
        outcomes = await asyncio.gather(
            self._generate_self_contained(state, plan.self_contained, components),
            self._generate_bundled(state, plan.bundled, components),
        )

        report = OutputReport()
        for errors, writes in outcomes:
            report.generation_errors.extend(errors)
            report.writes.extend(writes)
        if report.failures:
            self.logger.warning("%d web component output(s) failed to write", len(report.failures))
        return report

    async def _generate_self_contained(
        self, state: BuildPassState, targets: List[OutputTarget], components: List[Component]
    ) -> _PathOutcome:
        if not targets:
            return [], []

        with timed_span(
            "generate self-contained web components started",
            "generate self-contained web components finished",
            debug=True,
        ):
            outcomes = await asyncio.gather(
                *(self._generate_component(state, targets, cmp) for cmp in components)
            )

        errors: List[GenerationError] = []
        writes: List[WriteResult] = []
        for error, results in outcomes:
            if error is not None:
                errors.append(error)
            writes.extend(results)
        return errors, writes

    async def _generate_component(
        self, state: BuildPassState, targets: List[OutputTarget], component: Component
    ) -> Tuple[Optional[GenerationError], List[WriteResult]]:
        signal = self._new_signal(state)
        if signal.aborted:
            return None, []

        group = [component]
        flags = self.flag_builder(group, self.config)
        result = await self.generator.generate(component.tag_name, group, flags)
        if not result.ok:
            signal.abort(f"generation failed for {component.tag_name}")
            return result.error, []

        variants = self.expander.expand(group, result.text or "")
        return None, await self.writer.write_self_contained(targets, component, variants, signal)

    async def _generate_bundled(
        self, state: BuildPassState, targets: List[OutputTarget], components: List[Component]
    ) -> _PathOutcome:
        if not targets:
            return [], []

        namespace = self.config.fs_namespace
        with timed_span(
            "generate bundled web components started",
            "generate bundled web components finished",
            debug=True,
        ):
            signal = self._new_signal(state)
            if signal.aborted:
                return [], []

            flags = self.flag_builder(components, self.config)
            result = await self.generator.generate(namespace, components, flags)
            if not result.ok:
                signal.abort(f"generation failed for {namespace}")
                return [result.error] if result.error else [], []

            ordered = sorted(components, key=lambda cmp: cmp.tag_name)
            variants = self.expander.expand(ordered, result.text or "")
            writes = await self.writer.write_bundled(targets, namespace, variants, signal)
        return [], writes

    def _new_signal(self, state: BuildPassState) -> AbortSignal:
        signal = AbortSignal()
        if state.has_error:
            signal.abort("build pass already has errors")
        return signal


__all__ = ["OutputError", "OutputReport", "WebComponentOutput", "should_run"]
