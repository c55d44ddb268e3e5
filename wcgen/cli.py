"""CLI entrypoints for wcgen commands."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .fs import LocalFileSystem, MemoryFileSystem
from .logging import configure_logging
from .models import BuildPassState
from .orchestrator import OutputError, OutputReport, WebComponentOutput
from .writer import WriteStatus


def _add_output_options(parser: argparse.ArgumentParser, *, subcommand: bool = False) -> None:
    """Add -v/-q; on subcommands they only override what the top level set."""
    default = argparse.SUPPRESS if subcommand else False
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Log skipped writes, span timings and other debug detail.",
    )
    group.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only log warnings and errors.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wcgen",
        description="Generate self-contained and bundled web component outputs.",
    )
    _add_output_options(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write a DEBUG-level log of the pass to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Run the web component output stage for a project.",
    )
    _add_output_options(build_parser, subcommand=True)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project root or .wcgen.yml path (defaults to current directory).",
    )
    build_parser.add_argument(
        "--rebuild",
        action="store_true",
        help="Treat this pass as an incremental rebuild.",
    )
    build_parser.add_argument(
        "--no-script-changes",
        action="store_true",
        help="Report that no script files changed since the previous pass.",
    )
    build_parser.add_argument(
        "--full-build",
        action="store_true",
        help="Force regeneration even for incremental rebuilds.",
    )
    build_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List the files that would be written without touching the disk.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for wcgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=args.log_file,
    )

    if args.command == "build":
        try:
            config = load_config(Path(args.path))
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")

        dry_run = bool(getattr(args, "dry_run", False))
        stage = WebComponentOutput(
            config, fs=MemoryFileSystem() if dry_run else LocalFileSystem()
        )
        state = BuildPassState(
            requires_full_build=bool(args.full_build),
            is_rebuild=bool(args.rebuild),
            has_script_changes=not args.no_script_changes,
        )
        report = asyncio.run(stage.generate(state))
        _print_report(report, dry_run=dry_run)
        try:
            report.raise_for_failures()
        except OutputError as exc:
            parser.exit(1, f"wcgen build failed: {exc}\nRun with --verbose for more details.\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _print_report(report: OutputReport, *, dry_run: bool) -> None:
    if report.skipped:
        print(f"Skipped web component output ({report.skipped_reason})")
        return
    labels = {
        WriteStatus.WRITTEN: "Would write" if dry_run else "Wrote",
        WriteStatus.UNCHANGED: "Unchanged",
    }
    for result in sorted(report.writes, key=lambda item: item.path or ""):
        label = labels.get(result.status)
        if label and result.path:
            print(f"{label} {_relativize(Path(result.path))}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
