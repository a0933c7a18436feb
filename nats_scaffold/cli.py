"""Command-line interface for nats-scaffold.

Parses options into a GeneratorConfig, runs the generation pipeline, and
reports the result on a rich console.
"""

from __future__ import annotations

import argparse
import logging
from typing import Any, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .codegen.core.config import DEFAULT_OUTPUT_DIR, DEFAULT_TARGET, load_config
from .codegen.core.errors import AlreadyExistsError, ParseError, ScaffoldError
from .codegen.pipeline import GenerationPipeline, GenerationReport
from .codegen.registry import get_registry
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)

NEXT_STEPS = "'npm install', edit handlers path, 'npm run build'"


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="nats-scaffold",
        description="Generate NATS service stubs, wiring, and clients from a protobuf file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  nats-scaffold --proto calc.proto
  nats-scaffold -p calc.proto -o ./calc-service
  nats-scaffold -p calc.proto -o ./calc-service --force
  nats-scaffold --list-targets
        """.strip(),
    )

    parser.add_argument(
        "--proto", "-p", metavar="FILE", help="filepath to the protobuf file (required)"
    )
    parser.add_argument(
        "--out",
        "-o",
        metavar="DIR",
        help=f"directory where files will be generated (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--force",
        "-f",
        action="store_true",
        default=None,
        help="clobber any existing assets (handler stubs are backed up to .bak)",
    )
    parser.add_argument(
        "--target",
        "-t",
        metavar="TARGET",
        default=DEFAULT_TARGET,
        help=f"target language for generated code (default: {DEFAULT_TARGET})",
    )
    parser.add_argument(
        "--config", metavar="FILE", help="JSON configuration file for code generation"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="show what would be written without touching the filesystem",
    )
    parser.add_argument(
        "--list-targets",
        action="store_true",
        help="list supported target languages and exit",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    service_group = parser.add_argument_group("generated service options")
    service_group.add_argument(
        "--service-version",
        metavar="VERSION",
        help="version reported by the generated NATS service (default: 0.0.1)",
    )
    service_group.add_argument(
        "--error-code",
        type=int,
        metavar="CODE",
        help="error code replied when a handler fails (default: 500)",
    )
    service_group.add_argument(
        "--timeout",
        type=int,
        metavar="MS",
        help="request timeout used by generated clients, in milliseconds",
    )
    service_group.add_argument(
        "--no-comments",
        action="store_true",
        help="don't add explanatory comments to generated files",
    )

    log_group = parser.add_argument_group("logging")
    log_group.add_argument(
        "--verbose", "-v", action="store_true", help="show debug output"
    )
    log_group.add_argument(
        "--log-file", metavar="FILE", help="also write a debug log to FILE"
    )

    return parser


class CLIHandler:
    """Handle command-line operations for service generation."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def run(self, args: argparse.Namespace) -> int:
        """Run based on parsed arguments.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        if args.list_targets:
            return self._list_targets()

        pipeline = None
        try:
            config = load_config(
                target=args.target,
                custom_config=self._overrides(args),
                config_file=args.config,
            )
            pipeline = GenerationPipeline(config)
            report = pipeline.run()
        except AlreadyExistsError as e:
            self._error("output already exists", e)
            return 1
        except ParseError as e:
            self._error("failed to parse schema", e)
            return 1
        except ScaffoldError as e:
            step = pipeline.step if pipeline else "loading configuration"
            self._error(f"error while {step}", e)
            return 1
        except OSError as e:
            step = pipeline.step if pipeline else "loading configuration"
            logger.debug("I/O failure", exc_info=True)
            self._error(f"I/O error while {step}", e)
            return 1

        self._print_report(report)
        return 0

    def _overrides(self, args: argparse.Namespace) -> dict[str, Any]:
        overrides: dict[str, Any] = {
            "schema_path": args.proto,
            "output_dir": args.out,
            "force": args.force,
            "dry_run": args.dry_run,
            "service_version": args.service_version,
            "error_code": args.error_code,
            "request_timeout_ms": args.timeout,
        }
        if args.no_comments:
            overrides["add_comments"] = False
        return overrides

    def _error(self, title: str, error: Exception) -> None:
        self.console.print(f"[red]✗ {title}:[/red] {escape(str(error))}")
        logger.debug("%s: %s", title, error)

    def _print_report(self, report: GenerationReport) -> None:
        for warning in report.warnings:
            self.console.print(f"[yellow]⚠️  {escape(warning)}[/yellow]")

        verb = "Would write" if report.dry_run else "Generated"
        table = Table(
            title=f"📦 {verb} {len(report.planned)} file(s) in {report.output_dir}",
            box=box.ROUNDED,
            title_style="bold cyan",
        )
        table.add_column("File", style="bold green", no_wrap=True)
        table.add_column("Kind", style="cyan")
        table.add_column("Action", style="magenta")

        for planned in report.planned:
            table.add_row(
                planned.artifact.path,
                planned.artifact.kind.value,
                planned.action.value,
            )

        self.console.print()
        self.console.print(table)

        if report.dry_run:
            self.console.print("[dim]Dry run: nothing was written[/dim]")
            return

        self.console.print(
            f"✅ [green]{len(report.model.services)} service(s), "
            f"{report.model.rpc_count} rpc(s)[/green]"
        )
        self.console.print(NEXT_STEPS)

    def _list_targets(self) -> int:
        registry = get_registry()

        table = Table(
            title="📋 Supported Targets", box=box.ROUNDED, title_style="bold cyan"
        )
        table.add_column("Target", style="bold green", no_wrap=True)
        table.add_column("Extension", style="cyan")
        table.add_column("Generator Class", style="dim")
        table.add_column("Aliases", style="blue")

        for target in registry.list_targets():
            info = registry.get_target_info(target)
            aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
            table.add_row(f"🔧 {target}", info["file_extension"], info["class"], aliases)

        self.console.print()
        self.console.print(table)
        self.console.print(
            Panel(
                "[bold]Usage:[/bold] nats-scaffold --proto [dim]service.proto[/dim] "
                "--target [cyan]TARGET[/cyan]",
                title="💡 Quick Start",
                border_style="blue",
            )
        )
        return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, configure logging, and run the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
    )
    return CLIHandler().run(args)
