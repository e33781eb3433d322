"""CLI entry points for camelcase-lint - Thin Controller using Typer."""

import logging
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from camelcase_lint.domain.case_converter import CaseConverter, CasePolicy
from camelcase_lint.domain.config import ConfigurationLoader
from camelcase_lint.domain.constants import INTERNAL_ERROR_EXIT_CODE
from camelcase_lint.domain.entities import AnalysisReport, LintLevel
from camelcase_lint.domain.exceptions import MalformedSpanError
from camelcase_lint.domain.protocols import (
    DeclarationSourceProtocol,
    DiagnosticRendererProtocol,
    FileSystemProtocol,
    TelemetryPort,
)
from camelcase_lint.domain.rules import NamingRule
from camelcase_lint.infrastructure.gateways.source_map import SourceMap
from camelcase_lint.infrastructure.reporters import (
    HumanDiagnosticRenderer,
    JsonDiagnosticRenderer,
)
from camelcase_lint.infrastructure.services.lint_level_resolver import LintLevelResolverFactory
from camelcase_lint.infrastructure.services.lint_registry import LintRegistryService
from camelcase_lint.use_cases.check_naming import CheckNamingUseCase

stats_console = Console(stderr=True)

# B008: avoid function call in default; use module-level singletons for Typer options
_PATHS_ARGUMENT = typer.Argument(..., help="Files or directories to check")
_ALLOW_OPTION = typer.Option(None, "--allow", "-A", help="Set lint allowed")
_WARN_OPTION = typer.Option(None, "--warn", "-W", help="Set lint warnings")
_DENY_OPTION = typer.Option(None, "--deny", "-D", help="Set lint denied")
_FORBID_OPTION = typer.Option(None, "--forbid", "-F", help="Set lint forbidden")


class OutputFormat(str, Enum):
    HUMAN = "human"
    JSON = "json"


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    registry: LintRegistryService
    filesystem: FileSystemProtocol
    source_map: SourceMap
    front_ends: list[DeclarationSourceProtocol]
    rule: NamingRule


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def command_line_levels(
        allow: list[str] | None,
        warn: list[str] | None,
        deny: list[str] | None,
        forbid: list[str] | None,
    ) -> list[tuple[LintLevel, str]]:
        """Flags applied weakest first, so `-F` wins over `-A` for the same lint."""
        levels: list[tuple[LintLevel, str]] = []
        for level, names in (
            (LintLevel.ALLOW, allow),
            (LintLevel.WARN, warn),
            (LintLevel.DENY, deny),
            (LintLevel.FORBID, forbid),
        ):
            levels.extend((level, ConfigurationLoader.normalize_lint_name(n)) for n in names or [])
        return levels

    @staticmethod
    def build_renderer(output_format: OutputFormat, source_map: SourceMap) -> DiagnosticRendererProtocol:
        if output_format is OutputFormat.JSON:
            return JsonDiagnosticRenderer()
        return HumanDiagnosticRenderer(source_map)

    @staticmethod
    def print_stats(report: AnalysisReport) -> None:
        table = Table(title="camelcase-lint")
        table.add_column("Metric")
        table.add_column("Count", justify="right")
        table.add_row("files checked", str(report.files_checked))
        table.add_row("files skipped", str(len(report.skipped_files)))
        table.add_row("errors", str(report.outcome.error_count))
        table.add_row("warnings", str(report.outcome.warning_count))
        by_lint: dict[str, int] = {}
        for diagnostic in report.diagnostics:
            key = diagnostic.lint_name or diagnostic.code or "other"
            by_lint[key] = by_lint.get(key, 0) + 1
        for key in sorted(by_lint):
            table.add_row(f"  {key}", str(by_lint[key]))
        stats_console.print(table)

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="camelcase-lint",
            help="Naming-convention lint for type-like declarations (non_camel_case_types).",
            add_completion=False,
        )

        @app.command()
        def check(
            paths: list[Path] = _PATHS_ARGUMENT,
            output_format: OutputFormat = typer.Option(
                OutputFormat.HUMAN, "--format", help="Output format: human or json"
            ),
            allow: Optional[list[str]] = _ALLOW_OPTION,
            warn: Optional[list[str]] = _WARN_OPTION,
            deny: Optional[list[str]] = _DENY_OPTION,
            forbid: Optional[list[str]] = _FORBID_OPTION,
            stats: bool = typer.Option(False, "--stats", help="Print a summary table to stderr"),
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress and debug output"),
        ) -> None:
            """Check files for non-camel-case type names."""
            if verbose:
                logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
                deps.telemetry.verbose = True
            deps.telemetry.handshake()

            cli_levels = CLIAppFactory.command_line_levels(allow, warn, deny, forbid)
            for _, name in cli_levels:
                if not deps.registry.expand(name):
                    deps.telemetry.warning(f"unknown lint: `{name}`")
            resolver_factory = LintLevelResolverFactory(
                deps.registry, deps.config_loader.levels, cli_levels
            )
            use_case = CheckNamingUseCase(
                filesystem=deps.filesystem,
                front_ends=deps.front_ends,
                source_map=deps.source_map,
                resolver_factory=resolver_factory.for_source,
                rule=deps.rule,
                renderer=CLIAppFactory.build_renderer(output_format, deps.source_map),
                telemetry=deps.telemetry,
                registry=deps.registry,
            )
            try:
                report = use_case.execute(
                    [str(p) for p in paths],
                    suffixes=deps.config_loader.include_suffixes,
                    exclude=deps.config_loader.exclude_paths,
                )
            except MalformedSpanError as exc:
                deps.telemetry.error(f"internal error: {exc}")
                sys.exit(INTERNAL_ERROR_EXIT_CODE)

            for diagnostic in report.diagnostics:
                print(diagnostic.rendered)
            summary = use_case.renderer.render_summary(report.outcome)
            if summary:
                print(summary)
            if stats:
                CLIAppFactory.print_stats(report)
            sys.exit(report.outcome.exit_code)

        @app.command()
        def convert(
            identifiers: list[str] = typer.Argument(..., help="Identifiers to convert"),
            preserve_acronyms: Optional[bool] = typer.Option(
                None,
                "--preserve-acronyms/--no-preserve-acronyms",
                help="Keep all-caps words such as IO in IOError (default from config)",
            ),
        ) -> None:
            """Show the camel case form of each identifier."""
            policy = deps.config_loader.case_policy
            if preserve_acronyms is not None:
                policy = CasePolicy(preserve_acronyms=preserve_acronyms)
            converter = CaseConverter(policy)
            for identifier in identifiers:
                conversion = converter.convert(identifier)
                if conversion.conforms:
                    print(f"{identifier}: already camel case")
                elif conversion.rewritten is None:
                    print(f"{identifier}: no camel case form")
                else:
                    print(f"{identifier} -> {conversion.rewritten}")

        @app.command()
        def explain(
            lint: Optional[str] = typer.Argument(None, help="Lint name; omit to list all lints"),
        ) -> None:
            """Describe a lint, or list the known lints."""
            if lint is None:
                for name in deps.registry.lint_names():
                    entry = deps.registry.get_entry(name) or {}
                    print(
                        f"{name:<24} {entry.get('default_level', 'warn'):<7} "
                        f"{entry.get('short_description', '')}"
                    )
                return
            entry = deps.registry.get_entry(lint)
            if entry is None:
                deps.telemetry.error(f"unknown lint: `{lint}`")
                sys.exit(1)
            print(entry.get("explanation") or entry.get("short_description", ""))

        return app
