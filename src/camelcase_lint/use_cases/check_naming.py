"""Check Naming Use Case - one sequential pass over every input file."""

from collections.abc import Callable

from camelcase_lint.domain.analysis_context import AnalysisContext
from camelcase_lint.domain.constants import E_FORBID_OVERRULED, E_MALFORMED_LINT_ATTRIBUTE
from camelcase_lint.domain.entities import (
    AnalysisReport,
    DiagnosticNote,
    EmittedDiagnostic,
    ParsedSource,
    Span,
)
from camelcase_lint.domain.exceptions import LevelResolutionError, SourceLoadError
from camelcase_lint.domain.protocols import (
    DeclarationSourceProtocol,
    DiagnosticRendererProtocol,
    FileSystemProtocol,
    LintLevelResolverProtocol,
    LintRegistryProtocol,
    SourceMapProtocol,
    TelemetryPort,
)
from camelcase_lint.domain.rules import NamingRule
from camelcase_lint.use_cases.classify_identifiers import IdentifierClassifier
from camelcase_lint.use_cases.emit_diagnostic import DiagnosticEmitter
from camelcase_lint.use_cases.run_summary import RunSummary

ResolverFactory = Callable[[ParsedSource], LintLevelResolverProtocol]


class CheckNamingUseCase:
    """
    Orchestrates classifier -> rule -> resolver -> emitter -> summary.

    Files are processed in the order the filesystem returns them and
    declarations in source order, so output order is deterministic.
    A fresh AnalysisContext is created per run.
    """

    def __init__(
        self,
        filesystem: FileSystemProtocol,
        front_ends: list[DeclarationSourceProtocol],
        source_map: SourceMapProtocol,
        resolver_factory: ResolverFactory,
        rule: NamingRule,
        renderer: DiagnosticRendererProtocol,
        telemetry: TelemetryPort,
        registry: LintRegistryProtocol | None = None,
        classifier: IdentifierClassifier | None = None,
    ) -> None:
        self.filesystem = filesystem
        self.front_ends = front_ends
        self.source_map = source_map
        self.resolver_factory = resolver_factory
        self.rule = rule
        self.renderer = renderer
        self.telemetry = telemetry
        self.registry = registry
        self.classifier = classifier or IdentifierClassifier()

    def execute(
        self,
        paths: list[str],
        suffixes: tuple[str, ...] | None = None,
        exclude: list[str] | None = None,
    ) -> AnalysisReport:
        suffixes = suffixes or self.supported_suffixes()
        context = AnalysisContext()
        emitter = DiagnosticEmitter(context, self.renderer, self.registry)

        files = self.filesystem.collect_sources(paths, suffixes, exclude or [])
        self.telemetry.step(f"Checking {len(files)} file(s) for {self.rule.lint_name}")
        diagnostics: list[EmittedDiagnostic] = []
        skipped: list[str] = []
        for path in files:
            parsed = self._load(path)
            if parsed is None:
                skipped.append(path)
                continue
            diagnostics.extend(self.check_source(parsed, emitter))

        outcome = RunSummary(context).finalize()
        return AnalysisReport(
            diagnostics=diagnostics,
            outcome=outcome,
            files_checked=len(files) - len(skipped),
            skipped_files=skipped,
        )

    def supported_suffixes(self) -> tuple[str, ...]:
        return tuple(s for front_end in self.front_ends for s in front_end.suffixes)

    def check_source(
        self, parsed: ParsedSource, emitter: DiagnosticEmitter
    ) -> list[EmittedDiagnostic]:
        """Run the lint over one parsed file. Findings never abort the pass."""
        diagnostics: list[EmittedDiagnostic] = []
        for malformed in parsed.malformed_directives:
            diagnostics.append(
                emitter.emit_error(
                    "malformed lint attribute input",
                    malformed.span,
                    code=E_MALFORMED_LINT_ATTRIBUTE,
                    label="bad attribute argument",
                )
            )

        resolver = self.resolver_factory(parsed)
        conflicted_scopes = self._report_level_conflicts(parsed, resolver, emitter, diagnostics)

        for declaration in self.classifier.classify(parsed.sites):
            finding = self.rule.check(declaration)
            if finding is None or finding.conforms:
                continue
            if declaration.site.scope_id in conflicted_scopes:
                continue
            try:
                level, source = resolver.resolve(self.rule.lint_name, declaration.site.scope_id)
            except LevelResolutionError as exc:
                self.telemetry.debug(f"Skipping `{declaration.identifier.text}`: {exc}")
                continue
            diagnostic = emitter.emit(
                declaration.kind, declaration.identifier, finding, level, source
            )
            if diagnostic is not None:
                diagnostics.append(diagnostic)
        return diagnostics

    def _load(self, path: str) -> ParsedSource | None:
        front_end = next(
            (fe for fe in self.front_ends if path.endswith(fe.suffixes)), None
        )
        if front_end is None:
            self.telemetry.debug(f"No front end for {path}; skipped.")
            return None
        try:
            text = self.filesystem.read_text(path)
            parsed = front_end.parse(path, text)
        except SourceLoadError as exc:
            self.telemetry.warning(str(exc))
            return None
        self.source_map.add_file(path, text)
        return parsed

    def _report_level_conflicts(
        self,
        parsed: ParsedSource,
        resolver: LintLevelResolverProtocol,
        emitter: DiagnosticEmitter,
        diagnostics: list[EmittedDiagnostic],
    ) -> set[str]:
        """
        Resolve every scope that names this lint and report forbid conflicts once each.

        Returns the ids of scopes whose level could not be determined.
        """
        conflicted: set[str] = set()
        reported: set[Span] = set()
        lint = self.rule.lint_name
        directive_scopes = sorted(
            (
                directive
                for scope in parsed.scopes.values()
                for directive in scope.directives
                if lint in self._lints_named_by(directive.lint_name)
            ),
            key=lambda d: d.span.start,
        )
        for directive in directive_scopes:
            try:
                resolver.resolve(lint, directive.scope_id)
            except LevelResolutionError as exc:
                conflicted.add(directive.scope_id)
                if exc.directive.span in reported:
                    continue
                reported.add(exc.directive.span)
                diagnostics.append(self._conflict_diagnostic(exc, emitter))
        # Scopes nested inside a conflicted scope inherit the failure.
        for scope_id in parsed.scopes:
            chain = parsed.scope_chain(scope_id)
            if any(scope.scope_id in conflicted for scope in chain):
                conflicted.add(scope_id)
        return conflicted

    def _lints_named_by(self, name: str) -> list[str]:
        if self.registry is None:
            return [name]
        return self.registry.expand(name)

    def _conflict_diagnostic(
        self, exc: LevelResolutionError, emitter: DiagnosticEmitter
    ) -> EmittedDiagnostic:
        directive = exc.directive
        lint = exc.forbidden_by.lint_name
        if exc.forbidden_by.span is not None:
            note = DiagnosticNote("`forbid` level set here", exc.forbidden_by.span)
        else:
            note = DiagnosticNote(f"`forbid` lint level was set by {exc.forbidden_by.kind.value}")
        return emitter.emit_error(
            f"{directive.level.value}({directive.lint_name}) overruled by outer forbid({lint})",
            directive.span,
            code=E_FORBID_OVERRULED,
            label="overruled by previous forbid",
            notes=(note,),
        )
