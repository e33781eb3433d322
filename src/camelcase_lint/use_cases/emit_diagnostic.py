"""DiagnosticEmitter: the only place run state (note cache, counters) is mutated."""

from dataclasses import replace

from camelcase_lint.domain.analysis_context import AnalysisContext
from camelcase_lint.domain.entities import (
    CaseFinding,
    DeclarationKind,
    DiagnosticNote,
    EmittedDiagnostic,
    Identifier,
    LevelSource,
    LevelSourceKind,
    LintLevel,
    Span,
)
from camelcase_lint.domain.protocols import DiagnosticRendererProtocol, LintRegistryProtocol


class DiagnosticEmitter:
    """
    Turns findings into rendered diagnostics.

    Every call that returns a diagnostic increments the run counters, so the
    caller must invoke `emit` at most once per declaration.
    """

    DEFAULT_MESSAGE = "{noun} `{name}` should have a camel case name"
    DEFAULT_HELP = "convert the identifier to camel case"

    def __init__(
        self,
        context: AnalysisContext,
        renderer: DiagnosticRendererProtocol,
        registry: LintRegistryProtocol | None = None,
    ) -> None:
        self.context = context
        self.renderer = renderer
        self.registry = registry

    def emit(
        self,
        kind: DeclarationKind,
        identifier: Identifier,
        finding: CaseFinding,
        level: LintLevel,
        level_source: LevelSource,
    ) -> EmittedDiagnostic | None:
        if level is LintLevel.ALLOW:
            return None
        message_template, help_text = self._templates(level_source.lint_name)
        diagnostic = EmittedDiagnostic(
            severity=level.severity_label,
            message=message_template.format(noun=kind.noun, name=identifier.text),
            span=identifier.span,
            lint_name=level_source.lint_name,
            help=help_text if finding.has_suggestion else None,
            suggestion=finding.suggestion,
            notes=self._level_notes(level_source),
        )
        return self._finish(diagnostic)

    def emit_error(
        self,
        message: str,
        span: Span,
        code: str | None = None,
        label: str | None = None,
        notes: tuple[DiagnosticNote, ...] = (),
    ) -> EmittedDiagnostic:
        """Hard error that is not a lint finding (malformed attribute, forbid conflict)."""
        diagnostic = EmittedDiagnostic(
            severity="error",
            message=message,
            span=span,
            code=code,
            label=label,
            notes=notes,
        )
        return self._finish(diagnostic)

    def _finish(self, diagnostic: EmittedDiagnostic) -> EmittedDiagnostic:
        rendered = replace(diagnostic, rendered=self.renderer.render(diagnostic))
        self.context.counters.increment(rendered.severity)
        return rendered

    def _templates(self, lint_name: str) -> tuple[str, str]:
        entry = self.registry.get_entry(lint_name) if self.registry else None
        if not entry:
            return (self.DEFAULT_MESSAGE, self.DEFAULT_HELP)
        return (
            entry.get("message_template") or self.DEFAULT_MESSAGE,
            entry.get("help_template") or self.DEFAULT_HELP,
        )

    def _level_notes(self, source: LevelSource) -> tuple[DiagnosticNote, ...]:
        """Explain where the level came from, once per (lint, scope)."""
        if not self.context.level_cache.mark_if_first(source.lint_name, source.cache_scope):
            return ()
        if source.kind is LevelSourceKind.DIRECTIVE:
            return (DiagnosticNote("lint level defined here", source.span),)
        if source.kind is LevelSourceKind.COMMAND_LINE:
            flag_name = source.lint_name.replace("_", "-")
            return (
                DiagnosticNote(
                    f"requested on the command line with `{source.level.flag} {flag_name}`"
                ),
            )
        if source.kind is LevelSourceKind.CONFIG:
            return (
                DiagnosticNote(
                    f"`{source.lint_name} = \"{source.level.value}\"` set in "
                    "[tool.camelcase-lint] levels"
                ),
            )
        return (DiagnosticNote(f"`#[{source.level.value}({source.lint_name})]` on by default"),)
