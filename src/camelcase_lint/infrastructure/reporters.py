"""Diagnostic renderers - rustc-style text and JSON lines."""

import json

from camelcase_lint.domain.entities import DiagnosticNote, EmittedDiagnostic, RunOutcome, Span
from camelcase_lint.domain.protocols import DiagnosticRendererProtocol, SourceMapProtocol


class HumanDiagnosticRenderer(DiagnosticRendererProtocol):
    """
    Renders diagnostics the way rustc prints them.

    The gutter is as wide as the largest line number shown in the diagnostic.
    Every rendered diagnostic ends with a blank line.
    """

    def __init__(self, source_map: SourceMapProtocol) -> None:
        self.source_map = source_map

    def render(self, diagnostic: EmittedDiagnostic) -> str:
        spans = [diagnostic.span] + [n.span for n in diagnostic.notes if n.span is not None]
        width = max(len(str(span.line)) for span in spans)
        gutter = " " * (width + 1) + "|"

        header = diagnostic.severity
        if diagnostic.code:
            header += f"[{diagnostic.code}]"
        lines = [f"{header}: {diagnostic.message}"]
        lines.extend(self._excerpt(diagnostic.span, width, self._trailer(diagnostic)))

        previous_was_footnote = False
        for note in diagnostic.notes:
            if note.span is None:
                if not previous_was_footnote:
                    lines.append(gutter)
                lines.append(" " * (width + 1) + f"= note: {note.message}")
                previous_was_footnote = True
                continue
            lines.append(gutter)
            lines.append(f"note: {note.message}")
            lines.extend(self._excerpt(note.span, width, ""))
            previous_was_footnote = False
        return "\n".join(lines) + "\n"

    def render_summary(self, outcome: RunOutcome) -> str | None:
        if outcome.summary_line:
            return outcome.summary_line
        if outcome.warning_count:
            noun = "warning" if outcome.warning_count == 1 else "warnings"
            return f"warning: {outcome.warning_count} {noun} emitted"
        return None

    @staticmethod
    def _trailer(diagnostic: EmittedDiagnostic) -> str:
        parts: list[str] = []
        if diagnostic.label:
            parts.append(diagnostic.label)
        if diagnostic.help and diagnostic.suggestion:
            parts.append(f"help: {diagnostic.help}: `{diagnostic.suggestion}`")
        return " ".join(parts)

    def _excerpt(self, span: Span, width: int, trailer: str) -> list[str]:
        text = self.source_map.line_text(span.file, span.line)
        gutter = " " * (width + 1) + "|"
        source_line = f"{span.line:<{width}} |"
        if text:
            source_line += f" {text}"
        available = max(len(text) - (span.column - 1), 1)
        carets = "^" * max(min(span.length, available), 1)
        underline = f"{gutter} {' ' * (span.column - 1)}{carets}"
        if trailer:
            underline += f" {trailer}"
        return [
            " " * width + f"--> {span.location()}",
            gutter,
            source_line,
            underline,
        ]


class JsonDiagnosticRenderer(DiagnosticRendererProtocol):
    """One JSON object per diagnostic, then a summary object."""

    def render(self, diagnostic: EmittedDiagnostic) -> str:
        return json.dumps(
            {
                "severity": diagnostic.severity,
                "code": diagnostic.code,
                "lint": diagnostic.lint_name,
                "message": diagnostic.message,
                **self._location(diagnostic.span),
                "label": diagnostic.label,
                "help": diagnostic.help,
                "suggestion": diagnostic.suggestion,
                "notes": [self._note(note) for note in diagnostic.notes],
            }
        )

    def render_summary(self, outcome: RunOutcome) -> str | None:
        return json.dumps(
            {
                "summary": {
                    "errors": outcome.error_count,
                    "warnings": outcome.warning_count,
                    "exit_code": outcome.exit_code,
                    "message": outcome.summary_line,
                }
            }
        )

    @staticmethod
    def _location(span: Span) -> dict[str, object]:
        return {
            "file": span.file,
            "line": span.line,
            "column": span.column,
            "end_column": span.column + span.length,
        }

    @classmethod
    def _note(cls, note: DiagnosticNote) -> dict[str, object]:
        data: dict[str, object] = {"message": note.message}
        if note.span is not None:
            data.update(cls._location(note.span))
        return data
