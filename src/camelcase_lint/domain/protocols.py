from typing import TYPE_CHECKING, Protocol

from camelcase_lint.domain.registry_types import LintRegistryEntry

if TYPE_CHECKING:
    from camelcase_lint.domain.entities import (
        EmittedDiagnostic,
        LevelSource,
        LintLevel,
        ParsedSource,
        RunOutcome,
    )


class DeclarationSourceProtocol(Protocol):
    """Front end: turns one source buffer into declaration sites and a scope tree."""

    suffixes: tuple[str, ...]

    def parse(self, file: str, text: str) -> "ParsedSource":
        ...


class SourceMapProtocol(Protocol):
    """Line-map service. Raises MalformedSpanError for out-of-range requests."""

    def add_file(self, file: str, text: str) -> None:
        ...

    def line_text(self, file: str, line: int) -> str:
        ...

class LintLevelResolverProtocol(Protocol):
    """Scope-aware lint level lookup."""

    def resolve(self, lint_name: str, scope_id: str) -> tuple["LintLevel", "LevelSource"]:
        ...


class DiagnosticRendererProtocol(Protocol):
    """Turns an emitted diagnostic or the final outcome into printable text."""

    def render(self, diagnostic: "EmittedDiagnostic") -> str:
        ...

    def render_summary(self, outcome: "RunOutcome") -> str | None:
        ...


class LintRegistryProtocol(Protocol):
    """Lookup of lint metadata (default level, groups, message templates)."""

    def get_entry(self, lint_name: str) -> LintRegistryEntry | None:
        ...

    def lint_names(self) -> list[str]:
        ...

    def expand(self, name: str) -> list[str]:
        """Lints a directive name refers to: the lint itself or a group's members."""
        ...


class FileSystemProtocol(Protocol):
    """Source discovery and reading."""

    def collect_sources(
        self, paths: list[str], suffixes: tuple[str, ...], exclude: list[str]
    ) -> list[str]:
        ...

    def read_text(self, path: str) -> str:
        ...


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    verbose: bool

    def handshake(self) -> None:
        ...

    def step(self, message: str) -> None:
        ...

    def warning(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def debug(self, message: str) -> None:
        ...
