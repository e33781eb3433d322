from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Span:
    """A byte range in a source file plus its resolved 1-based line and column."""
    file: str
    start: int
    end: int
    line: int
    column: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def location(self) -> str:
        """path:line:column as printed after the `-->` arrow."""
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Identifier:
    """Raw identifier text and where it was declared. Never mutated."""
    text: str
    span: Span


class DeclarationKind(Enum):
    """Closed set of nameable declarations. Each member carries its diagnostic noun."""
    STRUCT = ("struct", "type")
    ENUM = ("enum", "type")
    ENUM_VARIANT = ("variant", "variant")
    TRAIT = ("trait", "trait")
    TYPE_ALIAS = ("type_alias", "type")
    TYPE_PARAMETER = ("type_parameter", "type parameter")

    def __init__(self, tag: str, noun: str) -> None:
        self.tag = tag
        self.noun = noun


@dataclass(frozen=True)
class CaseFinding:
    """Result of checking one identifier against the camel-case convention."""
    kind: DeclarationKind
    identifier: Identifier
    suggestion: str | None
    conforms: bool

    def __post_init__(self) -> None:
        if self.suggestion == "":
            raise ValueError("suggestion must be non-empty text or None")

    @property
    def has_suggestion(self) -> bool:
        return self.suggestion is not None


class LintLevel(Enum):
    """Severity a lint runs at in a given scope."""
    ALLOW = "allow"
    WARN = "warn"
    DENY = "deny"
    FORBID = "forbid"

    @property
    def severity_label(self) -> str:
        """Word printed at the start of the diagnostic."""
        if self is LintLevel.WARN:
            return "warning"
        return "error"

    @property
    def is_error(self) -> bool:
        return self in (LintLevel.DENY, LintLevel.FORBID)

    @property
    def flag(self) -> str:
        """Command-line flag that sets this level (-A, -W, -D, -F)."""
        return "-" + self.value[0].upper()

    @classmethod
    def parse(cls, value: str) -> "LintLevel":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"unknown lint level: {value!r}") from None


class LevelSourceKind(Enum):
    """Where a lint level came from."""
    DEFAULT = "default"
    CONFIG = "config"
    COMMAND_LINE = "command-line"
    DIRECTIVE = "directive"


@dataclass(frozen=True)
class LevelSource:
    """
    Provenance of a resolved lint level.

    For DIRECTIVE sources, `span` points at the lint name inside the
    attribute and `scope_id` names the scope that owns the directive.
    """
    kind: LevelSourceKind
    lint_name: str
    level: LintLevel
    span: Span | None = None
    scope_id: str | None = None

    @property
    def is_explicit(self) -> bool:
        return self.kind is LevelSourceKind.DIRECTIVE

    @property
    def cache_scope(self) -> str:
        """Key under which the 'lint level defined here' note is remembered."""
        if self.scope_id is not None:
            return self.scope_id
        return f"<{self.kind.value}>"

    @classmethod
    def default(cls, lint_name: str, level: LintLevel) -> "LevelSource":
        return cls(kind=LevelSourceKind.DEFAULT, lint_name=lint_name, level=level)


@dataclass(frozen=True)
class LintDirective:
    """One lint named in a level attribute, e.g. `non_camel_case_types` in `#![forbid(...)]`."""
    level: LintLevel
    lint_name: str
    span: Span
    scope_id: str


@dataclass(frozen=True)
class MalformedDirective:
    """A level attribute without a usable lint list, e.g. `#![deny]`."""
    level_text: str
    span: Span


@dataclass
class Scope:
    """A lexical lint-configuration region with its directives in source order."""
    scope_id: str
    parent_id: str | None
    directives: list[LintDirective] = field(default_factory=list)

    def add_directive(self, directive: LintDirective) -> None:
        self.directives.append(directive)


@dataclass(frozen=True)
class DeclarationSite:
    """
    A declaration header surfaced by a front end.

    `keyword` is the item keyword as written (`struct`, `enum`, `variant`,
    `type_param`, `fn`, ...); the classifier decides which ones are checked.
    `attributes` holds non-lint attribute texts such as `repr(C)`.
    """
    keyword: str
    identifier: Identifier
    scope_id: str
    attributes: tuple[str, ...] = ()


@dataclass(frozen=True)
class ClassifiedDeclaration:
    """A declaration site projected onto its DeclarationKind."""
    kind: DeclarationKind
    identifier: Identifier
    site: DeclarationSite


@dataclass(frozen=True)
class DiagnosticNote:
    """A `note:` block with its own source excerpt, or a `= note:` footnote when span is None."""
    message: str
    span: Span | None = None


@dataclass(frozen=True)
class EmittedDiagnostic:
    """A finding after severity filtering, ready for display."""
    severity: str
    message: str
    span: Span
    lint_name: str | None = None
    code: str | None = None
    label: str | None = None
    help: str | None = None
    suggestion: str | None = None
    notes: tuple[DiagnosticNote, ...] = ()
    rendered: str = ""

    @property
    def is_error(self) -> bool:
        return self.severity == "error"


@dataclass(frozen=True)
class RunOutcome:
    """What RunSummary hands back to the driver."""
    error_count: int
    warning_count: int
    summary_line: str | None
    exit_code: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class AnalysisReport:
    """Everything a check run produced, in emission order."""
    diagnostics: list[EmittedDiagnostic]
    outcome: RunOutcome
    files_checked: int = 0
    skipped_files: list[str] = field(default_factory=list)


@dataclass
class ParsedSource:
    """What a front end extracts from one file: sites in source order plus the scope tree."""
    file: str
    sites: list[DeclarationSite] = field(default_factory=list)
    scopes: dict[str, Scope] = field(default_factory=dict)
    malformed_directives: list[MalformedDirective] = field(default_factory=list)

    def add_scope(self, scope: Scope) -> Scope:
        self.scopes[scope.scope_id] = scope
        return scope

    def scope_chain(self, scope_id: str) -> list[Scope]:
        """Scopes from `scope_id` outward to the root."""
        chain: list[Scope] = []
        current: str | None = scope_id
        while current is not None:
            scope = self.scopes[current]
            chain.append(scope)
            current = scope.parent_id
        return chain
