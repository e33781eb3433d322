"""Domain errors. Findings are not errors; these are the ways a pass can go wrong."""

from camelcase_lint.domain.entities import LevelSource, LintDirective, Span


class NamingLintError(Exception):
    """Base class for camelcase-lint errors."""


class LevelResolutionError(NamingLintError):
    """
    A nested directive tried to lower a lint that an outer scope forbids.

    Carries both ends of the conflict so the driver can point at them.
    """

    def __init__(self, directive: LintDirective, forbidden_by: LevelSource) -> None:
        self.directive = directive
        self.forbidden_by = forbidden_by
        super().__init__(
            f"{directive.level.value}({directive.lint_name}) incompatible with "
            f"previous forbid in the same scope or an outer one"
        )


class MalformedSpanError(NamingLintError):
    """A span points outside the known source buffer. Collaborator contract breach."""

    def __init__(self, file: str, detail: str, span: Span | None = None) -> None:
        self.file = file
        self.span = span
        super().__init__(f"malformed span in {file}: {detail}")


class SourceLoadError(NamingLintError):
    """An input file could not be read or parsed by its front end."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"could not load {path}: {reason}")
