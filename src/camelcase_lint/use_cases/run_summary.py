"""RunSummary: the single point where accumulated counts decide the run's outcome."""

from camelcase_lint.domain.analysis_context import AnalysisContext
from camelcase_lint.domain.entities import RunOutcome


class RunSummary:
    """Reads the run counters once at the end of a pass."""

    def __init__(self, context: AnalysisContext) -> None:
        self.context = context

    def finalize(self) -> RunOutcome:
        errors = self.context.counters.errors
        return RunOutcome(
            error_count=errors,
            warning_count=self.context.counters.warnings,
            summary_line=self.summary_line(errors),
            exit_code=1 if errors else 0,
        )

    @staticmethod
    def summary_line(error_count: int) -> str | None:
        if error_count <= 0:
            return None
        noun = "error" if error_count == 1 else "errors"
        return f"error: aborting due to {error_count} previous {noun}"
