"""Run-wide mutable state, owned by the driver and threaded into the emitter."""

from collections import Counter
from dataclasses import dataclass, field


@dataclass
class EmittedLevelCache:
    """Remembers which (lint, scope) pairs already showed their level note. Write-once."""

    _seen: set[tuple[str, str]] = field(default_factory=set)

    def mark_if_first(self, lint_name: str, scope_key: str) -> bool:
        """Record the pair; True only the first time it is seen."""
        key = (lint_name, scope_key)
        if key in self._seen:
            return False
        self._seen.add(key)
        return True

    def __contains__(self, key: tuple[str, str]) -> bool:
        return key in self._seen

    def __len__(self) -> int:
        return len(self._seen)


@dataclass
class RunCounters:
    """Diagnostic counts by severity label ("error", "warning"). Never decremented."""

    _counts: Counter[str] = field(default_factory=Counter)

    def increment(self, severity: str) -> None:
        self._counts[severity] += 1

    @property
    def errors(self) -> int:
        return self._counts["error"]

    @property
    def warnings(self) -> int:
        return self._counts["warning"]


@dataclass
class AnalysisContext:
    """
    Cache and counters for one analysis pass.

    Created empty at the start of a run, mutated only by DiagnosticEmitter,
    read once by RunSummary, discarded when the run ends.
    """

    level_cache: EmittedLevelCache = field(default_factory=EmittedLevelCache)
    counters: RunCounters = field(default_factory=RunCounters)
