"""Scope-aware lint level resolution."""

import logging

from camelcase_lint.domain.entities import (
    LevelSource,
    LevelSourceKind,
    LintLevel,
    ParsedSource,
)
from camelcase_lint.domain.exceptions import LevelResolutionError
from camelcase_lint.domain.protocols import LintLevelResolverProtocol, LintRegistryProtocol


class LintLevelResolverFactory:
    """
    Holds the levels that apply before any source directive is read.

    Precedence, lowest first: registry default, config file, command line
    (later flags win). Source directives then override these per scope,
    except that a forbid from any layer cannot be lowered.
    """

    def __init__(
        self,
        registry: LintRegistryProtocol | None = None,
        config_levels: dict[str, LintLevel] | None = None,
        command_line_levels: list[tuple[LintLevel, str]] | None = None,
    ) -> None:
        self.registry = registry
        self.config_levels = dict(config_levels or {})
        self.command_line_levels = list(command_line_levels or [])

    def expand(self, name: str) -> list[str]:
        name = name.strip().replace("-", "_")
        if self.registry is None:
            return [name]
        return self.registry.expand(name)

    def base_source(self, lint_name: str) -> LevelSource:
        entry = self.registry.get_entry(lint_name) if self.registry else None
        default_level = LintLevel.parse((entry or {}).get("default_level", "warn"))
        source = LevelSource.default(lint_name, default_level)
        for name, level in self.config_levels.items():
            if lint_name in self.expand(name):
                source = LevelSource(LevelSourceKind.CONFIG, lint_name, level)
        for level, name in self.command_line_levels:
            if lint_name in self.expand(name):
                source = LevelSource(LevelSourceKind.COMMAND_LINE, lint_name, level)
        return source

    def for_source(self, parsed: ParsedSource) -> "ScopedLintLevelResolver":
        return ScopedLintLevelResolver(parsed, self)


class ScopedLintLevelResolver(LintLevelResolverProtocol):
    """Resolves levels over one file's scope tree. Results are memoised per (lint, scope)."""

    def __init__(self, parsed: ParsedSource, factory: LintLevelResolverFactory) -> None:
        self.parsed = parsed
        self.factory = factory
        self._memo: dict[tuple[str, str], tuple[LintLevel, LevelSource] | LevelResolutionError] = {}

    def resolve(self, lint_name: str, scope_id: str) -> tuple[LintLevel, LevelSource]:
        key = (lint_name, scope_id)
        if key not in self._memo:
            try:
                self._memo[key] = self._walk(lint_name, scope_id)
            except LevelResolutionError as exc:
                self._memo[key] = exc
        result = self._memo[key]
        if isinstance(result, LevelResolutionError):
            raise result
        return result

    def _walk(self, lint_name: str, scope_id: str) -> tuple[LintLevel, LevelSource]:
        source = self.factory.base_source(lint_name)
        forbidden_by = source if source.level is LintLevel.FORBID else None
        for scope in reversed(self.parsed.scope_chain(scope_id)):
            for directive in scope.directives:
                if lint_name not in self.factory.expand(directive.lint_name):
                    continue
                if forbidden_by is not None and directive.level is not LintLevel.FORBID:
                    raise LevelResolutionError(directive, forbidden_by)
                source = LevelSource(
                    LevelSourceKind.DIRECTIVE,
                    lint_name,
                    directive.level,
                    span=directive.span,
                    scope_id=scope.scope_id,
                )
                if directive.level is LintLevel.FORBID and forbidden_by is None:
                    forbidden_by = source
        logging.debug(
            "%s in %s resolved to %s (%s)", lint_name, scope_id, source.level.value, source.kind.value
        )
        return (source.level, source)
