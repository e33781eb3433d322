"""Configuration for the naming lint. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging

from camelcase_lint.domain.case_converter import CasePolicy
from camelcase_lint.domain.entities import LintLevel


class ConfigurationLoader:
    """
    Immutable configuration for linter settings.

    Created by Infrastructure from (config_dict, source_path). Domain does not
    read the filesystem; Infrastructure calls ConfigFileLoader.load_config_from_fs()
    and constructs ConfigurationLoader(config_dict, source_path) at composition root.

    Recognised keys of [tool.camelcase-lint]:
        levels            table of lint name -> allow|warn|deny|forbid
        preserve_acronyms keep all-caps words such as `IO` in `IOError` (default true)
        exempt_repr_c     skip `#[repr(C)]` items (default true)
        include           file suffixes to check (default [".rs", ".py"])
        exclude           path fragments to skip
    """

    DEFAULT_SUFFIXES = (".rs", ".py")

    def __init__(
        self,
        config_dict: dict[str, object],
        source_path: str | None = None,
    ) -> None:
        self._config = config_dict
        self._source_path = source_path
        self._levels: dict[str, LintLevel] = {}
        if config_dict:
            self.validate_config(config_dict)

    def validate_config(self, config: dict[str, object]) -> None:
        """Validate configuration values; bad entries are dropped with a warning."""
        raw_levels = config.get("levels", {})
        if not isinstance(raw_levels, dict):
            logging.warning("Configuration Warning: 'levels' must be a table of lint = level.")
            return
        for lint_name, raw_level in raw_levels.items():
            try:
                level = LintLevel.parse(str(raw_level))
            except ValueError:
                logging.warning(
                    "Configuration Warning: unknown level %r for lint %r; ignored.",
                    raw_level,
                    lint_name,
                )
                continue
            self._levels[self.normalize_lint_name(str(lint_name))] = level

    @staticmethod
    def normalize_lint_name(name: str) -> str:
        """Accept both `non-camel-case-types` and `non_camel_case_types`."""
        return name.strip().replace("-", "_")

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self._config

    @property
    def source_path(self) -> str | None:
        """pyproject.toml the settings came from, if any."""
        return self._source_path

    @property
    def levels(self) -> dict[str, LintLevel]:
        """Lint levels set in the config file."""
        return dict(self._levels)

    @property
    def case_policy(self) -> CasePolicy:
        return CasePolicy(preserve_acronyms=bool(self._config.get("preserve_acronyms", True)))

    @property
    def exempt_repr_c(self) -> bool:
        return bool(self._config.get("exempt_repr_c", True))

    @property
    def include_suffixes(self) -> tuple[str, ...]:
        raw = self._config.get("include", [])
        if isinstance(raw, list) and raw:
            return tuple(str(x) for x in raw if isinstance(x, str))
        return self.DEFAULT_SUFFIXES

    @property
    def exclude_paths(self) -> list[str]:
        """Path fragments to exclude from the check run."""
        raw = self._config.get("exclude", [])
        if isinstance(raw, list):
            return [str(x) for x in raw if isinstance(x, str)]
        return []
