"""LintRegistryService: loads the lint registry and answers lint and group lookups."""

from pathlib import Path
from typing import cast

import yaml

from camelcase_lint.domain.protocols import LintRegistryProtocol
from camelcase_lint.domain.registry_types import LintRegistryEntry


class LintRegistryService(LintRegistryProtocol):
    """Loads lint_registry.yaml and provides entries, group expansion and pylint messages."""

    def __init__(self, registry_path: str | None = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent
            self._path = _base / "resources" / "lint_registry.yaml"
        self._registry: dict[str, LintRegistryEntry] = {}
        self._load()

    def _load(self) -> None:
        if self._path.exists():
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
                self._registry = (
                    cast(dict[str, LintRegistryEntry], data) if isinstance(data, dict) else {}
                )
        else:
            self._registry = {}

    def get_entry(self, lint_name: str) -> LintRegistryEntry | None:
        """Entry by snake_case name, dashed name, or pylint symbol."""
        name = lint_name.strip().replace("-", "_")
        entry = self._registry.get(name)
        if entry:
            return cast(LintRegistryEntry, dict(entry))
        for e in self._registry.values():
            if e.get("pylint_symbol") == lint_name:
                return cast(LintRegistryEntry, dict(e))
        return None

    def lint_names(self) -> list[str]:
        return sorted(self._registry)

    def expand(self, name: str) -> list[str]:
        """The lint itself, every member of a group, or an empty list for unknown names."""
        name = name.strip().replace("-", "_")
        if name in self._registry:
            return [name]
        return sorted(
            lint for lint, entry in self._registry.items() if name in entry.get("groups", [])
        )

    def get_message_tuple(self, lint_name: str) -> tuple[str, str, str] | None:
        """(pylint message template, symbol, description) for a lint, if it declares a pylint msgid."""
        entry = self.get_entry(lint_name)
        if not entry or not entry.get("pylint_msgid"):
            return None
        template = entry.get("message_template", "").replace("{noun}", "%s").replace(
            "{name}", "%s"
        )
        symbol = entry.get("pylint_symbol") or lint_name.replace("_", "-")
        description = entry.get("short_description", "")
        # Trailing slot carries the optional help fragment.
        return (f"{template}%s", symbol, description)

    def build_pylint_msgs(self) -> dict[str, tuple[str, str, str]]:
        """Build Pylint msgs dict {msgid: (template, symbol, description)} for every lint."""
        result: dict[str, tuple[str, str, str]] = {}
        for lint_name in self.lint_names():
            entry = self._registry[lint_name]
            message = self.get_message_tuple(lint_name)
            if message is not None:
                result[str(entry["pylint_msgid"])] = message
        return result
