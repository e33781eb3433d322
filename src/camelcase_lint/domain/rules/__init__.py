"""Domain models for naming rules."""

from typing import Protocol

from camelcase_lint.domain.entities import CaseFinding, ClassifiedDeclaration

__all__ = ["NamingRule"]


class NamingRule(Protocol):
    """Checks one classified declaration against a naming convention."""

    lint_name: str
    description: str

    def check(self, declaration: ClassifiedDeclaration) -> CaseFinding | None:
        """Return a finding (conforming or not), or None when the declaration is exempt."""
        ...
