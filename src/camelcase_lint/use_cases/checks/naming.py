"""Naming convention checks (C9301) for pylint."""

from typing import TYPE_CHECKING

import astroid  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from pylint.lint import PyLinter
from pylint.checkers import BaseChecker

from camelcase_lint.domain.constants import NON_CAMEL_CASE_TYPES, ROOT_SCOPE
from camelcase_lint.domain.rules import NamingRule
from camelcase_lint.domain.rules.camel_case_types import NonCamelCaseTypesRule
from camelcase_lint.infrastructure.gateways.astroid_gateway import AstroidGateway
from camelcase_lint.infrastructure.gateways.source_map import SourceFile
from camelcase_lint.infrastructure.services.lint_registry import LintRegistryService
from camelcase_lint.use_cases.classify_identifiers import IdentifierClassifier


class NamingConventionChecker(BaseChecker):
    """
    C9301: classes, type aliases and type parameters should be camel case.
    Thin: delegates to NonCamelCaseTypesRule. Levels are left to pylint's
    own enable/disable handling.
    """

    name: str = "camelcase-lint"

    def __init__(
        self,
        linter: "PyLinter",
        registry: LintRegistryService | None = None,
        rule: NamingRule | None = None,
    ) -> None:
        self.registry = registry or LintRegistryService()
        self.msgs = self.registry.build_pylint_msgs()
        super().__init__(linter)
        self.rule = rule or NonCamelCaseTypesRule()
        self.gateway = AstroidGateway()
        self.classifier = IdentifierClassifier()
        entry = self.registry.get_entry(NON_CAMEL_CASE_TYPES) or {}
        self.msgid = str(entry.get("pylint_msgid", "C9301"))
        self.help_text = entry.get("help_template", "convert the identifier to camel case")

    def visit_module(self, node: astroid.nodes.Module) -> None:
        text = self._module_text(node)
        if text is None:
            return
        file = node.file or node.name
        source = SourceFile(file, text)
        sites = list(self.gateway.iter_declaration_sites(node, source, f"{file}::{ROOT_SCOPE}"))
        for declaration in self.classifier.classify(sites):
            finding = self.rule.check(declaration)
            if finding is None or finding.conforms:
                continue
            span = declaration.identifier.span
            suffix = f" ({self.help_text}: `{finding.suggestion}`)" if finding.suggestion else ""
            self.add_message(
                self.msgid,
                node=node,
                line=span.line,
                col_offset=span.column - 1,
                end_lineno=span.line,
                end_col_offset=span.column - 1 + span.length,
                args=(declaration.kind.noun, declaration.identifier.text, suffix),
            )

    @staticmethod
    def _module_text(node: astroid.nodes.Module) -> str | None:
        stream = node.stream()
        if stream is None:
            return None
        with stream:
            data = stream.read()
        if isinstance(data, bytes):
            return data.decode(node.file_encoding or "utf-8")
        return data
