"""Unit tests for NonCamelCaseTypesRule."""

import unittest

from camelcase_lint.domain.case_converter import CaseConverter, CasePolicy
from camelcase_lint.domain.entities import ClassifiedDeclaration, DeclarationKind
from camelcase_lint.domain.rules.camel_case_types import NonCamelCaseTypesRule
from tests.naming_test_utils import make_site


def _declaration(
    kind: DeclarationKind, keyword: str, text: str, attributes: tuple[str, ...] = ()
) -> ClassifiedDeclaration:
    site = make_site(keyword, text, attributes=attributes)
    return ClassifiedDeclaration(kind=kind, identifier=site.identifier, site=site)


class TestNonCamelCaseTypesRule(unittest.TestCase):
    """check() packages CaseConverter output; repr(C) items are exempt."""

    def setUp(self) -> None:
        self.rule = NonCamelCaseTypesRule()

    def test_lint_name(self) -> None:
        self.assertEqual(self.rule.lint_name, "non_camel_case_types")

    def test_non_conforming_struct(self) -> None:
        finding = self.rule.check(_declaration(DeclarationKind.STRUCT, "struct", "foo"))
        assert finding is not None
        self.assertFalse(finding.conforms)
        self.assertEqual(finding.suggestion, "Foo")
        self.assertIs(finding.kind, DeclarationKind.STRUCT)

    def test_conforming_struct(self) -> None:
        finding = self.rule.check(_declaration(DeclarationKind.STRUCT, "struct", "X86_64"))
        assert finding is not None
        self.assertTrue(finding.conforms)
        self.assertIsNone(finding.suggestion)

    def test_repr_c_struct_is_exempt(self) -> None:
        declaration = _declaration(DeclarationKind.STRUCT, "struct", "foo7", ("repr(C)",))
        self.assertIsNone(self.rule.check(declaration))

    def test_repr_c_with_other_hints_is_exempt(self) -> None:
        declaration = _declaration(DeclarationKind.ENUM, "enum", "c_enum", ("repr(u8, C)",))
        self.assertIsNone(self.rule.check(declaration))

    def test_repr_transparent_is_not_exempt(self) -> None:
        declaration = _declaration(DeclarationKind.STRUCT, "struct", "wrapper", ("repr(transparent)",))
        self.assertIsNotNone(self.rule.check(declaration))

    def test_variant_is_never_exempt(self) -> None:
        declaration = _declaration(DeclarationKind.ENUM_VARIANT, "variant", "bar", ("repr(C)",))
        finding = self.rule.check(declaration)
        assert finding is not None
        self.assertEqual(finding.suggestion, "Bar")

    def test_exemption_can_be_disabled(self) -> None:
        rule = NonCamelCaseTypesRule(exempt_repr_c=False)
        declaration = _declaration(DeclarationKind.STRUCT, "struct", "foo7", ("repr(C)",))
        self.assertIsNotNone(rule.check(declaration))

    def test_uses_injected_converter_policy(self) -> None:
        rule = NonCamelCaseTypesRule(CaseConverter(CasePolicy(preserve_acronyms=False)))
        finding = rule.check(_declaration(DeclarationKind.STRUCT, "struct", "IOError"))
        assert finding is not None
        self.assertEqual(finding.suggestion, "IoError")
