"""Unit tests for domain entities."""

import unittest

from camelcase_lint.domain.entities import (
    CaseFinding,
    DeclarationKind,
    Identifier,
    LevelSource,
    LevelSourceKind,
    LintLevel,
    ParsedSource,
    RunOutcome,
    Scope,
)
from tests.naming_test_utils import directive_source, make_span


class TestDeclarationKind(unittest.TestCase):
    """Each kind carries the noun used in messages."""

    def test_nouns(self) -> None:
        self.assertEqual(DeclarationKind.STRUCT.noun, "type")
        self.assertEqual(DeclarationKind.ENUM.noun, "type")
        self.assertEqual(DeclarationKind.TYPE_ALIAS.noun, "type")
        self.assertEqual(DeclarationKind.ENUM_VARIANT.noun, "variant")
        self.assertEqual(DeclarationKind.TRAIT.noun, "trait")
        self.assertEqual(DeclarationKind.TYPE_PARAMETER.noun, "type parameter")

    def test_tags_are_unique(self) -> None:
        tags = [kind.tag for kind in DeclarationKind]
        self.assertEqual(len(tags), len(set(tags)))


class TestLintLevel(unittest.TestCase):
    """Severity labels and parsing."""

    def test_severity_labels(self) -> None:
        self.assertEqual(LintLevel.WARN.severity_label, "warning")
        self.assertEqual(LintLevel.DENY.severity_label, "error")
        self.assertEqual(LintLevel.FORBID.severity_label, "error")

    def test_is_error(self) -> None:
        self.assertFalse(LintLevel.ALLOW.is_error)
        self.assertFalse(LintLevel.WARN.is_error)
        self.assertTrue(LintLevel.DENY.is_error)
        self.assertTrue(LintLevel.FORBID.is_error)

    def test_flag(self) -> None:
        self.assertEqual(LintLevel.DENY.flag, "-D")
        self.assertEqual(LintLevel.FORBID.flag, "-F")

    def test_parse_is_case_insensitive(self) -> None:
        self.assertIs(LintLevel.parse(" Deny "), LintLevel.DENY)

    def test_parse_rejects_unknown(self) -> None:
        with self.assertRaises(ValueError):
            LintLevel.parse("loud")


class TestCaseFinding(unittest.TestCase):
    """Suggestion is non-empty text or absent."""

    def test_empty_suggestion_rejected(self) -> None:
        identifier = Identifier("foo", make_span())
        with self.assertRaises(ValueError):
            CaseFinding(DeclarationKind.STRUCT, identifier, "", conforms=False)

    def test_has_suggestion(self) -> None:
        identifier = Identifier("foo", make_span())
        self.assertTrue(CaseFinding(DeclarationKind.STRUCT, identifier, "Foo", False).has_suggestion)
        self.assertFalse(CaseFinding(DeclarationKind.STRUCT, identifier, None, False).has_suggestion)


class TestLevelSource(unittest.TestCase):
    """cache_scope keys the lint-level note."""

    def test_directive_cache_scope_is_owning_scope(self) -> None:
        source = directive_source(scope_id="lint.rs::mod@40")
        self.assertTrue(source.is_explicit)
        self.assertEqual(source.cache_scope, "lint.rs::mod@40")

    def test_non_directive_cache_scope_is_kind(self) -> None:
        source = LevelSource(LevelSourceKind.COMMAND_LINE, "non_camel_case_types", LintLevel.DENY)
        self.assertFalse(source.is_explicit)
        self.assertEqual(source.cache_scope, "<command-line>")

    def test_default(self) -> None:
        source = LevelSource.default("non_camel_case_types", LintLevel.WARN)
        self.assertIs(source.kind, LevelSourceKind.DEFAULT)
        self.assertIsNone(source.span)


class TestParsedSource(unittest.TestCase):
    """scope_chain walks from a scope to the root."""

    def test_scope_chain(self) -> None:
        parsed = ParsedSource(file="lint.rs")
        parsed.add_scope(Scope("lint.rs::crate", None))
        parsed.add_scope(Scope("lint.rs::mod@10", "lint.rs::crate"))
        parsed.add_scope(Scope("lint.rs::struct@20", "lint.rs::mod@10"))
        chain = [scope.scope_id for scope in parsed.scope_chain("lint.rs::struct@20")]
        self.assertEqual(chain, ["lint.rs::struct@20", "lint.rs::mod@10", "lint.rs::crate"])


class TestRunOutcome(unittest.TestCase):
    def test_succeeded(self) -> None:
        self.assertTrue(RunOutcome(0, 2, None, 0).succeeded)
        self.assertFalse(RunOutcome(1, 0, "error: aborting due to 1 previous error", 1).succeeded)

    def test_span_location(self) -> None:
        span = make_span(line=4, column=8, length=13)
        self.assertEqual(span.location(), "lint.rs:4:8")
        self.assertEqual(span.length, 13)
