"""Unit tests for CheckNamingUseCase over in-memory sources."""

from unittest.mock import MagicMock

import pytest

from camelcase_lint.domain.entities import AnalysisReport, LintLevel
from camelcase_lint.domain.exceptions import SourceLoadError
from camelcase_lint.domain.rules.camel_case_types import NonCamelCaseTypesRule
from camelcase_lint.infrastructure.gateways.astroid_gateway import AstroidGateway
from camelcase_lint.infrastructure.gateways.rust_source_gateway import RustSourceGateway
from camelcase_lint.infrastructure.gateways.source_map import SourceMap
from camelcase_lint.infrastructure.reporters import HumanDiagnosticRenderer
from camelcase_lint.infrastructure.services.lint_level_resolver import LintLevelResolverFactory
from camelcase_lint.infrastructure.services.lint_registry import LintRegistryService
from camelcase_lint.use_cases.check_naming import CheckNamingUseCase


def _run(
    files: dict[str, str],
    telemetry: MagicMock | None = None,
    command_line_levels: list[tuple[LintLevel, str]] | None = None,
) -> AnalysisReport:
    filesystem = MagicMock()
    filesystem.collect_sources.return_value = list(files)

    def read_text(path: str) -> str:
        text = files[path]
        if text is None:
            raise SourceLoadError(path, "permission denied")
        return text

    filesystem.read_text.side_effect = read_text
    registry = LintRegistryService()
    source_map = SourceMap()
    use_case = CheckNamingUseCase(
        filesystem=filesystem,
        front_ends=[RustSourceGateway(), AstroidGateway()],
        source_map=source_map,
        resolver_factory=LintLevelResolverFactory(registry, {}, command_line_levels).for_source,
        rule=NonCamelCaseTypesRule(),
        renderer=HumanDiagnosticRenderer(source_map),
        telemetry=telemetry or MagicMock(),
        registry=registry,
    )
    return use_case.execute(["."])


class TestGoldenScenario:
    def test_eleven_errors_in_source_order(self, golden_source: str) -> None:
        report = _run({"lint.rs": golden_source})
        names = [d.message.split("`")[1] for d in report.diagnostics]
        assert names == [
            "ONE_TWO_THREE", "foo", "foo2", "foo3", "foo4", "bar",
            "foo6", "ty", "X86__64", "Abc_123", "A1_b2_c3",
        ]
        assert report.outcome.error_count == 11
        assert report.outcome.exit_code == 1
        assert report.outcome.summary_line == "error: aborting due to 11 previous errors"

    def test_level_note_only_on_first(self, golden_source: str) -> None:
        report = _run({"lint.rs": golden_source})
        assert [len(d.notes) for d in report.diagnostics] == [1] + [0] * 10
        note = report.diagnostics[0].notes[0]
        assert note.message == "lint level defined here"
        assert note.span is not None
        assert (note.span.line, note.span.column) == (1, 11)

    def test_repr_c_struct_and_conforming_names_are_silent(self, golden_source: str) -> None:
        report = _run({"lint.rs": golden_source})
        messages = " ".join(d.message for d in report.diagnostics)
        assert "foo7" not in messages
        assert "`X86_64`" not in messages
        assert "Foo5" not in messages
        assert "`main`" not in messages


class TestLevels:
    def test_default_level_is_warn(self) -> None:
        report = _run({"lint.rs": "struct foo;\n"})
        assert [d.severity for d in report.diagnostics] == ["warning"]
        assert report.outcome.exit_code == 0

    def test_group_allow_silences_lint(self) -> None:
        report = _run({"lint.rs": "#![allow(nonstandard_style)]\nstruct foo;\n"})
        assert report.diagnostics == []
        assert report.outcome.exit_code == 0

    def test_item_level_allow_under_crate_deny(self) -> None:
        source = (
            "#![deny(non_camel_case_types)]\n"
            "#[allow(non_camel_case_types)]\n"
            "struct foo;\n"
            "struct bar;\n"
        )
        report = _run({"lint.rs": source})
        assert [d.message for d in report.diagnostics] == ["type `bar` should have a camel case name"]

    def test_command_line_deny(self) -> None:
        report = _run(
            {"lint.rs": "struct foo;\n"},
            command_line_levels=[(LintLevel.DENY, "non_camel_case_types")],
        )
        assert report.diagnostics[0].severity == "error"
        assert report.outcome.exit_code == 1


class TestLevelNotes:
    DENIED = "#![deny(non_camel_case_types)]\nstruct foo;\nstruct bar;\n"

    def test_note_once_per_file(self) -> None:
        report = _run({"a.rs": self.DENIED, "b.rs": self.DENIED})
        assert [(d.span.file, len(d.notes)) for d in report.diagnostics] == [
            ("a.rs", 1), ("a.rs", 0), ("b.rs", 1), ("b.rs", 0),
        ]
        assert [d.notes[0].span.file for d in report.diagnostics if d.notes] == ["a.rs", "b.rs"]

    def test_note_not_repeated_within_file(self) -> None:
        source = self.DENIED + "enum baz { Qux }\ntrait quux {}\n"
        report = _run({"lint.rs": source})
        assert [len(d.notes) for d in report.diagnostics] == [1, 0, 0, 0]


class TestHardErrors:
    def test_malformed_attribute_reported_and_run_fails(self) -> None:
        report = _run({"lint.rs": "#![deny]\nstruct foo;\n"})
        first, second = report.diagnostics
        assert first.code == "E0452"
        assert first.message == "malformed lint attribute input"
        assert first.label == "bad attribute argument"
        assert second.severity == "warning"
        assert report.outcome.error_count == 1
        assert report.outcome.exit_code == 1

    def test_forbid_conflict_reported_once_and_item_skipped(self) -> None:
        source = (
            "#![forbid(non_camel_case_types)]\n"
            "#[allow(non_camel_case_types)]\n"
            "struct foo;\n"
            "struct bar;\n"
        )
        report = _run({"lint.rs": source})
        conflict, finding = report.diagnostics
        assert conflict.code == "E0453"
        assert conflict.message == (
            "allow(non_camel_case_types) overruled by outer forbid(non_camel_case_types)"
        )
        assert conflict.label == "overruled by previous forbid"
        assert conflict.notes[0].message == "`forbid` level set here"
        assert conflict.span.line == 2
        assert finding.message == "type `bar` should have a camel case name"
        assert report.outcome.error_count == 2


class TestFiles:
    def test_unreadable_file_is_skipped_with_warning(self) -> None:
        telemetry = MagicMock()
        report = _run({"broken.rs": None, "ok.rs": "struct Fine;\n"}, telemetry=telemetry)  # type: ignore[dict-item]
        assert report.skipped_files == ["broken.rs"]
        assert report.files_checked == 1
        telemetry.warning.assert_called_once()

    def test_file_without_front_end_is_skipped(self) -> None:
        report = _run({"notes.txt": "struct foo;\n"})
        assert report.skipped_files == ["notes.txt"]
        assert report.diagnostics == []

    def test_python_sources_use_astroid_front_end(self) -> None:
        report = _run({"shapes.py": "class my_shape:\n    pass\n"})
        (diagnostic,) = report.diagnostics
        assert diagnostic.message == "type `my_shape` should have a camel case name"
        assert diagnostic.suggestion == "MyShape"
        assert (diagnostic.span.line, diagnostic.span.column) == (1, 7)

    def test_python_syntax_error_is_skipped(self) -> None:
        telemetry = MagicMock()
        report = _run({"bad.py": "class (:\n"}, telemetry=telemetry)
        assert report.skipped_files == ["bad.py"]
        telemetry.warning.assert_called_once()


@pytest.mark.parametrize("flag_name", ["non-camel-case-types", "nonstandard_style"])
def test_command_line_names_accept_dashes_and_groups(flag_name: str) -> None:
    report = _run(
        {"lint.rs": "struct foo;\n"},
        command_line_levels=[(LintLevel.ALLOW, flag_name)],
    )
    assert report.diagnostics == []
