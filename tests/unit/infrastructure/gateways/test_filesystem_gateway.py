"""Unit tests for FileSystemGateway."""

from pathlib import Path

import pytest

from camelcase_lint.domain.exceptions import SourceLoadError
from camelcase_lint.infrastructure.gateways.filesystem_gateway import FileSystemGateway


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "b.rs").write_text("struct B;\n", encoding="utf-8")
    (tmp_path / "src" / "a.py").write_text("class A: ...\n", encoding="utf-8")
    (tmp_path / "src" / "notes.md").write_text("# notes\n", encoding="utf-8")
    (tmp_path / "target").mkdir()
    (tmp_path / "target" / "gen.rs").write_text("struct gen;\n", encoding="utf-8")
    return tmp_path


def test_directories_are_walked_in_sorted_order(tree: Path) -> None:
    found = FileSystemGateway().collect_sources([str(tree)], (".rs", ".py"), [])
    assert found == [
        str(tree / "src" / "a.py"),
        str(tree / "src" / "b.rs"),
        str(tree / "target" / "gen.rs"),
    ]


def test_exclude_fragments(tree: Path) -> None:
    found = FileSystemGateway().collect_sources([str(tree)], (".rs",), ["target"])
    assert found == [str(tree / "src" / "b.rs")]


def test_explicit_file_kept_whatever_suffix(tree: Path) -> None:
    notes = str(tree / "src" / "notes.md")
    assert FileSystemGateway().collect_sources([notes], (".rs",), []) == [notes]


def test_duplicates_dropped(tree: Path) -> None:
    path = str(tree / "src" / "b.rs")
    assert FileSystemGateway().collect_sources([path, path], (".rs",), []) == [path]


def test_read_text(tree: Path) -> None:
    assert FileSystemGateway().read_text(str(tree / "src" / "b.rs")) == "struct B;\n"


def test_read_missing_file_raises(tree: Path) -> None:
    with pytest.raises(SourceLoadError) as exc_info:
        FileSystemGateway().read_text(str(tree / "missing.rs"))
    assert exc_info.value.path.endswith("missing.rs")
