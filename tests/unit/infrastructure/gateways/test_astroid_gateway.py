"""Unit tests for AstroidGateway (Python front end)."""

import unittest

from camelcase_lint.domain.exceptions import SourceLoadError
from camelcase_lint.infrastructure.gateways.astroid_gateway import AstroidGateway


class TestAstroidGateway(unittest.TestCase):
    def setUp(self) -> None:
        self.gateway = AstroidGateway()

    def _sites(self, code: str) -> list[tuple[str, str]]:
        parsed = self.gateway.parse("shapes.py", code)
        return [(s.keyword, s.identifier.text) for s in parsed.sites]

    def test_root_scope_only(self) -> None:
        parsed = self.gateway.parse("shapes.py", "class A: ...\n")
        self.assertEqual(list(parsed.scopes), ["shapes.py::crate"])
        self.assertEqual(parsed.sites[0].scope_id, "shapes.py::crate")

    def test_class_kinds(self) -> None:
        code = (
            "import enum\n"
            "from typing import Protocol\n"
            "class plain: ...\n"
            "class drawable(Protocol): ...\n"
            "class colour(enum.IntEnum):\n"
            "    dark_red = 1\n"
        )
        self.assertEqual(
            self._sites(code),
            [("struct", "plain"), ("trait", "drawable"), ("enum", "colour")],
        )

    def test_nested_and_decorated_classes(self) -> None:
        code = "@dataclass\nclass outer:\n    class inner_t:\n        pass\n"
        parsed = self.gateway.parse("shapes.py", code)
        spans = [(s.identifier.text, s.identifier.span.line, s.identifier.span.column) for s in parsed.sites]
        self.assertEqual(spans, [("outer", 2, 7), ("inner_t", 3, 11)])

    def test_type_alias_annotation(self) -> None:
        code = "from typing import TypeAlias\nvector_t: TypeAlias = list[float]\nother: int = 3\n"
        self.assertEqual(self._sites(code), [("type", "vector_t")])

    def test_columns_count_characters(self) -> None:
        parsed = self.gateway.parse("shapes.py", "x = 'é'; y: TypeAlias = int\n")
        (site,) = parsed.sites
        self.assertEqual(site.identifier.span.column, 10)

    def test_syntax_error_becomes_source_load_error(self) -> None:
        with self.assertRaises(SourceLoadError):
            self.gateway.parse("broken.py", "class (:\n")

    def test_functions_are_not_sites(self) -> None:
        self.assertEqual(self._sites("def make_thing():\n    return 1\n"), [])

    def test_declarations_inside_function_bodies_are_skipped(self) -> None:
        code = (
            "def f():\n"
            "    class inner_cls: pass\n"
            "async def g():\n"
            "    local_t: TypeAlias = int\n"
            "class holder:\n"
            "    def method(self):\n"
            "        class hidden: pass\n"
        )
        self.assertEqual(self._sites(code), [("struct", "holder")])

    def test_classes_under_module_level_blocks_are_sites(self) -> None:
        code = "import sys\nif sys.version_info >= (3, 11):\n    class gated: pass\nelse:\n    class fallback: pass\n"
        self.assertEqual(self._sites(code), [("struct", "gated"), ("struct", "fallback")])
