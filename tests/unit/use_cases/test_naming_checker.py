"""Unit tests for the pylint NamingConventionChecker and plugin registration."""

import unittest
from unittest.mock import MagicMock

import astroid  # type: ignore[import-untyped]

from camelcase_lint.checker import register
from camelcase_lint.use_cases.checks.naming import NamingConventionChecker


class TestNamingConventionChecker(unittest.TestCase):
    def setUp(self) -> None:
        self.linter = MagicMock()
        self.checker = NamingConventionChecker(self.linter)

    def _messages(self, code: str) -> list[tuple]:
        module = astroid.parse(code, path="shapes.py")
        self.checker.visit_module(module)
        return [c.args for c in self.linter.add_message.call_args_list]

    def test_msgs_come_from_registry(self) -> None:
        template, symbol, _ = self.checker.msgs["C9301"]
        self.assertEqual(symbol, "non-camel-case-type")
        self.assertEqual(template, "%s `%s` should have a camel case name%s")

    def test_reports_snake_case_class(self) -> None:
        (message,) = self._messages("class my_shape:\n    pass\n")
        msgid, line, _node, args, _confidence, col_offset, end_lineno, end_col_offset = message
        self.assertEqual(msgid, "C9301")
        self.assertEqual(line, 1)
        self.assertEqual(args, ("type", "my_shape", " (convert the identifier to camel case: `MyShape`)"))
        self.assertEqual((col_offset, end_lineno, end_col_offset), (6, 1, 14))

    def test_protocols_and_enums(self) -> None:
        code = (
            "from enum import Enum\n"
            "from typing import Protocol\n"
            "class shape_like(Protocol): ...\n"
            "class colour(Enum):\n"
            "    red = 1\n"
        )
        nouns = [m[3][:2] for m in self._messages(code)]
        self.assertEqual(nouns, [("trait", "shape_like"), ("type", "colour")])

    def test_type_alias_annotation(self) -> None:
        code = "from typing import TypeAlias\nint_list: TypeAlias = list[int]\n"
        (message,) = self._messages(code)
        self.assertEqual(message[3][1], "int_list")

    def test_conforming_module_is_silent(self) -> None:
        self.assertEqual(self._messages("class Shape:\n    def area(self): ...\n"), [])

    def test_function_local_classes_are_not_reported(self) -> None:
        self.assertEqual(self._messages("def build():\n    class local_shape:\n        pass\n"), [])


def test_register_adds_checker() -> None:
    linter = MagicMock()
    register(linter)
    (checker,), _ = linter.register_checker.call_args
    assert isinstance(checker, NamingConventionChecker)
