"""Pytest configuration.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
and the project root on the import path.
"""

import pytest

from camelcase_lint.infrastructure.di.container import NamingLintContainer
from tests.naming_test_utils import SOURCE_DATA


@pytest.fixture
def golden_source() -> str:
    return (SOURCE_DATA / "lint_non_camel_case_types.rs").read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def _reset_container() -> None:
    NamingLintContainer.reset()
