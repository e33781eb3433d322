from pylint.lint import PyLinter

from camelcase_lint.use_cases.checks.naming import NamingConventionChecker


def register(linter: PyLinter) -> None:
    """Register checkers."""
    linter.register_checker(NamingConventionChecker(linter))
