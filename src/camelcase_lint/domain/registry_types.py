from typing import TypedDict


class LintRegistryEntry(TypedDict, total=False):
    default_level: str
    groups: list[str]
    message_template: str
    help_template: str
    short_description: str
    explanation: str
    pylint_msgid: str
    pylint_symbol: str
