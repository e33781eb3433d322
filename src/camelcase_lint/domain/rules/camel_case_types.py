"""non_camel_case_types: type-like declarations should have upper camel case names."""

from camelcase_lint.domain.case_converter import CaseConverter
from camelcase_lint.domain.constants import NON_CAMEL_CASE_TYPES
from camelcase_lint.domain.entities import CaseFinding, ClassifiedDeclaration, DeclarationKind
from camelcase_lint.domain.rules import NamingRule


class NonCamelCaseTypesRule(NamingRule):
    """Rule for non_camel_case_types. Thin wrapper around CaseConverter plus exemptions."""

    lint_name: str = NON_CAMEL_CASE_TYPES
    description: str = "types, variants, traits and type parameters should have camel case names"

    _REPR_EXEMPT_KINDS = (DeclarationKind.STRUCT, DeclarationKind.ENUM)

    def __init__(self, converter: CaseConverter | None = None, exempt_repr_c: bool = True) -> None:
        self.converter = converter or CaseConverter()
        self.exempt_repr_c = exempt_repr_c

    def check(self, declaration: ClassifiedDeclaration) -> CaseFinding | None:
        if self.is_exempt(declaration):
            return None
        conversion = self.converter.convert(declaration.identifier.text)
        return CaseFinding(
            kind=declaration.kind,
            identifier=declaration.identifier,
            suggestion=conversion.rewritten,
            conforms=conversion.conforms,
        )

    def is_exempt(self, declaration: ClassifiedDeclaration) -> bool:
        """`#[repr(C)]` structs and enums mirror foreign names and are not checked."""
        if not self.exempt_repr_c or declaration.kind not in self._REPR_EXEMPT_KINDS:
            return False
        return any(self._is_repr_c(attr) for attr in declaration.site.attributes)

    @staticmethod
    def _is_repr_c(attribute: str) -> bool:
        compact = attribute.replace(" ", "")
        if not (compact.startswith("repr(") and compact.endswith(")")):
            return False
        hints = compact[len("repr("):-1].split(",")
        return "C" in hints
