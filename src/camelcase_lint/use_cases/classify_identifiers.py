"""Projects front-end declaration sites onto the closed set of checked kinds."""

from collections.abc import Iterable, Iterator

from camelcase_lint.domain.entities import (
    ClassifiedDeclaration,
    DeclarationKind,
    DeclarationSite,
)


class IdentifierClassifier:
    """
    Yields (kind, identifier) pairs in source order.

    Only declaration headers are candidates. Sites whose keyword has no
    DeclarationKind (fn, mod, const, ...) are dropped.
    """

    KIND_BY_KEYWORD: dict[str, DeclarationKind] = {
        "struct": DeclarationKind.STRUCT,
        "union": DeclarationKind.STRUCT,
        "enum": DeclarationKind.ENUM,
        "variant": DeclarationKind.ENUM_VARIANT,
        "trait": DeclarationKind.TRAIT,
        "type": DeclarationKind.TYPE_ALIAS,
        "type_param": DeclarationKind.TYPE_PARAMETER,
    }

    def classify(self, sites: Iterable[DeclarationSite]) -> Iterator[ClassifiedDeclaration]:
        for site in sorted(sites, key=lambda s: s.identifier.span.start):
            kind = self.KIND_BY_KEYWORD.get(site.keyword)
            if kind is None:
                continue
            yield ClassifiedDeclaration(kind=kind, identifier=site.identifier, site=site)
