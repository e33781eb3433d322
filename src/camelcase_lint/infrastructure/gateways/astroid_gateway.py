"""Astroid Gateway - Python front end for the naming lint."""

import re
from collections.abc import Iterator

import astroid  # type: ignore[import-untyped]
from astroid import nodes

from camelcase_lint.domain.constants import ROOT_SCOPE
from camelcase_lint.domain.entities import DeclarationSite, Identifier, ParsedSource, Scope
from camelcase_lint.domain.exceptions import SourceLoadError
from camelcase_lint.domain.protocols import DeclarationSourceProtocol
from camelcase_lint.infrastructure.gateways.source_map import SourceFile

_PROTOCOL_BASES = frozenset({"Protocol"})
_ENUM_BASES = frozenset({"Enum", "IntEnum", "StrEnum", "Flag", "IntFlag"})
_TYPE_ALIAS_ANNOTATIONS = frozenset({"TypeAlias", "typing.TypeAlias", "typing_extensions.TypeAlias"})
_DECLARATION_NODES = (nodes.ClassDef, nodes.FunctionDef, nodes.AnnAssign, nodes.TypeAlias)


class AstroidGateway(DeclarationSourceProtocol):
    """
    Maps Python declarations onto the lint's declaration sites.

    class -> struct (Protocol -> trait, Enum -> enum), `type X = ...` and
    `X: TypeAlias = ...` -> type, PEP 695 type parameters -> type_param.
    Python has no lint attributes, so every site lives in the root scope.
    """

    suffixes: tuple[str, ...] = (".py",)

    def parse(self, file: str, text: str) -> ParsedSource:
        try:
            module = astroid.parse(text, path=file)
        except astroid.AstroidSyntaxError as exc:
            raise SourceLoadError(file, f"syntax error: {exc.error}") from exc
        parsed = ParsedSource(file=file)
        root_id = f"{file}::{ROOT_SCOPE}"
        parsed.add_scope(Scope(root_id, None))
        parsed.sites.extend(self.iter_declaration_sites(module, SourceFile(file, text), root_id))
        return parsed

    def iter_declaration_sites(
        self, module: nodes.Module, source: SourceFile, scope_id: str
    ) -> Iterator[DeclarationSite]:
        for node in self._declarations(module):
            if isinstance(node, nodes.ClassDef):
                yield from self._class_sites(node, source, scope_id)
            elif isinstance(node, nodes.TypeAlias):
                yield self._site("type", node.name, source, scope_id)
                yield from self._type_param_sites(node, source, scope_id)
            elif isinstance(node, nodes.AnnAssign):
                if self._is_type_alias_annotation(node):
                    yield self._site("type", node.target, source, scope_id)
            else:
                yield from self._type_param_sites(node, source, scope_id)

    @classmethod
    def _declarations(cls, node: nodes.NodeNG) -> Iterator[nodes.NodeNG]:
        """Declarations in statement order; function bodies are not entered."""
        for child in node.get_children():
            if isinstance(child, _DECLARATION_NODES):
                yield child
            if not isinstance(child, nodes.FunctionDef):
                yield from cls._declarations(child)

    def _class_sites(
        self, node: nodes.ClassDef, source: SourceFile, scope_id: str
    ) -> Iterator[DeclarationSite]:
        line = source.line_text(node.lineno)
        match = re.search(rf"\bclass\s+({re.escape(node.name)})\b", line)
        if match is not None:
            start = source.line_starts[node.lineno - 1] + match.start(1)
            identifier = Identifier(node.name, source.span(start, start + len(node.name)))
            yield DeclarationSite(self.class_keyword(node), identifier, scope_id)
        yield from self._type_param_sites(node, source, scope_id)

    def _type_param_sites(
        self, node: nodes.NodeNG, source: SourceFile, scope_id: str
    ) -> Iterator[DeclarationSite]:
        for param in getattr(node, "type_params", None) or []:
            if isinstance(param, nodes.TypeVar):
                yield self._site("type_param", param.name, source, scope_id)

    @staticmethod
    def _site(
        keyword: str, name_node: nodes.AssignName, source: SourceFile, scope_id: str
    ) -> DeclarationSite:
        line = source.line_text(name_node.lineno)
        # astroid columns are UTF-8 byte offsets.
        column = len(line.encode("utf-8")[:name_node.col_offset].decode("utf-8", errors="ignore"))
        start = source.line_starts[name_node.lineno - 1] + column
        identifier = Identifier(name_node.name, source.span(start, start + len(name_node.name)))
        return DeclarationSite(keyword, identifier, scope_id)

    @staticmethod
    def class_keyword(node: nodes.ClassDef) -> str:
        bases = {name.rsplit(".", 1)[-1] for name in node.basenames}
        if bases & _PROTOCOL_BASES:
            return "trait"
        if bases & _ENUM_BASES:
            return "enum"
        return "struct"

    @staticmethod
    def _is_type_alias_annotation(node: nodes.AnnAssign) -> bool:
        return (
            isinstance(node.target, nodes.AssignName)
            and node.annotation.as_string() in _TYPE_ALIAS_ANNOTATIONS
        )
