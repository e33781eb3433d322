"""Rust Source Gateway - item-level scanner for `.rs` files.

This is not a Rust parser. It masks comments and literals, tokenises what is
left and walks item headers: enough to find every declaration the naming lint
looks at and the lint attributes that scope it.
"""

import logging
import re
from dataclasses import dataclass

from camelcase_lint.domain.constants import LINT_LEVEL_ATTRIBUTES, ROOT_SCOPE
from camelcase_lint.domain.entities import (
    DeclarationSite,
    Identifier,
    LintDirective,
    LintLevel,
    MalformedDirective,
    ParsedSource,
    Scope,
)
from camelcase_lint.domain.protocols import DeclarationSourceProtocol
from camelcase_lint.infrastructure.gateways.source_map import SourceFile

OPENERS = frozenset("([{")
CLOSERS = frozenset(")]}")


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    start: int
    end: int


@dataclass(frozen=True)
class Attribute:
    """`#[...]` or `#![...]` with the tokens between the brackets."""

    inner: bool
    body: tuple[Token, ...]

    @property
    def text(self) -> str:
        return "".join(t.text for t in self.body)


class RustSourceMasker:
    """Blanks comments, strings and char literals. Offsets and newlines are kept."""

    _PREFIXED_LITERAL = re.compile(r"""[bc]?r(?P<hashes>\#*)"|[bc]"|b'""", re.VERBOSE)

    @staticmethod
    def mask(text: str) -> str:
        out = list(text)
        i = 0
        n = len(text)
        while i < n:
            ch = text[i]
            nxt = text[i + 1] if i + 1 < n else ""
            end: int | None = None
            if ch == "/" and nxt == "/":
                newline = text.find("\n", i)
                end = n if newline == -1 else newline
            elif ch == "/" and nxt == "*":
                end = RustSourceMasker._block_comment_end(text, i)
            elif ch in "rbc" and not RustSourceMasker._follows_ident(text, i):
                end = RustSourceMasker._prefixed_literal_end(text, i)
            elif ch == '"':
                end = RustSourceMasker._string_end(text, i + 1)
            elif ch == "'":
                end = RustSourceMasker._char_end(text, i)
            if end is None:
                i += 1
                continue
            for j in range(i, end):
                if out[j] != "\n":
                    out[j] = " "
            i = end
        return "".join(out)

    @staticmethod
    def _follows_ident(text: str, i: int) -> bool:
        return i > 0 and (text[i - 1].isalnum() or text[i - 1] == "_")

    @staticmethod
    def _block_comment_end(text: str, i: int) -> int:
        depth = 0
        j = i
        while j < len(text):
            if text.startswith("/*", j):
                depth += 1
                j += 2
            elif text.startswith("*/", j):
                depth -= 1
                j += 2
                if depth == 0:
                    return j
            else:
                j += 1
        return len(text)

    @staticmethod
    def _string_end(text: str, j: int) -> int:
        escape = False
        while j < len(text):
            ch = text[j]
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                return j + 1
            j += 1
        return len(text)

    @staticmethod
    def _char_end(text: str, i: int) -> int | None:
        """End of a char literal at `i`, or None when the quote starts a lifetime."""
        if text[i + 1:i + 2] == "\\":
            close = text.find("'", i + 3)
            return None if close == -1 else close + 1
        if text[i + 2:i + 3] == "'" and text[i + 1:i + 2] not in ("", "\n"):
            return i + 3
        return None

    @staticmethod
    def _prefixed_literal_end(text: str, i: int) -> int | None:
        match = RustSourceMasker._PREFIXED_LITERAL.match(text, i)
        if match is None:
            return None
        hashes = match.group("hashes")
        if hashes is not None:
            close = text.find('"' + hashes, match.end())
            return len(text) if close == -1 else close + 1 + len(hashes)
        if match.group().endswith("'"):
            return RustSourceMasker._char_end(text, i + 1)
        return RustSourceMasker._string_end(text, match.end())


class RustTokenizer:
    """Splits masked source into identifier, lifetime, number and punctuation tokens."""

    TOKEN_RE = re.compile(
        r"""
        (?P<ident>(?:r\#)?[^\W\d]\w*)
        |(?P<lifetime>'[^\W\d]\w*)
        |(?P<number>\d\w*)
        |(?P<punct>::|->|=>|\S)
        """,
        re.VERBOSE,
    )

    @staticmethod
    def tokenize(masked: str) -> list[Token]:
        return [
            Token(str(m.lastgroup), m.group(), m.start(), m.end())
            for m in RustTokenizer.TOKEN_RE.finditer(masked)
        ]


class RustItemWalker:
    """
    Walks one file's tokens item by item.

    Every item carrying lint attributes gets its own scope, and so does every
    item with a body of items (`mod`, `trait`, `impl`, `extern`). Function
    bodies are skipped.
    """

    def __init__(self, file: str, text: str) -> None:
        self.file = file
        self.source = SourceFile(file, text)
        self.tokens = RustTokenizer.tokenize(RustSourceMasker.mask(text))
        self.pos = 0
        self.parsed = ParsedSource(file=file)
        self.root_id = f"{file}::{ROOT_SCOPE}"
        self.parsed.add_scope(Scope(self.root_id, None))

    def walk(self) -> ParsedSource:
        self.walk_items(self.root_id, closing=False)
        self.parsed.malformed_directives.sort(key=lambda m: m.span.start)
        return self.parsed

    # -- token cursor -------------------------------------------------------

    def peek(self, offset: int = 0) -> Token | None:
        index = self.pos + offset
        return self.tokens[index] if index < len(self.tokens) else None

    def at(self, text: str, offset: int = 0) -> bool:
        token = self.peek(offset)
        return token is not None and token.text == text

    def at_ident(self, offset: int = 0) -> bool:
        token = self.peek(offset)
        return token is not None and token.kind == "ident"

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def skip_group(self) -> None:
        """Consume a balanced (), [] or {} group starting at the cursor."""
        depth = 0
        while self.pos < len(self.tokens):
            text = self.advance().text
            if text in OPENERS:
                depth += 1
            elif text in CLOSERS:
                depth -= 1
                if depth <= 0:
                    return

    def skip_until(self, stops: set[str]) -> bool:
        """Advance to the first stop token outside any bracket. The stop is not consumed."""
        depth = 0
        while self.pos < len(self.tokens):
            text = self.tokens[self.pos].text
            if depth == 0 and text in stops:
                return True
            if text in OPENERS:
                depth += 1
            elif text in CLOSERS:
                if depth == 0:
                    return False
                depth -= 1
            self.pos += 1
        return False

    # -- items --------------------------------------------------------------

    def walk_items(self, scope_id: str, closing: bool, in_impl: bool = False) -> None:
        pending: list[Attribute] = []
        while self.pos < len(self.tokens):
            start = self.pos
            if self.at("}"):
                self.advance()
                if closing:
                    return
                continue
            if self.at("#") and self.at("!", 1) and self.at("[", 2):
                self.apply_inner_attribute(self.read_attribute(), scope_id)
                continue
            if self.at("#") and self.at("[", 1):
                pending.append(self.read_attribute())
                continue
            if self.at(";"):
                self.advance()
            else:
                self.walk_item(scope_id, pending, in_impl)
            pending = []
            if self.pos == start:
                self.advance()

    def walk_item(self, scope_id: str, attrs: list[Attribute], in_impl: bool) -> None:
        self.skip_qualifiers()
        token = self.peek()
        if token is None:
            return
        keyword = token.text
        if keyword == "struct" or (keyword == "union" and self.at_ident(1)):
            self.walk_adt(scope_id, attrs)
        elif keyword == "enum":
            self.walk_enum(scope_id, attrs)
        elif keyword == "trait":
            self.walk_trait(scope_id, attrs)
        elif keyword == "type":
            self.walk_type_alias(scope_id, attrs, in_impl)
        elif keyword == "fn":
            self.walk_fn(scope_id, attrs)
        elif keyword == "impl":
            self.walk_impl(scope_id, attrs)
        elif keyword == "mod":
            self.walk_mod(scope_id, attrs)
        elif keyword == "extern" and self.at("{", 1):
            block_scope, _ = self.scope_for(scope_id, "extern", token.start, attrs, force=True)
            self.advance()
            self.advance()
            self.walk_items(block_scope, closing=True)
        elif keyword in ("use", "static", "const", "extern"):
            self.skip_until({";", "}"})
        elif token.kind == "ident" and self.at("!", 1):
            self.skip_macro_invocation()
        elif keyword in OPENERS:
            self.skip_group()
        else:
            self.advance()

    def skip_qualifiers(self) -> None:
        while True:
            if self.at("pub"):
                self.advance()
                if self.at("("):
                    self.skip_group()
            elif self.at("unsafe") or self.at("async"):
                self.advance()
            elif self.at("auto") and self.at("trait", 1):
                self.advance()
            elif self.at("default") and self.at_ident(1):
                self.advance()
            elif self.at("const") and (self.at("fn", 1) or self.at("unsafe", 1) or self.at("async", 1)):
                self.advance()
            elif self.at("extern") and self.at("fn", 1):
                self.advance()
            else:
                return

    def skip_macro_invocation(self) -> None:
        self.advance()
        self.advance()
        if self.at_ident():
            self.advance()
        token = self.peek()
        if token is not None and token.text in OPENERS:
            self.skip_group()
        if self.at(";"):
            self.advance()

    def item_header(self, scope_id: str, attrs: list[Attribute]) -> str | None:
        """Consume `keyword name <generics>` and record the site; returns the item scope."""
        keyword = self.advance()
        if not self.at_ident():
            return None
        item_scope, attribute_texts = self.scope_for(scope_id, keyword.text, keyword.start, attrs)
        self.add_site(keyword.text, self.advance(), item_scope, attribute_texts)
        if self.at("<"):
            self.walk_generics(item_scope)
        return item_scope

    def walk_adt(self, scope_id: str, attrs: list[Attribute]) -> None:
        if self.item_header(scope_id, attrs) is None:
            return
        self.skip_until({";", "{"})
        if self.at("{"):
            self.skip_group()
        elif self.at(";"):
            self.advance()

    def walk_enum(self, scope_id: str, attrs: list[Attribute]) -> None:
        enum_scope = self.item_header(scope_id, attrs)
        if enum_scope is None:
            return
        self.skip_until({"{", ";"})
        if not self.at("{"):
            return
        self.advance()
        while self.pos < len(self.tokens) and not self.at("}"):
            start = self.pos
            variant_attrs: list[Attribute] = []
            while self.at("#") and self.at("[", 1):
                variant_attrs.append(self.read_attribute())
            name = self.peek()
            if name is not None and name.kind == "ident":
                variant_scope, texts = self.scope_for(enum_scope, "variant", name.start, variant_attrs)
                self.add_site("variant", self.advance(), variant_scope, texts)
            self.skip_until({",", "}"})
            if self.at(","):
                self.advance()
            if self.pos == start:
                self.advance()
        if self.at("}"):
            self.advance()

    def walk_trait(self, scope_id: str, attrs: list[Attribute]) -> None:
        keyword = self.tokens[self.pos]
        if not self.at_ident(1):
            self.advance()
            return
        trait_scope, texts = self.scope_for(scope_id, "trait", keyword.start, attrs, force=True)
        self.advance()
        self.add_site("trait", self.advance(), trait_scope, texts)
        if self.at("<"):
            self.walk_generics(trait_scope)
        self.skip_until({"{", ";"})
        if self.at("{"):
            self.advance()
            self.walk_items(trait_scope, closing=True)
        elif self.at(";"):
            self.advance()

    def walk_type_alias(self, scope_id: str, attrs: list[Attribute], in_impl: bool) -> None:
        # Associated types in impls name the trait's type; they are checked on the trait.
        if in_impl:
            self.advance()
        else:
            self.item_header(scope_id, attrs)
        self.skip_until({";", "}"})
        if self.at(";"):
            self.advance()

    def walk_fn(self, scope_id: str, attrs: list[Attribute]) -> None:
        if self.item_header(scope_id, attrs) is None:
            return
        self.skip_until({"{", ";"})
        if self.at("{"):
            self.skip_group()
        elif self.at(";"):
            self.advance()

    def walk_impl(self, scope_id: str, attrs: list[Attribute]) -> None:
        keyword = self.advance()
        impl_scope, _ = self.scope_for(scope_id, "impl", keyword.start, attrs, force=True)
        if self.at("<"):
            self.walk_generics(impl_scope)
        self.skip_until({"{", ";"})
        if self.at("{"):
            self.advance()
            self.walk_items(impl_scope, closing=True, in_impl=True)
        elif self.at(";"):
            self.advance()

    def walk_mod(self, scope_id: str, attrs: list[Attribute]) -> None:
        keyword = self.advance()
        if not self.at_ident():
            return
        mod_scope, texts = self.scope_for(scope_id, "mod", keyword.start, attrs, force=True)
        self.add_site("mod", self.advance(), mod_scope, texts)
        if self.at("{"):
            self.advance()
            self.walk_items(mod_scope, closing=True)
        elif self.at(";"):
            self.advance()

    def walk_generics(self, scope_id: str) -> None:
        """`<'a, T: Bound = Default, const N: usize>`; only type parameters become sites."""
        self.advance()
        while self.pos < len(self.tokens):
            if self.at(">"):
                self.advance()
                return
            while self.at("#") and self.at("[", 1):
                self.read_attribute()
            token = self.peek()
            if token is None:
                return
            if token.text == "const":
                self.advance()
            elif token.kind == "ident":
                self.add_site("type_param", token, scope_id, ())
            self.skip_generic_param()
            if self.at(","):
                self.advance()
            elif not self.at(">"):
                return

    def skip_generic_param(self) -> None:
        depth = 0
        angle = 0
        while self.pos < len(self.tokens):
            text = self.tokens[self.pos].text
            if depth == 0 and angle == 0 and text in (",", ">"):
                return
            if text in OPENERS:
                depth += 1
            elif text in CLOSERS:
                if depth == 0:
                    return
                depth -= 1
            elif text == "<":
                angle += 1
            elif text == ">":
                angle -= 1
            self.pos += 1

    # -- sites, scopes and attributes --------------------------------------

    def add_site(
        self, keyword: str, token: Token, scope_id: str, attributes: tuple[str, ...]
    ) -> None:
        start = token.start
        text = token.text
        if text.startswith("r#"):
            start += 2
            text = text[2:]
        identifier = Identifier(text, self.source.span(start, token.end))
        self.parsed.sites.append(DeclarationSite(keyword, identifier, scope_id, attributes))

    def scope_for(
        self,
        parent_id: str,
        label: str,
        start: int,
        attrs: list[Attribute],
        force: bool = False,
    ) -> tuple[str, tuple[str, ...]]:
        """Pick the scope an item's own attributes apply to and split off non-lint attributes."""
        lint_attrs: list[tuple[LintLevel, list[tuple[str, int, int]]]] = []
        others: list[str] = []
        for attr in attrs:
            split = self.split_lint_attribute(attr)
            if split is None:
                others.append(attr.text)
            else:
                lint_attrs.append(split)
        scope_id = parent_id
        if force or any(entries for _, entries in lint_attrs):
            scope_id = f"{self.file}::{label}@{start}"
            self.parsed.add_scope(Scope(scope_id, parent_id))
        for level, entries in lint_attrs:
            self.add_directives(scope_id, level, entries)
        return scope_id, tuple(others)

    def apply_inner_attribute(self, attr: Attribute, scope_id: str) -> None:
        split = self.split_lint_attribute(attr)
        if split is not None:
            self.add_directives(scope_id, *split)

    def add_directives(
        self, scope_id: str, level: LintLevel, entries: list[tuple[str, int, int]]
    ) -> None:
        scope = self.parsed.scopes[scope_id]
        for lint_name, start, end in entries:
            scope.add_directive(
                LintDirective(level, lint_name, self.source.span(start, end), scope_id)
            )

    def read_attribute(self) -> Attribute:
        self.advance()
        inner = self.at("!")
        if inner:
            self.advance()
        self.advance()
        depth = 1
        body: list[Token] = []
        while self.pos < len(self.tokens):
            token = self.advance()
            if token.text in OPENERS:
                depth += 1
            elif token.text in CLOSERS:
                depth -= 1
                if depth == 0:
                    break
            body.append(token)
        return Attribute(inner, tuple(body))

    def split_lint_attribute(
        self, attr: Attribute
    ) -> tuple[LintLevel, list[tuple[str, int, int]]] | None:
        """
        (level, [(lint, start, end), ...]) for `allow/warn/deny/forbid(...)`.

        Returns None for any other attribute. Unusable input is recorded as a
        malformed directive and yields an empty entry list.
        """
        body = attr.body
        if not body or body[0].text not in LINT_LEVEL_ATTRIBUTES:
            return None
        if len(body) > 1 and body[1].text == "::":
            return None
        level_token = body[0]
        level = LintLevel.parse(level_token.text)
        args = body[1:]
        if len(args) < 2 or args[0].text != "(" or args[-1].text != ")":
            self.record_malformed(level_token.text, level_token.start, body[-1].end)
            return (level, [])

        entries: list[tuple[str, int, int]] = []
        malformed_before = len(self.parsed.malformed_directives)
        for entry in self.split_commas(args[1:-1]):
            if self.is_path(entry):
                name = "".join(t.text for t in entry)
                entries.append((name, entry[0].start, entry[-1].end))
            elif entry[0].text == "reason" and len(entry) > 1 and entry[1].text == "=":
                continue
            else:
                self.record_malformed(level_token.text, entry[0].start, entry[-1].end)
        if not entries and len(self.parsed.malformed_directives) == malformed_before:
            self.record_malformed(level_token.text, level_token.start, body[-1].end)
        return (level, entries)

    def record_malformed(self, level_text: str, start: int, end: int) -> None:
        self.parsed.malformed_directives.append(
            MalformedDirective(level_text, self.source.span(start, end))
        )

    @staticmethod
    def split_commas(tokens: tuple[Token, ...]) -> list[list[Token]]:
        entries: list[list[Token]] = [[]]
        depth = 0
        for token in tokens:
            if token.text in OPENERS:
                depth += 1
            elif token.text in CLOSERS:
                depth -= 1
            if token.text == "," and depth == 0:
                entries.append([])
                continue
            entries[-1].append(token)
        return [entry for entry in entries if entry]

    @staticmethod
    def is_path(tokens: list[Token]) -> bool:
        if len(tokens) % 2 == 0:
            return False
        return all(
            token.kind == "ident" if index % 2 == 0 else token.text == "::"
            for index, token in enumerate(tokens)
        )


class RustSourceGateway(DeclarationSourceProtocol):
    """DeclarationSourceProtocol for Rust sources."""

    suffixes: tuple[str, ...] = (".rs",)

    def parse(self, file: str, text: str) -> ParsedSource:
        parsed = RustItemWalker(file, text).walk()
        logging.debug(
            "Scanned %s: %d declaration sites, %d scopes", file, len(parsed.sites), len(parsed.scopes)
        )
        return parsed
