"""Pure camel-case conversion. No diagnostic state, no I/O."""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class CasePolicy:
    """
    Tunable parts of the conversion.

    preserve_acronyms: keep the tail of an all-uppercase word (`IOError`,
    `HTTPClient`). When False every word tail is lowercased (`IoError`).
    Screaming identifiers such as `ONE_TWO_THREE` are always lowercased
    word by word regardless of this flag.
    """
    preserve_acronyms: bool = True


@dataclass(frozen=True)
class Conversion:
    """conforms=True means no rewrite is needed and `rewritten` is None."""
    conforms: bool
    rewritten: str | None


class CaseConverter:
    """Converts identifiers to upper camel case, avoiding ambiguous digit runs."""

    def __init__(self, policy: CasePolicy | None = None) -> None:
        self.policy = policy or CasePolicy()

    def convert(self, identifier: str) -> Conversion:
        """Decide whether `identifier` conforms; if not, propose the canonical form."""
        body = identifier.strip("_")
        if not body or not any(ch.isupper() or ch.islower() for ch in body):
            return Conversion(conforms=True, rewritten=None)
        rewritten = self.to_camel_case(identifier)
        if rewritten == identifier:
            return Conversion(conforms=True, rewritten=None)
        if not self._is_renderable(rewritten):
            return Conversion(conforms=False, rewritten=None)
        return Conversion(conforms=False, rewritten=rewritten)

    def is_camel_case(self, identifier: str) -> bool:
        return self.convert(identifier).conforms

    def to_camel_case(self, identifier: str) -> str:
        """Canonical form of `identifier`; leading/trailing underscores kept verbatim."""
        rewritten = self._rewrite(identifier)
        # Lowercased tails can fuse single-letter words (`a_b` -> `AB` -> `Ab`),
        # so repeat until the form is stable. Later passes only lowercase letters.
        for _ in range(len(identifier)):
            again = self._rewrite(rewritten)
            if again == rewritten:
                break
            rewritten = again
        return rewritten

    def _rewrite(self, identifier: str) -> str:
        body = identifier.strip("_")
        if not body:
            return identifier
        leading = identifier[: len(identifier) - len(identifier.lstrip("_"))]
        trailing = identifier[len(identifier.rstrip("_")):]

        screaming = len(self.word_groups(body)) >= 2 and not any(ch.islower() for ch in body)
        lower_tail = screaming or not self.policy.preserve_acronyms

        words = [self.capitalize(word, lower_tail) for word in self.split_words(body)]
        return leading + self.join_words(words) + trailing

    @staticmethod
    def word_groups(body: str) -> list[str]:
        """
        Split on underscore runs that separate words.

        A run between two digits (`X86_64`) is a digit separator and keeps
        its neighbours in one group.
        """
        parts = re.split(r"(_+)", body)
        groups = [parts[0]]
        for separator, text in zip(parts[1::2], parts[2::2]):
            if groups[-1][-1:].isdigit() and text[:1].isdigit():
                groups[-1] += separator + text
            else:
                groups.append(text)
        return [group for group in groups if group]

    @staticmethod
    def split_words(body: str) -> list[str]:
        """Split on underscores and case transitions; empty words are dropped."""
        return [
            word
            for chunk in body.split("_")
            if chunk
            for word in CaseConverter.split_case(chunk)
        ]

    @staticmethod
    def split_case(chunk: str) -> list[str]:
        """
        Split an underscore-free chunk on case transitions.

        lower->Upper and digit->Upper start a word. In an uppercase run followed by a
        lowercase letter the last uppercase letter starts the new word, so
        `IOError` splits as `IO` + `Error`. Digits never start a word.
        """
        words: list[str] = []
        start = 0
        for i in range(1, len(chunk)):
            ch = chunk[i]
            if not ch.isupper():
                continue
            prev = chunk[i - 1]
            nxt = chunk[i + 1] if i + 1 < len(chunk) else ""
            if prev.islower() or prev.isdigit() or (prev.isupper() and nxt.islower()):
                words.append(chunk[start:i])
                start = i
        words.append(chunk[start:])
        return words

    @staticmethod
    def capitalize(word: str, lower_tail: bool = False) -> str:
        tail = word[1:].lower() if lower_tail else word[1:]
        return word[0].upper() + tail

    @staticmethod
    def join_words(words: list[str]) -> str:
        """Concatenate words; a single `_` separates a digit from a following digit."""
        joined = ""
        for word in words:
            if joined and joined[-1].isdigit() and word[0].isdigit():
                joined += "_"
            joined += word
        return joined

    @staticmethod
    def _is_renderable(candidate: str) -> bool:
        return bool(candidate) and not candidate[0].isdigit()
