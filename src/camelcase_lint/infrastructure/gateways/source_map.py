"""Source map - byte offsets to (line, column) and back to line text."""

from bisect import bisect_right
from dataclasses import dataclass, field

from camelcase_lint.domain.entities import Span
from camelcase_lint.domain.exceptions import MalformedSpanError
from camelcase_lint.domain.protocols import SourceMapProtocol


@dataclass
class SourceFile:
    """One registered buffer with the offsets at which each line starts."""

    name: str
    text: str
    line_starts: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.line_starts:
            self.line_starts = [0]
            for index, char in enumerate(self.text):
                if char == "\n":
                    self.line_starts.append(index + 1)

    @property
    def line_count(self) -> int:
        return len(self.line_starts)

    def line_of(self, offset: int) -> int:
        """1-based line containing `offset`."""
        return bisect_right(self.line_starts, offset)

    def line_text(self, line: int) -> str:
        start = self.line_starts[line - 1]
        end = self.line_starts[line] - 1 if line < self.line_count else len(self.text)
        return self.text[start:end].rstrip("\r")

    def span(self, start: int, end: int) -> Span:
        if start < 0 or end < start or end > len(self.text):
            raise MalformedSpanError(
                self.name, f"byte range {start}..{end} is outside 0..{len(self.text)}"
            )
        line = self.line_of(start)
        column = start - self.line_starts[line - 1] + 1
        return Span(file=self.name, start=start, end=end, line=line, column=column)


class SourceMap(SourceMapProtocol):
    """
    Shared, read-only after registration. Columns count characters, not bytes,
    starting at 1 like rustc does.
    """

    def __init__(self) -> None:
        self._files: dict[str, SourceFile] = {}

    def add_file(self, file: str, text: str) -> None:
        self._files[file] = SourceFile(file, text)

    def _get(self, file: str) -> SourceFile:
        source = self._files.get(file)
        if source is None:
            raise MalformedSpanError(file, "file was never registered with the source map")
        return source

    def line_text(self, file: str, line: int) -> str:
        source = self._get(file)
        if line < 1 or line > source.line_count:
            raise MalformedSpanError(file, f"line {line} is outside 1..{source.line_count}")
        return source.line_text(line)
