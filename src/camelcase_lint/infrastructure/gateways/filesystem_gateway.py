"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

from pathlib import Path

from camelcase_lint.domain.exceptions import SourceLoadError
from camelcase_lint.domain.protocols import FileSystemProtocol


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def collect_sources(
        self, paths: list[str], suffixes: tuple[str, ...], exclude: list[str]
    ) -> list[str]:
        """Files under `paths` with a checked suffix, sorted within each directory.

        Explicitly named files are kept whatever their suffix; `exclude`
        entries are matched as substrings of the path.
        """
        collected: list[str] = []
        for path in paths:
            path_obj = Path(path)
            if path_obj.is_dir():
                candidates = sorted(
                    p for p in path_obj.rglob("*") if p.is_file() and p.suffix in suffixes
                )
            else:
                candidates = [path_obj]
            for candidate in candidates:
                name = str(candidate)
                if any(fragment in name for fragment in exclude):
                    continue
                if name not in collected:
                    collected.append(name)
        return collected

    def read_text(self, path: str) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceLoadError(path, str(exc)) from exc
