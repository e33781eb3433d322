"""Load [tool.camelcase-lint] from pyproject.toml. Infrastructure I/O only."""

import logging
import sys
from pathlib import Path

from camelcase_lint.domain.constants import CONFIG_SECTION

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib


class ConfigFileLoader:
    """
    Loads config from the nearest pyproject.toml, walking up from `start`.
    """

    @staticmethod
    def load_config_from_fs(start: Path | None = None) -> tuple[dict[str, object], str | None]:
        """Returns (config_dict, path of the pyproject.toml it came from)."""
        current_path = (start or Path.cwd()).resolve()
        empty: dict[str, object] = {}
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if not config_file.exists():
                continue
            try:
                with config_file.open("rb") as f:
                    data = toml_lib.load(f)
            except (OSError, toml_lib.TOMLDecodeError) as exc:
                logging.warning("Configuration Warning: could not read %s: %s", config_file, exc)
                return (empty, None)
            tool_section = data.get("tool", {}) or {}
            config_dict = tool_section.get(CONFIG_SECTION, {}) or tool_section.get(
                CONFIG_SECTION.replace("-", "_"), {}
            )
            return (config_dict, str(config_file))
        return (empty, None)
