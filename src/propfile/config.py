"""PropfileConfig: settings for the propfile command line tool.

Looked up as propfile.toml in the working directory or any parent:

    [propfile]
    encoding = "utf-8"
    line_separator = "native"   # native | lf | crlf
    resolve_env = true          # expand ${NAME} from the environment on get

Every key is optional. The library itself takes these as plain arguments and
never reads the file.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_CONFIG_FILENAME = "propfile.toml"

_LINE_SEPARATORS = {
    "native": os.linesep,
    "lf": "\n",
    "crlf": "\r\n",
}


@dataclass
class PropfileConfig:
    """Resolved tool configuration."""

    root: Path                          # directory searched from / containing propfile.toml
    encoding: str = "utf-8"
    line_separator: str = os.linesep
    resolve_env: bool = True

    @property
    def config_path(self) -> Path:
        return self.root / _CONFIG_FILENAME


def _line_separator(name: str) -> str:
    try:
        return _LINE_SEPARATORS[name.lower()]
    except KeyError:
        msg = f"line_separator must be one of {', '.join(_LINE_SEPARATORS)}, got {name!r}"
        raise ValueError(msg) from None


def _flag(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        msg = f"{name} must be true or false, got {value!r}"
        raise ValueError(msg)
    return value


def load_config(root: Path | str | None = None) -> PropfileConfig:
    """Load propfile.toml from root (or search upward from cwd if root is None)."""
    root_path = _find_root(Path(root) if root else Path.cwd())
    config_path = root_path / _CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_path.exists():
        with config_path.open("rb") as f:
            raw = tomllib.load(f)

    section = raw.get("propfile", {})
    return PropfileConfig(
        root=root_path,
        encoding=str(section.get("encoding", "utf-8")),
        line_separator=_line_separator(str(section.get("line_separator", "native"))),
        resolve_env=_flag("resolve_env", section.get("resolve_env", True)),
    )


def _find_root(start: Path) -> Path:
    """Walk upward from start looking for propfile.toml."""
    for directory in (start, *start.parents):
        if (directory / _CONFIG_FILENAME).exists():
            return directory
    return start


def init_config(root: Path) -> Path:
    """Write a default propfile.toml at root. Raises if already exists."""
    config_path = root / _CONFIG_FILENAME
    if config_path.exists():
        msg = f"{_CONFIG_FILENAME} already exists at {config_path}"
        raise FileExistsError(msg)

    content = """\
[propfile]
# encoding = "utf-8"
# line_separator = "native"   # native | lf | crlf
# resolve_env = true          # expand ${NAME} from the environment on get
"""
    config_path.write_text(content)
    return config_path
