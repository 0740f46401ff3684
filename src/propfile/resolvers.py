"""Built-in read-time resolvers.

A resolver is any ``Callable[[str], str]``. Register it with
``Properties.add_resolver``; it runs on every ``get``/``get_or_default``.
"""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

ENV_PATTERN = re.compile(r"\$\{([a-zA-Z0-9_]+)\}")


def substitute_env(data: str, environ: Mapping[str, str]) -> str:
    """Replace ${NAME} tokens from environ; unknown names are left as is."""

    def _replace(match: re.Match[str]) -> str:
        value = environ.get(match.group(1))
        if value is None:
            return match.group(0)
        return value.strip()

    return ENV_PATTERN.sub(_replace, data)


def environment_resolver(data: str) -> str:
    """Resolve ${NAME} tokens against the process environment."""
    return substitute_env(data, os.environ)


def mapping_resolver(values: Mapping[str, str]) -> Callable[[str], str]:
    """Build a resolver that substitutes ${NAME} tokens from a fixed mapping.

    Every call returns a new function, so register it with a stable name
    (``props.add_resolver(mapping_resolver(v), name="defaults")``) or repeated
    registrations will all be kept.
    """
    return lambda data: substitute_env(data, values)
