"""Properties: in-memory key/value store backed by .properties text.

    props = Properties()
    props.load_path("app.properties")
    props.add_resolver(environment_resolver)
    props.get("db.url")                 # resolvers applied
    props.put("db.pool", 8)             # stored as "8"
    props.store_path("app.properties")

Stored values are always strings. Resolvers run only when a value is read
through get/get_or_default; keys/values/pairs/store see the raw text.

Concurrency: one lock serialises put/put_all/remove/clear. Reads take no lock,
and load/store are not synchronised against each other.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from propfile import lines
from propfile.errors import PropertiesError, PropertyNotFoundError
from propfile.models import Pair, to_property_str, validate_key

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from typing import TextIO

log = logging.getLogger("propfile.properties")

HEADER_DATE_FORMAT = "%a %b %d %H:%M:%S %Z %Y"


@dataclass
class LoadState:
    """Per-call state of the line reader."""

    buffering: bool = False     # inside a continued value
    last_key: str = ""          # key whose value is being continued


class Properties:
    """Thread-safe (for mutation) string-to-string property map."""

    def __init__(self, entries: Mapping[str, Any] | Iterable[Pair] | None = None) -> None:
        self._elements: dict[str, str] = {}
        self._lock = threading.Lock()
        self._resolvers: list[tuple[str | None, Callable[[str], str]]] = []
        if entries is not None:
            self.put_all(entries)

    # ------------------------------------------------------------------
    # Resolvers
    # ------------------------------------------------------------------

    def add_resolver(self, resolver: Callable[[str], str], *, name: str | None = None) -> bool:
        """Register a read-time transform. Returns False if already registered.

        A resolver is a duplicate when the same callable is already registered
        (under any name), or when name matches an existing registration.
        """
        for existing_name, existing in self._resolvers:
            if existing is resolver or (name is not None and name == existing_name):
                return False
        self._resolvers.append((name, resolver))
        return True

    def _resolve(self, data: str) -> str:
        for _, resolver in self._resolvers:
            data = resolver(data)
        return data

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get(self, key: str) -> str:
        """Resolved value for key. Raises PropertyNotFoundError if missing."""
        try:
            value = self._elements[key]
        except KeyError:
            raise PropertyNotFoundError(key) from None
        return self._resolve(value)

    def get_or_default(self, key: str, default: str = "") -> str:
        """Resolved value for key, or the resolved default. Never raises."""
        return self._resolve(self._elements.get(key, default))

    def count(self) -> int:
        return len(self._elements)

    def is_empty(self) -> bool:
        return self.count() == 0

    def keys(self) -> list[str]:
        """All keys in ascending order."""
        return sorted(self._elements)

    def values(self) -> list[str]:
        """Raw values, in map order."""
        return list(self._elements.values())

    def pairs(self) -> list[Pair]:
        """Raw entries as Pair objects, in map order."""
        return [Pair(k, v) for k, v in list(self._elements.items())]

    def contains(self, key: str) -> bool:
        return key in self._elements

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key: object) -> bool:
        return key in self._elements

    def __str__(self) -> str:
        if self.is_empty():
            return "(0) {}"
        body = ", ".join(f"[{k} = {self._elements[k]}]" for k in self.keys())
        return f"({self.count()}) {{{body}}}"

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def put(self, key: str, value: Any) -> str:
        """Store value (stringified) under key. Returns the previous raw value or ""."""
        validate_key(key)
        text = to_property_str(value)
        with self._lock:
            old = self._elements.get(key, "")
            self._elements[key] = text
        return old

    def put_all(self, entries: Mapping[str, Any] | Iterable[Pair]) -> None:
        """Store several entries at once. Every key is validated before any is written."""
        if isinstance(entries, Mapping):
            items = [Pair(k, v) for k, v in entries.items()]
        else:
            items = list(entries)
        staged = {p.key: p.value_str for p in items}
        with self._lock:
            self._elements.update(staged)

    def remove(self, key: str) -> str:
        """Delete key. Returns the previous raw value or ""."""
        with self._lock:
            return self._elements.pop(key, "")

    def clear(self) -> None:
        with self._lock:
            self._elements = {}

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load(self, source: Iterable[str]) -> int:
        """Read lines from source into the store. Returns the number of pairs read.

        Malformed lines are skipped. Errors raised by the source itself
        (OSError, UnicodeDecodeError, ...) propagate and abort the load.
        """
        state = LoadState()
        n = 0
        for lineno, line in enumerate(source, start=1):
            if self._process_line(line, state, lineno):
                n += 1
        log.debug("loaded %d pairs (%d keys total)", n, self.count())
        return n

    def _process_line(self, line: str, state: LoadState, lineno: int) -> bool:
        """Apply one physical line. True when it started a new pair."""
        if state.buffering:
            line = lines.strip_comment(line)
            if lines.continuation_index(line) == lines.INDEX_NOT_FOUND:
                state.buffering = False
            old = self._elements.get(state.last_key, "")
            self.put(state.last_key, old + lines.strip_continuation(line))
            return False

        if not lines.is_line_valid(line):
            return False
        line = lines.strip_comment(line)
        try:
            key, value = lines.split_pair(line)
        except PropertiesError as exc:
            log.debug("line %d skipped: %s", lineno, exc)
            return False

        raw = to_property_str(value)
        if lines.continuation_index(raw) != lines.INDEX_NOT_FOUND:
            state.buffering = True
            state.last_key = key
        self.put(key, lines.strip_continuation(raw))
        return True

    def load_path(self, path: Path | str, encoding: str = "utf-8") -> int:
        """Load a .properties file from disk."""
        path = Path(path)
        with path.open(encoding=encoding) as f:
            n = self.load(f)
        log.info("loaded %d pairs from %s", n, path)
        return n

    # ------------------------------------------------------------------
    # Store
    # ------------------------------------------------------------------

    def store(self, sink: TextIO, *, line_separator: str = os.linesep) -> None:
        """Write a timestamp header and sorted key=value lines, then flush."""
        now = datetime.now().astimezone().strftime(HEADER_DATE_FORMAT)
        sink.write("#" + now + line_separator)
        for key in self.keys():
            sink.write(key + "=" + self._elements[key] + line_separator)
        sink.flush()

    def store_path(
        self,
        path: Path | str,
        encoding: str = "utf-8",
        *,
        line_separator: str = os.linesep,
    ) -> None:
        """Write to path via a temp file + rename so readers never see a partial file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        try:
            # newline="" keeps line_separator exactly as given
            with tmp.open("w", encoding=encoding, newline="") as f:
                self.store(f, line_separator=line_separator)
            tmp.replace(path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise
        log.info("stored %d pairs to %s", self.count(), path)


def load_properties(path: Path | str, *, encoding: str = "utf-8", resolve_env: bool = False) -> Properties:
    """Load path into a new Properties, optionally with the environment resolver."""
    from propfile.resolvers import environment_resolver

    props = Properties()
    if resolve_env:
        props.add_resolver(environment_resolver, name="env")
    props.load_path(path, encoding=encoding)
    return props
