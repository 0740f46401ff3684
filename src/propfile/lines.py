"""Line-level helpers for the .properties format.

A physical line is one of:

    (blank)                 # ignored
    # comment / ! comment   # ignored
    key = value             # pair; first '=' splits, both sides trimmed
    key = value # note      # '#' or '!' anywhere truncates the rest
    key = first part \\     # '\\' continues the value on the next line

There is no escape for '#', '!' or '\\' inside a value: the first occurrence of
any of them always acts as a marker.

Once a value is being continued, the next line is always value text: a blank
line or a full-line comment there ends the value and adds nothing. Readers
that skip such lines and keep continuing will disagree: `a=x\\`, `# note`,
`y` reads as "x" here, where they give "xy".
"""

from __future__ import annotations

from propfile.errors import EmptyKeyError, InvalidPairError

INDEX_NOT_FOUND = -1

COMMENT_CHARS = ("#", "!")
CONTINUATION_CHAR = "\\"
DELIMITER = "="


def _index_of_any(line: str, chars: tuple[str, ...]) -> int:
    for i, ch in enumerate(line):
        if ch in chars:
            return i
    return INDEX_NOT_FOUND


def is_full_comment(line: str) -> bool:
    return line.strip().startswith(COMMENT_CHARS)


def is_line_valid(line: str) -> bool:
    """False for blank lines and full-line comments."""
    stripped = line.strip()
    if not stripped:
        return False
    return not is_full_comment(stripped)


def comment_index(line: str) -> int:
    """Position of the first comment marker, or INDEX_NOT_FOUND."""
    return _index_of_any(line, COMMENT_CHARS)


def continuation_index(line: str) -> int:
    """Position of the first backslash, or INDEX_NOT_FOUND."""
    return line.find(CONTINUATION_CHAR)


def strip_comment(line: str) -> str:
    """Trim and drop everything from the first comment marker on."""
    line = line.strip()
    index = comment_index(line)
    if index == INDEX_NOT_FOUND:
        return line
    return line[:index]


def strip_continuation(line: str) -> str:
    """Trim and drop everything from the first backslash on."""
    line = line.strip()
    index = continuation_index(line)
    if index == INDEX_NOT_FOUND:
        return line
    return line[:index]


def split_pair(line: str) -> tuple[str, str | None]:
    """Split a cleaned line into (key, value) on the first '='.

    An empty value comes back as None. Raises InvalidPairError when there is
    no delimiter and EmptyKeyError when the key is blank.
    """
    line = line.strip()
    key, sep, value = line.partition(DELIMITER)
    if not sep:
        msg = f"invalid data pair: {line!r}"
        raise InvalidPairError(msg)
    key = key.strip()
    value = value.strip()
    if not key:
        msg = "key cannot be empty"
        raise EmptyKeyError(msg)
    return key, value or None
