"""Front matter parsing for blog posts.

Two header styles are understood:

* key/value lines (``Title: Some title``) at the top of the file, ended by
  the first blank line. Indented lines continue the previous value.
* a YAML mapping between ``---`` fences.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

import yaml

from blog.exceptions import FrontMatterError


_FENCE = "---"
_key_re = re.compile(r"^(?P<key>[A-Za-z][A-Za-z0-9_ -]*?)\s*:\s*(?P<value>.*)$")

DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
)


def split_document(text: str, path: str | None = None) -> tuple[dict[str, Any], str]:
    """Split a post into its front matter mapping and body.

    Args:
        text: Full file content
        path: Source path, only used in error messages

    Returns:
        Tuple of (metadata with lower-cased keys, body text)

    Raises:
        FrontMatterError: If the header is missing or malformed
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    lines = text.splitlines(keepends=True)
    if not lines or not lines[0].strip():
        raise FrontMatterError("document does not start with front matter", path, 1)

    if lines[0].rstrip() == _FENCE:
        return _split_yaml(lines, path)
    return _split_key_value(lines, path)


def _split_yaml(lines: list[str], path: str | None) -> tuple[dict[str, Any], str]:
    for index in range(1, len(lines)):
        if lines[index].rstrip() == _FENCE:
            break
    else:
        raise FrontMatterError("unclosed YAML front matter block", path, 1)

    raw = "".join(lines[1:index])
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"invalid YAML front matter: {e}", path) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError("YAML front matter must be a mapping", path, 2)

    metadata = {str(key).strip().lower(): value for key, value in data.items()}
    body = "".join(lines[index + 1 :])
    return metadata, body.lstrip("\n")


def _split_key_value(lines: list[str], path: str | None) -> tuple[dict[str, Any], str]:
    metadata: dict[str, Any] = {}
    last_key = None
    end = len(lines)

    for number, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped:
            end = number
            break

        if line[0] in " \t":
            # Continuation of the previous value
            if last_key is None:
                raise FrontMatterError("continuation line without a key", path, number)
            metadata[last_key] = f"{metadata[last_key]} {stripped}".strip()
            continue

        match = _key_re.match(line.rstrip("\r\n"))
        if not match:
            raise FrontMatterError(f"expected 'Key: value', got {stripped!r}", path, number)

        last_key = match.group("key").strip().lower()
        metadata[last_key] = match.group("value").strip()

    body = "".join(lines[end:])
    return metadata, body


def parse_date(value: Any, path: str | None = None) -> datetime:
    """Parse a front matter date into a naive or aware datetime."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        raise FrontMatterError(f"invalid date: {value!r}", path)

    text = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise FrontMatterError(f"invalid date: {value!r}", path) from None


def split_list(value: Any) -> tuple[str, ...]:
    """Normalize a comma-separated string or a list into a tuple of strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = [str(item) for item in value]
    else:
        items = [str(value)]
    return tuple(item.strip() for item in items if item and item.strip())
