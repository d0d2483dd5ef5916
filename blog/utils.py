from __future__ import annotations

import hashlib
import re


_slug_re = re.compile(r"[^a-z0-9\s-]")
_space_re = re.compile(r"[\s-]+")
_valid_slug_re = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(text: str) -> str:
    normalized = text.strip().lower()
    normalized = _slug_re.sub("", normalized)
    normalized = _space_re.sub("-", normalized)
    normalized = normalized.strip("-")
    return normalized or "post"


def is_valid_slug(slug: str) -> bool:
    return bool(_valid_slug_re.match(slug))


def sha256_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
