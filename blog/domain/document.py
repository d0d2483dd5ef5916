"""Document entity for blog posts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from blog.frontmatter import parse_date, split_list
from blog.utils import sha256_text


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True, slots=True)
class Document:
    """Immutable blog post.

    Holds the front matter fields a site generator reads plus the body
    text. The record has no behavior beyond conversion helpers; edits
    happen in the source file.

    Attributes:
        title: Post title
        date: Publication timestamp
        category: Category name
        slug: URL-safe identifier (e.g., "python-metaclasses")
        body: Markup body following the front matter
        modified: Last modification timestamp (optional)
        tags: Set of tags
        authors: Authors in the order given; ``author`` is the first
        summary: Short summary shown in listings
        image: Header image path or URL (optional)
        series: Series name the post belongs to (optional)
        path: Source path relative to the content root (optional)
        metadata: Raw front matter mapping with lower-cased keys
    """

    title: str
    date: datetime
    category: str
    slug: str
    body: str
    modified: datetime | None = None
    tags: frozenset[str] = frozenset()
    authors: tuple[str, ...] = ()
    summary: str = ""
    image: str | None = None
    series: str | None = None
    path: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def author(self) -> str:
        return self.authors[0] if self.authors else ""

    @property
    def checksum(self) -> str:
        """SHA-256 of the body, used for change detection."""
        return sha256_text(self.body)

    @classmethod
    def from_metadata(
        cls, metadata: dict[str, Any], body: str, path: str | None = None
    ) -> "Document":
        """Create a document from parsed front matter.

        Keys are matched case-insensitively. Required fields that are
        missing are stored as empty strings so the linter can report them;
        a missing or unparseable ``Date`` raises ``FrontMatterError``.
        """
        meta = {str(key).lower(): value for key, value in metadata.items()}
        modified = meta.get("modified")
        authors = meta.get("authors", meta.get("author"))

        return cls(
            title=_text(meta.get("title")),
            date=parse_date(meta.get("date"), path),
            category=_text(meta.get("category")),
            slug=_text(meta.get("slug")),
            body=body,
            modified=parse_date(modified, path) if modified not in (None, "") else None,
            tags=frozenset(split_list(meta.get("tags"))),
            authors=split_list(authors),
            summary=_text(meta.get("summary")),
            image=_text(meta.get("image")) or None,
            series=_text(meta.get("series")) or None,
            path=path,
            metadata=meta,
        )

    def to_dict(self) -> dict:
        """Convert document to a JSON-friendly dictionary."""
        return {
            "title": self.title,
            "date": self.date.isoformat(),
            "modified": self.modified.isoformat() if self.modified else None,
            "category": self.category,
            "tags": sorted(self.tags),
            "authors": list(self.authors),
            "slug": self.slug,
            "summary": self.summary,
            "image": self.image,
            "series": self.series,
            "path": self.path,
            "body": self.body,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Document":
        """Create document from dictionary (JSONL format).

        Args:
            data: Dictionary with document fields

        Returns:
            Document instance
        """
        modified = data.get("modified")
        return cls(
            title=data["title"],
            date=datetime.fromisoformat(data["date"]),
            category=data["category"],
            slug=data["slug"],
            body=data.get("body", ""),
            modified=datetime.fromisoformat(modified) if modified else None,
            tags=frozenset(data.get("tags", [])),
            authors=tuple(data.get("authors", [])),
            summary=data.get("summary", ""),
            image=data.get("image"),
            series=data.get("series"),
            path=data.get("path"),
        )
