"""Domain entities for blog content."""

from blog.domain.document import Document

__all__ = ["Document"]
