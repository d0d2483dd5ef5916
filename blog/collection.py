"""Loading and exporting the posts under the content roots."""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Iterable, Iterator

from blog.config import AppConfig
from blog.domain.document import Document
from blog.exceptions import FrontMatterError
from blog.frontmatter import split_document

logger = logging.getLogger(__name__)


def iter_content_files(roots: Iterable[str | Path], extensions: Iterable[str]) -> Iterator[Path]:
    """Yield content files under each root, sorted per root, each file once."""
    suffixes = {ext.lower() for ext in extensions}
    seen = set()
    for root in roots:
        root = Path(root)
        if root.is_file():
            if root.suffix.lower() in suffixes and root.resolve() not in seen:
                seen.add(root.resolve())
                yield root
            continue
        if not root.is_dir():
            logger.warning("Content root does not exist: %s", root)
            continue
        for path in sorted(root.rglob("*")):
            if path.is_file() and path.suffix.lower() in suffixes and path.resolve() not in seen:
                seen.add(path.resolve())
                yield path


def relative_path(path: Path, root: Path | None) -> str:
    if root is None:
        return path.as_posix()
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def load_document(path: str | Path, root: str | Path | None = None) -> Document:
    """Read a post from disk.

    Args:
        path: File to read
        root: Content root the stored path is made relative to

    Returns:
        Document instance

    Raises:
        FrontMatterError: If the front matter is malformed
    """
    path = Path(path)
    rel = relative_path(path, Path(root) if root is not None else None)
    text = path.read_text(encoding="utf-8")
    metadata, body = split_document(text, rel)
    document = Document.from_metadata(metadata, body, path=rel)
    logger.debug("Loaded %s (slug=%s)", rel, document.slug)
    return document


def load_collection(config: AppConfig) -> list[Document]:
    """Load every post under the configured content roots.

    Files with malformed front matter are skipped with a warning; use the
    linter to get a full report.
    """
    documents = []
    loaded = set()
    for root in config.content.content_roots:
        root_path = Path(root)
        base = root_path if root_path.is_dir() else root_path.parent
        for path in iter_content_files([root_path], config.content.file_extensions):
            if path.resolve() in loaded:
                continue
            loaded.add(path.resolve())
            try:
                documents.append(load_document(path, base))
            except (FrontMatterError, UnicodeDecodeError) as e:
                logger.warning("Skipping %s: %s", path, e)
    return documents


def find_duplicate_slugs(documents: Iterable[Document]) -> dict[str, list[str]]:
    """Map each slug used by more than one document to the paths using it."""
    by_slug: dict[str, list[str]] = defaultdict(list)
    for document in documents:
        if document.slug:
            by_slug[document.slug].append(document.path or "<memory>")
    return {slug: paths for slug, paths in by_slug.items() if len(paths) > 1}


def export_jsonl(documents: Iterable[Document], output_path: str | Path) -> int:
    """Write one JSON record per document.

    Returns:
        Number of records written

    Raises:
        ValueError: If two documents share a slug; nothing is written
    """
    documents = list(documents)
    duplicates = find_duplicate_slugs(documents)
    if duplicates:
        listing = "; ".join(f"{slug}: {', '.join(paths)}" for slug, paths in sorted(duplicates.items()))
        raise ValueError(f"Duplicate slugs: {listing}")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with output_path.open("w", encoding="utf-8") as handle:
        for document in documents:
            record = {
                "id": document.slug,
                "path": document.path,
                "title": document.title,
                "checksum": document.checksum,
                "content": document.body,
                "frontmatter": _frontmatter_record(document),
            }
            handle.write(json.dumps(record, ensure_ascii=False) + "\n")
            count += 1

    logger.info("Exported %d document(s) to %s", count, output_path)
    return count


def _frontmatter_record(document: Document) -> dict:
    data = document.to_dict()
    data.pop("body")
    data.pop("path")
    return data
