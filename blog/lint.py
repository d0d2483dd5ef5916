"""Content checks for blog posts.

Checks run on the front matter and the body text only; nothing is
rendered. A post passes when it has every required field, a URL-safe
slug, syntactically valid links and balanced code fences.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable
from urllib.parse import urlsplit

from blog.collection import find_duplicate_slugs, relative_path
from blog.config import LintConfig
from blog.domain.document import Document
from blog.exceptions import FrontMatterError
from blog.frontmatter import split_document
from blog.utils import is_valid_slug, slugify

logger = logging.getLogger(__name__)

ERROR = "error"
WARNING = "warning"

_fence_re = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
_code_span_re = re.compile(r"(`+)(?:(?!\1).)+?\1")
_inline_link_re = re.compile(r"\[(?:[^\[\]\\]|\\.)*\]\((?P<target>[^)]*)\)")
_titled_re = re.compile(r"^(?P<url>\S+)\s+(?:\"[^\"]*\"|'[^']*')$")
_autolink_re = re.compile(r"<(?P<url>[A-Za-z][A-Za-z0-9+.-]{1,31}:[^<>\s]*)>")
_reference_re = re.compile(r"^ {0,3}\[(?P<label>[^\]]+)\]:\s*<?(?P<url>[^\s>]*)>?")
_host_schemes = {"http", "https", "ftp"}


@dataclass(frozen=True)
class LintIssue:
    code: str
    message: str
    severity: str = ERROR
    line: int | None = None

    def format(self, path: str | None = None) -> str:
        location = path or ""
        if self.line:
            location = f"{location}:{self.line}"
        prefix = f"{location}: " if location else ""
        return f"{prefix}{self.severity}: {self.message} [{self.code}]"


@dataclass
class LintReport:
    results: dict[str, list[LintIssue]] = field(default_factory=dict)
    strict: bool = False

    def add(self, path: str, issues: Iterable[LintIssue]) -> None:
        self.results.setdefault(path, []).extend(issues)

    @property
    def errors(self) -> int:
        return sum(1 for issues in self.results.values() for i in issues if i.severity == ERROR)

    @property
    def warnings(self) -> int:
        return sum(1 for issues in self.results.values() for i in issues if i.severity == WARNING)

    @property
    def ok(self) -> bool:
        if self.strict:
            return self.errors == 0 and self.warnings == 0
        return self.errors == 0


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, frozenset)):
        return not value
    return False


def check_required(values: dict[str, Any], required: Iterable[str]) -> list[LintIssue]:
    return [
        LintIssue("missing-field", f"required field '{name}' is missing or empty")
        for name in required
        if _is_empty(values.get(name.lower()))
    ]


def check_slug(slug: str) -> list[LintIssue]:
    if not slug or is_valid_slug(slug):
        return []
    return [
        LintIssue(
            "invalid-slug",
            f"slug {slug!r} must contain only lowercase letters, digits and single hyphens"
            f" (try {slugify(slug)!r})",
        )
    ]


def check_url(url: str, config: LintConfig) -> str | None:
    """Return a description of what is wrong with a link target, or None."""
    if not url:
        return "empty link target"
    if any(ch.isspace() for ch in url):
        return f"link {url!r} contains whitespace"

    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError for a malformed port
    except ValueError as e:
        return f"link {url!r} is not a valid URL ({e})"

    if not parts.scheme:
        if not config.allow_relative_links:
            return f"relative link {url!r} is not allowed"
        return None

    scheme = parts.scheme.lower()
    allowed = {s.lower() for s in config.allowed_schemes}
    if scheme not in allowed:
        return f"link {url!r} uses scheme '{scheme}' which is not allowed"
    if scheme in _host_schemes and not parts.hostname:
        return f"link {url!r} has no host"
    if scheme == "mailto" and "@" not in parts.path:
        return f"link {url!r} has no address"
    return None


def iter_text_lines(body: str) -> Iterable[tuple[int, str]]:
    """Yield (line number, text) for lines outside fenced code, code spans removed."""
    open_fence = None
    for number, line in enumerate(body.splitlines(), start=1):
        match = _fence_re.match(line)
        if open_fence is None:
            if match:
                open_fence = match.group("fence")
                continue
            yield number, _code_span_re.sub("", line)
        elif match and _closes(open_fence, match):
            open_fence = None


def _link_target(raw: str) -> str:
    """Strip angle brackets and an optional title from an inline link destination."""
    target = raw.strip()
    if target.startswith("<") and ">" in target:
        return target[1 : target.index(">")]
    titled = _titled_re.match(target)
    if titled:
        return titled.group("url")
    return target


def extract_links(body: str) -> list[tuple[int, str]]:
    links = []
    for number, line in iter_text_lines(body):
        reference = _reference_re.match(line)
        if reference:
            links.append((number, reference.group("url")))
            continue
        for match in _inline_link_re.finditer(line):
            links.append((number, _link_target(match.group("target"))))
        for match in _autolink_re.finditer(line):
            links.append((number, match.group("url")))
    return links


def check_links(body: str, config: LintConfig) -> list[LintIssue]:
    issues = []
    for number, url in extract_links(body):
        problem = check_url(url, config)
        if problem:
            issues.append(LintIssue("invalid-link", problem, line=number))
    return issues


def _closes(open_fence: str, match: re.Match) -> bool:
    fence = match.group("fence")
    return (
        fence[0] == open_fence[0]
        and len(fence) >= len(open_fence)
        and not match.group("info").strip()
    )


def check_fences(body: str) -> list[LintIssue]:
    open_fence = None
    open_line = 0
    for number, line in enumerate(body.splitlines(), start=1):
        match = _fence_re.match(line)
        if not match:
            continue
        if open_fence is None:
            open_fence, open_line = match.group("fence"), number
        elif _closes(open_fence, match):
            open_fence = None
    if open_fence is not None:
        return [LintIssue("render", f"code fence '{open_fence}' is never closed", line=open_line)]
    return []


def check_body(body: str, config: LintConfig) -> list[LintIssue]:
    if not body.strip():
        return [LintIssue("empty-body", "document body is empty", WARNING)]
    return check_fences(body) + check_links(body, config)


def _document_values(document: Document) -> dict[str, Any]:
    values = dict(document.metadata)
    values.update(
        {
            "title": document.title,
            "date": document.date,
            "category": document.category,
            "slug": document.slug,
            "summary": document.summary,
            "tags": document.tags,
            "authors": document.authors,
        }
    )
    if document.modified is not None:
        values["modified"] = document.modified
    return values


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are read as UTC so they compare with offset ones
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def lint_document(document: Document, config: LintConfig | None = None) -> list[LintIssue]:
    """Check a loaded document. Line numbers are relative to the body."""
    config = config or LintConfig()
    issues = check_required(_document_values(document), config.required_fields)
    issues += check_slug(document.slug)
    if document.modified is not None and _as_utc(document.modified) < _as_utc(document.date):
        issues.append(
            LintIssue("modified-before-date", "'Modified' is earlier than 'Date'", WARNING)
        )
    issues += check_body(document.body, config)
    return issues


def _header_lines(text: str, body: str) -> int:
    return len(text.splitlines()) - len(body.splitlines())


def lint_text(text: str, config: LintConfig | None = None, path: str | None = None):
    """Check raw file content.

    Returns:
        Tuple of (issues with file line numbers, Document or None)
    """
    config = config or LintConfig()
    try:
        metadata, body = split_document(text, path)
    except FrontMatterError as e:
        return [LintIssue("render", e.reason, line=e.line)], None

    try:
        document = Document.from_metadata(metadata, body, path=path)
    except FrontMatterError as e:
        # The date is unusable; report what can still be checked
        issues = check_required(metadata, config.required_fields)
        if metadata.get("date") not in (None, ""):
            issues.append(LintIssue("invalid-date", e.reason))
        issues += check_slug(str(metadata.get("slug") or "").strip())
        issues += check_body(body, config)
        document = None
    else:
        issues = lint_document(document, config)

    offset = _header_lines(text, body)
    issues = [replace(i, line=i.line + offset) if i.line else i for i in issues]
    return issues, document


def lint_path(path: str | Path, config: LintConfig | None = None, root: Path | None = None):
    """Lint one file. Parse failures become issues and are never raised."""
    path = Path(path)
    rel = relative_path(path, root)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        logger.warning("Cannot decode %s: %s", rel, e)
        return [LintIssue("render", f"file is not valid UTF-8 ({e.reason} at byte {e.start})")], None
    issues, document = lint_text(text, config, rel)
    logger.debug("Linted %s: %d issue(s)", rel, len(issues))
    return issues, document


def lint_paths(paths: Iterable[str | Path], config: LintConfig | None = None) -> LintReport:
    """Lint several files and report slugs shared between them."""
    config = config or LintConfig()
    report = LintReport(strict=config.strict)
    documents = []
    seen = set()

    for path in paths:
        key = Path(path).resolve()
        if key in seen:
            continue
        seen.add(key)
        issues, document = lint_path(path, config)
        report.add(str(path), issues)
        if document is not None:
            documents.append(replace(document, path=str(path)))

    for slug, owners in find_duplicate_slugs(documents).items():
        for owner in owners:
            others = ", ".join(p for p in owners if p != owner)
            report.add(owner, [LintIssue("duplicate-slug", f"slug {slug!r} is also used by {others}")])

    if not report.ok:
        logger.info("Lint found %d error(s), %d warning(s)", report.errors, report.warnings)
    return report
