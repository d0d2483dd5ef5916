"""Blog content and the tools that check it."""

__version__ = "0.1.0"

from blog.domain.document import Document
from blog.exceptions import FrontMatterError
from blog.frontmatter import split_document
from blog.collection import load_document, load_collection
from blog.lint import LintIssue, LintReport, lint_document, lint_path, lint_paths

__all__ = [
    "Document",
    "FrontMatterError",
    "split_document",
    "load_document",
    "load_collection",
    "LintIssue",
    "LintReport",
    "lint_document",
    "lint_path",
    "lint_paths",
]
