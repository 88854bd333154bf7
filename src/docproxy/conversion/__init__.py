"""Content conversion for docproxy (sanitizing, link rewriting, HTML to Markdown)."""

from .batch import ConversionStats, convert_file, convert_path, find_source_files, output_path_for
from .links import LinkKind, LinkMode, classify_link, rewrite_extension, rewrite_links
from .markdown import HtmlToMarkdown
from .protocols import MarkdownConverter
from .sanitizer import sanitize_markup

__all__ = [
    # Protocols
    "MarkdownConverter",
    # Text transforms
    "LinkMode",
    "LinkKind",
    "classify_link",
    "rewrite_extension",
    "rewrite_links",
    "sanitize_markup",
    # Implementations
    "HtmlToMarkdown",
    # Batch
    "ConversionStats",
    "convert_file",
    "convert_path",
    "find_source_files",
    "output_path_for",
]
