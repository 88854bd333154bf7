"""HTML to Markdown conversion."""

from __future__ import annotations

import logging
import re

import html2text

from .links import LinkMode, rewrite_links
from .sanitizer import sanitize_markup

logger = logging.getLogger(__name__)


class HtmlToMarkdown:
    """
    Converts HTML documents to Markdown with cross-document links kept local.

    The pipeline is: strip styles and scripts, rewrite relative
    ``.{source_ext}`` hrefs, convert with html2text, tidy the output,
    then rewrite any remaining relative Markdown links.

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert('<a href="intro.html">Intro</a>')
        # "[Intro](intro.md)\\n"
    """

    def __init__(
        self,
        source_ext: str = "html",
        target_ext: str = "md",
        body_width: int = 0,
        ignore_images: bool = False,
        ignore_tables: bool = False,
    ):
        """
        Initialize the Markdown converter.

        Args:
            source_ext: Extension of linked source documents
            target_ext: Extension of converted documents
            body_width: Max line width (0 = no wrapping)
            ignore_images: Skip image conversion
            ignore_tables: Skip table conversion
        """
        self.source_ext = source_ext
        self.target_ext = target_ext
        self._body_width = body_width
        self._ignore_images = ignore_images
        self._ignore_tables = ignore_tables

    def _build_converter(self) -> html2text.HTML2Text:
        """Create an html2text parser (instances keep output between calls)."""
        converter = html2text.HTML2Text()

        # Line width (0 = no wrapping for consistent output)
        converter.body_width = self._body_width

        # Inline [text](url) links, left relative
        converter.inline_links = True
        converter.wrap_links = False
        converter.protect_links = False

        # ATX headings are html2text's default; match bullet and emphasis marks
        converter.ul_item_mark = "-"
        converter.emphasis_mark = "*"
        converter.strong_mark = "**"

        # Content handling
        converter.ignore_images = self._ignore_images
        converter.ignore_tables = self._ignore_tables
        converter.unicode_snob = True
        converter.default_image_alt = ""
        converter.single_line_break = False

        return converter

    def _clean_output(self, markdown: str) -> str:
        """Clean up the converted Markdown."""
        # Remove trailing whitespace on each line (html2text ends <br> with two spaces)
        markdown = "\n".join(line.rstrip() for line in markdown.split("\n"))

        # Remove excessive blank lines
        markdown = re.sub(r"\n{3,}", "\n\n", markdown)

        # Ensure single newline at end
        return markdown.strip() + "\n"

    def prepare(self, html: str) -> str:
        """Sanitize HTML and rewrite its relative hrefs."""
        cleaned = sanitize_markup(html)
        return rewrite_links(cleaned, LinkMode.HTML, self.source_ext, self.target_ext)

    def convert(self, html: str) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML content string

        Returns:
            Markdown string, or "" if conversion failed
        """
        try:
            markdown = self._build_converter().handle(self.prepare(html))
            markdown = self._clean_output(markdown)
            return rewrite_links(markdown, LinkMode.MARKDOWN, self.source_ext, self.target_ext)

        except Exception as e:
            logger.error(f"Failed to convert HTML to Markdown: {e}")
            return ""
