"""Relative link rewriting between document extensions."""

from __future__ import annotations

import re
from enum import Enum
from functools import lru_cache


class LinkMode(str, Enum):
    """Kind of text being rewritten."""

    HTML = "html"
    MARKDOWN = "markdown"

    @classmethod
    def _missing_(cls, value: object) -> LinkMode | None:
        # "markup" names the generated lightweight-markup output
        if isinstance(value, str):
            lowered = value.lower()
            if lowered == "markup":
                return cls.MARKDOWN
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class LinkKind(str, Enum):
    """Classification of a link target."""

    FRAGMENT = "fragment"
    PROTOCOL_RELATIVE = "protocol_relative"
    SPECIAL_SCHEME = "special_scheme"
    ABSOLUTE = "absolute"
    OPAQUE_SCHEME = "opaque_scheme"
    RELATIVE = "relative"


# href="..." or href='...' with matching quotes; data-href, xlink:href and the like are skipped
HTML_HREF_PATTERN = re.compile(r"""(?<![\w:-])(href\s*=\s*)(?:"([^"]+)"|'([^']+)')""", re.IGNORECASE)

# Markdown inline links [text](url)
MARKDOWN_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

_SPECIAL_SCHEME = re.compile(r"^(?:mailto|tel|javascript):", re.IGNORECASE)
_ABSOLUTE = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)
_OPAQUE = re.compile(r"^[a-z][a-z0-9+.-]*:", re.IGNORECASE)

# Kinds left untouched in each mode
_PRESERVED = {
    LinkMode.HTML: frozenset(kind for kind in LinkKind if kind is not LinkKind.RELATIVE),
    LinkMode.MARKDOWN: frozenset({LinkKind.ABSOLUTE, LinkKind.SPECIAL_SCHEME, LinkKind.FRAGMENT}),
}


def classify_link(url: str) -> LinkKind:
    """Classify a link target by its leading characters."""
    if url.startswith("#"):
        return LinkKind.FRAGMENT
    if url.startswith("//"):
        return LinkKind.PROTOCOL_RELATIVE
    if _SPECIAL_SCHEME.match(url):
        return LinkKind.SPECIAL_SCHEME
    if _ABSOLUTE.match(url):
        return LinkKind.ABSOLUTE
    if _OPAQUE.match(url):
        return LinkKind.OPAQUE_SCHEME
    return LinkKind.RELATIVE


@lru_cache(maxsize=32)
def _extension_pattern(source_ext: str) -> re.Pattern[str]:
    return re.compile(r"\." + re.escape(source_ext) + r"(?=\Z|[?#])", re.IGNORECASE)


def _normalize_ext(ext: str) -> str:
    return ext[1:] if ext.startswith(".") else ext


def rewrite_extension(url: str, source_ext: str = "html", target_ext: str = "md") -> str:
    """
    Replace the first ".{source_ext}" that ends the path with ".{target_ext}".

    The match must sit at the end of the url or right before a query
    string or fragment, which are preserved.

    Examples:
        >>> rewrite_extension("guide/page.html?x=1#top")
        'guide/page.md?x=1#top'
        >>> rewrite_extension("page.html.bak")
        'page.html.bak'
    """
    source_ext = _normalize_ext(source_ext)
    target_ext = _normalize_ext(target_ext)
    return _extension_pattern(source_ext).sub("." + target_ext, url, count=1)


def rewrite_links(
    text: str,
    mode: LinkMode | str,
    source_ext: str = "html",
    target_ext: str = "md",
) -> str:
    """
    Rewrite relative links ending in source_ext to use target_ext.

    In HTML mode, href attributes are rewritten unless they carry a
    scheme, start with "//" or are fragment-only. In Markdown mode,
    inline link targets are rewritten unless they are absolute
    (scheme://), mailto:/tel:/javascript:, or fragment-only.

    Text that does not match a link pattern is returned verbatim.

    Args:
        text: HTML or Markdown text
        mode: Which link syntax to scan for ("markup" is accepted for Markdown)
        source_ext: Extension to replace (e.g. "html")
        target_ext: Replacement extension (e.g. "md")

    Returns:
        Text with rewritten links
    """
    mode = LinkMode(mode)
    preserved = _PRESERVED[mode]

    def rewrite(url: str) -> str:
        if classify_link(url) in preserved:
            return url
        return rewrite_extension(url, source_ext, target_ext)

    if mode is LinkMode.HTML:

        def replace_href(match: re.Match[str]) -> str:
            prefix = match.group(1)
            if match.group(2) is not None:
                return f'{prefix}"{rewrite(match.group(2))}"'
            return f"{prefix}'{rewrite(match.group(3))}'"

        return HTML_HREF_PATTERN.sub(replace_href, text)

    def replace_link(match: re.Match[str]) -> str:
        return f"[{match.group(1)}]({rewrite(match.group(2))})"

    return MARKDOWN_LINK_PATTERN.sub(replace_link, text)
