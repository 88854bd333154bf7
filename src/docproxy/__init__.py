"""
docproxy - Browser-rendering proxy rules and HTML to Markdown conversion.

Usage:
    from docproxy import map_set_cookie, rewrite_links, LinkMode

    records = map_set_cookie("sid=abc; Path=/; Secure", "https", "example.com")
    markdown = rewrite_links("[Intro](intro.html)", LinkMode.MARKDOWN, "html", "md")
"""

__version__ = "1.0.0"

from .conversion import (
    ConversionStats,
    HtmlToMarkdown,
    LinkKind,
    LinkMode,
    classify_link,
    convert_path,
    rewrite_links,
    sanitize_markup,
)
from .cookies import CookieRecord, SameSite, install_cookies, map_set_cookie
from .models.config import BrowserConfig, ConvertConfig, DocproxyConfig, ProxyConfig

__all__ = [
    "__version__",
    # Cookies
    "CookieRecord",
    "SameSite",
    "map_set_cookie",
    "install_cookies",
    # Conversion
    "LinkMode",
    "LinkKind",
    "classify_link",
    "rewrite_links",
    "sanitize_markup",
    "HtmlToMarkdown",
    "ConversionStats",
    "convert_path",
    # Config
    "DocproxyConfig",
    "ConvertConfig",
    "ProxyConfig",
    "BrowserConfig",
]
