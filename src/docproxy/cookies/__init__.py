"""Set-Cookie parsing and browser cookie installation for docproxy."""

from .installer import CookieStore, install_cookies
from .models import CookieRecord, SameSite
from .parser import HOST_PREFIX, SECURE_PREFIX, map_set_cookie, parse_set_cookie_line

__all__ = [
    # Models
    "CookieRecord",
    "SameSite",
    # Parsing
    "map_set_cookie",
    "parse_set_cookie_line",
    "SECURE_PREFIX",
    "HOST_PREFIX",
    # Installation
    "CookieStore",
    "install_cookies",
]
