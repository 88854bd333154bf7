"""Cookie records produced from Set-Cookie headers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class SameSite(str, Enum):
    """Canonical SameSite attribute values."""

    NONE = "None"
    LAX = "Lax"
    STRICT = "Strict"


@dataclass
class CookieRecord:
    """
    One cookie ready to be installed into a browser cookie jar.

    A finalized record carries exactly one of ``domain`` or ``url``.
    Host-only cookies use ``url`` (origin + path), domain cookies use
    ``domain`` (lower-cased, no leading dot).

    Attributes:
        name: Cookie name (never empty)
        value: Cookie value with one layer of matching quotes removed
        domain: Domain attribute for domain cookies
        path: Cookie path, defaults to "/"
        secure: Secure flag
        http_only: HttpOnly flag
        same_site: SameSite attribute, None when unset
        url: Origin + path for host-only cookies
    """

    name: str
    value: str
    domain: Optional[str] = None
    path: str = "/"
    secure: bool = False
    http_only: bool = False
    same_site: Optional[SameSite] = None
    url: Optional[str] = None

    @property
    def host_only(self) -> bool:
        return self.url is not None

    def to_browser_cookie(self) -> dict[str, Any]:
        """
        Build the dict accepted by Playwright's ``BrowserContext.add_cookies``.

        Playwright refuses ``url`` together with ``path``, so host-only
        cookies rely on the path embedded in their url.
        """
        cookie: dict[str, Any] = {"name": self.name, "value": self.value}

        if self.url is not None:
            cookie["url"] = self.url
        else:
            cookie["domain"] = self.domain
            cookie["path"] = self.path

        cookie["secure"] = self.secure
        cookie["httpOnly"] = self.http_only
        if self.same_site is not None:
            cookie["sameSite"] = self.same_site.value

        return cookie
