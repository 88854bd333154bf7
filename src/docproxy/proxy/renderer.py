"""Re-rendering intercepted HTML pages in a headless browser."""

from __future__ import annotations

import logging
from typing import Optional

from ..browser.pool import BrowserPool
from ..cookies import install_cookies, map_set_cookie
from ..cookies.parser import SetCookieValue

logger = logging.getLogger(__name__)


class PageRenderer:
    """
    Render a URL in the browser with the response's cookies applied.

    The pool is injected and owned by the caller, which also handles
    browser reconnection.

    Example:
        async with BrowserPool() as pool:
            renderer = PageRenderer(pool)
            html = await renderer.render(url, set_cookie, "https", "example.com")
    """

    def __init__(
        self,
        pool: BrowserPool,
        wait_until: str = "networkidle",
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize the renderer.

        Args:
            pool: Initialized browser pool
            wait_until: Wait condition ('load', 'domcontentloaded', 'networkidle')
            timeout: Navigation timeout (seconds)
        """
        self._pool = pool
        self._wait_until = wait_until
        self._timeout = timeout * 1000

    async def render(
        self,
        url: str,
        set_cookie: SetCookieValue,
        scheme: str,
        host: str,
    ) -> Optional[str]:
        """
        Render a page and return its final HTML.

        Args:
            url: URL to navigate to
            set_cookie: Set-Cookie header value(s) from the intercepted response
            scheme: Scheme of the intercepted request
            host: Host name of the intercepted request

        Returns:
            Rendered HTML, or None if rendering failed
        """
        try:
            async with self._pool.acquire() as page:
                records = map_set_cookie(set_cookie, scheme, host)
                if records:
                    await install_cookies(page.context, records)

                await page.goto(
                    url,
                    wait_until=self._wait_until,  # type: ignore[arg-type]
                    timeout=self._timeout,
                )
                content: str = await page.content()

        except Exception as e:
            logger.error(f"Failed to render url {url}: {e}")
            return None

        logger.debug(f"Rendered {url}: {len(content)} chars")
        return content
