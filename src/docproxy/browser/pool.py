"""Browser page pool for rendering intercepted pages."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from types import TracebackType
from typing import Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

logger = logging.getLogger(__name__)

LAUNCH_ARGS = ["--start-maximized"]


class BrowserPool:
    """
    Owned handle on a Chromium instance that hands out isolated pages.

    Every acquisition gets a fresh browser context, so cookies installed
    for one render never leak into another. If the browser process
    disconnects unexpectedly it is relaunched; renders in flight at that
    moment fail and are handled by their callers.

    Example:
        async with BrowserPool(max_pages=5) as pool:
            async with pool.acquire() as page:
                await page.context.add_cookies(cookies)
                await page.goto("https://example.com")
                html = await page.content()
    """

    def __init__(
        self,
        max_pages: int = 5,
        headless: bool = True,
        user_agent: Optional[str] = None,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize the browser pool.

        Args:
            max_pages: Maximum number of pages open at once
            headless: Run browser in headless mode
            user_agent: Custom user agent string
            timeout: Default timeout for page operations (seconds)
        """
        self._max_pages = max_pages
        self._headless = headless
        self._user_agent = user_agent
        self._timeout = timeout * 1000  # Convert to milliseconds

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._semaphore: asyncio.Semaphore | None = None
        self._relaunching: asyncio.Task[None] | None = None
        self._closing = False
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def _launch(self) -> None:
        if self._playwright is None:
            raise RuntimeError("Playwright not started")
        self._browser = await self._playwright.chromium.launch(
            headless=self._headless,
            args=LAUNCH_ARGS,
        )
        self._browser.on("disconnected", self._on_disconnected)

    def _on_disconnected(self, browser: Browser) -> None:
        if self._closing:
            return
        logger.warning("Browser disconnected, relaunching")
        self._browser = None
        self._relaunching = asyncio.ensure_future(self._launch())

    async def _ready_browser(self) -> Browser:
        """Return the live browser, launching a new one if the last attempt failed."""
        if self._browser is None and self._relaunching is None:
            if self._closing or self._playwright is None:
                raise RuntimeError("Browser not initialized")
            self._relaunching = asyncio.ensure_future(self._launch())

        relaunching = self._relaunching
        if relaunching is not None:
            try:
                await relaunching
            finally:
                # A failed launch is not reused; the next caller starts a fresh one
                if self._relaunching is relaunching:
                    self._relaunching = None

        if self._browser is None:
            raise RuntimeError("Browser not initialized")
        return self._browser

    async def _create_context(self) -> BrowserContext:
        """Create a new isolated browser context."""
        context_options: dict[str, object] = {
            "no_viewport": True,
            "java_script_enabled": True,
            "ignore_https_errors": True,
        }

        if self._user_agent:
            context_options["user_agent"] = self._user_agent

        browser = await self._ready_browser()
        context = await browser.new_context(**context_options)  # type: ignore[arg-type]
        context.set_default_timeout(self._timeout)
        return context

    async def __aenter__(self) -> BrowserPool:
        """Enter async context and launch the browser."""
        self._closing = False
        self._playwright = await async_playwright().start()
        await self._launch()
        self._semaphore = asyncio.Semaphore(self._max_pages)

        self._initialized = True
        logger.info(f"Browser pool initialized with {self._max_pages} pages")
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and cleanup resources."""
        self._closing = True

        if self._relaunching is not None:
            with contextlib.suppress(Exception):
                await self._relaunching
            self._relaunching = None

        # Close browser
        if self._browser:
            try:
                await self._browser.close()
            except Exception as e:
                logger.debug(f"Error closing browser: {e}")
            self._browser = None

        # Stop playwright
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        self._initialized = False
        logger.info("Browser pool shut down")

    def acquire(self) -> PageLease:
        """
        Acquire a page from the pool.

        Returns a context manager that provides a Page object in its own
        browser context.
        """
        if not self._initialized:
            raise RuntimeError("Browser pool not initialized. Use 'async with' context.")
        return PageLease(self)


class PageLease:
    """Context manager for acquiring a page from the pool."""

    def __init__(self, pool: BrowserPool) -> None:
        self._pool = pool
        self._context: BrowserContext | None = None
        self._acquired = False

    async def __aenter__(self) -> Page:
        """Wait for a free slot, then open a context and page."""
        semaphore = self._pool._semaphore
        if semaphore is None:
            raise RuntimeError("Pool not initialized")
        await semaphore.acquire()
        self._acquired = True

        try:
            self._context = await self._pool._create_context()
            return await self._context.new_page()
        except BaseException:
            await self._release()
            raise

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the context (and its pages) and free the slot."""
        await self._release()

    async def _release(self) -> None:
        if self._context is not None:
            with contextlib.suppress(Exception):
                await self._context.close()
            self._context = None

        if self._acquired and self._pool._semaphore is not None:
            self._pool._semaphore.release()
            self._acquired = False
