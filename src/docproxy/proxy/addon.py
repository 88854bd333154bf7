"""mitmproxy addon that serves browser-rendered HTML."""

from __future__ import annotations

import logging

from mitmproxy import http

from .guards import is_credentialed_self_reference
from .renderer import PageRenderer

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPE = "text/html"


def is_html_response(response: http.Response) -> bool:
    """Check the media type of a response, ignoring parameters."""
    content_type = response.headers.get("content-type", "")
    return content_type.split(";")[0].strip().lower() == HTML_CONTENT_TYPE


class RenderAddon:
    """
    Replace HTML response bodies with the page as rendered by a browser.

    Cookies set by the intercepted response are installed into the
    rendering browser context first, so the rendered page sees the same
    session as the client. If rendering fails the original response is
    passed through untouched.

    Example:
        async with BrowserPool() as pool:
            master.addons.add(RenderAddon(PageRenderer(pool)))
    """

    def __init__(self, renderer: PageRenderer, block_credentialed_urls: bool = True) -> None:
        """
        Initialize the addon.

        Args:
            renderer: Page renderer backed by an owned browser pool
            block_credentialed_urls: Answer 404 to credentialed self-references
        """
        self._renderer = renderer
        self._block_credentialed = block_credentialed_urls

    def request(self, flow: http.HTTPFlow) -> None:
        """Short-circuit requests that embed credentials for their own host."""
        if not self._block_credentialed:
            return

        url = flow.request.pretty_url
        if is_credentialed_self_reference(url, flow.request.host):
            logger.info(f"Blocking credentialed self-reference: {flow.request.host}")
            flow.response = http.Response.make(
                404,
                b"",
                {"Content-Type": HTML_CONTENT_TYPE},
            )

    async def response(self, flow: http.HTTPFlow) -> None:
        """Render HTML responses in the browser and swap in the result."""
        response = flow.response
        if response is None or not is_html_response(response):
            return

        request = flow.request
        html = await self._renderer.render(
            request.pretty_url,
            response.headers.get_all("set-cookie"),
            request.scheme,
            request.host,
        )
        if html is None:
            return

        # Encodes per the declared charset; switches the header to utf-8 if it cannot
        response.text = html

    def error(self, flow: http.HTTPFlow) -> None:
        """Log flows that failed upstream."""
        logger.warning(f"Flow error for {flow.request.pretty_url}: {flow.error}")
