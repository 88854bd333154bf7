"""Running the rendering proxy on mitmproxy."""

from __future__ import annotations

import logging

from mitmproxy import options
from mitmproxy.tools.dump import DumpMaster

from ..browser.pool import BrowserPool
from ..models.config import ProxyConfig
from .addon import RenderAddon
from .renderer import PageRenderer

logger = logging.getLogger(__name__)


async def run_proxy(config: ProxyConfig) -> None:
    """
    Serve the rendering proxy until cancelled.

    Owns the browser pool for the lifetime of the proxy and closes it,
    together with mitmproxy, on exit.

    Args:
        config: Proxy and browser settings
    """
    browser = config.browser

    async with BrowserPool(
        max_pages=browser.max_pages,
        headless=browser.headless,
        user_agent=browser.user_agent,
        timeout=browser.timeout,
    ) as pool:
        renderer = PageRenderer(pool, wait_until=browser.wait_until, timeout=browser.timeout)

        opts = options.Options()
        master = DumpMaster(opts, with_termlog=False, with_dumper=False)
        opts.update(
            listen_host=config.listen_host,
            listen_port=config.listen_port,
            ssl_insecure=config.ssl_insecure,
        )
        master.addons.add(RenderAddon(renderer, block_credentialed_urls=config.block_credentialed_urls))

        logger.info(f"Proxy listening on {config.listen_host}:{config.listen_port}")
        try:
            await master.run()
        finally:
            master.shutdown()
            logger.info("Proxy stopped")
