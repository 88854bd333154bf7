"""Installing cookie records into a browser cookie store."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol

from .models import CookieRecord

logger = logging.getLogger(__name__)


class CookieStore(Protocol):
    """
    Protocol for a browser-session cookie jar.

    Playwright's ``BrowserContext`` satisfies it directly.
    """

    async def add_cookies(self, cookies: Sequence[Any]) -> None:
        """Install cookies, rejecting the whole batch on any invalid entry."""
        ...


async def install_cookies(store: CookieStore, records: Sequence[CookieRecord]) -> int:
    """
    Install cookie records, falling back to one-by-one installation.

    The bulk call is attempted first. If the store rejects the batch,
    every record is retried individually and per-record failures are
    logged, never raised.

    Args:
        store: Target cookie store
        records: Records produced by ``map_set_cookie``

    Returns:
        Number of records installed
    """
    if not records:
        return 0

    cookies = [record.to_browser_cookie() for record in records]
    logger.debug(f"Setting {len(cookies)} cookies: {[c['name'] for c in cookies]}")

    try:
        await store.add_cookies(cookies)
        return len(cookies)
    except Exception as e:
        logger.warning(f"Bulk cookie install failed, retrying individually: {e}")

    installed = 0
    for cookie in cookies:
        try:
            await store.add_cookies([cookie])
            installed += 1
        except Exception as e:
            logger.warning(f"Failed to set cookie {cookie['name']}: {e}")

    return installed
