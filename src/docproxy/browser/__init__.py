"""Headless browser management for docproxy."""

from .pool import BrowserPool, PageLease

__all__ = ["BrowserPool", "PageLease"]
