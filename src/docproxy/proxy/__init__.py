"""Intercepting proxy that serves browser-rendered pages."""

from .addon import RenderAddon, is_html_response
from .guards import is_credentialed_self_reference
from .renderer import PageRenderer
from .server import run_proxy

__all__ = [
    "RenderAddon",
    "PageRenderer",
    "is_credentialed_self_reference",
    "is_html_response",
    "run_proxy",
]
