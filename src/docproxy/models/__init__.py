"""Configuration models for docproxy."""

from .config import BrowserConfig, ConvertConfig, DocproxyConfig, ProxyConfig

__all__ = [
    "DocproxyConfig",
    "ConvertConfig",
    "ProxyConfig",
    "BrowserConfig",
]
