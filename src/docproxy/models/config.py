"""Pydantic configuration models for docproxy."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


class ConvertConfig(BaseModel):
    """Configuration for HTML to Markdown conversion."""

    source_ext: str = Field("html", min_length=1, description="Extension of source documents")
    target_ext: str = Field("md", min_length=1, description="Extension of converted documents")
    body_width: int = Field(0, ge=0, description="Markdown line width (0 = no wrapping)")
    ignore_images: bool = Field(False, description="Drop images from the output")
    ignore_tables: bool = Field(False, description="Drop tables from the output")

    model_config = {"extra": "forbid"}

    @field_validator("source_ext", "target_ext")
    @classmethod
    def _strip_dot(cls, v: str) -> str:
        return v[1:] if v.startswith(".") else v


class BrowserConfig(BaseModel):
    """Configuration for the headless browser used to render pages."""

    headless: bool = Field(True, description="Run Chromium without a window")
    max_pages: int = Field(5, ge=1, description="Maximum pages rendered concurrently")
    timeout: float = Field(30.0, gt=0, description="Navigation timeout in seconds")
    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = Field(
        "networkidle",
        description="Navigation condition considered finished",
    )
    user_agent: Optional[str] = Field(None, description="Custom User-Agent for rendered pages")

    model_config = {"extra": "forbid"}


class ProxyConfig(BaseModel):
    """Configuration for the intercepting proxy."""

    listen_host: str = Field("127.0.0.1", description="Address the proxy binds to")
    listen_port: int = Field(8001, ge=1, le=65535, description="Port the proxy listens on")
    ssl_insecure: bool = Field(True, description="Skip upstream certificate verification")
    block_credentialed_urls: bool = Field(
        True,
        description="Answer 404 to URLs embedding credentials for their own host",
    )
    browser: BrowserConfig = Field(default_factory=BrowserConfig)

    model_config = {"extra": "forbid"}


class DocproxyConfig(BaseModel):
    """
    Root configuration model for docproxy.

    YAML format:
        convert:
          source_ext: html
          target_ext: md
        proxy:
          listen_port: 8001
          browser:
            max_pages: 3
        log_level: DEBUG
    """

    convert: ConvertConfig = Field(default_factory=ConvertConfig)
    proxy: ProxyConfig = Field(default_factory=ProxyConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "DocproxyConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "DocproxyConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
