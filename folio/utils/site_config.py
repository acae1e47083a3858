"""
Site configuration loading.

site.yaml is merged over the SiteConfig defaults with OmegaConf, so unknown
keys and mistyped values are rejected at load time. Directory settings are
resolved against the directory holding site.yaml.

Usage:
    from folio.utils.site_config import load_site_config

    config = load_site_config()                    # FOLIO_SITE_CONFIG or ./site.yaml
    config = load_site_config(Path("site.yaml"))
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException
from yaml import YAMLError

load_dotenv()
FOLIO_SITE_CONFIG = Path(os.getenv("FOLIO_SITE_CONFIG", "site.yaml"))

DEFAULT_MATHJAX_URL = "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"


class SiteConfigError(Exception):
    """
    Exception raised when site.yaml is missing or invalid.

    Attributes:
        message: Error description
        config_path: Path to the offending config file
        original_error: The underlying OmegaConf/YAML error, if any
    """

    def __init__(
        self,
        message: str,
        config_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.config_path = config_path
        self.original_error = original_error

        parts = [message]
        if config_path:
            parts.append(f"Config: {config_path}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


@dataclass
class SiteConfig:
    """
    Site-wide settings.

    Attributes:
        title: Site title shown in page headers and the feed
        author: Author name for the feed and page metadata
        description: Default meta description
        base_url: Absolute site URL used in the sitemap and feed (no trailing slash)
        language: HTML lang attribute
        content_dir: Directory holding pages/ and posts/
        static_dir: Directory copied verbatim to the output root
        output_dir: Build output directory
        layouts_dir: Optional directory of layouts overriding the built-in ones
        post_permalink: URL pattern for posts; {slug}, {year}, {month}, {day} available
        page_permalink: URL pattern for pages; {slug} available
        feed_size: Number of posts in feed.xml
        mathjax_url: MathJax script URL (empty string disables math typesetting)
        root_dir: Directory of the loaded site.yaml (set by load_site_config)
    """

    title: str = "Untitled site"
    author: str = ""
    description: str = ""
    base_url: str = ""
    language: str = "en"
    content_dir: str = "content"
    static_dir: str = "static"
    output_dir: str = "_site"
    layouts_dir: Optional[str] = None
    post_permalink: str = "/blog/{slug}/"
    page_permalink: str = "/{slug}/"
    feed_size: int = 20
    mathjax_url: str = DEFAULT_MATHJAX_URL
    extra: Dict[str, Any] = field(default_factory=dict)
    root_dir: str = "."

    def resolve(self, relative: str) -> Path:
        """Resolve a configured directory against root_dir."""
        path = Path(relative)
        return path if path.is_absolute() else (Path(self.root_dir) / path).resolve()

    @property
    def content_path(self) -> Path:
        return self.resolve(self.content_dir)

    @property
    def pages_path(self) -> Path:
        return self.content_path / "pages"

    @property
    def posts_path(self) -> Path:
        return self.content_path / "posts"

    @property
    def static_path(self) -> Path:
        return self.resolve(self.static_dir)

    @property
    def output_path(self) -> Path:
        return self.resolve(self.output_dir)

    @property
    def layouts_path(self) -> Optional[Path]:
        return self.resolve(self.layouts_dir) if self.layouts_dir else None

    def absolute_url(self, url: str) -> str:
        """Prefix a site-relative URL with base_url."""
        return f"{self.base_url.rstrip('/')}{url}"


def load_site_config(config_path: Optional[Path] = None, **overrides) -> SiteConfig:
    """
    Load site.yaml and merge it over the SiteConfig defaults.

    Args:
        config_path: Path to site.yaml (default: FOLIO_SITE_CONFIG env variable)
        **overrides: Values applied after the file (e.g., output_dir="/tmp/out")

    Returns:
        SiteConfig with root_dir set to the config file's directory

    Raises:
        SiteConfigError: If the file is missing, not valid YAML, or does not match SiteConfig
    """
    config_path = Path(config_path) if config_path else FOLIO_SITE_CONFIG
    if not config_path.exists():
        raise SiteConfigError("Site config not found", config_path=config_path)

    try:
        schema = OmegaConf.structured(SiteConfig)
        loaded = OmegaConf.load(config_path)
        merged = OmegaConf.merge(schema, loaded, overrides)
        merged.root_dir = str(config_path.resolve().parent)
        return OmegaConf.to_object(merged)
    except (OmegaConfBaseException, YAMLError) as e:
        raise SiteConfigError("Invalid site config", config_path=config_path, original_error=e) from e
