"""
Shared utilities for FOLIO.

Common functionality used across contexts:
- Logging setup and site event history
- Site configuration
- Text processing
- Report formatting
"""

from folio.utils.site_config import SiteConfig, SiteConfigError, load_site_config
from folio.utils.timestamp import now, now_exact, today

__all__ = ["SiteConfig", "SiteConfigError", "load_site_config", "now", "now_exact", "today"]
