from pathlib import Path
from typing import Dict, List, Optional

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    Template,
    TemplateNotFound,
    select_autoescape,
)

BUILTIN_LAYOUTS_PATH = Path(__file__).parent / "layouts"
LAYOUT_SUFFIX = ".html.jinja"


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 layouts for HTML generation.

    Layouts are stored as {name}.html.jinja (and sitemap/feed as .xml.jinja).
    A site may provide its own layouts directory; files there take precedence
    over the built-in layouts in folio/contexts/rendering/layouts/.
    """

    def __init__(self, layouts_path: Optional[Path] = None):
        """
        Initialize the template registry.

        Args:
            layouts_path: Optional site layouts directory searched before the built-in one
        """
        search_paths: List[Path] = []
        if layouts_path is not None:
            search_paths.append(Path(layouts_path))
        search_paths.append(BUILTIN_LAYOUTS_PATH)

        self.search_paths = search_paths
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=ChoiceLoader([FileSystemLoader(str(path)) for path in search_paths]),
            autoescape=select_autoescape(enabled_extensions=("html.jinja", "xml.jinja")),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def get_template(self, name: str) -> Template:
        """
        Get a template by file name, loading and caching it if necessary.

        Args:
            name: Template file name (e.g., 'post.html.jinja', 'feed.xml.jinja')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If no search path has the template
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if name in self._cache:
            return self._cache[name]

        try:
            template = self.env.get_template(name)
        except TemplateNotFound as e:
            searched = ", ".join(str(path) for path in self.search_paths)
            raise TemplateNotFound(f"Template '{name}' not found in: {searched}") from e

        self._cache[name] = template
        return template

    def get_layout(self, layout: str) -> Template:
        """Get an HTML layout by name (e.g., 'post' -> post.html.jinja)."""
        return self.get_template(f"{layout}{LAYOUT_SUFFIX}")

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        return name in self._cache
