"""
Rendering Context

Responsibilities:
- Converts markdown bodies to HTML with LaTeX math left intact for MathJax
- Places rendered bodies in Jinja2 layouts
- Writes the output tree, generated pages (home, sitemap, feed) and static assets

Owns: HTML output, layouts, output directory management
Never: Modifies content files
"""

from folio.contexts.rendering.builder import BuildResult, build_site, write_site
from folio.contexts.rendering.markdown_renderer import MarkdownRenderer, protect_math
from folio.contexts.rendering.template_registry import TemplateRegistry

__all__ = [
    "BuildResult",
    "build_site",
    "write_site",
    "MarkdownRenderer",
    "protect_math",
    "TemplateRegistry",
]
