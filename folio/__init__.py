"""
Folio - static site builder for a CV and math-heavy blog posts

Reads markdown documents with YAML front-matter, verifies them, and renders
them to a static HTML tree with MathJax-ready LaTeX.

Architecture:
- Authoring Context: Front-matter parsing, content loading and post scaffolding
- Verification Context: Markup, LaTeX delimiter and link/image checks
- Rendering Context: Markdown conversion, Jinja2 layouts and site output
"""

__version__ = "0.1.0"
